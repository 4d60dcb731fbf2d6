"""
Handles the 'init' command: generate a project from a template.
"""
import logging
import sys

import click

from ..config import load_config, set_log_level
from ..exit_codes import CommandError, SUCCESS, TemplateNotFoundError
from ..init import discover, run_init
from ..render import console, render_templates

logger = logging.getLogger(__name__)

INTRO = (
    "This command will create one or more files in the current directory, "
    "based on the environment and the answers to a few questions. Note that "
    'answering "?" to any question will show question-specific help and '
    'answering "none" to most questions will leave its value blank.'
)


@click.command("init", context_settings={"ignore_unknown_options": True})
@click.argument("template", required=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option("--force", is_flag=True, help="Continue even if existing files may be overwritten")
@click.option("--yes", "-y", is_flag=True, help="Accept every default without prompting")
@click.option("--dest", type=click.Path(file_okay=False), help="Output directory (default: current directory)")
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
def init_handler(template, args, force, yes, dest, verbose):
    """
    Generate project scaffolding from a template.

    TEMPLATE is a template name, or a path to a template directory or its
    template.py. Any further ARGS are passed to the template as flags.

    Examples:

        projinit init node

        projinit init ./my-templates/widget --yes
    """
    if verbose:
        set_log_level("DEBUG")

    try:
        config = load_config()
        if not verbose:
            set_log_level(config.get("logging", {}).get("level", "INFO"))

        if not template:
            _, _, templates = discover(None, config)
            click.echo("A valid init template name must be specified.\n")
            render_templates(templates)
            sys.exit(SUCCESS)

        if not yes:
            click.echo(INTRO + "\n")
        run_init(template, args, dest_dir=dest, force=force, interactive=not yes, config=config)
    except TemplateNotFoundError as e:
        console.print(f'[red]Loading "{e.name}" init template... ERROR[/red]')
        click.echo("A valid init template name must be specified.\n")
        _, _, templates = discover(None, config)
        render_templates(templates)
        sys.exit(e.exit_code)
    except CommandError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)
