import click

from ..config import load_config
from ..init import discover
from ..render import render_templates


@click.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output in JSON format.")
def list_handler(as_json):
    """List the templates found on the search path."""
    _, _, templates = discover(None, load_config())
    if as_json:
        import json
        click.echo(json.dumps([
            {
                "name": name,
                "description": template.description,
                "path": str(template.directory),
            }
            for name, template in sorted(templates.items())
        ], indent=2))
        return
    render_templates(templates)
