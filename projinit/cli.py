#!/usr/bin/env python3

import logging
import sys

import click

from projinit import __version__
from projinit.commands.init import init_handler
from projinit.commands.license import licenses_handler
from projinit.commands.list import list_handler
from projinit.exit_codes import INTERRUPTED, CommandError, get_exit_code_for_exception

logger = logging.getLogger("projinit")


@click.group()
@click.version_option(__version__)
def cli():
    """Project scaffolding from templates."""
    pass


cli.add_command(init_handler)
cli.add_command(list_handler)
cli.add_command(licenses_handler)


def main():
    try:
        cli.main(standalone_mode=False)
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(INTERRUPTED)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except CommandError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)
    except (KeyboardInterrupt, Exception) as e:
        logger.error(f"Unexpected error: {e}")
        logger.debug("Traceback:", exc_info=True)
        sys.exit(get_exit_code_for_exception(e))


if __name__ == "__main__":
    main()
