"""
Handles the 'licenses' command.
"""
import click

from ..config import load_config
from ..init import discover
from ..render import render_licenses


@click.command("licenses")
def licenses_handler():
    """List the license texts available to templates."""
    _, search, _ = discover(None, load_config())
    render_licenses(search.available_licenses())
