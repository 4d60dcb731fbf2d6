"""
Output rendering functions for projinit.
"""
from rich.console import Console
from rich.table import Table

console = Console()


def render_templates(templates):
    """
    Render the available templates as a table.

    Args:
        templates: Mapping of template name to Template.
    """
    if not templates:
        console.print("No templates found.")
        return
    table = Table(title="Available Templates")
    table.add_column("Name", style="cyan")
    table.add_column("Description", style="magenta")
    table.add_column("Location", style="dim")
    for name in sorted(templates):
        template = templates[name]
        table.add_row(name, template.description, str(template.directory.parent))
    console.print(table)


def render_licenses(licenses):
    """Render the bundled license names, one per line."""
    if not licenses:
        console.print("No licenses found.")
        return
    for name in sorted(licenses):
        console.print(name)
