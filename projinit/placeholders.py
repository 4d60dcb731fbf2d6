"""
Placeholder substitution for template files and rename rules.

Uses Jinja2 with init-specific delimiters so that ``{{ }}`` and ``{% %}``-free
content in copied files is left alone:

    {%= name %}                    value
    {% if licenses %}...{% endif %} statements
    {%# a comment #%}              comment
"""
from typing import Any, Dict

from jinja2 import Environment

INIT_DELIMITERS = {
    "block_start_string": "{%",
    "block_end_string": "%}",
    "variable_start_string": "{%=",
    "variable_end_string": "%}",
    "comment_start_string": "{%#",
    "comment_end_string": "#%}",
}


def create_environment() -> Environment:
    """Create a Jinja2 environment using the init delimiters."""
    return Environment(
        autoescape=False,
        keep_trailing_newline=True,
        **INIT_DELIMITERS,
    )


class PlaceholderRenderer:
    """Render strings against a properties bag."""

    def __init__(self, env: Environment = None):
        self.env = env or create_environment()

    def render(self, text: str, props: Dict[str, Any]) -> str:
        return self.env.from_string(text).render(**props)

    __call__ = render


def render_placeholders(text: str, props: Dict[str, Any]) -> str:
    """Render ``text`` once with a fresh environment."""
    return PlaceholderRenderer().render(text, props)
