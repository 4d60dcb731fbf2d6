"""Tests for placeholders.py module."""

import pytest
from jinja2 import TemplateSyntaxError

from projinit.placeholders import PlaceholderRenderer, render_placeholders


class TestPlaceholders:
    """Test placeholder substitution with the init delimiters."""

    def test_value(self):
        assert render_placeholders("{%= name %}", {"name": "demo"}) == "demo"

    def test_statements_and_filters(self):
        text = "{% for l in licenses %}{%= l | lower %}{% if not loop.last %},{% endif %}{% endfor %}"

        assert render_placeholders(text, {"licenses": ["MIT", "ISC"]}) == "mit,isc"

    def test_other_template_syntax_untouched(self):
        text = "Hello {{ user }} ${HOME} <%= x %>"

        assert render_placeholders(text, {"user": "nobody"}) == text

    def test_comment(self):
        assert render_placeholders("a{%# note #%}b", {}) == "ab"

    def test_trailing_newline_kept(self):
        assert render_placeholders("{%= name %}\n", {"name": "x"}) == "x\n"

    def test_no_html_escaping(self):
        assert render_placeholders("{%= v %}", {"v": "<a & b>"}) == "<a & b>"

    def test_renderer_is_callable(self):
        renderer = PlaceholderRenderer()

        assert renderer("{%= a %}-{%= b %}", {"a": 1, "b": 2}) == "1-2"

    def test_syntax_error(self):
        with pytest.raises(TemplateSyntaxError):
            render_placeholders("{% if %}", {})
