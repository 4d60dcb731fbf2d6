"""Tests for registry.py module."""

import pytest

from projinit.exit_codes import ConfigurationError
from projinit.registry import Template, list_templates, load_template
from projinit.search_path import get_builtin_template_dir


class TestListTemplates:
    """Test template discovery."""

    def test_directory_name_is_the_key(self, tmp_path, make_template):
        make_template(tmp_path, "widget")

        templates = list_templates([tmp_path])

        assert list(templates) == ["widget"]
        assert isinstance(templates["widget"], Template)
        assert templates["widget"].description == "A test template."
        assert templates["widget"].directory == tmp_path / "widget"

    def test_first_search_dir_wins(self, tmp_path, make_template):
        make_template(tmp_path / "first", "widget", source='''
            description = "first"

            def template(init, done):
                done()
        ''')
        make_template(tmp_path / "second", "widget", source='''
            description = "second"

            def template(init, done):
                done()
        ''')

        templates = list_templates([tmp_path / "first", tmp_path / "second"])

        assert templates["widget"].description == "first"

    def test_optional_attributes(self, tmp_path, make_template):
        make_template(tmp_path, "widget", source='''
            description = "Widget"
            notes = "Before."
            after = "After."
            warn_on = ["*.js", "lib"]

            def template(init, done):
                done()
        ''')

        template = list_templates([tmp_path])["widget"]

        assert template.notes == "Before."
        assert template.after == "After."
        assert template.warn_on == ["*.js", "lib"]

    def test_ignores_directories_without_descriptor(self, tmp_path, make_template):
        (tmp_path / "licenses").mkdir()
        (tmp_path / "licenses" / "LICENSE-MIT").write_text("mit")
        make_template(tmp_path, "widget")

        assert list(list_templates([tmp_path])) == ["widget"]

    def test_broken_descriptor_is_fatal(self, tmp_path, make_template):
        make_template(tmp_path, "broken", source='''
            raise RuntimeError("boom")
        ''')

        with pytest.raises(ConfigurationError) as exc_info:
            list_templates([tmp_path])

        assert "boom" in str(exc_info.value)
        assert str(tmp_path / "broken" / "template.py") in str(exc_info.value)

    def test_descriptor_without_procedure_is_fatal(self, tmp_path, make_template):
        make_template(tmp_path, "empty", source='description = "nothing to run"\n')

        with pytest.raises(ConfigurationError):
            list_templates([tmp_path])

    def test_bundled_templates(self):
        templates = list_templates([get_builtin_template_dir()])

        assert {"node", "python"} <= set(templates)
        assert templates["node"].description


class TestTemplateRun:
    """Test the template procedure contract."""

    def test_run_passes_init_done_and_args(self, tmp_path, make_template):
        make_template(tmp_path, "echo", source='''
            description = "echo"

            def template(init, done, *args):
                init.append(args)
                done()
        ''')
        template = load_template("echo", tmp_path / "echo" / "template.py")
        calls = []
        received = []

        template.run(received, lambda error=None: calls.append(error), "a", "b")

        assert received == [("a", "b")]
        assert calls == [None]
