import textwrap
from pathlib import Path

import pytest
from pyfakefs.fake_filesystem_unittest import Patcher

from projinit.search_path import SearchContext, get_builtin_template_dir


@pytest.fixture
def fs():
    with Patcher() as patcher:
        yield patcher.fs


def write_files(base, files):
    """Write a ``{relative path: contents}`` mapping under ``base``."""
    base = Path(base)
    for relpath, contents in files.items():
        path = base / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(contents, bytes):
            path.write_bytes(contents)
        else:
            path.write_text(contents)
    return base


@pytest.fixture
def make_template():
    """Create a template directory (descriptor, root files, rename rules) under a search dir."""
    def _make(search_dir, name, source=None, files=None, renames=None):
        template_dir = Path(search_dir) / name
        template_dir.mkdir(parents=True, exist_ok=True)
        if source is None:
            source = '''
                description = "A test template."

                def template(init, done, *args):
                    done()
            '''
        (template_dir / "template.py").write_text(textwrap.dedent(source))
        write_files(template_dir / "root", files or {})
        if renames is not None:
            import json
            (template_dir / "rename.json").write_text(json.dumps(renames))
        return template_dir
    return _make


@pytest.fixture
def search(tmp_path):
    """A search path of one writable directory followed by the bundled templates."""
    user = tmp_path / "search"
    user.mkdir()
    return SearchContext([user, get_builtin_template_dir()])


@pytest.fixture
def no_git():
    """Make every git query come back empty."""
    from unittest.mock import patch
    with patch("projinit.prompts.git_origin", return_value=None), \
            patch("projinit.prompts.git_config", return_value=None), \
            patch("projinit.prompts.git_describe", return_value=None):
        yield
