"""Tests for defaults.py module."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from projinit.defaults import DefaultsLoader
from projinit.exit_codes import ConfigurationError
from projinit.search_path import SearchContext


@pytest.fixture
def layered(fs):
    fs.create_file("/first/defaults.json", contents=json.dumps({
        "author_name": "First Author",
        "licenses": ["MIT"],
    }))
    fs.create_file("/second/defaults.json", contents=json.dumps({
        "author_name": "Second Author",
        "author_email": "second@example.com",
    }))
    fs.create_file("/second/widget/rename.json", contents=json.dumps({
        "lib/name.js": "lib/{%= name %}.js",
    }))
    fs.create_dir("/third")
    return SearchContext([Path("/first"), Path("/second"), Path("/third")])


class TestDefaultsLoader:
    """Test layered defaults loading."""

    def test_first_found_wins_per_key(self, layered):
        defaults = DefaultsLoader(layered).load("defaults.json")

        assert defaults == {
            "author_name": "First Author",
            "licenses": ["MIT"],
            "author_email": "second@example.com",
        }

    def test_joins_path_segments(self, layered):
        renames = DefaultsLoader(layered).load("widget", "rename.json")

        assert renames == {"lib/name.js": "lib/{%= name %}.js"}

    def test_missing_file_gives_empty_mapping(self, layered):
        assert DefaultsLoader(layered).load("nope", "rename.json") == {}

    def test_result_is_cached(self, layered, fs):
        loader = DefaultsLoader(layered)
        first = loader.load("defaults.json")

        Path("/first/defaults.json").write_text(json.dumps({"author_name": "Changed"}))
        second = loader.load("defaults.json")

        assert second is first
        assert second["author_name"] == "First Author"

    def test_cache_belongs_to_the_search_context(self, layered):
        DefaultsLoader(layered).load("defaults.json")

        assert "defaults.json" in layered.defaults_cache
        assert SearchContext(layered.search_dirs).defaults_cache == {}

    def test_invalid_json_is_fatal(self, fs):
        fs.create_file("/bad/defaults.json", contents="{not json")
        loader = DefaultsLoader(SearchContext([Path("/bad")]))

        with pytest.raises(ConfigurationError) as exc_info:
            loader.load("defaults.json")

        assert "/bad/defaults.json" in str(exc_info.value)

    def test_non_object_is_fatal(self, fs):
        fs.create_file("/bad/defaults.json", contents="[1, 2]")
        loader = DefaultsLoader(SearchContext([Path("/bad")]))

        with pytest.raises(ConfigurationError):
            loader.load("defaults.json")

    def test_invalid_utf8_is_fatal(self, fs):
        fs.create_file("/bad/defaults.json", contents=b'{"name": "\xff"}')
        loader = DefaultsLoader(SearchContext([Path("/bad")]))

        with pytest.raises(ConfigurationError) as exc_info:
            loader.load("defaults.json")

        assert "/bad/defaults.json" in str(exc_info.value)

    def test_unreadable_file_is_fatal(self, fs):
        fs.create_file("/bad/defaults.json", contents="{}")

        with patch("projinit.defaults.open", create=True, side_effect=PermissionError("denied")):
            with pytest.raises(ConfigurationError) as exc_info:
                DefaultsLoader(SearchContext([Path("/bad")])).load("defaults.json")

        assert "denied" in str(exc_info.value)
        assert "/bad/defaults.json" in str(exc_info.value)
