"""
Layered JSON defaults.

A logical defaults file (``defaults.json``, ``<template>/rename.json``) may
exist in several search directories. All copies are merged, and a key set by
a higher-precedence file is never overwritten by a lower-precedence one.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict

from .exit_codes import ConfigurationError
from .search_path import SearchContext

logger = logging.getLogger(__name__)


class DefaultsLoader:
    """Read and merge JSON defaults across a search path, memoized per path."""

    def __init__(self, search: SearchContext):
        self.search = search

    def load(self, *segments: str) -> Dict[str, Any]:
        """
        Load the merged defaults for the joined ``segments``.

        Repeated calls with the same segments return the same dict object
        without touching the filesystem again.

        Raises:
            ConfigurationError: If a matching file is not a valid JSON object.
        """
        relpath = "/".join(str(s).strip("/") for s in segments)
        cache = self.search.defaults_cache
        if relpath in cache:
            return cache[relpath]

        result: Dict[str, Any] = {}

        filepaths = [
            dirpath / relpath
            for dirpath in self.search.search_dirs
            if (dirpath / relpath).is_file()
        ]
        if filepaths:
            logger.debug(f"Loading data from {relpath}")

        # Search path order goes from most specific to least specific.
        for filepath in filepaths:
            for key, value in _read_json(filepath).items():
                result.setdefault(key, value)

        cache[relpath] = result
        return result


def _read_json(filepath: Path) -> Dict[str, Any]:
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Unable to parse JSON ({e})", filepath) from e
    except OSError as e:
        raise ConfigurationError(f"Unable to read JSON ({e})", filepath) from e
    if not isinstance(data, dict):
        raise ConfigurationError("Expected a JSON object", filepath)
    return data
