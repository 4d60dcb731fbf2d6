"""
File manifest construction.

A file manifest maps destination paths (relative to the output directory) to
source paths (relative to the search path). Rename rules from
``<template>/rename.json`` can redirect a source file to a templated
destination, or drop it.
"""
import fnmatch
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from jinja2 import TemplateError

from .exit_codes import ConfigurationError
from .placeholders import PlaceholderRenderer
from .search_path import SearchContext

logger = logging.getLogger(__name__)

Renderer = Callable[[str, Dict[str, Any]], str]


def evaluate_rule(rule: Any, props: Dict[str, Any], renderer: Renderer):
    """
    Evaluate one rename rule.

    Returns the rendered destination, or ``False`` when the rule excludes
    the file. ``false``, ``null``, ``""`` and anything rendering to
    ``"false"`` or ``""`` are exclusions.
    """
    if not rule:
        return False
    processed = renderer(str(rule), props)
    if processed in ("false", ""):
        return False
    return processed


def _matches(pattern: str, path: str) -> bool:
    return pattern == path or fnmatch.fnmatchcase(path, pattern)


def build_manifest(search: SearchContext,
                   template_root: str,
                   rename_rules: Dict[str, Any],
                   props: Dict[str, Any],
                   renderer: Optional[Renderer] = None) -> Dict[str, str]:
    """
    Compute the files to copy for a template.

    Args:
        search: Search path to scan.
        template_root: Search-relative root of the template file tree
            (e.g. ``"node/root"``).
        rename_rules: Mapping of template-root-relative source path to a
            destination template string, or ``False``.
        props: Properties used to render the rename rules.
        renderer: Placeholder renderer (defaults to the init delimiters).

    Returns:
        Ordered dict of destination path to search-relative source path.
    """
    renderer = renderer or PlaceholderRenderer()
    prefix = template_root.strip("/") + "/"

    def evaluate(key):
        try:
            return evaluate_rule(rename_rules[key], props, renderer)
        except TemplateError as e:
            rules_path = search.get_file(template_root.strip("/").split("/")[0], "rename.json")
            raise ConfigurationError(f"Unable to process rename rule {key!r} ({e})", rules_path) from e

    entries = search.expand(prefix + "**")
    sources: List[str] = [entry.relative_path[len(prefix):] for entry in entries]

    files: Dict[str, str] = {}
    # Include all template files by default.
    for src in sources:
        dest = evaluate(src) if src in rename_rules else False
        files[dest or src] = prefix + src

    # Exclusions are evaluated over every rule, not just the ones hit above.
    exclusions = [
        key for key in rename_rules
        if evaluate(key) is False
    ]
    for key in exclusions:
        for src in sources:
            if _matches(key, src):
                files.pop(src, None)

    logger.debug(f"{len(files)} file(s) to copy from {template_root}")
    return files


def add_license_files(search: SearchContext, files: Dict[str, str], licenses: Iterable[str]) -> Dict[str, str]:
    """Add a ``LICENSE-<name>`` entry for every license found on the search path."""
    for license_name in licenses or []:
        entries = search.expand(f"licenses/LICENSE-{license_name}")
        if entries:
            files[f"LICENSE-{license_name}"] = entries[0].relative_path
        else:
            logger.debug(f"No bundled license text for {license_name}")
    return files
