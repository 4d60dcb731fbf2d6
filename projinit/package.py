"""
Package descriptor generation.

Builds a ``package.json``-style object from the collected properties. Only
properties that were actually collected are promoted; nothing is written as
null.
"""
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from .exit_codes import MaterializeError

logger = logging.getLogger(__name__)

BASIC_FIELDS = ("name", "title", "description", "version", "homepage")
AUTHOR_FIELDS = ("name", "email", "url")


def build_package(props: Dict[str, Any]) -> Dict[str, Any]:
    """Assemble the package descriptor for ``props``."""
    pkg: Dict[str, Any] = {}

    for prop in BASIC_FIELDS:
        if prop in props:
            pkg[prop] = props[prop]

    if any(key.startswith("author_") for key in props):
        pkg["author"] = {
            field: props[f"author_{field}"]
            for field in AUTHOR_FIELDS
            if props.get(f"author_{field}")
        }

    if "repository" in props:
        if isinstance(props["repository"], str):
            pkg["repository"] = {"type": "git", "url": props["repository"]}
        else:
            pkg["repository"] = props["repository"]
    if "bugs" in props:
        pkg["bugs"] = {"url": props["bugs"]}
    if props.get("licenses"):
        licenses = []
        for license_name in props["licenses"]:
            entry = {"type": license_name}
            if props.get("homepage"):
                entry["url"] = f"{props['homepage']}/blob/master/LICENSE-{license_name}"
            licenses.append(entry)
        pkg["licenses"] = licenses

    if props.get("main"):
        pkg["main"] = props["main"]
    if props.get("bin"):
        pkg["bin"] = props["bin"]
    if props.get("engines"):
        pkg["engines"] = props["engines"]
    elif props.get("node_version"):
        pkg["engines"] = {"node": props["node_version"]}
    if props.get("scripts"):
        pkg["scripts"] = dict(props["scripts"])
    if props.get("npm_test"):
        pkg.setdefault("scripts", {})["test"] = props["npm_test"]

    for prop in ("dependencies", "devDependencies", "peerDependencies", "keywords"):
        if props.get(prop):
            pkg[prop] = props[prop]

    return pkg


def write_package(path: Union[str, Path], props: Dict[str, Any],
                  callback: Optional[Callable[[Dict[str, Any], Dict[str, Any]], Dict[str, Any]]] = None) -> Dict[str, Any]:
    """
    Write the package descriptor for ``props`` to ``path``.

    ``callback(pkg, props)`` may return a modified descriptor before it is
    written.

    Raises:
        MaterializeError: If the file cannot be written.
    """
    pkg = build_package(props)
    if callback:
        pkg = callback(pkg, props)

    path = Path(path)
    logger.debug(f"Writing {path.name}...")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(pkg, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as e:
        logger.error(f"Writing {path} failed: {e}")
        raise MaterializeError(path, e) from e
    return pkg
