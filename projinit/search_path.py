"""
Search path resolution for templates and their data files.

A search path is an ordered list of absolute directories. Earlier entries take
precedence over later ones for every lookup: template descriptors, defaults
files, rename rules and individual template files.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

TEMPLATE_DESCRIPTOR = "template.py"


def get_builtin_template_dir() -> Path:
    """Get the bundled templates directory."""
    return Path(__file__).parent / "templates"


def get_user_dir(user_dir: Optional[Union[str, Path]] = None) -> Path:
    """Get the user's override directory (``~/.projinit`` unless configured)."""
    if user_dir is None:
        user_dir = "~/.projinit"
    return Path(os.path.expanduser(str(user_dir)))


@dataclass(frozen=True)
class FileEntry:
    """A file found on the search path."""

    absolute_path: Path
    relative_path: str
    base_directory: Path


def to_absolute(entry: FileEntry) -> Path:
    """Return the absolute location of ``entry``."""
    return entry.base_directory / entry.relative_path


def resolve(explicit_ref: Optional[str] = None,
            user_dir: Optional[Union[str, Path]] = None,
            builtin_dir: Optional[Union[str, Path]] = None) -> Tuple[Optional[str], List[Path]]:
    """
    Build the search path for an invocation.

    Order: the directory holding an explicitly named template, the user
    override directory (if it exists), then the bundled templates.

    Args:
        explicit_ref: Template name, or a path to a template descriptor file
            or template directory.
        user_dir: User override directory.
        builtin_dir: Bundled templates directory.

    Returns:
        Tuple of (canonical template name, list of absolute directories).
    """
    name = explicit_ref
    dirs: List[Path] = []

    if explicit_ref:
        ref = Path(os.path.expanduser(explicit_ref))
        if ref.is_file():
            # template.py inside a template directory names that directory.
            if ref.name == TEMPLATE_DESCRIPTOR:
                dirs.append(ref.resolve().parent.parent)
                name = ref.resolve().parent.name
            else:
                dirs.append(ref.resolve().parent)
                name = ref.stem
        elif ref.is_dir() and (ref / TEMPLATE_DESCRIPTOR).is_file():
            dirs.append(ref.resolve().parent)
            name = ref.resolve().name

    user_path = get_user_dir(user_dir)
    if user_path.is_dir():
        dirs.append(user_path)

    dirs.append(Path(builtin_dir) if builtin_dir else get_builtin_template_dir())

    search_dirs: List[Path] = []
    for dirpath in dirs:
        dirpath = dirpath.resolve()
        if dirpath not in search_dirs:
            search_dirs.append(dirpath)

    logger.debug(f"Search path: {', '.join(str(d) for d in search_dirs)}")
    return name, search_dirs


def _glob_pattern(pattern: str) -> str:
    # A trailing ** only yields directories with pathlib; match what is under them.
    if pattern == "**" or pattern.endswith("/**"):
        return pattern + "/*"
    return pattern


class SearchContext:
    """
    The search path of one invocation, and the lookups made against it.

    Holds the defaults cache too, so that nothing outlives the invocation.
    """

    def __init__(self, search_dirs: Iterable[Union[str, Path]]):
        self.search_dirs = [Path(d) for d in search_dirs]
        self.defaults_cache = {}

    def expand(self, patterns: Union[str, Iterable[str]], files_only: bool = True) -> List[FileEntry]:
        """
        Expand glob patterns relative to every search directory.

        A relative path found in an earlier directory is never replaced by
        the same path from a later one.
        """
        if isinstance(patterns, str):
            patterns = [patterns]
        patterns = list(patterns)

        found = {}
        for dirpath in self.search_dirs:
            if not dirpath.is_dir():
                continue
            matches = set()
            for pattern in patterns:
                for path in dirpath.glob(_glob_pattern(pattern)):
                    if files_only and not path.is_file():
                        continue
                    matches.add(path.relative_to(dirpath).as_posix())
            for relpath in sorted(matches):
                if relpath in found:
                    continue
                found[relpath] = FileEntry(
                    absolute_path=dirpath / relpath,
                    relative_path=relpath,
                    base_directory=dirpath,
                )
        return list(found.values())

    def get_file(self, *segments: str) -> Optional[Path]:
        """Return the absolute path of the first match for the joined segments."""
        relpath = "/".join(str(s).strip("/") for s in segments if s)
        if not relpath:
            return None
        entries = self.expand(relpath, files_only=False)
        return to_absolute(entries[0]) if entries else None

    def available_licenses(self) -> List[str]:
        """Names of the license files under ``licenses/`` on the search path."""
        return [
            Path(entry.relative_path).name[len("LICENSE-"):]
            for entry in self.expand("licenses/LICENSE-*")
        ]
