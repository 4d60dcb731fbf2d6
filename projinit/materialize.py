"""
Copy template files into the destination directory.

Text files are run through placeholder substitution on the way; binary files
and anything matched by ``no_process`` are copied byte for byte.
"""
import fnmatch
import logging
import os
import shutil
from dataclasses import dataclass, replace
from pathlib import Path, PurePosixPath
from typing import Any, Callable, Dict, Iterable, Optional, Union

from jinja2 import TemplateError

from .exit_codes import ConfigurationError, MaterializeError
from .placeholders import PlaceholderRenderer
from .search_path import SearchContext

logger = logging.getLogger(__name__)

PLACEHOLDER_FILE = "misc/placeholder"

BINARY_EXTENSIONS = {
    # images
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".icns", ".tif", ".tiff",
    ".webp", ".psd", ".xcf",
    # fonts
    ".eot", ".otf", ".ttf", ".woff", ".woff2",
    # archives
    ".zip", ".gz", ".tgz", ".bz2", ".xz", ".7z", ".rar", ".tar", ".jar", ".whl",
    # media
    ".mp3", ".mp4", ".ogg", ".wav", ".flac", ".avi", ".mov", ".webm",
    # compiled / documents
    ".pyc", ".pyo", ".so", ".dll", ".dylib", ".exe", ".o", ".a", ".class",
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".sqlite", ".db",
    ".bin",
}

SNIFF_BYTES = 8000


def is_binary(path: Union[str, Path]) -> bool:
    """
    Guess whether ``path`` is a binary file.

    Checks the extension first, then looks for a NUL byte at the start of the
    file when it exists.
    """
    path = Path(path)
    if path.suffix.lower() in BINARY_EXTENSIONS:
        return True
    if not path.is_file():
        return False
    with open(path, "rb") as f:
        return b"\0" in f.read(SNIFF_BYTES)


def matches_any(patterns: Iterable[str], relpath: str) -> bool:
    """Match ``relpath`` against globs; patterns without a ``/`` match the basename."""
    basename = PurePosixPath(relpath).name
    for pattern in patterns:
        target = relpath if "/" in pattern else basename
        if fnmatch.fnmatchcase(target, pattern):
            return True
    return False


@dataclass(frozen=True)
class CopyOptions:
    """How a single file is copied."""

    process: Optional[Callable[[str], str]] = None
    no_process: Union[bool, tuple] = False
    encoding: str = "utf-8"

    def skips_processing(self, relpath) -> bool:
        """True when ``relpath`` is copied raw: ``no_process`` is True or one of its globs matches."""
        if isinstance(self.no_process, bool):
            return self.no_process
        return matches_any(self.no_process, str(relpath))


class Materializer:
    """
    Writes files from the search path into ``dest_dir``.

    Args:
        search: Search path the sources are resolved against.
        dest_dir: Output directory; relative destinations are joined to it.
        template_root: Search-relative root of the template's file tree
            (e.g. ``"node/root"``), used for relative sources.
    """

    def __init__(self, search: SearchContext, dest_dir: Union[str, Path], template_root: str = ""):
        self.search = search
        self.dest_dir = Path(dest_dir)
        self.template_root = template_root.strip("/")
        self.written = []

    def srcpath(self, *segments: str) -> Optional[Path]:
        """Search the template's root on the search path for a file."""
        if not segments or segments[0] is None:
            return None
        return self.search.get_file(self.template_root, *segments)

    def destpath(self, *segments: str) -> Path:
        """Absolute destination path for the joined ``segments``."""
        return self.dest_dir.joinpath(*segments)

    def copy(self, srcpath: Optional[Union[str, Path]], destpath: Optional[str] = None,
             options: Optional[CopyOptions] = None) -> Path:
        """
        Copy one file, processing its contents unless told otherwise.

        A relative ``srcpath`` is looked up under the template root. When no
        source resolves, the bundled placeholder file is written instead.

        Raises:
            MaterializeError: On any I/O failure.
            ConfigurationError: If the file's placeholders cannot be parsed.
        """
        options = options or CopyOptions()
        if destpath is None:
            destpath = str(srcpath)

        source = Path(srcpath) if srcpath is not None else None
        if source is not None and not source.is_absolute():
            source = self.srcpath(str(srcpath))
        if source is None:
            source = self.search.get_file(PLACEHOLDER_FILE)
            logger.debug(f"No source for {destpath}, using placeholder")

        target = self.destpath(destpath)
        logger.debug(f"Writing {destpath}...")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if source is None:
                target.write_bytes(b"")
            elif options.process and not options.skips_processing(destpath) and not is_binary(source):
                self._copy_processed(source, target, options)
            else:
                shutil.copyfile(source, target)
        except OSError as e:
            logger.error(f"Writing {destpath} failed: {e}")
            raise MaterializeError(destpath, e) from e

        self.written.append(target)
        return target

    def _copy_processed(self, source: Path, target: Path, options: CopyOptions):
        try:
            contents = source.read_text(encoding=options.encoding)
        except UnicodeDecodeError:
            logger.debug(f"{source} is not {options.encoding} text, copying as-is")
            shutil.copyfile(source, target)
            return
        try:
            contents = options.process(contents)
        except TemplateError as e:
            raise ConfigurationError(f"Unable to process placeholders ({e})", source) from e
        with open(target, "w", encoding=options.encoding, newline="") as f:
            f.write(contents)

    def copy_and_process(self, files: Dict[str, str], props: Dict[str, Any],
                         no_process: Optional[Iterable[str]] = None,
                         process: Optional[Callable[[str], str]] = None):
        """
        Copy every entry of a file manifest, substituting placeholders.

        Args:
            files: Destination path to search-relative (or absolute) source.
            props: Properties used for substitution.
            no_process: Globs (relative to the template root) of files to
                copy without substitution.
            process: Replacement content processor.
        """
        if process is None:
            renderer = PlaceholderRenderer()

            def process(contents):
                return renderer.render(contents, props)

        patterns = tuple(no_process or ())
        options = CopyOptions(process=process)
        prefix = self.template_root + "/" if self.template_root else ""

        for destpath, srcpath in files.items():
            file_options = options
            if srcpath and not os.path.isabs(srcpath):
                if patterns:
                    relpath = srcpath[len(prefix):] if srcpath.startswith(prefix) else srcpath
                    file_options = replace(options, no_process=matches_any(patterns, relpath))
                srcpath = self.search.get_file(srcpath)
            self.copy(srcpath, destpath, file_options)
