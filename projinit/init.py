"""
The init pipeline.

``run_init`` resolves the search path, finds the requested template, and runs
its procedure with an ``InitContext``: the object templates use to ask
questions, compute the files to copy, copy them, and write the package
descriptor.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from . import __version__
from .config import console, load_config
from .defaults import DefaultsLoader
from .exit_codes import ExistingFilesError, TemplateFailedError, TemplateNotFoundError
from .manifest import add_license_files, build_manifest
from .materialize import CopyOptions, Materializer
from .package import write_package
from .prompts import Prompter, PromptSpec, builtin_prompts
from .registry import Template, list_templates
from .search_path import SearchContext, resolve

logger = logging.getLogger(__name__)


class InitContext:
    """
    Services available to a running template.

    Attributes:
        name: Template name.
        search: Search path of this invocation.
        defaults: Merged ``defaults.json`` values.
        renames: Merged ``<name>/rename.json`` rules.
        flags: Extra command-line arguments, each mapped to True.
    """

    def __init__(self, name: str, search: SearchContext, dest_dir: Union[str, Path],
                 args: Iterable[str] = (), interactive: bool = True,
                 no_process: Iterable[str] = ()):
        self.name = name
        self.search = search
        self.dest_dir = Path(dest_dir)
        self.template_root = f"{name}/root"
        self.loader = DefaultsLoader(search)
        self.defaults = self.loader.load("defaults.json")
        self.renames = self.loader.load(name, "rename.json")
        self.flags = {arg: True for arg in args}
        self.no_process = list(no_process)
        self.materializer = Materializer(search, self.dest_dir, self.template_root)
        self.prompter = Prompter(
            builtin_prompts(self.dest_dir, self.available_licenses(), __version__),
            defaults=self.defaults,
            interactive=interactive,
        )

    # -- Questions ---------------------------------------------------------

    def prompt(self, name: str, default: Any = None, **overrides) -> PromptSpec:
        return self.prompter.prompt(name, default, **overrides)

    def process(self, options: Optional[Dict[str, Any]], questions: List[PromptSpec]) -> Dict[str, Any]:
        """Ask ``questions``; ``year`` and ``date`` are filled in unless given in ``options``."""
        now = datetime.now()
        seeded = {"year": str(now.year), "date": now.strftime("%Y-%m-%d")}
        seeded.update(options or {})
        return self.prompter.process(seeded, questions)

    # -- Files -------------------------------------------------------------

    def read_defaults(self, *segments: str) -> Dict[str, Any]:
        return self.loader.load(*segments)

    def available_licenses(self) -> List[str]:
        return self.search.available_licenses()

    def files_to_copy(self, props: Dict[str, Any]) -> Dict[str, str]:
        """Files to copy, renamed or omitted according to ``rename.json``."""
        return build_manifest(self.search, self.template_root, self.renames, props)

    def add_license_files(self, files: Dict[str, str], licenses: Iterable[str]) -> Dict[str, str]:
        return add_license_files(self.search, files, licenses)

    def srcpath(self, *segments: str) -> Optional[Path]:
        return self.materializer.srcpath(*segments)

    def destpath(self, *segments: str) -> Path:
        return self.materializer.destpath(*segments)

    def copy(self, srcpath, destpath: Optional[str] = None, options: Optional[CopyOptions] = None) -> Path:
        return self.materializer.copy(srcpath, destpath, options)

    def copy_and_process(self, files: Dict[str, str], props: Dict[str, Any],
                         no_process: Optional[Iterable[str]] = None,
                         process: Optional[Callable[[str], str]] = None):
        patterns = self.no_process + list(no_process or [])
        self.materializer.copy_and_process(files, props, no_process=patterns, process=process)

    def write_package_json(self, filename: str, props: Dict[str, Any],
                           callback: Optional[Callable] = None) -> Dict[str, Any]:
        return write_package(self.destpath(filename), props, callback)


def discover(template_ref: Optional[str], config: Optional[Dict[str, Any]] = None):
    """
    Resolve the search path and scan it for templates.

    Returns:
        Tuple of (canonical name, SearchContext, templates by name).
    """
    if config is None:
        config = load_config()
    user_dir = config.get("general", {}).get("user_dir")
    name, search_dirs = resolve(template_ref, user_dir=user_dir)
    return name, SearchContext(search_dirs), list_templates(search_dirs)


def existing_files(dest_dir: Path, warn_on) -> List[Path]:
    """Files or directories in ``dest_dir`` matched by a template's warn_on globs."""
    if not warn_on:
        return []
    patterns = [warn_on] if isinstance(warn_on, str) else list(warn_on)
    found = []
    for pattern in patterns:
        found.extend(dest_dir.glob(pattern))
    return found


def run_init(template_ref: Optional[str], args: Iterable[str] = (),
             dest_dir: Optional[Union[str, Path]] = None, force: bool = False,
             interactive: bool = True, config: Optional[Dict[str, Any]] = None) -> InitContext:
    """
    Generate a project from a template into ``dest_dir`` (default: cwd).

    Raises:
        TemplateNotFoundError: No template matches ``template_ref``.
        ExistingFilesError: Files matched by the template's warn_on exist
            and ``force`` is False.
        TemplateFailedError: The template reported a failure.
    """
    if config is None:
        config = load_config()
    dest_dir = Path(dest_dir) if dest_dir else Path.cwd()
    args = list(args)

    name, search, templates = discover(template_ref, config)
    template: Optional[Template] = templates.get(name) if name else None
    if template is None:
        raise TemplateNotFoundError(name, templates)

    logger.info(f'Loading "{name}" init template from {template.directory}')

    if existing_files(dest_dir, template.warn_on):
        if not force:
            raise ExistingFilesError("Existing files may be overwritten! Use --force to continue anyway.")
        logger.warning("Existing files may be overwritten!")

    if template.notes:
        console.print(f'[bold]"{name}" template notes:[/bold]')
        console.print(template.notes)

    dest_dir.mkdir(parents=True, exist_ok=True)
    init = InitContext(
        name, search, dest_dir,
        args=args,
        interactive=interactive,
        no_process=config.get("general", {}).get("no_process", []),
    )

    outcome = {}

    def done(error=None):
        if "error" in outcome:
            logger.warning(f'Template "{name}" signalled completion more than once')
            return
        outcome["error"] = error

    template.run(init, done, *args)

    if "error" not in outcome:
        raise TemplateFailedError(f'Template "{name}" did not complete.')
    if outcome["error"]:
        raise TemplateFailedError(f'Template "{name}" failed: {outcome["error"]}')

    logger.info(f'Initialized from template "{name}" ({len(init.materializer.written)} file(s) written).')
    if template.after:
        console.print(template.after)
    return init
