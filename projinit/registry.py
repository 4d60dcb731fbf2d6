"""
Template discovery.

A template is a directory on the search path holding a ``template.py``
descriptor module, a ``root/`` file tree and optionally ``rename.json``.
The descriptor module defines::

    description = "One line shown in the template list."
    notes = "Shown before the questions."           # optional
    after = "Shown once the files are written."     # optional
    warn_on = "*"                                    # optional glob(s)

    def template(init, done, *args):
        ...
        done()
"""
import importlib.util
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .exit_codes import ConfigurationError
from .search_path import TEMPLATE_DESCRIPTOR

logger = logging.getLogger(__name__)


@dataclass
class Template:
    """A discovered template and its descriptor."""

    name: str
    path: Path
    description: str = ""
    notes: Optional[str] = None
    after: Optional[str] = None
    warn_on: Union[str, List[str], None] = None
    procedure: Optional[Callable[..., Any]] = field(default=None, repr=False)

    @property
    def directory(self) -> Path:
        return self.path.parent

    def run(self, init, done: Callable[..., None], *args):
        """Run the template procedure; it must call ``done`` exactly once."""
        return self.procedure(init, done, *args)

    @classmethod
    def from_module(cls, name: str, path: Path, module: ModuleType) -> "Template":
        procedure = getattr(module, "template", None)
        if not callable(procedure):
            raise ConfigurationError("Template descriptor does not define template()", path)
        return cls(
            name=name,
            path=path,
            description=getattr(module, "description", "") or "",
            notes=getattr(module, "notes", None),
            after=getattr(module, "after", None),
            warn_on=getattr(module, "warn_on", None),
            procedure=procedure,
        )


def load_template(name: str, path: Path) -> Template:
    """
    Import a template descriptor.

    Raises:
        ConfigurationError: If the descriptor cannot be imported.
    """
    module_name = "projinit_template_" + re.sub(r"\W", "_", name)
    spec = importlib.util.spec_from_file_location(module_name, str(path))
    if spec is None or spec.loader is None:
        raise ConfigurationError("Unable to load template descriptor", path)
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise ConfigurationError(f"Template descriptor failed to load ({e})", path) from e
    return Template.from_module(name, path, module)


def list_templates(search_dirs: Iterable[Path]) -> Dict[str, Template]:
    """
    Scan the search path for template descriptors.

    The first directory that provides a given template name wins.

    Returns:
        Templates keyed by name.
    """
    templates: Dict[str, Template] = {}
    for dirpath in search_dirs:
        dirpath = Path(dirpath)
        if not dirpath.is_dir():
            continue
        for descriptor in sorted(dirpath.glob(f"*/{TEMPLATE_DESCRIPTOR}")):
            name = descriptor.parent.name
            if name in templates or not descriptor.is_file():
                continue
            logger.debug(f"Loading template {name} from {descriptor}")
            templates[name] = load_template(name, descriptor)
    return templates
