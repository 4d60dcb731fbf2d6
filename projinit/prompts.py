"""
Interactive collection of project properties.

Templates ask for properties by name. Each built-in prompt has a message, a
default (a value, or a callable computing one from what has been answered so
far), an optional validator, help text shown when the answer is ``?``, and an
optional sanitize step that can rewrite the answer or derive more properties.
Answering ``none`` leaves a property blank.
"""
import logging
import os
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

import click

from .exit_codes import CommandError, USAGE_ERROR
from .utils import git_config, git_describe, git_origin, github_url, parse_repo_url

logger = logging.getLogger(__name__)

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
SEMVER_RE = re.compile(
    r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


class PromptValidationError(CommandError):
    """An answer (or accepted default) failed its prompt's validator."""

    exit_code = USAGE_ERROR


def valid_semver(value):
    """Return ``value`` without a leading ``v`` if it is a semantic version, else None."""
    if not value:
        return None
    value = str(value).strip()
    if not SEMVER_RE.match(value):
        return None
    return value[1:] if value.startswith("v") else value


@dataclass(frozen=True)
class PromptSpec:
    """A single question."""

    name: str
    message: str
    default: Any = None
    validator: Any = None
    warning: str = ""
    sanitize: Optional[Callable[[Any, Dict[str, Any]], Any]] = None

    def validate(self, value) -> bool:
        if self.validator is None or value == "":
            return True
        if isinstance(self.validator, str):
            return re.match(self.validator, str(value)) is not None
        if isinstance(self.validator, re.Pattern):
            return self.validator.match(str(value)) is not None
        return bool(self.validator(value))


def evaluate_default(default, value, props):
    """Resolve a default that may be a callable ``(value, props) -> value``."""
    if callable(default):
        return default(value, props)
    return default


def _safe_name(value):
    return re.sub(r"^(\d)", r"_\1", re.sub(r"[\W_]+", "_", value))


def builtin_prompts(cwd: Path, available_licenses: Iterable[str] = (),
                    tool_version: str = "") -> Dict[str, PromptSpec]:
    """
    Create the built-in prompts.

    Args:
        cwd: Directory the project is generated in; git defaults are read
            from it and the project name defaults to its basename.
        available_licenses: License names bundled on the search path.
        tool_version: Version string offered as a default requirement.
    """
    cwd = Path(cwd)
    dirname = cwd.resolve().name

    def default_name(value, props):
        types = ["javascript", "js", "python", "py"]
        if props.get("type"):
            types.append(re.escape(str(props["type"])))
        type_re = "(?:" + "|".join(types) + ")"
        # Strip leading "type-" and trailing "-type" / "-js" from the dirname.
        pattern = re.compile(
            r"^" + type_re + r"[\-\._]?|(?:[\-\._]?" + type_re + r")?(?:[\-\._]?js)?$",
            re.IGNORECASE,
        )
        name = pattern.sub("", dirname)
        return re.sub(r"[^\w\-\.]", "", name)

    def sanitize_name(value, props):
        props["safe_name"] = _safe_name(value)
        props["test_safe_name"] = "my_test" if props["safe_name"] == "test" else props["safe_name"]

    def default_title(value, props):
        title = re.sub(r"[\W_]+", " ", props.get("name") or "")
        return re.sub(r"\w+", lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), title).strip()

    def default_version(value, props):
        tag = git_describe(cwd) or ""
        return valid_semver(tag.split("-")[0]) or "0.1.0"

    def default_repository(value, props):
        origin = git_origin(cwd)
        if origin:
            return re.sub(r"^git@([^:]+):", r"git://\1/", origin)
        user = git_config("github.user", cwd) or os.environ.get("USER") or os.environ.get("USERNAME") or "???"
        props["git_user"] = user
        return f"git://github.com/{user}/{dirname}.git"

    def sanitize_repository(value, props):
        owner, repo = parse_repo_url(value)
        if repo is not None:
            props["git_user"] = props.get("git_user") or owner
            props["git_repo"] = repo
        else:
            props["git_user"] = props.get("git_user") or ""
            props["git_repo"] = dirname

    def sanitize_licenses(value, props):
        return value.split() if isinstance(value, str) else list(value or [])

    licenses_help = " ".join(sorted(available_licenses)) or "(none)"

    prompts = [
        PromptSpec("name", "Project name", default=default_name,
                   validator=r"^[\w\-\.]+$",
                   warning="Must be only letters, numbers, dashes, dots or underscores.",
                   sanitize=sanitize_name),
        PromptSpec("title", "Project title", default=default_title,
                   warning="May consist of any characters."),
        PromptSpec("description", "Description", default="The best project ever.",
                   warning="May consist of any characters."),
        PromptSpec("version", "Version", default=default_version,
                   validator=valid_semver,
                   warning="Must be a valid semantic version (semver.org)."),
        PromptSpec("repository", "Project git repository", default=default_repository,
                   warning="Should be a public git:// URI.",
                   sanitize=sanitize_repository),
        PromptSpec("homepage", "Project homepage",
                   default=lambda value, props: github_url(props.get("repository")) or "none",
                   warning="Should be a public URL."),
        PromptSpec("bugs", "Project issues tracker",
                   default=lambda value, props: github_url(props.get("repository"), "issues") or "none",
                   warning="Should be a public URL."),
        PromptSpec("licenses", "Licenses", default="MIT",
                   validator=r"^[\w\-\.\d]+(?:\s+[\w\-\.\d]+)*$",
                   warning="Must be zero or more space-separated licenses. Built-in licenses are: "
                           + licenses_help + ", but you may specify any number of custom licenses.",
                   sanitize=sanitize_licenses),
        PromptSpec("author_name", "Author name",
                   default=lambda value, props: git_config("user.name", cwd) or "none",
                   warning="May consist of any characters."),
        PromptSpec("author_email", "Author email",
                   default=lambda value, props: git_config("user.email", cwd) or "none",
                   warning="Should be a valid email address."),
        PromptSpec("author_url", "Author url", default="none",
                   warning="Should be a public URL."),
        PromptSpec("node_version", "What versions of node does it run on?", default=">= 18",
                   warning="Must be a valid semantic version range descriptor."),
        PromptSpec("python_requires", "What versions of Python does it run on?", default=">=3.8",
                   warning="Must be a valid version specifier."),
        PromptSpec("main", "Main module/entry point",
                   default=lambda value, props: f"lib/{props.get('name', '')}",
                   warning="Must be a path relative to the project root."),
        PromptSpec("bin", "CLI script",
                   default=lambda value, props: f"bin/{props.get('name', '')}",
                   warning="Must be a path relative to the project root."),
        PromptSpec("npm_test", "Npm test command", default="node --test",
                   warning="Must be an executable command."),
        PromptSpec("test_command", "Test command", default="pytest",
                   warning="Must be an executable command."),
        PromptSpec("tool_version", "What version of projinit does it require?",
                   default=tool_version,
                   warning="Must be a valid version specifier."),
    ]
    return {spec.name: spec for spec in prompts}


class Prompter:
    """
    Asks questions in declaration order and collects the answers.

    Args:
        prompts: Built-in prompts by name.
        defaults: User defaults (from ``defaults.json``); they replace the
            prompt's own default.
        interactive: When False every default is accepted as the answer.
    """

    def __init__(self, prompts: Dict[str, PromptSpec], defaults: Optional[Dict[str, Any]] = None,
                 interactive: bool = True):
        self.prompts = prompts
        self.defaults = defaults or {}
        self.interactive = interactive

    def prompt(self, name: str, default: Any = None, **overrides) -> PromptSpec:
        """
        Build a question, starting from the built-in prompt of the same name.

        A callable ``default`` receives the built-in default's value, so a
        template can adjust it (e.g. add a prefix to the project name).
        """
        spec = self.prompts.get(name) or PromptSpec(name, name)
        if default is not None:
            base = spec.default
            if callable(default):
                def chained(value, props, base=base, default=default):
                    return default(evaluate_default(base, value, props), props)
                spec = replace(spec, default=chained)
            else:
                spec = replace(spec, default=default)
        if overrides:
            spec = replace(spec, **overrides)
        return spec

    def process(self, options: Optional[Dict[str, Any]], questions: List[PromptSpec]) -> Dict[str, Any]:
        """
        Ask every question, strictly in order.

        Args:
            options: Initial properties (e.g. ``{"type": "node"}``).
            questions: Questions built with :meth:`prompt`.

        Returns:
            The properties bag.
        """
        props = dict(options or {})
        if self.interactive:
            click.echo("Please answer the following:")
        for spec in questions:
            if spec.name in self.defaults:
                default = self.defaults[spec.name]
            else:
                default = evaluate_default(spec.default, None, props)
            value = self._ask(spec, default, props)
            sanitized = spec.sanitize(value, props) if spec.sanitize else None
            props[spec.name] = value if sanitized is None else sanitized
            logger.debug(f"{spec.name} = {props[spec.name]!r}")
        return props

    def _ask(self, spec: PromptSpec, default: Any, props: Dict[str, Any]):
        if isinstance(default, (list, tuple)):
            default = " ".join(str(d) for d in default)
        default = "" if default is None else str(default)

        while True:
            if self.interactive:
                answer = click.prompt(f"[?] {spec.message}", default=default, show_default=bool(default))
            else:
                answer = default
            answer = answer.strip()

            if answer == "?":
                click.echo(spec.warning or "No help available.")
                continue
            if answer.lower() == "none":
                answer = ""
            if spec.validate(answer):
                return answer

            if not self.interactive:
                raise PromptValidationError(f'Invalid value "{answer}" for {spec.name}: {spec.warning}')
            click.secho(spec.warning or "Invalid value.", fg="red", err=True)
