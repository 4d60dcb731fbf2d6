"""
Logging setup and user configuration for projinit.

Configuration is read from ``~/.projinitrc`` (JSON) or ``~/.projinitrc.toml``,
merged over the defaults, then overridden by ``PROJINIT_*`` environment
variables.
"""
import copy
import json
import logging
import os
from pathlib import Path

import toml
from rich.console import Console
from rich.logging import RichHandler

from .exit_codes import ConfigurationError

# Initialize Rich Console
console = Console(stderr=True)

# Configure logging to use RichHandler
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)]
)

logger = logging.getLogger("projinit")

ENV_PREFIX = "PROJINIT_"


def set_log_level(level):
    """Set the level of the projinit logger hierarchy."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)


def get_default_config():
    """Return the built-in configuration."""
    return {
        "general": {
            "user_dir": "~/.projinit",
            "no_process": [],
        },
        "logging": {
            "level": "INFO",
        },
    }


def get_config_path():
    """
    Return the path of the user's configuration file.

    The TOML variant is used when it exists, otherwise the JSON one.
    """
    home = Path(os.path.expanduser("~"))
    toml_path = home / ".projinitrc.toml"
    if toml_path.exists():
        return toml_path
    return home / ".projinitrc"


def _deep_merge(base, override):
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _coerce_env_value(raw, current):
    if isinstance(current, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(current, int):
        try:
            return int(raw)
        except ValueError:
            return raw
    if isinstance(current, list):
        return [part.strip() for part in raw.split(",") if part.strip()]
    return raw


def _set_by_env_parts(config, parts, raw):
    """
    Walk ``parts`` (lowercased pieces of an env var name) into ``config``.

    Keys may themselves contain underscores, so the longest matching key at
    each level is consumed first.
    """
    for size in range(len(parts), 0, -1):
        key = "_".join(parts[:size])
        if key not in config:
            continue
        rest = parts[size:]
        if not rest:
            config[key] = _coerce_env_value(raw, config[key])
            return True
        if isinstance(config[key], dict):
            return _set_by_env_parts(config[key], rest, raw)
    return False


def _apply_env_overrides(config):
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX):].lower().split("_")
        if not _set_by_env_parts(config, parts, raw):
            logger.debug(f"Ignoring unknown config override {name}")
    return config


def load_config():
    """
    Load the configuration with all merges applied.

    Raises:
        ConfigurationError: If the configuration file cannot be parsed.
    """
    config = copy.deepcopy(get_default_config())
    config_path = get_config_path()

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if config_path.suffix == ".toml":
                    user_config = toml.load(f)
                else:
                    user_config = json.load(f)
        except (json.JSONDecodeError, toml.TomlDecodeError) as e:
            raise ConfigurationError(f"Invalid configuration file ({e})", config_path) from e
        if not isinstance(user_config, dict):
            raise ConfigurationError("Configuration must be an object", config_path)
        _deep_merge(config, user_config)

    return _apply_env_overrides(config)


def save_config(config, path=None):
    """Write ``config`` to ``path`` (default: the user's config file)."""
    path = Path(path) if path else get_config_path()
    with open(path, "w", encoding="utf-8") as f:
        if path.suffix == ".toml":
            toml.dump(config, f)
        else:
            json.dump(config, f, indent=2)
    return path
