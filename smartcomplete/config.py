# smartcomplete/config.py
"""
Runtime settings and the user YAML configuration.

Two layers:

- :class:`Settings`: file locations resolved from the environment (a local
  ``.env`` is honored through python-dotenv, without overriding real
  exports).
- The user configuration: a small YAML mapping (``enabled``,
  ``max_suggestions``, ``history_size``, ``shortcuts``) stored at
  ``Settings.config_file``.

Environment variables
---------------------
SMARTCOMPLETE_HOME          directory for the config file (``~/.smartcomplete``)
SMARTCOMPLETE_HISTORY_FILE  native history file (``~/.smartcomplete_history``)
SMARTCOMPLETE_CONFIG        YAML config path (``$SMARTCOMPLETE_HOME/config.yaml``)
HISTFILE                    bash history (``~/.bash_history``)
SMARTCOMPLETE_ZSH_HISTORY   zsh history (``~/.zsh_history``)

Python: 3.9+
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from .constants import new_default_config
from .log_manager import child

__all__ = [
    "Settings",
    "ConfigError",
    "ConfigParseError",
    "ConfigWriteError",
    "load_config",
    "save_config",
    "update_config",
    "remove_config",
    "coerce_value",
    "resolve_settings",
]

logger = child(__name__)


# ----------------------------
# Exceptions (explicit & clear)
# ----------------------------

class ConfigError(RuntimeError):
    """Base class for configuration failures."""


class ConfigParseError(ConfigError):
    """Raised when the YAML config cannot be parsed into a mapping."""


class ConfigWriteError(ConfigError):
    """Raised when the YAML config cannot be written or removed."""


# -----------------
# Resolved settings
# -----------------

def _env_path(var: str, default: Path) -> Path:
    value = os.getenv(var)
    return Path(value).expanduser() if value else default


@dataclass(frozen=True)
class Settings:
    """Filesystem locations used by the engine and the CLI."""

    home: Path
    history_file: Path
    config_file: Path
    bash_history_file: Path
    zsh_history_file: Path

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Resolve settings from the environment (and ``.env`` when ``dotenv``)."""
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=False)
        user_home = Path.home()
        home = _env_path("SMARTCOMPLETE_HOME", user_home / ".smartcomplete")
        return cls(
            home=home,
            history_file=_env_path("SMARTCOMPLETE_HISTORY_FILE", user_home / ".smartcomplete_history"),
            config_file=_env_path("SMARTCOMPLETE_CONFIG", home / "config.yaml"),
            bash_history_file=_env_path("HISTFILE", user_home / ".bash_history"),
            zsh_history_file=_env_path("SMARTCOMPLETE_ZSH_HISTORY", user_home / ".zsh_history"),
        )


# -----------------------
# YAML user configuration
# -----------------------

def save_config(path: Path, data: Mapping[str, Any]) -> None:
    """Write ``data`` as YAML to ``path`` (parent directories are created)."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            yaml.safe_dump(dict(data), default_flow_style=False, sort_keys=False),
            encoding="utf-8",
        )
    except OSError as exc:
        raise ConfigWriteError(f"Cannot write config {path}: {exc}") from exc
    logger.info("Configuration written to %s", path)


def load_config(path: Path, create: bool = True) -> Dict[str, Any]:
    """Load the YAML config at ``path``.

    A missing file yields the defaults (written to disk first when
    ``create``). Keys absent from the file are filled from the defaults.

    Raises
    ------
    ConfigParseError
        If the file is unreadable, not valid YAML, or not a mapping.
    """
    if not path.exists():
        defaults = new_default_config()
        if create:
            save_config(path, defaults)
        return defaults

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigParseError(f"Error parsing {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigParseError(f"{path} must parse to a mapping (YAML object).")

    merged = new_default_config()
    merged.update(data)
    logger.debug("Loaded config from %s with keys: %s", path, list(data.keys()))
    return merged


def update_config(path: Path, updates: Mapping[str, Any]) -> Dict[str, Any]:
    """Shallow-merge ``updates`` into the stored config and persist it."""
    current = load_config(path, create=False)
    current.update(updates)
    save_config(path, current)
    return current


def remove_config(path: Path) -> bool:
    """Delete the config file. Returns False when there was nothing to remove."""
    if not path.exists():
        return False
    try:
        path.unlink()
    except OSError as exc:
        raise ConfigWriteError(f"Cannot remove config {path}: {exc}") from exc
    logger.info("Configuration file removed: %s", path)
    return True


_INT_KEYS = frozenset({"max_suggestions", "history_size"})
_BOOL_KEYS = frozenset({"enabled"})
_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


def coerce_value(key: str, raw: str) -> Any:
    """Convert a CLI string into the type stored for ``key``.

    >>> coerce_value("max_suggestions", "5")
    5
    """
    if key in _INT_KEYS:
        try:
            value = int(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be an integer, got {raw!r}") from exc
        if value <= 0:
            raise ValueError(f"{key} must be positive, got {value}")
        return value
    if key in _BOOL_KEYS:
        word = raw.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"{key} must be a boolean, got {raw!r}")
    return raw


def resolve_settings(settings: Optional[Settings] = None) -> Settings:
    return settings or Settings.from_env()
