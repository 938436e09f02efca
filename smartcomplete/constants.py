# smartcomplete/constants.py
"""
Shared constants and defaults for smartcomplete (Python 3.9+).

This module centralizes the built-in command catalog, history bounds, ranking
weights and the default user configuration so behavior stays consistent
across the engine, the service layer and the CLI.

Public API
----------
- COMMON_COMMANDS: Known top-level commands (first-token suggestions).
- SUBCOMMANDS: Read-only mapping of parent command ➜ known subcommands.
- CommandCatalog / CATALOG: Immutable bundle of both tables.
- MAX_HISTORY, RECENT_LIMIT, MAX_SUGGESTIONS: Engine bounds.
- PRIMARY_HISTORY_LIMIT, SHELL_HISTORY_LIMIT: Per-source load caps.
- PREFIX_WEIGHT, FREQUENCY_WEIGHT, CATALOG_WEIGHT: Ranking weights.
- DEFAULT_CONFIG: Template user configuration (copy before mutating).
- new_default_config(): Return a deep-copied DEFAULT_CONFIG for safe mutation.

Notes
-----
- The catalog is static configuration, not mutable state: tuples and a
  ``MappingProxyType`` keep accidental writes out.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Final, Mapping, Tuple

__all__ = [
    "COMMON_COMMANDS",
    "GIT_SUBCOMMANDS",
    "NPM_SUBCOMMANDS",
    "SUBCOMMANDS",
    "CommandCatalog",
    "CATALOG",
    "MAX_HISTORY",
    "RECENT_LIMIT",
    "MAX_SUGGESTIONS",
    "PRIMARY_HISTORY_LIMIT",
    "SHELL_HISTORY_LIMIT",
    "PREFIX_WEIGHT",
    "FREQUENCY_WEIGHT",
    "CATALOG_WEIGHT",
    "DEFAULT_CONFIG",
    "new_default_config",
]


# ---------------------------------------------------------------------------
# Command catalog.
# Order is meaningful: fuzzy ties fall back to catalog order.
# ---------------------------------------------------------------------------
COMMON_COMMANDS: Final[Tuple[str, ...]] = (
    "cd", "ls", "pwd", "mkdir", "rmdir", "rm", "cp", "mv", "touch",
    "cat", "less", "more", "head", "tail", "grep", "find", "which",
    "git", "npm", "node", "yarn", "pip", "python", "python3",
    "curl", "wget", "ssh", "scp", "rsync", "tar", "gzip", "unzip",
    "ps", "top", "htop", "kill", "jobs", "nohup", "screen", "tmux",
    "chmod", "chown", "sudo", "su", "whoami", "id", "groups",
)

GIT_SUBCOMMANDS: Final[Tuple[str, ...]] = (
    "add", "commit", "push", "pull", "clone", "status", "log", "diff",
    "branch", "checkout", "merge", "rebase", "reset", "stash", "tag",
    "remote", "fetch", "show", "config", "init",
)

NPM_SUBCOMMANDS: Final[Tuple[str, ...]] = (
    "install", "uninstall", "update", "run", "start", "test", "build",
    "init", "publish", "version", "audit", "fund", "list", "outdated",
)

# yarn shares npm's verbs.
SUBCOMMANDS: Final[Mapping[str, Tuple[str, ...]]] = MappingProxyType(
    {
        "git": GIT_SUBCOMMANDS,
        "npm": NPM_SUBCOMMANDS,
        "yarn": NPM_SUBCOMMANDS,
    }
)


@dataclass(frozen=True)
class CommandCatalog:
    """Immutable lookup tables for first-token and second-token completion.

    Attributes
    ----------
    commands : tuple of str
        Known top-level commands.
    subcommands : Mapping[str, tuple of str]
        Parent command ➜ subcommands. Parents absent from the mapping have
        no subcommand candidates.
    """

    commands: Tuple[str, ...] = COMMON_COMMANDS
    subcommands: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: SUBCOMMANDS)

    def __post_init__(self) -> None:
        # Freeze whatever the caller passed in (lists, plain dicts).
        object.__setattr__(self, "commands", tuple(self.commands))
        object.__setattr__(
            self,
            "subcommands",
            MappingProxyType({k: tuple(v) for k, v in self.subcommands.items()}),
        )

    def is_known(self, command: str) -> bool:
        """Return True if ``command`` is a catalog top-level command."""
        return command in self.commands

    def subcommands_for(self, parent: str) -> Tuple[str, ...]:
        """Return the subcommands of ``parent`` (empty tuple when unknown)."""
        return self.subcommands.get(parent, ())


CATALOG: Final[CommandCatalog] = CommandCatalog()

# ---------------------------------------------------------------------------
# History bounds.
# ---------------------------------------------------------------------------
MAX_HISTORY: Final[int] = 2000
RECENT_LIMIT: Final[int] = 20
MAX_SUGGESTIONS: Final[int] = 10
PRIMARY_HISTORY_LIMIT: Final[int] = 1000
SHELL_HISTORY_LIMIT: Final[int] = 500

# ---------------------------------------------------------------------------
# Ranking weights (prefix > fuzzy > frequency > catalog).
# ---------------------------------------------------------------------------
PREFIX_WEIGHT: Final[int] = 100
FREQUENCY_WEIGHT: Final[int] = 10
CATALOG_WEIGHT: Final[int] = 5

# ---------------------------------------------------------------------------
# Default user config (YAML on disk).
# IMPORTANT: Treat as a template; copy it before mutating at runtime.
# ---------------------------------------------------------------------------
DEFAULT_CONFIG: Final[Dict[str, object]] = {
    "enabled": True,
    "max_suggestions": MAX_SUGGESTIONS,
    "history_size": MAX_HISTORY,
    "shortcuts": {
        "gst": "git status",
        "gco": "git checkout",
        "gp": "git push",
        "gl": "git log",
        "ll": "ls -la",
    },
}


def new_default_config() -> Dict[str, object]:
    """Return a deep copy of :data:`DEFAULT_CONFIG` for safe mutation.

    Returns
    -------
    Dict[str, object]
        A deep-copied dictionary that callers may freely mutate.
    """
    return deepcopy(DEFAULT_CONFIG)
