# smartcomplete/history.py
"""
Line-oriented command-history sources.

Overview
--------
A :class:`HistoryStore` reads one history file (native, bash or zsh) and
appends new commands to it. Failures never propagate:

- :meth:`HistoryStore.load` returns ``[]`` when the file is missing or
  unreadable; the error is logged, never raised.
- :meth:`HistoryStore.append` logs I/O failures instead of raising.
- Blocking file access runs in a worker thread (``asyncio.to_thread``) so the
  three sources can load concurrently.

zsh with ``EXTENDED_HISTORY`` writes ``: <start>:<elapsed>;<command>``;
:class:`ZshHistoryStore` strips that prefix and keeps lines that do not
match unchanged.

Public API
----------
- HistoryStore, ZshHistoryStore
- parse_zsh_line(line) -> str
- default_stores(settings) -> tuple of the primary, bash and zsh stores

Python: 3.9+
"""

from __future__ import annotations

import asyncio
import re
from typing import TYPE_CHECKING, List, Optional, Tuple

from .constants import PRIMARY_HISTORY_LIMIT, SHELL_HISTORY_LIMIT
from .filesystem import LocalFileSystem, PathLike
from .log_manager import child

if TYPE_CHECKING:  # pragma: no cover
    from .config import Settings

__all__ = ["HistoryStore", "ZshHistoryStore", "parse_zsh_line", "default_stores"]

logger = child(__name__)

_ZSH_EXTENDED_RE = re.compile(r"^: \d+:\d+;(.*)$")


def parse_zsh_line(line: str) -> str:
    """Strip the ``: <int>:<int>;`` marker from a zsh history line.

    >>> parse_zsh_line(": 1690000000:0;git pull")
    'git pull'
    >>> parse_zsh_line("git pull")
    'git pull'
    """
    m = _ZSH_EXTENDED_RE.match(line)
    return m.group(1) if m else line


class HistoryStore:
    """One history file with a per-source cap on how many entries to load.

    Parameters
    ----------
    path : str or os.PathLike
        History file location.
    limit : int
        Only the most recent ``limit`` entries are returned by :meth:`load`.
    fs : LocalFileSystem, optional
        Filesystem primitive; defaults to the local disk.
    name : str
        Label used in log lines.
    """

    def __init__(
        self,
        path: PathLike,
        *,
        limit: int = PRIMARY_HISTORY_LIMIT,
        fs: Optional[LocalFileSystem] = None,
        name: str = "history",
    ) -> None:
        self.path = path
        self.limit = limit
        self.fs = fs or LocalFileSystem()
        self.name = name

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, path={str(self.path)!r}, limit={self.limit})"

    def parse_line(self, line: str) -> str:
        return line

    def _read_entries(self) -> List[str]:
        if not self.fs.exists(self.path):
            logger.debug("%s history not found at %s", self.name, self.path)
            return []
        content = self.fs.read_all(self.path)
        parsed = (self.parse_line(line.rstrip("\r")).strip() for line in content.split("\n"))
        entries = [entry for entry in parsed if entry]
        if self.limit <= 0:
            return []
        return entries[-self.limit:]

    async def load(self) -> List[str]:
        """Return the most recent entries of this source (``[]`` on any failure)."""
        try:
            entries = await asyncio.to_thread(self._read_entries)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Error loading %s history from %s: %s", self.name, self.path, exc)
            return []
        logger.debug("Loaded %d %s history entries", len(entries), self.name)
        return entries

    async def append(self, command: str) -> None:
        """Append ``command`` as one line; empty input is a no-op."""
        clean = command.strip()
        if not clean:
            return
        try:
            await asyncio.to_thread(self.fs.append, self.path, f"{clean}\n")
        except Exception as exc:  # noqa: BLE001
            logger.error("Error saving command to %s history: %s", self.name, exc)


class ZshHistoryStore(HistoryStore):
    """zsh history; understands the extended-history timestamp prefix."""

    def parse_line(self, line: str) -> str:
        return parse_zsh_line(line)


def default_stores(
    settings: "Settings", fs: Optional[LocalFileSystem] = None
) -> Tuple[HistoryStore, HistoryStore, HistoryStore]:
    """Build the native, bash and zsh stores; the native store comes first."""
    return (
        HistoryStore(settings.history_file, limit=PRIMARY_HISTORY_LIMIT, fs=fs, name="native"),
        HistoryStore(settings.bash_history_file, limit=SHELL_HISTORY_LIMIT, fs=fs, name="bash"),
        ZshHistoryStore(settings.zsh_history_file, limit=SHELL_HISTORY_LIMIT, fs=fs, name="zsh"),
    )
