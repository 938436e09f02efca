# smartcomplete/engine.py
"""
Completion engine: generator routing, aggregation and ranking.

Public API
----------
- CompletionEngine.initialize()          (async) merge the history sources
- CompletionEngine.get_completions(text) (async) ranked suggestions
- CompletionEngine.add_to_history(cmd)   record a command (persisted)
- CompletionEngine.get_history()         defensive copy, oldest first
- CompletionEngine.recent(limit)         most recent first
- CompletionEngine.flush()               (async) wait for pending writes

Behavior
--------
- Nothing raises out of the public API: failing sources and generators
  degrade to empty results plus a log line.
- History is an insertion-ordered, duplicate-free list bounded to
  ``max_history`` entries; the oldest entries are evicted first.
- Persistence is fire-and-forget. With a running event loop the write is
  scheduled as a task (see :meth:`flush`); without one it runs to completion
  before :meth:`add_to_history` returns.

Python: 3.9+
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Set

from .constants import CATALOG, MAX_HISTORY, MAX_SUGGESTIONS, RECENT_LIMIT, CommandCatalog
from .filesystem import LocalFileSystem
from .generators import (
    command_candidates,
    history_candidates,
    path_candidates,
    subcommand_candidates,
    tokenize,
)
from .history import HistoryStore, default_stores
from .log_manager import child
from .ranking import rank

if TYPE_CHECKING:  # pragma: no cover
    from .config import Settings

__all__ = ["CompletionEngine", "merge_histories"]

logger = child(__name__)


def merge_histories(sources: Iterable[Sequence[str]], limit: int = MAX_HISTORY) -> List[str]:
    """Concatenate ``sources``, drop repeats (first occurrence wins), keep the last ``limit``."""
    merged = list(dict.fromkeys(entry for source in sources for entry in source))
    return merged[-limit:] if limit > 0 else []


class CompletionEngine:
    """Fuse catalog, filesystem and history candidates under one ranking.

    Parameters
    ----------
    stores : sequence of HistoryStore, optional
        History sources, merged in order. The first one is the native store
        that :meth:`add_to_history` appends to. ``None`` or empty means an
        in-memory history only.
    catalog : CommandCatalog
        Static command/subcommand tables.
    fs : LocalFileSystem, optional
        Filesystem primitive for path completion.
    max_history : int
        Bound of the in-memory history.
    max_suggestions : int
        How many ranked completions :meth:`get_completions` returns.
    """

    def __init__(
        self,
        stores: Optional[Sequence[HistoryStore]] = None,
        *,
        catalog: CommandCatalog = CATALOG,
        fs: Optional[LocalFileSystem] = None,
        max_history: int = MAX_HISTORY,
        max_suggestions: int = MAX_SUGGESTIONS,
    ) -> None:
        self.stores: List[HistoryStore] = list(stores or [])
        self.catalog = catalog
        self.fs = fs or LocalFileSystem()
        self.max_history = max_history
        self.max_suggestions = max_suggestions
        self._history: List[str] = []
        self._pending: Set["asyncio.Task[None]"] = set()
        self._last_write: Optional["asyncio.Task[None]"] = None

    @classmethod
    def from_settings(cls, settings: "Settings", **kwargs) -> "CompletionEngine":
        """Build an engine over the native, bash and zsh stores of ``settings``."""
        return cls(default_stores(settings, fs=kwargs.get("fs")), **kwargs)

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """Load every store concurrently and merge them into the history.

        One failing source does not stop the others; if all fail the history
        stays as it was and the failure is logged. Commands recorded before
        this call stay in the history as its most recent entries.
        """
        if not self.stores:
            return
        results = await asyncio.gather(
            *(store.load() for store in self.stores), return_exceptions=True
        )
        loaded: List[Sequence[str]] = []
        for store, result in zip(self.stores, results):
            if isinstance(result, BaseException):
                logger.warning("Error loading %s history: %s", store.name, result)
                continue
            loaded.append(result)
        if not loaded:
            logger.error("No history source could be loaded; starting empty")
            return
        recorded = list(self._history)
        seen = set(recorded)
        merged = [e for e in merge_histories(loaded, self.max_history) if e not in seen]
        merged += recorded
        self._history = merged[-self.max_history:] if self.max_history > 0 else []
        logger.debug("History initialized with %d entries", len(self._history))

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    async def get_completions(self, text: str) -> List[str]:
        """Return up to ``max_suggestions`` ranked completions for ``text``.

        Empty (or whitespace-only) input returns the recent-commands list
        without scoring.
        """
        trimmed = text.strip()
        if not trimmed:
            return self.recent()

        try:
            candidates = await self._gather_candidates(trimmed)
            return rank(candidates, trimmed, self._history, self.catalog, self.max_suggestions)
        except Exception as exc:  # noqa: BLE001
            logger.error("Ranking failed for %r: %s", trimmed, exc)
            return []

    async def _gather_candidates(self, trimmed: str) -> List[str]:
        tokens = tokenize(trimmed)
        candidates: List[str] = []

        if len(tokens) == 1:
            candidates += self._safely("command", command_candidates, trimmed, self.catalog)
        elif len(tokens) == 2:
            candidates += self._safely(
                "subcommand", subcommand_candidates, tokens[0], tokens[1], self.catalog
            )
        else:
            try:
                candidates += await path_candidates(trimmed, self.fs)
            except Exception as exc:  # noqa: BLE001
                logger.warning("path generator failed: %s", exc)

        candidates += self._safely("history", history_candidates, trimmed, list(self._history))
        return candidates

    @staticmethod
    def _safely(label: str, generator, *args) -> List[str]:
        try:
            return generator(*args)
        except Exception as exc:  # noqa: BLE001
            logger.warning("%s generator failed: %s", label, exc)
            return []

    def recent(self, limit: int = RECENT_LIMIT) -> List[str]:
        """Return the ``limit`` most recent entries, newest first."""
        if limit <= 0:
            return []
        return self._history[-limit:][::-1]

    # ------------------------------------------------------------------
    # History mutation
    # ------------------------------------------------------------------

    def add_to_history(self, command: str) -> None:
        """Record ``command`` as the most recent entry and persist it."""
        clean = command.strip()
        if not clean:
            return

        if clean in self._history:
            self._history.remove(clean)
        self._history.append(clean)
        if len(self._history) > self.max_history:
            self._history = self._history[-self.max_history:] if self.max_history > 0 else []

        self._persist(clean)

    def _persist(self, command: str) -> None:
        if not self.stores:
            return
        store = self.stores[0]
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                asyncio.run(store.append(command))
            except Exception as exc:  # noqa: BLE001
                logger.error("Persisting %r failed: %s", command, exc)
            return
        previous = self._last_write
        if previous is not None and (previous.done() or previous.get_loop() is not loop):
            previous = None
        task = loop.create_task(self._append_after(previous, store, command))
        self._last_write = task
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    @staticmethod
    async def _append_after(
        previous: Optional["asyncio.Task[None]"], store: HistoryStore, command: str
    ) -> None:
        # Appends land on disk in add_to_history order.
        if previous is not None:
            await asyncio.gather(previous, return_exceptions=True)
        await store.append(command)

    async def flush(self) -> None:
        """Wait for persistence tasks scheduled by :meth:`add_to_history`."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def get_history(self) -> List[str]:
        return list(self._history)
