# smartcomplete/completers.py
"""
Prompt-toolkit completer backed by :class:`~smartcomplete.engine.CompletionEngine`.

Public API
----------
- EngineCompleter: prompt-toolkit Completer that replaces the whole input
  line with each ranked suggestion.

Notes
-----
- Suggestions are whole command lines (``"git status"``), so every
  Completion replaces everything before the cursor.
- Engine errors are logged at DEBUG and produce no completions.
"""

from __future__ import annotations

import asyncio
from typing import Any, AsyncGenerator, Iterable, Iterator, List

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from .engine import CompletionEngine
from .log_manager import child

__all__ = ["EngineCompleter"]

logger = child(__name__)


class EngineCompleter(Completer):
    """Whole-line completer over a :class:`CompletionEngine`.

    Parameters
    ----------
    engine : CompletionEngine
        An engine whose history is already initialized.

    Examples
    --------
    >>> comp = EngineCompleter(CompletionEngine())
    >>> # session = PromptSession(completer=comp, complete_while_typing=False)
    """

    __slots__ = ("engine",)

    def __init__(self, engine: CompletionEngine) -> None:
        self.engine = engine

    @staticmethod
    def _to_completions(text: str, suggestions: Iterable[str]) -> Iterator[Completion]:
        for suggestion in suggestions:
            yield Completion(text=suggestion, start_position=-len(text), display=suggestion)

    def get_completions(  # type: ignore[override]
        self, document: Document, complete_event: Any
    ) -> Iterator[Completion]:
        """Yield completions synchronously (used outside a running event loop)."""
        text = document.text_before_cursor
        try:
            suggestions: List[str] = asyncio.run(self.engine.get_completions(text))
        except Exception as exc:  # noqa: BLE001
            logger.debug("Completion failed for %r: %s", text, exc)
            return
        yield from self._to_completions(text, suggestions)

    async def get_completions_async(  # type: ignore[override]
        self, document: Document, complete_event: Any
    ) -> AsyncGenerator[Completion, None]:
        """Yield completions from inside prompt-toolkit's event loop."""
        text = document.text_before_cursor
        try:
            suggestions = await self.engine.get_completions(text)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Completion failed for %r: %s", text, exc)
            return
        for completion in self._to_completions(text, suggestions):
            yield completion
