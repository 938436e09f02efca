# smartcomplete/service.py
"""
Config-aware front door used by the CLI and shell integrations.

:class:`CompletionService` owns one :class:`~smartcomplete.engine.CompletionEngine`
and applies the user configuration on top of it:

- ``enabled: false`` turns every suggestion request into ``[]``;
- an exact ``shortcuts`` hit returns only its expansion;
- ``max_suggestions`` truncates the engine's ranked list;
- ``history_size`` bounds the engine's in-memory history.

A broken config file never breaks completion: the error is logged and the
defaults are used instead.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .config import ConfigError, Settings, load_config, resolve_settings
from .constants import MAX_HISTORY, MAX_SUGGESTIONS, new_default_config
from .engine import CompletionEngine
from .log_manager import child

__all__ = ["CompletionService"]

logger = child(__name__)


class CompletionService:
    """Shortcut expansion, on/off switch and result limits around the engine."""

    def __init__(
        self,
        engine: Optional[CompletionEngine] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = resolve_settings(settings)
        self._config: Optional[Dict[str, Any]] = None
        self._started = False
        self.engine = engine or CompletionEngine.from_settings(
            self.settings,
            max_history=self.history_size,
            max_suggestions=self.max_suggestions,
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> Dict[str, Any]:
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def _load_config(self) -> Dict[str, Any]:
        try:
            return load_config(self.settings.config_file)
        except ConfigError as exc:
            logger.error("Error loading configuration: %s", exc)
            return new_default_config()

    def reload_config(self) -> Dict[str, Any]:
        self._config = None
        return self.config

    @property
    def max_suggestions(self) -> int:
        value = self.config.get("max_suggestions")
        return value if isinstance(value, int) and value > 0 else MAX_SUGGESTIONS

    @property
    def history_size(self) -> int:
        value = self.config.get("history_size")
        return value if isinstance(value, int) and value > 0 else MAX_HISTORY

    @property
    def shortcuts(self) -> Dict[str, str]:
        value = self.config.get("shortcuts")
        return value if isinstance(value, dict) else {}

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Load history once; later calls are no-ops."""
        if self._started:
            return
        self._started = True
        await self.engine.initialize()

    async def suggest(self, text: str) -> List[str]:
        """Return suggestions for ``text`` honoring the user configuration."""
        if not self.config.get("enabled", True):
            return []

        expansion = self.shortcuts.get(text.strip())
        if expansion:
            return [str(expansion)]

        await self.start()
        completions = await self.engine.get_completions(text)
        return completions[: self.max_suggestions]

    def record(self, command: str) -> None:
        """Remember an executed command (also before :meth:`start`)."""
        self.engine.add_to_history(command)
