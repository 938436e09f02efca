# smartcomplete/log_manager.py
"""
Centralized logger factory for smartcomplete.

This module provides a single entry point, :func:`get_logger`, that returns a
configured :class:`logging.Logger`. It supports:
- Colored console logs via `colorlog` when stderr is a TTY
- Plain console logs otherwise
- Optional file logging (UTF-8)
- Idempotent handler attachment (prevents duplicate handlers)

Console output goes to **stderr**: ``smartcomplete complete`` prints JSON on
stdout and diagnostics must not corrupt it.

Environment variables
---------------------
SMARTCOMPLETE_FORCE_COLOR=true|false
    Force-enable or disable colored logging regardless of the TTY check.
SMARTCOMPLETE_LOG_LEVEL=DEBUG|INFO|WARNING|ERROR
    Default level when :func:`get_logger` is called without ``level``.

Notes
-----
- Module loggers are children of ``"smartcomplete"`` (see :func:`child`), so
  handlers are attached once on the package logger and shared.

Python: 3.9+
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Dict, Optional, Union

import colorlog

__all__ = ["get_logger", "child", "resolve_level", "ROOT_LOGGER_NAME"]

ROOT_LOGGER_NAME = "smartcomplete"

# -----------------------
# Color configuration map
# -----------------------

_LEVEL_COLORS: Dict[str, str] = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

# Colors for the logger name segment (per module logger).
_NAME_COLORS: Dict[str, str] = {
    "smartcomplete.history": "blue",
    "smartcomplete.engine": "bold_white",
    "smartcomplete.generators": "magenta",
    "smartcomplete.config": "cyan",
    "smartcomplete.service": "bold_blue",
    "smartcomplete.completers": "white",
}

_PLAIN_FMT = "[%(levelname)s] %(asctime)s - [%(name)s] %(message)s"
_PLAIN_DATEFMT = "%Y-%m-%d %H:%M:%S"

_COLOR_FMT = (
    "%(log_color)s[%(levelname)s]%(reset)s %(asctime)s - "
    "[%(name_log_color)s%(name)s%(reset)s] %(message)s"
)

_TRUTHY = {"1", "true", "yes", "on"}


# ---------------
# Helper builders
# ---------------

def _should_use_color() -> bool:
    """Return True if colorized logs should be used."""
    env = os.getenv("SMARTCOMPLETE_FORCE_COLOR")
    if env is not None:
        return env.strip().lower() in _TRUTHY
    try:
        return sys.stderr.isatty()
    except (AttributeError, ValueError):
        # Detached or closed stream (e.g. under some test runners).
        return False


def _build_colored_stream_handler() -> logging.Handler:
    """Create a colorlog StreamHandler with our format and color maps."""
    handler = colorlog.StreamHandler(stream=sys.stderr)
    formatter = colorlog.ColoredFormatter(
        fmt=_COLOR_FMT,
        datefmt=_PLAIN_DATEFMT,
        log_colors=_LEVEL_COLORS,
        secondary_log_colors={"name": _NAME_COLORS},
    )
    handler.setFormatter(formatter)
    return handler


def _build_plain_stream_handler() -> logging.Handler:
    """Create a plain (non-colored) StreamHandler."""
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=_PLAIN_FMT, datefmt=_PLAIN_DATEFMT))
    return handler


def _attach_stream_handler(logger: logging.Logger) -> None:
    """
    Attach a single stream handler to `logger` if not already attached.

    We mark the logger with a private attribute to avoid duplicate stream handlers.
    """
    if getattr(logger, "_smartcomplete_stream_handler_attached", False):
        return

    handler = _build_colored_stream_handler() if _should_use_color() else _build_plain_stream_handler()
    logger.addHandler(handler)
    logger._smartcomplete_stream_handler_attached = True  # type: ignore[attr-defined]


def _attach_file_handler(logger: logging.Logger, log_to_file: str) -> None:
    """
    Attach a file handler to `logger` for the given path, if not already present.

    Ensures only one FileHandler per absolute file path per logger.
    """
    log_file_path = os.path.abspath(log_to_file)
    for h in logger.handlers:
        if isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", None) == log_file_path:
            return

    try:
        fhandler = logging.FileHandler(log_file_path, encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to open log file '%s': %s", log_file_path, exc)
        return

    fhandler.setFormatter(logging.Formatter(fmt=_PLAIN_FMT, datefmt=_PLAIN_DATEFMT))
    logger.addHandler(fhandler)


def resolve_level(level: Union[int, str, None] = None) -> int:
    """Turn ``level`` (or ``SMARTCOMPLETE_LOG_LEVEL``) into a logging level.

    Unknown names fall back to WARNING.
    """
    if isinstance(level, int):
        return level
    name = (level or os.getenv("SMARTCOMPLETE_LOG_LEVEL") or "WARNING").strip().upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


# ----------------
# Public interface
# ----------------

def get_logger(
    name: str = ROOT_LOGGER_NAME,
    level: Union[int, str, None] = None,
    log_to_file: Optional[str] = None,
) -> logging.Logger:
    """
    Return a configured, reusable :class:`logging.Logger`.

    Parameters
    ----------
    name : str, default "smartcomplete"
        Logger name.
    level : int or str, optional
        Log level for this logger. Defaults to ``SMARTCOMPLETE_LOG_LEVEL`` or
        WARNING.
    log_to_file : Optional[str], default None
        Optional filesystem path for file logging. The file handler is attached
        once per unique path per logger.

    Returns
    -------
    logging.Logger
        A configured logger instance with ``propagate = False``.
    """
    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(level))

    _attach_stream_handler(logger)
    if log_to_file:
        _attach_file_handler(logger, log_to_file)

    logger.propagate = False
    return logger


def child(module: str) -> logging.Logger:
    """Return the ``smartcomplete.<module>`` logger.

    Children carry no handlers of their own; records propagate to the package
    logger configured by :func:`get_logger`.
    """
    short = module.rsplit(".", 1)[-1]
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{short}")
