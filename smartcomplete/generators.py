# smartcomplete/generators.py
"""
Candidate generators.

Each generator produces completion strings from one source; the engine picks
which ones run from the token count of the input:

====================  =========================================
tokens (trimmed)      generator
====================  =========================================
1                     :func:`command_candidates` (catalog)
2                     :func:`subcommand_candidates` (catalog)
3 or more             :func:`path_candidates` (filesystem)
any non-empty         :func:`history_candidates` (always)
====================  =========================================

Generators never raise for missing data: an unknown parent command or an
unreadable directory yields ``[]``.
"""

from __future__ import annotations

import asyncio
import os
from typing import List, Optional, Sequence, Tuple

from . import fuzzy
from .constants import CATALOG, CommandCatalog
from .filesystem import LocalFileSystem
from .log_manager import child

__all__ = [
    "tokenize",
    "command_candidates",
    "subcommand_candidates",
    "split_path_fragment",
    "path_candidates",
    "history_candidates",
]

logger = child(__name__)


def tokenize(text: str) -> List[str]:
    """Split on single spaces; no quoting semantics."""
    return text.split(" ")


def command_candidates(text: str, catalog: CommandCatalog = CATALOG) -> List[str]:
    return [m.original for m in fuzzy.filter(text, catalog.commands)]


def subcommand_candidates(
    parent: str, fragment: str, catalog: CommandCatalog = CATALOG
) -> List[str]:
    """Complete ``<parent> <fragment>`` from the parent's subcommand table."""
    known = catalog.subcommands_for(parent)
    if not known:
        return []
    return [f"{parent} {m.original}" for m in fuzzy.filter(fragment, known)]


def split_path_fragment(text: str) -> Tuple[str, str, str]:
    """Split ``text`` into (command prefix, directory part, base-name prefix).

    The command prefix keeps its trailing space; the directory part is ``""``
    when the fragment has none (the current directory is listed then).

    >>> split_path_fragment("tar czf src/ma")
    ('tar czf ', 'src', 'ma')
    """
    cut = text.rfind(" ")
    prefix, fragment = text[: cut + 1], text[cut + 1:]
    return prefix, os.path.dirname(fragment), os.path.basename(fragment)


def _list_matches(fs: LocalFileSystem, directory: str, base: str) -> List[str]:
    listed = directory or "."
    if not fs.exists(listed):
        return []
    needle = base.lower()
    out: List[str] = []
    for name in sorted(fs.list_dir(listed)):
        if not name.lower().startswith(needle):
            continue
        full = os.path.join(directory, name)
        out.append(full + "/" if fs.is_dir(os.path.join(listed, name)) else full)
    return out


async def path_candidates(text: str, fs: Optional[LocalFileSystem] = None) -> List[str]:
    """Complete the last token of ``text`` against directory entries.

    Any I/O failure (missing directory, permission error) yields ``[]``.
    """
    fs = fs or LocalFileSystem()
    prefix, directory, base = split_path_fragment(text)
    try:
        entries = await asyncio.to_thread(_list_matches, fs, directory, base)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Path completion failed for %r: %s", directory, exc)
        return []
    return [f"{prefix}{entry}" for entry in entries]


def history_candidates(text: str, history: Sequence[str]) -> List[str]:
    return [m.original for m in fuzzy.filter(text, history)]
