# smartcomplete/filesystem.py
"""
Filesystem primitive used by the history stores and the path generator.

Every method may raise :class:`OSError`; callers in this package treat any
raised error as "absent/empty".
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Union

__all__ = ["LocalFileSystem", "PathLike"]

PathLike = Union[str, "os.PathLike[str]"]


class LocalFileSystem:
    """Thin wrapper over the local disk (UTF-8 text, line-oriented files)."""

    encoding = "utf-8"

    def exists(self, path: PathLike) -> bool:
        return os.path.exists(path)

    def read_all(self, path: PathLike) -> str:
        # zsh histories may carry metafied bytes; decode them lossily.
        return Path(path).read_text(encoding=self.encoding, errors="replace")

    def append(self, path: PathLike, text: str) -> None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "a", encoding=self.encoding) as fh:
            fh.write(text)

    def list_dir(self, path: PathLike) -> List[str]:
        return os.listdir(path)

    def is_dir(self, path: PathLike) -> bool:
        return os.path.isdir(path)
