# tests/conftest.py
from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, List, Optional, Set

import pytest

from smartcomplete.history import HistoryStore, ZshHistoryStore


# -------------------------
# Hermetic environment
# -------------------------
@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """
    Point every location smartcomplete reads or writes into tmp_path.

    - HOME and the SMARTCOMPLETE_* paths live under tmp_path/home
    - cwd is tmp_path/work (so .env lookups and path completion are local)
    - package log records propagate, so caplog can see them
    """
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("SMARTCOMPLETE_HOME", str(home / ".smartcomplete"))
    monkeypatch.setenv("SMARTCOMPLETE_HISTORY_FILE", str(home / ".smartcomplete_history"))
    monkeypatch.setenv("HISTFILE", str(home / ".bash_history"))
    monkeypatch.setenv("SMARTCOMPLETE_ZSH_HISTORY", str(home / ".zsh_history"))
    for var in ("SMARTCOMPLETE_CONFIG", "SMARTCOMPLETE_LOG_LEVEL", "SMARTCOMPLETE_FORCE_COLOR"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(work)
    monkeypatch.setattr(logging.getLogger("smartcomplete"), "propagate", True)
    return home


# -------------------------
# In-memory filesystem
# -------------------------
class FakeFileSystem:
    """
    Dict-backed stand-in for LocalFileSystem.

    - .files: path ➜ text
    - .dirs: path ➜ entry names
    - .broken: paths whose every operation raises OSError
    - .appended: (path, text) tuples in call order
    """

    def __init__(
        self,
        files: Optional[Dict[str, str]] = None,
        dirs: Optional[Dict[str, List[str]]] = None,
        broken: Iterable[str] = (),
    ):
        self.files: Dict[str, str] = dict(files or {})
        self.dirs: Dict[str, List[str]] = dict(dirs or {})
        self.broken: Set[str] = set(broken)
        self.appended: List[tuple] = []

    def _check(self, path) -> str:
        key = os.fspath(path)
        if key in self.broken:
            raise PermissionError(f"denied: {key}")
        return key

    def exists(self, path) -> bool:
        key = os.fspath(path)
        return key in self.files or key in self.dirs or key in self.broken

    def read_all(self, path) -> str:
        key = self._check(path)
        if key not in self.files:
            raise FileNotFoundError(key)
        return self.files[key]

    def append(self, path, text: str) -> None:
        key = self._check(path)
        self.appended.append((key, text))
        self.files[key] = self.files.get(key, "") + text

    def list_dir(self, path) -> List[str]:
        key = self._check(path)
        if key not in self.dirs:
            raise FileNotFoundError(key)
        return list(self.dirs[key])

    def is_dir(self, path) -> bool:
        return os.fspath(path) in self.dirs


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    return FakeFileSystem()


@pytest.fixture
def make_stores(fake_fs):
    """
    Build (native, bash, zsh) stores over fake_fs from three text blobs.

    Usage:
        stores = make_stores(native="ls\\n", bash="", zsh=": 1:0;git pull\\n")
    """
    def _factory(native: Optional[str] = None, bash: Optional[str] = None, zsh: Optional[str] = None):
        for path, text in (("/native", native), ("/bash", bash), ("/zsh", zsh)):
            if text is not None:
                fake_fs.files[path] = text
        return [
            HistoryStore("/native", limit=1000, fs=fake_fs, name="native"),
            HistoryStore("/bash", limit=500, fs=fake_fs, name="bash"),
            ZshHistoryStore("/zsh", limit=500, fs=fake_fs, name="zsh"),
        ]
    return _factory
