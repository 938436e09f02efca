# tests/test_generators.py
from __future__ import annotations

import asyncio

import pytest

from smartcomplete import generators as sut
from smartcomplete.constants import CommandCatalog


# --------------------------
# tokenize / command / subcommand
# --------------------------

def test_tokenize_splits_on_single_spaces():
    assert sut.tokenize("git  st") == ["git", "", "st"]
    assert sut.tokenize("ls") == ["ls"]


def test_command_candidates_fuzzy_matches_catalog():
    out = sut.command_candidates("gi")
    assert "git" in out
    assert all("g" in c and "i" in c for c in out)


def test_command_candidates_prefers_consecutive_runs():
    out = sut.command_candidates("pyt")
    assert out[:2] == ["python", "python3"]


def test_subcommand_candidates_formats_with_parent():
    out = sut.subcommand_candidates("git", "st")
    assert "git status" in out
    assert "git stash" in out
    assert all(c.startswith("git ") for c in out)


def test_subcommand_candidates_unknown_parent_is_empty():
    assert sut.subcommand_candidates("docker", "ps") == []


def test_yarn_uses_npm_subcommands():
    assert "yarn install" in sut.subcommand_candidates("yarn", "inst")


def test_custom_catalog():
    cat = CommandCatalog(commands=("make",), subcommands={"make": ("clean", "all")})
    assert sut.command_candidates("mk", cat) == ["make"]
    assert sut.subcommand_candidates("make", "cl", cat) == ["make clean"]


# --------------------------
# path completion
# --------------------------

@pytest.fixture
def project_tree(isolated_env, tmp_path):
    """work/src/{Makefile, main.py, models/, util.py}; cwd is work/."""
    work = tmp_path / "work"
    src = work / "src"
    src.mkdir()
    (src / "Makefile").write_text("")
    (src / "main.py").write_text("")
    (src / "util.py").write_text("")
    (src / "models").mkdir()
    (work / "README.md").write_text("")
    return work


def test_split_path_fragment():
    assert sut.split_path_fragment("tar czf src/ma") == ("tar czf ", "src", "ma")
    assert sut.split_path_fragment("cp a b") == ("cp a ", "", "b")
    assert sut.split_path_fragment("ls -la src/") == ("ls -la ", "src", "")


def test_path_candidates_case_insensitive_prefix_and_dir_suffix(project_tree):
    out = asyncio.run(sut.path_candidates("ls -la src/ma"))
    assert out == ["ls -la src/Makefile", "ls -la src/main.py"]

    out = asyncio.run(sut.path_candidates("ls -la src/mo"))
    assert out == ["ls -la src/models/"]


def test_path_candidates_lists_directory_contents(project_tree):
    out = asyncio.run(sut.path_candidates("ls -la src/"))
    assert out == [
        "ls -la src/Makefile",
        "ls -la src/main.py",
        "ls -la src/models/",
        "ls -la src/util.py",
    ]


def test_path_candidates_current_directory_has_no_dot_prefix(project_tree):
    out = asyncio.run(sut.path_candidates("cp -r README.md s"))
    assert out == ["cp -r README.md src/"]


def test_path_candidates_missing_directory_is_empty(project_tree):
    assert asyncio.run(sut.path_candidates("ls -la nope/x")) == []


def test_path_candidates_io_error_is_empty(fake_fs):
    fake_fs.broken.add("locked")
    assert asyncio.run(sut.path_candidates("cat a locked/f", fs=fake_fs)) == []


def test_path_candidates_with_fake_fs(fake_fs):
    fake_fs.dirs["etc"] = ["hosts", "hostname", "passwd", "ssh"]
    fake_fs.dirs["etc/ssh"] = []
    out = asyncio.run(sut.path_candidates("sudo vim etc/h", fs=fake_fs))
    assert out == ["sudo vim etc/hostname", "sudo vim etc/hosts"]


# --------------------------
# history
# --------------------------

def test_history_candidates_fuzzy_over_history():
    hist = ["git status", "ls -la", "git stash pop"]
    out = sut.history_candidates("gst", hist)
    assert set(out) == {"git status", "git stash pop"}
    assert sut.history_candidates("zzz", hist) == []
