# tests/test_fuzzy.py
from __future__ import annotations

import math

from smartcomplete import fuzzy as sut


def test_match_requires_ordered_subsequence():
    assert sut.match("gst", "git status") is not None
    assert sut.match("tsg", "git status") is None
    assert sut.match("gitx", "git") is None


def test_match_is_case_insensitive_and_keeps_original():
    m = sut.match("GIT", "git Status")
    assert m is not None
    assert m.original == "git Status"


def test_consecutive_runs_score_higher():
    # g,i,t consecutive: 1 + 3 + 7
    assert sut.score("git", "git status") == 11
    # g alone, then "st" consecutive: 1 + 1 + 3
    assert sut.score("gst", "git status") == 5


def test_exact_match_outranks_everything():
    assert sut.score("ls", "LS") == math.inf
    assert sut.EXACT_MATCH_SCORE == math.inf


def test_empty_query_matches_with_zero():
    m = sut.match("", "anything")
    assert m is not None and m.score == 0


def test_score_zero_when_no_match():
    assert sut.score("zz", "git") == 0


def test_filter_orders_by_score_then_input_order():
    out = sut.filter("st", ["git stash", "status", "list", "nope", "stat"])
    # every match holds one "st" run (score 4): input order decides
    assert [m.original for m in out] == ["git stash", "status", "list", "stat"]
    assert [m.index for m in out] == [0, 1, 2, 4]


def test_filter_puts_longer_runs_first():
    out = sut.filter("sta", ["s-t-a", "stash"])
    assert [m.original for m in out] == ["stash", "s-t-a"]


def test_filter_ties_are_stable():
    out = sut.filter("a", ["ba", "ca", "da"])
    assert [m.original for m in out] == ["ba", "ca", "da"]
