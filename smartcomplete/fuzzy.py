# smartcomplete/fuzzy.py
"""
Subsequence fuzzy matching with a consecutive-run relevance score.

A query matches a candidate when every query character appears, in order,
somewhere in the candidate (case-insensitive). The score rewards runs of
consecutive matched characters: each matched character grows the current run
score to ``1 + 2 * run`` and every character adds the current run score to
the total, so ``"gst"`` against ``"git status"`` scores lower than ``"git"``
against ``"git status"``. An exact (case-insensitive) match scores
:data:`EXACT_MATCH_SCORE`.

Public API
----------
- FuzzyMatch: one match (original string, score, index in the input).
- match(query, candidate) -> FuzzyMatch | None
- filter(query, candidates) -> list[FuzzyMatch], best first, stable.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

__all__ = ["EXACT_MATCH_SCORE", "FuzzyMatch", "match", "filter", "score"]

EXACT_MATCH_SCORE = math.inf


@dataclass(frozen=True)
class FuzzyMatch:
    original: str
    score: float
    index: int = 0


def match(query: str, candidate: str, index: int = 0) -> Optional[FuzzyMatch]:
    """Match ``query`` against ``candidate``; return None when it is not a subsequence."""
    needle = query.lower()
    haystack = candidate.lower()
    if not needle:
        return FuzzyMatch(candidate, 0.0, index)
    if haystack == needle:
        return FuzzyMatch(candidate, EXACT_MATCH_SCORE, index)

    pos = 0
    run = 0
    total = 0
    for ch in haystack:
        if pos < len(needle) and ch == needle[pos]:
            pos += 1
            run += 1 + run
        else:
            run = 0
        total += run

    if pos < len(needle):
        return None
    return FuzzyMatch(candidate, float(total), index)


def score(query: str, candidate: str) -> float:
    """Return the fuzzy score of ``candidate`` for ``query`` (0 when no match)."""
    found = match(query, candidate)
    return found.score if found else 0.0


def filter(query: str, candidates: Iterable[str]) -> List[FuzzyMatch]:  # noqa: A001
    """Return matching candidates, highest score first.

    Ties keep the input order; non-matching candidates are dropped.
    """
    found = [m for i, c in enumerate(candidates) if (m := match(query, c, i)) is not None]
    found.sort(key=lambda m: (-m.score, m.index))
    return found
