# smartcomplete/ranking.py
"""
Scoring and ranking of completion candidates.

Four additive signals, strongest first:

1. exact prefix (case-insensitive) of the raw input: ``PREFIX_WEIGHT``
2. fuzzy sub-score of the candidate against the input
3. ``FREQUENCY_WEIGHT`` per exact occurrence in history
4. ``CATALOG_WEIGHT`` when the candidate's first token is a catalog command

Sorting is stable: equal scores keep the aggregation order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from . import fuzzy
from .constants import (
    CATALOG,
    CATALOG_WEIGHT,
    FREQUENCY_WEIGHT,
    MAX_SUGGESTIONS,
    PREFIX_WEIGHT,
    CommandCatalog,
)

__all__ = ["ScoredCandidate", "dedupe", "score_candidate", "score_all", "rank"]


@dataclass(frozen=True)
class ScoredCandidate:
    command: str
    score: float


def dedupe(candidates: Iterable[str]) -> List[str]:
    """Collapse duplicates, keeping each string at its first position."""
    return list(dict.fromkeys(candidates))


def score_candidate(
    candidate: str,
    text: str,
    history: Sequence[str] = (),
    catalog: CommandCatalog = CATALOG,
) -> float:
    """Return the relevance score of ``candidate`` for input ``text``."""
    total = 0.0
    if candidate.lower().startswith(text.lower()):
        total += PREFIX_WEIGHT
    total += fuzzy.score(text, candidate)
    total += FREQUENCY_WEIGHT * history.count(candidate)
    if catalog.is_known(candidate.split(" ")[0]):
        total += CATALOG_WEIGHT
    return total


def score_all(
    candidates: Iterable[str],
    text: str,
    history: Sequence[str] = (),
    catalog: CommandCatalog = CATALOG,
) -> List[ScoredCandidate]:
    """Dedupe and score, best first (stable)."""
    scored = [
        ScoredCandidate(c, score_candidate(c, text, history, catalog))
        for c in dedupe(candidates)
    ]
    # list.sort is stable; reverse=True keeps equal keys in input order too.
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored


def rank(
    candidates: Iterable[str],
    text: str,
    history: Sequence[str] = (),
    catalog: CommandCatalog = CATALOG,
    limit: int = MAX_SUGGESTIONS,
) -> List[str]:
    """Return at most ``limit`` candidate strings, best first."""
    return [s.command for s in score_all(candidates, text, history, catalog)[:limit]]
