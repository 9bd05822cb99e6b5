"""Deterministic ordering of scored candidates."""

from typing import Iterable

from .models import ScoredCandidate


def ranking_key(candidate: ScoredCandidate) -> tuple:
    # Score, rating and experience descending; designer id makes the order total
    designer = candidate.designer
    return (
        -candidate.result.score,
        -(designer.rating or 0.0),
        -(designer.years_experience or 0),
        str(designer.id),
    )


def rank(candidates: Iterable[ScoredCandidate]) -> list[ScoredCandidate]:
    """Return candidates best first.

    Identical inputs always produce the same order.
    """
    return sorted(candidates, key=ranking_key)
