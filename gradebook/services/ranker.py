from __future__ import annotations

from collections.abc import Iterable

from ..models.component import Component
from ..models.config_models import DEFAULT_TOP_N
from ..models.record import StudentRow
from ..models.results import RankingEntry
from .validator import parse_score

"""Ranker: top-N students for one scoring component.

Only the selected cell has to parse; rows where it is missing or not a number
drop out of the ranking without a diagnostic. Ties keep sheet order (stable
sort), so the same input always yields the same ranking.
"""

__all__ = [
    "rank",
    "top_n",
    "top3",
]


def rank(rows: Iterable[StudentRow], component: Component | str) -> list[RankingEntry]:
    """All rankable rows for `component`, highest score first."""
    comp = Component.parse(component)
    candidates: list[RankingEntry] = []
    for row in rows:
        text = row.score_text(comp)
        if text is None:
            continue
        try:
            score = parse_score(text)
        except ValueError:
            continue
        candidates.append(RankingEntry(row=row, score=score))
    # sorted() is stable with reverse=True: equal scores stay in input order
    return sorted(candidates, key=lambda e: e.score, reverse=True)


def top_n(rows: Iterable[StudentRow], component: Component | str, n: int = DEFAULT_TOP_N) -> list[RankingEntry]:
    """Up to `n` entries; fewer when fewer rows are rankable.

    Raises:
        ValueError: if n is negative or the component name is unknown
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    return rank(rows, component)[:n]


def top3(rows: Iterable[StudentRow], component: Component | str) -> list[RankingEntry]:
    return top_n(rows, component, 3)
