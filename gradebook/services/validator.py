from __future__ import annotations

import math

from ..models.component import MIN_CELLS, Component
from ..models.record import StudentRow, ValidatedRecord
from ..models.results import RowDiagnostic

"""Row filter / validator.

A data row either becomes a ValidatedRecord (all seven score cells parse),
a RowDiagnostic naming the first field that failed, or None when the row is
too short to carry the score columns (silently skipped).
"""

__all__ = [
    "parse_score",
    "validate_row",
]


def parse_score(text: str) -> float:
    """Parse a trimmed score cell.

    Raises:
        ValueError: for empty, non-numeric, digit-separated or non-finite text
    """
    stripped = text.strip()
    if "_" in stripped:
        # digit separators are not valid in a score cell
        raise ValueError(f"invalid number {stripped!r}")
    try:
        value = float(stripped)
    except ValueError:
        raise ValueError(f"invalid number {stripped!r}") from None
    if not math.isfinite(value):
        raise ValueError(f"non-finite number {stripped!r}")
    return value


def validate_row(row: StudentRow) -> ValidatedRecord | RowDiagnostic | None:
    if row.cell_count < MIN_CELLS:
        return None
    scores: dict[Component, float] = {}
    for component in Component:
        text = row.score_text(component) or ""
        try:
            scores[component] = parse_score(text)
        except ValueError as e:
            return RowDiagnostic(row_number=row.row_number, component=component, error=str(e))
    return ValidatedRecord(row=row, scores=scores)
