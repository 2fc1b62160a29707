from __future__ import annotations

import logging
from collections.abc import Iterable

from ..models.component import Component
from ..models.config_models import DEFAULT_TOLERANCE
from ..models.record import StudentRow
from ..models.results import AggregateResult, Mismatch, RowDiagnostic
from .validator import validate_row

"""Aggregator: record counts, component averages and total cross-check.

Consistency rule: Quiz + Mid-Sem + Lab Test + Weekly Labs + Compre must match
the reported Total (300) within `tolerance`. Pre-Compre is averaged but not
part of the sum. A mismatched row is still counted and averaged; validation
failures and consistency mismatches are independent.
"""

__all__ = [
    "aggregate",
]

logger = logging.getLogger(__name__)


def aggregate(
    rows: Iterable[StudentRow], tolerance: float = DEFAULT_TOLERANCE, *, log_skipped: bool = True
) -> AggregateResult:
    """Aggregate data rows (header already removed).

    Args:
        rows: decoded data rows, in sheet order
        tolerance: largest |calculated - total| that is not reported
        log_skipped: log each unparseable row at WARN level

    Returns:
        AggregateResult with averages of 0.0 when no row validates
    """
    sums = {c: 0.0 for c in Component}
    count = 0
    mismatches: list[Mismatch] = []
    skipped: list[RowDiagnostic] = []

    for row in rows:
        result = validate_row(row)
        if result is None:
            continue
        if isinstance(result, RowDiagnostic):
            if log_skipped:
                logger.warning(result.message)
            skipped.append(result)
            continue

        calculated = result.calculated_total
        total = result.score(Component.TOTAL)
        if abs(calculated - total) > tolerance:
            mismatch = Mismatch(
                row_number=result.row_number,
                record_id=result.record_id,
                calculated=calculated,
                total=total,
            )
            logger.debug(mismatch.message)
            mismatches.append(mismatch)

        for c in Component:
            sums[c] += result.score(c)
        count += 1

    if count > 0:
        averages = {c: sums[c] / count for c in Component}
    else:
        averages = {c: 0.0 for c in Component}

    return AggregateResult(count=count, averages=averages, mismatches=mismatches, skipped=skipped)
