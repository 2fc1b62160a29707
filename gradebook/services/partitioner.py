from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models.config_models import DEFAULT_SUBGROUP_RULES, SubgroupRule, duplicate_labels
from ..models.record import StudentRow

"""Subgroup partitioner (branch buckets keyed by student-ID substring)."""

__all__ = [
    "partition",
]


def partition(
    rows: Iterable[StudentRow], rules: Sequence[SubgroupRule] = DEFAULT_SUBGROUP_RULES
) -> dict[str, list[StudentRow]]:
    """Bucket data rows by every rule whose substring the student ID contains.

    Membership is not exclusive: overlapping substrings put a row in several
    subgroups. Subgroups without rows are left out. The mapping is ordered by
    label.

    Raises:
        ValueError: if two rules share a label
    """
    dup = duplicate_labels(rules)
    if dup:
        raise ValueError(f"duplicate subgroup label(s): {', '.join(dup)}")
    buckets: dict[str, list[StudentRow]] = {}
    for row in rows:
        for rule in rules:
            if rule.matches(row.student_id):
                buckets.setdefault(rule.label, []).append(row)
    return {label: buckets[label] for label in sorted(buckets)}
