from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .component import Component

"""Config dataclasses for the gradebook analyzer.

These are the typed domain view of the optional YAML config; the loader in
gradebook/config/loader.py builds them after schema validation.
"""

__all__ = [
    "SubgroupRule",
    "AnalysisConfig",
    "DEFAULT_SUBGROUP_RULES",
    "DEFAULT_TOLERANCE",
    "DEFAULT_TOP_N",
    "duplicate_labels",
]

DEFAULT_TOLERANCE = 0.05  # rounding noise allowed between computed and reported totals
DEFAULT_TOP_N = 3


@dataclass(frozen=True)
class SubgroupRule:
    """Student-ID substring that places a row into a named subgroup."""
    label: str  # e.g. "CS"
    substring: str  # e.g. "2024A7PS"; plain containment, not anchored

    def matches(self, student_id: str) -> bool:
        return self.substring in student_id


def duplicate_labels(rules: Iterable[SubgroupRule]) -> list[str]:
    """Labels used by more than one rule, in first-seen order."""
    seen: set[str] = set()
    dups: list[str] = []
    for rule in rules:
        if rule.label in seen and rule.label not in dups:
            dups.append(rule.label)
        seen.add(rule.label)
    return dups


DEFAULT_SUBGROUP_RULES: tuple[SubgroupRule, ...] = (
    SubgroupRule("EEE", "2024A3PS"),
    SubgroupRule("MECH", "2024A4PS"),
    SubgroupRule("BPHARM", "2024A5PS"),
    SubgroupRule("CS", "2024A7PS"),
    SubgroupRule("ENI", "2024A8PS"),
    SubgroupRule("ECE", "2024AAPS"),
    SubgroupRule("MNC", "2024ADPS"),
)


@dataclass(frozen=True)
class AnalysisConfig:
    """Root configuration for one analysis run."""
    subgroups: tuple[SubgroupRule, ...] = DEFAULT_SUBGROUP_RULES
    mismatch_tolerance: float = DEFAULT_TOLERANCE
    top_n: int = DEFAULT_TOP_N
    rank_components: tuple[Component, ...] = field(default_factory=lambda: tuple(Component))
    subgroup_rankings: bool = False  # also rank inside each subgroup

    def __post_init__(self) -> None:
        dup = duplicate_labels(self.subgroups)
        if dup:
            raise ValueError(f"duplicate subgroup label(s): {', '.join(dup)}")
