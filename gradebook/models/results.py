from __future__ import annotations

from dataclasses import dataclass, field

from .component import Component
from .record import StudentRow

"""Result models for the gradebook analyzer.

Aggregation, ranking and report structures. All are frozen; the services
build them fresh per run.
"""

__all__ = [
    "RowDiagnostic",
    "Mismatch",
    "AggregateResult",
    "RankingEntry",
    "SubgroupReport",
    "GradebookReport",
]


@dataclass(frozen=True)
class RowDiagnostic:
    """A data row skipped because one of its score cells did not parse."""
    row_number: int  # 1-based sheet row
    component: Component  # first field that failed
    error: str  # parse error text

    @property
    def message(self) -> str:
        return f"Row {self.row_number} error in {self.component.field_name}: {self.error}"


@dataclass(frozen=True)
class Mismatch:
    """A validated row whose component sum disagrees with its reported total."""
    row_number: int
    record_id: str
    calculated: float
    total: float

    @property
    def message(self) -> str:
        return (
            f"Row {self.row_number} (ID {self.record_id}): "
            f"calculated {self.calculated:.2f} != total {self.total:.2f}"
        )


@dataclass(frozen=True)
class AggregateResult:
    """Counts, component averages and diagnostics for one set of rows."""
    count: int  # validated records
    averages: dict[Component, float]  # 0.0 for every component when count == 0
    mismatches: list[Mismatch] = field(default_factory=list)  # encounter order
    skipped: list[RowDiagnostic] = field(default_factory=list)  # unparseable rows

    @property
    def errors(self) -> list[str]:
        """Mismatch diagnostics as display strings."""
        return [m.message for m in self.mismatches]

    def average(self, component: Component | str) -> float:
        return self.averages[Component.parse(component)]


@dataclass(frozen=True)
class RankingEntry:
    row: StudentRow
    score: float

    @property
    def student_id(self) -> str:
        return self.row.student_id

    @property
    def record_id(self) -> str:
        return self.row.record_id

    @property
    def row_number(self) -> int:
        return self.row.row_number


@dataclass(frozen=True)
class SubgroupReport:
    label: str
    substring: str
    row_count: int  # rows matched, before validation
    aggregate: AggregateResult
    rankings: dict[Component, list[RankingEntry]] | None = None


@dataclass(frozen=True)
class GradebookReport:
    """Everything one run computes; rendered by services.report."""
    source: str
    sheet_name: str
    overall: AggregateResult
    rankings: dict[Component, list[RankingEntry]]
    subgroups: list[SubgroupReport]  # sorted by label
    top_n: int = 3
