from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .component import ID_COLUMN, STUDENT_ID_COLUMN, Component

"""Row-level domain models for the gradebook analyzer.

StudentRow is the named-field view of one sheet row, decoded once when the
Dataset is built. Row numbers follow the sheet: header = row 1, first data
row = row 2 (table index + 1).
"""

__all__ = [
    "StudentRow",
    "ValidatedRecord",
    "Dataset",
]


def _cell(cells: Sequence[str], index: int) -> str:
    return cells[index].strip() if index < len(cells) else ""


@dataclass(frozen=True)
class StudentRow:
    """One data row of the score sheet (ragged; cells as text)."""
    row_number: int  # 1-based sheet row (table index + 1)
    record_id: str  # trimmed cell 0
    student_id: str  # trimmed cell 3, "" when the row is too short
    cells: tuple[str, ...]  # original text cells

    @classmethod
    def decode(cls, index: int, cells: Sequence[object]) -> StudentRow:
        """Decode the raw cells found at table position `index` (0 = header)."""
        text = tuple("" if c is None else str(c) for c in cells)
        return cls(
            row_number=index + 1,
            record_id=_cell(text, ID_COLUMN),
            student_id=_cell(text, STUDENT_ID_COLUMN),
            cells=text,
        )

    @property
    def cell_count(self) -> int:
        return len(self.cells)

    def score_text(self, component: Component) -> str | None:
        """Trimmed text of a score cell, or None if the row does not reach it."""
        if component.column >= len(self.cells):
            return None
        return self.cells[component.column].strip()


@dataclass(frozen=True)
class ValidatedRecord:
    """A StudentRow whose seven score cells all parsed as numbers."""
    row: StudentRow
    scores: dict[Component, float]

    @property
    def row_number(self) -> int:
        return self.row.row_number

    @property
    def record_id(self) -> str:
        return self.row.record_id

    def score(self, component: Component) -> float:
        return self.scores[component]

    @property
    def calculated_total(self) -> float:
        """Quiz + Mid-Sem + Lab Test + Weekly Labs + Compre."""
        return sum(self.scores[c] for c in Component.consistency_parts())


@dataclass(frozen=True)
class Dataset:
    """A loaded score sheet: header row plus decoded data rows."""
    header: tuple[str, ...]
    rows: tuple[StudentRow, ...]
    sheet_name: str = ""
    source: str = ""

    @classmethod
    def from_table(
        cls, table: Sequence[Sequence[object]], *, sheet_name: str = "", source: str = ""
    ) -> Dataset:
        """Build a Dataset from raw rows; the first row is the header."""
        if not table:
            return cls(header=(), rows=(), sheet_name=sheet_name, source=source)
        header = tuple("" if c is None else str(c) for c in table[0])
        rows = tuple(StudentRow.decode(i, cells) for i, cells in enumerate(table) if i >= 1)
        return cls(header=header, rows=rows, sheet_name=sheet_name, source=source)

    def __len__(self) -> int:
        return len(self.rows)
