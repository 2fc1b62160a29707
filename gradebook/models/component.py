from __future__ import annotations

from enum import Enum

"""Component enum for the gradebook analyzer.

Each scoring component maps to one fixed column of the score sheet:

    0: id | 1-2: (unused) | 3: student ID | 4-10: Quiz .. Total (300)

All positional knowledge about score columns lives here and in
`models.record.StudentRow`; every other module addresses scores by Component.
"""

__all__ = [
    "Component",
    "MIN_CELLS",
    "ID_COLUMN",
    "STUDENT_ID_COLUMN",
]

ID_COLUMN = 0
STUDENT_ID_COLUMN = 3
MIN_CELLS = 11  # id .. Total (300)


class Component(Enum):
    """Scoring component (key, column, diagnostic field name, report title)."""

    QUIZ = ("quiz", 4, "Quiz", "Quiz")
    MID_SEM = ("midSem", 5, "Mid-Sem", "Mid-Sem")
    LAB_TEST = ("labTest", 6, "Lab Test", "Lab Test")
    WEEKLY_LABS = ("weeklyLabs", 7, "Weekly Labs", "Weekly Labs")
    PRE_COMPRE = ("preCompre", 8, "Pre-Compre", "Pre-Compre")
    COMPRE = ("compre", 9, "Compre", "Compre")
    TOTAL = ("total", 10, "Total (300)", "Total")

    def __init__(self, key: str, column: int, field_name: str, title: str) -> None:
        self.key = key
        self.column = column
        self.field_name = field_name
        self.title = title

    @classmethod
    def parse(cls, name: str | Component) -> Component:
        """Resolve a component from its key, enum name or title (case-insensitive).

        Raises:
            ValueError: if the name matches no component
        """
        if isinstance(name, Component):
            return name
        token = str(name).strip().lower()
        for c in cls:
            if token in (c.key.lower(), c.name.lower(), c.title.lower(), c.field_name.lower()):
                return c
        raise ValueError(f"unknown component: {name!r}")

    @classmethod
    def consistency_parts(cls) -> tuple[Component, ...]:
        """Components summed for the total cross-check (Pre-Compre excluded)."""
        return (cls.QUIZ, cls.MID_SEM, cls.LAB_TEST, cls.WEEKLY_LABS, cls.COMPRE)
