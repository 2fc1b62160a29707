# Shared pytest fixtures
from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import pytest

from gradebook.logging.init import reset_logging

HEADER = [
    "S.No", "Name", "Section", "Student ID",
    "Quiz", "Mid-Sem", "Lab Test", "Weekly Labs", "Pre-Compre", "Compre", "Total (300)",
]


def make_row(
    sno: str,
    student_id: str,
    quiz: object,
    mid_sem: object,
    lab_test: object,
    weekly_labs: object,
    pre_compre: object,
    compre: object,
    total: object | None = None,
) -> list[str]:
    """Build a full 11-cell sheet row; total defaults to the consistent sum."""
    if total is None:
        total = float(quiz) + float(mid_sem) + float(lab_test) + float(weekly_labs) + float(compre)  # type: ignore[arg-type]
    cells = [sno, f"Student {sno}", "L1", student_id, quiz, mid_sem, lab_test, weekly_labs, pre_compre, compre, total]
    return [str(c) for c in cells]


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()
    # drop handlers bound to this test's captured stdout
    logger = logging.getLogger("gradebook")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)


@pytest.fixture()
def temp_workdir(tmp_path: Path, monkeypatch) -> Path:
    (tmp_path / "config").mkdir()
    (tmp_path / "data").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def sample_table() -> list[list[str]]:
    """Header + six data rows (sheet rows 2..7).

    row 2, 3: CS, consistent
    row 4:    EEE, total 280 but components sum to 278 (mismatch)
    row 5:    MECH, Quiz "AB" (skipped with diagnostic)
    row 6:    EEE, only 6 cells (silently skipped)
    row 7:    matches no branch, consistent
    """
    return [
        list(HEADER),
        make_row("1", "2024A7PS0001P", 25, 60, 40, 25, 150, 100, 250),
        make_row("2", "2024A7PS0002P", 20, 50, 35, 20, 125, 90, 215),
        make_row("3", "2024A3PS0003P", 28, 70, 42, 28, 168, 110, 280),
        make_row("4", "2024A4PS0004P", "AB", 40, 30, 15, 85, 70, 155),
        ["5", "Student 5", "L3", "2024A3PS0005P", "15", "45"],
        make_row("6", "2024B1PS0006P", 10, 30, 20, 10, 70, 60, 130),
    ]


@pytest.fixture()
def sample_config_yaml() -> str:
    return """subgroups:
  CS: "2024A7PS"
  EEE: "2024A3PS"
mismatch_tolerance: 0.5
top_n: 2
rank_components: [quiz, total]
subgroup_rankings: true
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "gradebook.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def write_xlsx(path: Path, rows: list[list[object]], sheet_name: str = "Sheet1") -> Path:
    with pd.ExcelWriter(path) as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture()
def sample_xlsx(temp_workdir: Path, sample_table: list[list[str]]) -> Path:
    return write_xlsx(temp_workdir / "data" / "scores.xlsx", sample_table)


@pytest.fixture()
def sample_csv(temp_workdir: Path, sample_table: list[list[str]]) -> Path:
    p = temp_workdir / "data" / "scores.csv"
    p.write_text("\n".join(",".join(r) for r in sample_table) + "\n", encoding="utf-8")
    return p
