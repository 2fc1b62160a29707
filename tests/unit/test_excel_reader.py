from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
from conftest import write_xlsx

from gradebook.excel.reader import (
    NoSheetError,
    NotEnoughRowsError,
    TableError,
    TableReadError,
    UnsupportedFormatError,
    load_dataset,
    normalize_sheet,
    read_table,
)


def test_read_xlsx_first_sheet_only(temp_workdir: Path):
    p = temp_workdir / "multi.xlsx"
    with pd.ExcelWriter(p) as writer:
        pd.DataFrame([["id"], ["1"]]).to_excel(writer, sheet_name="First", header=False, index=False)
        pd.DataFrame([["id"], ["2"], ["3"]]).to_excel(writer, sheet_name="Second", header=False, index=False)
    sheet = read_table(p)
    assert sheet.sheet_name == "First"
    assert sheet.rows == [["id"], ["1"]]


def test_read_xlsx_numbers_become_text(temp_workdir: Path):
    p = write_xlsx(temp_workdir / "nums.xlsx", [["Quiz", "Total"], [10, 83.5], [7.0, 80]])
    sheet = read_table(p)
    assert sheet.rows[1] == ["10", "83.5"]
    assert sheet.rows[2] == ["7", "80"]


def test_read_xlsx_trailing_empty_cells_dropped(sample_xlsx: Path):
    sheet = read_table(sample_xlsx)
    assert len(sheet.rows) == 7
    assert len(sheet.rows[0]) == 11
    assert sheet.rows[5] == ["5", "Student 5", "L3", "2024A3PS0005P", "15", "45"]
    assert sheet.rows[4][4] == "AB"


def test_read_csv_ragged_rows(sample_csv: Path):
    sheet = read_table(sample_csv)
    assert sheet.sheet_name == "scores"
    assert sheet.rows[5] == ["5", "Student 5", "L3", "2024A3PS0005P", "15", "45"]
    assert sheet.rows[1][3] == "2024A7PS0001P"


def test_read_tsv(temp_workdir: Path):
    p = temp_workdir / "scores.tsv"
    p.write_text("id\tname\n1\tAlice\n", encoding="utf-8")
    assert read_table(p).rows == [["id", "name"], ["1", "Alice"]]


def test_read_csv_blank_row_keeps_numbering(temp_workdir: Path):
    p = temp_workdir / "gap.csv"
    p.write_text("id,name\n1,A\n,\n3,C\n", encoding="utf-8")
    sheet = read_table(p)
    assert sheet.rows == [["id", "name"], ["1", "A"], [], ["3", "C"]]


def test_read_csv_data_rows_wider_than_header(temp_workdir: Path):
    p = temp_workdir / "wide.csv"
    p.write_text(
        "S.No,Name,Section,Student ID\n"
        "1,Student 1,L1,2024A7PS0001P,25,60,40,25,150,100,250\n"
        "2,Student 2,L1,2024A7PS0002P,20,50,35,20,125,90,215,late\n",
        encoding="utf-8",
    )
    sheet = read_table(p)
    assert sheet.rows[0] == ["S.No", "Name", "Section", "Student ID"]
    assert len(sheet.rows[1]) == 11
    assert sheet.rows[1][10] == "250"
    assert sheet.rows[2][-1] == "late"

    ds = load_dataset(p)
    assert [r.student_id for r in ds.rows] == ["2024A7PS0001P", "2024A7PS0002P"]


def test_missing_file(temp_workdir: Path):
    with pytest.raises(TableReadError) as e:
        read_table(temp_workdir / "nope.xlsx")
    assert "file not found" in str(e.value)


def test_unreadable_workbook(temp_workdir: Path):
    p = temp_workdir / "broken.xlsx"
    p.write_bytes(b"not a zip file")
    with pytest.raises(TableReadError):
        read_table(p)


def test_unsupported_suffix(temp_workdir: Path):
    p = temp_workdir / "scores.json"
    p.write_text("{}", encoding="utf-8")
    with pytest.raises(UnsupportedFormatError):
        read_table(p)


def test_header_only_sheet(temp_workdir: Path):
    p = write_xlsx(temp_workdir / "header_only.xlsx", [["id", "name"]])
    with pytest.raises(NotEnoughRowsError):
        read_table(p)


def test_empty_csv(temp_workdir: Path):
    p = temp_workdir / "empty.csv"
    p.write_text("", encoding="utf-8")
    with pytest.raises(NotEnoughRowsError):
        read_table(p)


def test_normalize_sheet_requires_two_rows():
    with pytest.raises(NotEnoughRowsError):
        normalize_sheet(pd.DataFrame([["only header"]]), "Sheet1")


def test_no_sheet_error_is_a_table_error():
    assert issubclass(NoSheetError, TableError)


def test_load_dataset(sample_xlsx: Path):
    ds = load_dataset(sample_xlsx)
    assert ds.sheet_name == "Sheet1"
    assert ds.source == str(sample_xlsx)
    assert len(ds) == 6
    assert ds.rows[0].student_id == "2024A7PS0001P"
    assert ds.rows[0].row_number == 2
