from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.record import Dataset

"""Score sheet reader.

Loads the first sheet of a workbook (.xlsx/.xlsm/.xls) or a delimited text
file (.csv/.tsv) into ragged rows of text cells:
- row 1 is the header, rows 2.. are data
- empty cells become "", trailing empty cells are dropped (ragged rows)
- blank rows are kept as [] so row numbers match the sheet
"""

__all__ = [
    "TableError",
    "TableReadError",
    "UnsupportedFormatError",
    "NoSheetError",
    "NotEnoughRowsError",
    "SheetData",
    "read_table",
    "normalize_sheet",
    "load_dataset",
]

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}
DELIMITED_SUFFIXES = {".csv": ",", ".tsv": "\t"}


class TableError(Exception):
    """Base class for fatal input errors (no report is produced)."""

class TableReadError(TableError):
    """Raised when the input file is missing or cannot be parsed."""

class UnsupportedFormatError(TableError):
    """Raised for file suffixes the reader does not handle."""

class NoSheetError(TableError):
    """Raised when a workbook contains no sheet."""

class NotEnoughRowsError(TableError):
    """Raised when the sheet has no data row beyond the header."""


@dataclass
class SheetData:
    sheet_name: str
    rows: list[list[str]]  # ragged text cells; rows[0] is the header


def _cell_text(val: Any) -> str:
    if val is None or pd.isna(val):
        return ""
    if isinstance(val, float) and val.is_integer():
        # Excel stores 83 as 83.0; keep the sheet's display form
        return str(int(val))
    return str(val)


def normalize_sheet(df: pd.DataFrame, sheet_name: str) -> SheetData:
    """Convert a header-less raw DataFrame into ragged text rows.

    Raises:
        NotEnoughRowsError: if fewer than 2 rows (header + one data row) exist
    """
    rows: list[list[str]] = []
    for raw in df.itertuples(index=False, name=None):
        cells = [_cell_text(v) for v in raw]
        while cells and cells[-1].strip() == "":
            cells.pop()
        rows.append(cells)
    while rows and not rows[-1]:
        rows.pop()
    if len(rows) < 2:
        raise NotEnoughRowsError(f"sheet '{sheet_name}' has not enough rows (need header + data)")
    return SheetData(sheet_name=sheet_name, rows=rows)


def _read_excel(path: Path) -> tuple[str, pd.DataFrame]:
    try:
        xls = pd.ExcelFile(path)
    except Exception as e:
        raise TableReadError(f"cannot open workbook {path}: {e}") from e
    with xls:
        if not xls.sheet_names:
            raise NoSheetError(f"no sheet found in {path}")
        name = str(xls.sheet_names[0])
        try:
            df = xls.parse(xls.sheet_names[0], header=None, dtype=object)
        except Exception as e:
            raise TableReadError(f"cannot read sheet '{name}' of {path}: {e}") from e
    return name, df


def _delimited_width(path: Path, sep: str) -> int:
    # read_csv sizes the frame from the first line; ragged rows need the widest
    with path.open(encoding="utf-8", newline="") as f:
        return max((len(cells) for cells in csv.reader(f, delimiter=sep)), default=0)


def _read_delimited(path: Path, sep: str) -> tuple[str, pd.DataFrame]:
    try:
        width = _delimited_width(path, sep)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise TableReadError(f"cannot read {path}: {e}") from e
    if width == 0:
        raise NotEnoughRowsError(f"{path} is empty")
    try:
        df = pd.read_csv(
            path,
            sep=sep,
            header=None,
            names=range(width),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
        )
    except pd.errors.EmptyDataError as e:
        raise NotEnoughRowsError(f"{path} is empty") from e
    except Exception as e:
        raise TableReadError(f"cannot read {path}: {e}") from e
    return path.stem, df


def read_table(path: Path) -> SheetData:
    """Read the first sheet of `path` as ragged text rows.

    Raises:
        TableReadError: file missing or unreadable
        UnsupportedFormatError: unknown file suffix
        NoSheetError: workbook without sheets
        NotEnoughRowsError: fewer than 2 rows
    """
    path = Path(path)
    if not path.is_file():
        raise TableReadError(f"file not found: {path}")
    suffix = path.suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        name, df = _read_excel(path)
    elif suffix in DELIMITED_SUFFIXES:
        name, df = _read_delimited(path, DELIMITED_SUFFIXES[suffix])
    else:
        raise UnsupportedFormatError(f"unsupported file type '{path.suffix}': {path.name}")
    return normalize_sheet(df, name)


def load_dataset(path: Path) -> Dataset:
    sheet = read_table(path)
    return Dataset.from_table(sheet.rows, sheet_name=sheet.sheet_name, source=str(path))
