#!/usr/bin/env python3
"""Sample score sheet generator.

Generates a synthetic class score sheet for manual runs of the analyzer.
The generated sheet follows the expected layout:
- Row 1: Header row
- Row 2+: Data rows
    0: S.No | 1: Name | 2: Section | 3: Student ID | 4-10: Quiz .. Total (300)

Branch codes in the student IDs match the default subgroup table, and a few
rows can be corrupted on purpose (wrong totals, non-numeric cells) so the
cross-check and row filter have something to report.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

HEADER = [
    "S.No", "Name", "Section", "Student ID",
    "Quiz", "Mid-Sem", "Lab Test", "Weekly Labs", "Pre-Compre", "Compre", "Total (300)",
]

BRANCH_CODES = ["A3", "A4", "A5", "A7", "A8", "AA", "AD"]

# Maximum marks per component (Quiz .. Compre); Total (300) is their sum
# without Pre-Compre.
MAX_MARKS = {"quiz": 30, "mid_sem": 75, "lab_test": 45, "weekly_labs": 30, "compre": 120}


def generate_scores(rows: int, seed: int = 42) -> pd.DataFrame:
    """Generate synthetic score rows with consistent totals."""
    rng = np.random.default_rng(seed)

    data: dict[str, list[object]] = {}
    data["S.No"] = list(range(1, rows + 1))
    data["Name"] = [f"Student {i}" for i in range(1, rows + 1)]
    data["Section"] = rng.choice(["L1", "L2", "L3"], rows).tolist()
    branches = rng.choice(BRANCH_CODES, rows)
    data["Student ID"] = [f"2024{b}PS{1000 + i:04d}P" for i, b in enumerate(branches)]

    parts: dict[str, np.ndarray] = {}
    for key, top in MAX_MARKS.items():
        # half-mark granularity, skewed towards the upper half
        parts[key] = np.round(rng.beta(5, 2, rows) * top * 2) / 2
    pre_compre = parts["quiz"] + parts["mid_sem"] + parts["lab_test"] + parts["weekly_labs"]
    total = sum(parts.values())

    data["Quiz"] = parts["quiz"].tolist()
    data["Mid-Sem"] = parts["mid_sem"].tolist()
    data["Lab Test"] = parts["lab_test"].tolist()
    data["Weekly Labs"] = parts["weekly_labs"].tolist()
    data["Pre-Compre"] = pre_compre.tolist()
    data["Compre"] = parts["compre"].tolist()
    data["Total (300)"] = total.tolist()
    return pd.DataFrame(data, columns=HEADER)


def inject_errors(df: pd.DataFrame, mismatches: int, malformed: int, seed: int = 42) -> pd.DataFrame:
    """Corrupt some rows: shifted totals and non-numeric score cells."""
    rng = np.random.default_rng(seed + 1)
    out = df.astype(object).copy()
    picks = rng.choice(len(out), size=min(len(out), mismatches + malformed), replace=False)
    for i, idx in enumerate(picks):
        if i < mismatches:
            out.at[idx, "Total (300)"] = float(out.at[idx, "Total (300)"]) + float(rng.integers(1, 10))
        else:
            col = rng.choice(HEADER[4:])
            out.at[idx, col] = "AB"  # absent
    return out


def write_sheet(output_path: Path, df: pd.DataFrame, sheet_name: str = "Sheet1") -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() == ".csv":
        df.to_csv(output_path, index=False)
    else:
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    print(f"Created score sheet: {output_path}")
    print(f"  Data rows: {len(df)} (+ 1 header row)")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic class score sheet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s scores.xlsx
  %(prog)s scores.xlsx --rows 400 --mismatches 5 --malformed 2
  %(prog)s scores.csv --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output .xlsx or .csv path")
    parser.add_argument("--rows", type=int, default=120, help="Number of students (default: 120)")
    parser.add_argument("--mismatches", type=int, default=0, help="Rows with a wrong Total (300)")
    parser.add_argument("--malformed", type=int, default=0, help="Rows with a non-numeric score cell")
    parser.add_argument("--sheet", default="Sheet1", help="Sheet name (default: Sheet1)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if args.mismatches < 0 or args.malformed < 0:
        print("Error: --mismatches/--malformed must be >= 0", file=sys.stderr)
        return 1

    df = generate_scores(args.rows, args.seed)
    if args.mismatches or args.malformed:
        df = inject_errors(df, args.mismatches, args.malformed, args.seed)
    try:
        write_sheet(args.output, df, args.sheet)
    except OSError as e:
        print(f"Error writing score sheet: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
