from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from ..config.loader import ConfigError, default_config, load_config
from ..excel.reader import TableError, load_dataset, read_table
from ..logging.init import log_summary, redirect_output, set_debug, setup_logging
from ..models.component import Component
from ..models.config_models import AnalysisConfig
from ..services.analysis import analyze
from ..services.report import render_json, render_report, render_summary_line

"""CLI entrypoint.

Flow:
- Load config (optional --config YAML; built-in defaults otherwise)
- Read the first sheet of the input file
- Analyse (averages, total cross-check, rankings, branch subgroups)
- Print the report to stdout, then log a SUMMARY line

Exit codes: 0 success, 1 fatal input/config error, 2 diagnostics present
under --strict. A missing input path is an argparse usage error (exit 2).
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_DIAGNOSTICS = 2

INSPECT_ROWS = 3


def _non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0: {value}")
    return value


def _component(text: str) -> Component:
    try:
        return Component.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="gradebook",
        description="Class score sheet report: averages, total cross-check and top students",
    )
    p.add_argument("path", type=Path, help="Score sheet (.xlsx/.xlsm/.xls/.csv/.tsv); first sheet is used")
    p.add_argument("--config", type=Path, default=None, help="YAML config (subgroups, tolerance, ranking)")
    p.add_argument(
        "--component",
        dest="components",
        action="append",
        type=_component,
        default=None,
        help="Rank only this component (repeatable), e.g. quiz, midSem, total",
    )
    p.add_argument("--top", type=_non_negative_int, default=None, help="Ranking size (default 3)")
    p.add_argument("--subgroup-rankings", action="store_true", help="Also rank inside each branch")
    p.add_argument("--json", action="store_true", help="Print the report as JSON")
    p.add_argument("--strict", action="store_true", help="Exit 2 when mismatches or skipped rows exist")
    p.add_argument("--inspect-data", action="store_true", help="Print header & first rows then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _apply_overrides(cfg: AnalysisConfig, args: argparse.Namespace) -> AnalysisConfig:
    changes: dict[str, object] = {}
    if args.components:
        # keep first occurrence order, drop repeats
        changes["rank_components"] = tuple(dict.fromkeys(args.components))
    if args.top is not None:
        changes["top_n"] = args.top
    if args.subgroup_rankings:
        changes["subgroup_rankings"] = True
    return dataclasses.replace(cfg, **changes) if changes else cfg


def _inspect_data(path: Path, logger: logging.Logger) -> int:
    try:
        sheet = read_table(path)
    except TableError as e:
        logger.error(f"input: {e}")
        return EXIT_FATAL
    print(f"FILE: {path.name}")
    print(f"  SHEET: {sheet.sheet_name} rows={len(sheet.rows)}")
    print(f"    header={sheet.rows[0]}")
    for cells in sheet.rows[1:1 + INSPECT_ROWS]:
        print(f"    row={cells}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # [] is an explicit empty argv; only None falls back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    if args.json:
        redirect_output(logger, sys.stderr)

    if args.config is not None:
        try:
            cfg = load_config(args.config)
        except ConfigError as e:
            logger.error(f"config: {e}")
            return EXIT_FATAL
    else:
        cfg = default_config()
    cfg = _apply_overrides(cfg, args)

    if args.inspect_data:
        return _inspect_data(args.path, logger)

    try:
        dataset = load_dataset(args.path)
    except TableError as e:
        logger.error(f"input: {e}")
        return EXIT_FATAL

    logger.info(f"Analysing {args.path} (sheet={dataset.sheet_name} data_rows={len(dataset)})")
    report = analyze(dataset, cfg)

    if args.json:
        print(render_json(report))
    else:
        for line in render_report(report):
            print(line)

    summary_line = render_summary_line(report)
    log_summary(summary_line.removeprefix("SUMMARY "))

    if args.strict and (report.overall.mismatches or report.overall.skipped):
        return EXIT_DIAGNOSTICS
    return EXIT_SUCCESS
