from __future__ import annotations

import json
from typing import Any

from ..models.component import Component
from ..models.results import AggregateResult, GradebookReport, RankingEntry

"""Report rendering for the gradebook analyzer.

Three views of one GradebookReport:
- render_report(): the human-readable console report
- render_summary_line(): a single SUMMARY line for the log
- report_to_dict() / render_json(): the same data as a JSON document
"""

__all__ = [
    "render_report",
    "render_summary_line",
    "report_to_dict",
    "render_json",
]


def _ranking_lines(title: str, entries: list[RankingEntry], n: int, scope: str) -> list[str]:
    lines = ["", f"Top {n} students in the {scope} for {title}:"]
    for i, entry in enumerate(entries, start=1):
        lines.append(f"No. {i} in the {scope}: Id: {entry.student_id}, Marks: {entry.score:.2f}")
    return lines


def _averages_inline(result: AggregateResult) -> str:
    return ", ".join(f"{c.title}: {result.averages[c]:.2f}" for c in Component)


def render_report(report: GradebookReport) -> list[str]:
    """Render the console report as a list of lines (no trailing newlines).

    Layout:
        Overall Records: N
        Overall Averages:            (omitted when N == 0)
        Quiz: 12.50 ...
        Overall Errors: / No overall errors found.
        Top 3 students in the class for <Component>: ...
        Branch: <label> ...          (one block per subgroup, sorted by label)
    """
    overall = report.overall
    lines = [f"Overall Records: {overall.count}"]
    if overall.count > 0:
        lines.append("Overall Averages:")
        lines.extend(f"{c.title}: {overall.averages[c]:.2f}" for c in Component)

    if overall.mismatches:
        lines.append("")
        lines.append("Overall Errors:")
        lines.extend(f" - {msg}" for msg in overall.errors)
    else:
        lines.append("")
        lines.append("No overall errors found.")

    for component, entries in report.rankings.items():
        lines.extend(_ranking_lines(component.title, entries, report.top_n, "class"))

    for sub in report.subgroups:
        result = sub.aggregate
        lines.append("")
        lines.append(f"Branch: {sub.label}")
        lines.append(f"Records: {result.count}")
        if result.count > 0:
            lines.append(_averages_inline(result))
        else:
            lines.append("No records for this branch.")
        if result.mismatches:
            lines.append("Errors:")
            lines.extend(f" - {msg}" for msg in result.errors)
        else:
            lines.append("No errors found for this branch.")
        if sub.rankings:
            for component, entries in sub.rankings.items():
                lines.extend(_ranking_lines(component.title, entries, report.top_n, "branch"))
    return lines


def render_summary_line(report: GradebookReport) -> str:
    """Render the SUMMARY line.

    Format:
        SUMMARY records={count} skipped={skipped} mismatches={mismatches} subgroups={subgroups}
    """
    overall = report.overall
    return (
        f"SUMMARY records={overall.count} "
        f"skipped={len(overall.skipped)} "
        f"mismatches={len(overall.mismatches)} "
        f"subgroups={len(report.subgroups)}"
    )


def _aggregate_to_dict(result: AggregateResult) -> dict[str, Any]:
    return {
        "count": result.count,
        "averages": {c.key: result.averages[c] for c in Component},
        "mismatches": [
            {
                "row": m.row_number,
                "id": m.record_id,
                "calculated": m.calculated,
                "total": m.total,
                "message": m.message,
            }
            for m in result.mismatches
        ],
        "skipped": [
            {"row": d.row_number, "field": d.component.field_name, "error": d.error, "message": d.message}
            for d in result.skipped
        ],
    }


def _rankings_to_dict(rankings: dict[Component, list[RankingEntry]]) -> dict[str, Any]:
    return {
        c.key: [
            {"rank": i, "row": e.row_number, "id": e.record_id, "student_id": e.student_id, "score": e.score}
            for i, e in enumerate(entries, start=1)
        ]
        for c, entries in rankings.items()
    }


def report_to_dict(report: GradebookReport) -> dict[str, Any]:
    return {
        "source": report.source,
        "sheet": report.sheet_name,
        "top_n": report.top_n,
        "overall": _aggregate_to_dict(report.overall),
        "rankings": _rankings_to_dict(report.rankings),
        "subgroups": [
            {
                "label": sub.label,
                "substring": sub.substring,
                "rows": sub.row_count,
                **_aggregate_to_dict(sub.aggregate),
                "rankings": _rankings_to_dict(sub.rankings) if sub.rankings is not None else None,
            }
            for sub in report.subgroups
        ],
    }


def render_json(report: GradebookReport) -> str:
    return json.dumps(report_to_dict(report), ensure_ascii=False, indent=2)
