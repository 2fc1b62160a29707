from __future__ import annotations

import logging

from ..models.component import Component
from ..models.config_models import AnalysisConfig
from ..models.record import Dataset, StudentRow
from ..models.results import GradebookReport, RankingEntry, SubgroupReport
from .aggregator import aggregate
from .partitioner import partition
from .progress import ProgressTracker
from .ranker import top_n

"""Analysis orchestration for the gradebook analyzer.

Runs the aggregator and ranker over the whole dataset, then partitions the
rows into subgroups and re-runs them per subgroup. Returns one structured
GradebookReport; rendering lives in services.report.
"""

__all__ = [
    "analyze",
    "rank_components",
]

logger = logging.getLogger(__name__)


def rank_components(
    rows: list[StudentRow], components: tuple[Component, ...], n: int
) -> dict[Component, list[RankingEntry]]:
    """Top-n per component, keyed in the order the components were given."""
    return {c: top_n(rows, c, n) for c in components}


def analyze(dataset: Dataset, config: AnalysisConfig | None = None) -> GradebookReport:
    cfg = config or AnalysisConfig()
    rows = list(dataset.rows)
    logger.debug(f"analyze: rows={len(rows)} tolerance={cfg.mismatch_tolerance} top_n={cfg.top_n}")

    overall = aggregate(rows, tolerance=cfg.mismatch_tolerance)
    rankings = rank_components(rows, cfg.rank_components, cfg.top_n)

    groups = partition(rows, cfg.subgroups)
    substrings = {rule.label: rule.substring for rule in cfg.subgroups}
    subgroups: list[SubgroupReport] = []
    with ProgressTracker(len(groups)) as progress:
        for label, members in groups.items():
            progress.start(label)
            result = aggregate(members, tolerance=cfg.mismatch_tolerance, log_skipped=False)
            sub_rankings = (
                rank_components(members, cfg.rank_components, cfg.top_n)
                if cfg.subgroup_rankings
                else None
            )
            subgroups.append(
                SubgroupReport(
                    label=label,
                    substring=substrings[label],
                    row_count=len(members),
                    aggregate=result,
                    rankings=sub_rankings,
                )
            )
            progress.finish(records=result.count)
            logger.debug(f"subgroup {label}: rows={len(members)} records={result.count}")

    return GradebookReport(
        source=dataset.source,
        sheet_name=dataset.sheet_name,
        overall=overall,
        rankings=rankings,
        subgroups=subgroups,
        top_n=cfg.top_n,
    )
