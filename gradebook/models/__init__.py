"""Domain models for the gradebook analyzer.

Row records, scoring components, aggregation/ranking results and the
analysis configuration.
"""

from .component import Component
from .config_models import AnalysisConfig, SubgroupRule
from .record import Dataset, StudentRow, ValidatedRecord
from .results import (
    AggregateResult,
    GradebookReport,
    Mismatch,
    RankingEntry,
    RowDiagnostic,
    SubgroupReport,
)

__all__ = [
    # Configuration models
    "AnalysisConfig",
    "SubgroupRule",
    # Row models
    "Component",
    "Dataset",
    "StudentRow",
    "ValidatedRecord",
    # Result models
    "AggregateResult",
    "GradebookReport",
    "Mismatch",
    "RankingEntry",
    "RowDiagnostic",
    "SubgroupReport",
]
