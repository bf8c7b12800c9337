"""Public surface for the prune feature."""

from .domain.models import (
    ExecutionResult,
    FailedDeletion,
    FailureKind,
    ProjectReport,
    PruneCandidate,
    ReportSummary,
    SelectionResult,
    SortField,
)
from .usecases.executor import ProgressCallback, execute_prune
from .usecases.report import build_project_report, generate_report, sort_reports
from .usecases.selector import FORCE_WARNING, select_candidates

__all__ = [
    "FORCE_WARNING",
    "ExecutionResult",
    "FailedDeletion",
    "FailureKind",
    "ProgressCallback",
    "ProjectReport",
    "PruneCandidate",
    "ReportSummary",
    "SelectionResult",
    "SortField",
    "build_project_report",
    "execute_prune",
    "generate_report",
    "select_candidates",
    "sort_reports",
]
