"""Where: src/parkr/features/prune/domain/models.py
What: Reports, candidates and results exchanged by selection and execution.
Why: Keep selector, executor, interactive UI and CLI on one set of value objects.
Assumptions: - Objects live for a single invocation and are never persisted.
Trade-offs: - PruneCandidate stays mutable so the selector and UI can flip ``selected``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from parkr.features.safety import VerifyReason


class SortField(str, Enum):
    """Orderings offered by the report command."""

    SIZE = "size"
    NAME = "name"
    MODIFIED = "modified"


@dataclass(slots=True, frozen=True)
class ProjectReport:
    """Per-run view of a grabbed project and its safety verdict."""

    name: str
    local_path: Path | None
    local_size: int
    last_modified: datetime | None
    last_park_at: datetime | None
    never_parked: bool
    no_hash_mode: bool
    is_safe: bool
    reason: VerifyReason | None
    status: str


@dataclass(slots=True)
class PruneCandidate:
    """A report the user or the selector may mark for deletion."""

    report: ProjectReport
    selected: bool = False

    @property
    def name(self) -> str:
        return self.report.name

    @property
    def local_size(self) -> int:
        return self.report.local_size


@dataclass(slots=True)
class SelectionResult:
    """Ordered candidate pool plus the automatic selection over it."""

    target_bytes: int
    candidates: list[PruneCandidate] = field(default_factory=list)
    total_selected: int = 0
    insufficient_space: bool = False
    no_candidates: bool = False
    forced: bool = False
    warnings: list[str] = field(default_factory=list)

    @property
    def selected(self) -> list[PruneCandidate]:
        """Selected candidates in deletion order."""

        return [candidate for candidate in self.candidates if candidate.selected]

    def recompute_total(self) -> int:
        """Refresh ``total_selected`` after the selection was edited."""

        self.total_selected = sum(candidate.local_size for candidate in self.selected)
        return self.total_selected


class FailureKind(str, Enum):
    """Why a selected candidate was not deleted."""

    NOT_TRACKED = "not_tracked"
    VERIFICATION_FAILED = "verification_failed"
    VERIFICATION_ERROR = "verification_error"
    DELETE_FAILED = "delete_failed"
    STATE_SAVE_FAILED = "state_save_failed"


@dataclass(slots=True, frozen=True)
class FailedDeletion:
    """A candidate that stayed on disk, or was deleted without its state being saved."""

    report: ProjectReport
    kind: FailureKind
    message: str
    reason: VerifyReason | None = None


@dataclass(slots=True)
class ExecutionResult:
    """Outcome of one prune batch."""

    target_bytes: int
    deleted: list[ProjectReport] = field(default_factory=list)
    failed: list[FailedDeletion] = field(default_factory=list)
    skipped: list[ProjectReport] = field(default_factory=list)
    total_freed: int = 0

    @property
    def state_inconsistent(self) -> bool:
        """True when a directory was removed but the state document was not updated."""

        return any(failure.kind is FailureKind.STATE_SAVE_FAILED for failure in self.failed)

    @property
    def target_reached(self) -> bool:
        return self.total_freed >= self.target_bytes


@dataclass(slots=True)
class ReportSummary:
    """Aggregate of every grabbed project for the report command."""

    projects: list[ProjectReport] = field(default_factory=list)
    total_size: int = 0
    safe_to_delete: int = 0
    recoverable_space: int = 0

    @property
    def total_projects(self) -> int:
        return len(self.projects)

    @property
    def candidates(self) -> list[ProjectReport]:
        return [report for report in self.projects if report.is_safe]


__all__ = [
    "ExecutionResult",
    "FailedDeletion",
    "FailureKind",
    "ProjectReport",
    "PruneCandidate",
    "ReportSummary",
    "SelectionResult",
    "SortField",
]
