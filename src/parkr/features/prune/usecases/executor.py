"""
Summary: Delete selected local copies one at a time, re-verifying each immediately before removal.
Why: State may change between selection and deletion; each success must be durably recorded.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from parkr.features.hashing import TreeHashError, hash_tree
from parkr.features.safety import VerifyMode, describe, verify
from parkr.features.state import Project, ProjectStore, StateError
from parkr.platform.filesystem import FilesystemPort, LocalFilesystem
from parkr.platform.logging import PruneEvent

from ..domain.models import (
    ExecutionResult,
    FailedDeletion,
    FailureKind,
    ProjectReport,
    SelectionResult,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProjectReport, bool, int], None]

STATE_SAVE_FAILED_MESSAGE = "directory deleted but state not saved"


def execute_prune(
    selection: SelectionResult,
    store: ProjectStore,
    *,
    mode: VerifyMode = VerifyMode.AUTO,
    on_progress: ProgressCallback | None = None,
    filesystem: FilesystemPort | None = None,
    hasher: Callable[[Path], str] = hash_tree,
) -> ExecutionResult:
    """Delete the selected candidates of ``selection`` in order.

    Each candidate is re-resolved in ``store.state`` and, unless ``mode`` is
    ``FORCE_SKIP``, verified again right before its directory is removed. A
    successful removal marks the project as no longer grabbed and saves the
    store at once. Failures are recorded and the batch moves on, except a
    failed save after a removal: that is logged as critical and ends the batch
    so the saved state never lags more than one deletion behind the disk.
    The batch also stops once ``total_freed`` reaches the target; whatever was
    not attempted lands in ``skipped``.
    """

    fs = filesystem or LocalFilesystem()
    result = ExecutionResult(target_bytes=selection.target_bytes)
    queue = [candidate.report for candidate in selection.selected]
    total = len(queue)

    logger.info(
        "Prune batch started",
        extra={
            "prune_event": PruneEvent.BATCH_START,
            "target_bytes": selection.target_bytes,
            "selected": total,
        },
    )

    for index, report in enumerate(queue):
        sequence = index + 1
        log_extra = {
            "project": report.name,
            "local_path": str(report.local_path) if report.local_path else None,
            "sequence": sequence,
            "total": total,
        }

        outcome = _precheck(report, store, mode, fs, hasher)
        if isinstance(outcome, FailedDeletion):
            failure = outcome
            result.failed.append(failure)
            event = (
                PruneEvent.VERIFY_FAILED
                if failure.kind is FailureKind.VERIFICATION_FAILED
                else PruneEvent.DELETE_FAILED
            )
            logger.warning(
                "Skipping %s: %s",
                report.name,
                failure.message,
                extra={**log_extra, "prune_event": event, "reason": failure.message},
            )
            _notify(on_progress, report, False, 0)
            continue

        project, local_path = outcome

        try:
            freed = fs.dir_size(local_path)
        except OSError:
            freed = report.local_size

        logger.debug(
            "Deleting %s", report.name, extra={**log_extra, "prune_event": PruneEvent.DELETE_START}
        )
        try:
            fs.remove_tree(local_path)
        except OSError as exc:
            message = f"failed to delete directory: {exc}"
            result.failed.append(FailedDeletion(report, FailureKind.DELETE_FAILED, message))
            logger.error(
                "Failed to delete %s: %s",
                report.name,
                exc,
                extra={**log_extra, "prune_event": PruneEvent.DELETE_FAILED, "error_message": str(exc)},
            )
            _notify(on_progress, report, False, 0)
            continue

        project.mark_pruned()
        try:
            store.save()
        except (StateError, OSError) as exc:
            message = f"{STATE_SAVE_FAILED_MESSAGE}: {exc}"
            result.failed.append(FailedDeletion(report, FailureKind.STATE_SAVE_FAILED, message))
            logger.critical(
                "Directory for %s was deleted but the state could not be saved: %s",
                report.name,
                exc,
                extra={
                    **log_extra,
                    "prune_event": PruneEvent.STATE_SAVE_FAILED,
                    "error_message": str(exc),
                },
            )
            _notify(on_progress, report, False, 0)
            result.skipped.extend(queue[sequence:])
            break

        result.deleted.append(report)
        result.total_freed += freed
        logger.info(
            "Deleted %s",
            report.name,
            extra={**log_extra, "prune_event": PruneEvent.DELETE_SUCCESS, "freed": freed},
        )
        _notify(on_progress, report, True, freed)

        if result.total_freed >= result.target_bytes:
            result.skipped.extend(queue[sequence:])
            logger.info(
                "Target reached",
                extra={**log_extra, "prune_event": PruneEvent.TARGET_REACHED},
            )
            break

    logger.info(
        "Prune batch finished",
        extra={
            "prune_event": PruneEvent.BATCH_COMPLETE,
            "deleted": len(result.deleted),
            "failed": len(result.failed),
            "skipped": len(result.skipped),
            "total_freed": result.total_freed,
        },
    )
    return result


def _precheck(
    report: ProjectReport,
    store: ProjectStore,
    mode: VerifyMode,
    fs: FilesystemPort,
    hasher: Callable[[Path], str],
) -> tuple[Project, Path] | FailedDeletion:
    """Re-resolve and re-verify ``report``; return the project and its directory, or the failure."""

    project = store.state.projects.get(report.name)
    if project is None or not project.is_grabbed:
        return FailedDeletion(report, FailureKind.NOT_TRACKED, "project is no longer grabbed")

    if mode is not VerifyMode.FORCE_SKIP:
        try:
            verdict = verify(project, mode, filesystem=fs, hasher=hasher)
        except (TreeHashError, OSError) as exc:
            return FailedDeletion(
                report, FailureKind.VERIFICATION_ERROR, f"verification error: {exc}"
            )
        if not verdict.safe:
            return FailedDeletion(
                report,
                FailureKind.VERIFICATION_FAILED,
                describe(verdict.reason),
                reason=verdict.reason,
            )

    local_path = project.local_path
    if local_path is None or not fs.is_directory(local_path):
        return FailedDeletion(report, FailureKind.DELETE_FAILED, "local path not found")
    return project, local_path


def _notify(
    on_progress: ProgressCallback | None,
    report: ProjectReport,
    success: bool,
    freed: int,
) -> None:
    if on_progress is None:
        return
    try:
        on_progress(report, success, freed)
    except Exception:
        logger.exception("Progress callback failed for %s", report.name)


__all__ = ["ProgressCallback", "STATE_SAVE_FAILED_MESSAGE", "execute_prune"]
