"""
Summary: Pick which grabbed projects to delete, oldest first, until a byte target is met.
Why: Reclaim the requested space while touching the fewest and stalest local copies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Final

from parkr.features.hashing import hash_tree
from parkr.features.safety import VerifyMode
from parkr.features.state import Project
from parkr.platform.filesystem import FilesystemPort, LocalFilesystem
from parkr.platform.logging import PruneEvent

from ..domain.models import PruneCandidate, SelectionResult
from .report import build_project_report, oldest_first_key

logger = logging.getLogger(__name__)

FORCE_WARNING: Final[str] = "force skips verification; data may be lost"


def select_candidates(
    projects: Mapping[str, Project],
    target_bytes: int,
    *,
    force: bool = False,
    mode: VerifyMode = VerifyMode.AUTO,
    filesystem: FilesystemPort | None = None,
    hasher: Callable[[Path], str] = hash_tree,
) -> SelectionResult:
    """Build the candidate pool for ``target_bytes`` and pre-select from it.

    Without ``force`` the pool holds every grabbed project that verifies safe
    under ``mode``. With ``force`` it holds every grabbed project, never-parked
    ones included. The pool is ordered oldest last-modified first and accepted
    greedily until the accumulated size reaches the target. Nothing is
    mutated in ``projects``.

    Raises:
        ValueError: If ``target_bytes`` is not positive.
    """

    if target_bytes <= 0:
        raise ValueError(f"target_bytes must be positive, got {target_bytes}")

    fs = filesystem or LocalFilesystem()
    result = SelectionResult(target_bytes=target_bytes, forced=force)

    if force:
        result.warnings.append(FORCE_WARNING)
        logger.warning(
            "Selection is forced",
            extra={"prune_event": PruneEvent.SELECTION_FORCED, "error_message": FORCE_WARNING},
        )

    report_mode = VerifyMode.FORCE_SKIP if force else mode
    pool = []
    for name, project in projects.items():
        if not project.is_grabbed:
            continue
        report = build_project_report(
            name, project, mode=report_mode, filesystem=fs, hasher=hasher
        )
        if force or report.is_safe:
            pool.append(report)
        else:
            logger.debug("Skipping %s: %s", name, report.status)

    if not pool:
        result.no_candidates = True
        logger.info(
            "No prune candidates",
            extra={"prune_event": PruneEvent.SELECTION_COMPLETE, "target_bytes": target_bytes, "selected": 0},
        )
        return result

    pool.sort(key=oldest_first_key)

    accumulated = 0
    for report in pool:
        candidate = PruneCandidate(report=report)
        if accumulated < target_bytes:
            candidate.selected = True
            accumulated += report.local_size
        result.candidates.append(candidate)

    result.total_selected = accumulated
    result.insufficient_space = accumulated < target_bytes

    logger.info(
        "Selection complete",
        extra={
            "prune_event": PruneEvent.SELECTION_COMPLETE,
            "target_bytes": target_bytes,
            "selected": len(result.selected),
        },
    )
    return result


__all__ = ["FORCE_WARNING", "select_candidates"]
