"""
Summary: Decide whether a grabbed project's local copy can be deleted without data loss.
Why: Every prune path (selection, re-check before delete, reports) shares one state machine.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from parkr.features.hashing import hash_tree
from parkr.features.state import Project
from parkr.platform.filesystem import FilesystemPort, LocalFilesystem

from ..domain.models import Verdict, VerifyMode, VerifyReason

logger = logging.getLogger(__name__)

_LOCAL_FILESYSTEM = LocalFilesystem()


def mtime_baseline(project: Project) -> datetime | None:
    """Baseline for the mtime method: ``last_park_mtime``, else ``last_park_at``."""

    return project.last_park_mtime or project.last_park_at


def hash_precheck_baseline(project: Project) -> datetime | None:
    """Baseline for the dirty pre-check of the hash method.

    ``local_hash_computed_at`` when recorded, else ``last_park_at``.
    """

    return project.local_hash_computed_at or project.last_park_at


def verify(
    project: Project,
    mode: VerifyMode = VerifyMode.AUTO,
    *,
    filesystem: FilesystemPort | None = None,
    hasher: Callable[[Path], str] = hash_tree,
) -> Verdict:
    """Return whether ``project`` may be deleted and why.

    The check is read-only. ``TreeHashError`` and ``OSError`` raised while
    hashing or walking the tree propagate to the caller.
    """

    fs = filesystem or _LOCAL_FILESYSTEM
    verdict = _evaluate(project, mode, fs, hasher)
    logger.debug(
        "Verified %s in %s mode: safe=%s reason=%s",
        project.local_path,
        mode.value,
        verdict.safe,
        verdict.reason.value,
    )
    return verdict


def _evaluate(
    project: Project,
    mode: VerifyMode,
    fs: FilesystemPort,
    hasher: Callable[[Path], str],
) -> Verdict:
    if project.last_park_at is None:
        return Verdict(False, VerifyReason.NEVER_PARKED)

    if mode is VerifyMode.FORCE_SKIP:
        return Verdict(True, VerifyReason.FORCED_NO_VERIFICATION)

    if mode is VerifyMode.HASH_ONLY and project.no_hash_mode:
        return Verdict(False, VerifyReason.HASH_UNAVAILABLE)

    local_path = project.local_path
    if local_path is None or not fs.is_directory(local_path):
        return Verdict(False, VerifyReason.LOCAL_PATH_MISSING)

    if mode is VerifyMode.MTIME_ONLY or project.no_hash_mode:
        return _verify_by_mtime(local_path, mtime_baseline(project), fs)

    dirty = _verify_by_mtime(local_path, hash_precheck_baseline(project), fs)
    if not dirty.safe:
        return dirty

    if project.archive_content_hash is None or project.local_content_hash is None:
        return Verdict(False, VerifyReason.MISSING_HASH_DATA)

    current_hash = hasher(local_path)
    if current_hash != project.archive_content_hash:
        return Verdict(False, VerifyReason.CONTENT_MISMATCH)
    return Verdict(True, VerifyReason.SAFE_BY_HASH)


def _verify_by_mtime(
    local_path: Path,
    baseline: datetime | None,
    fs: FilesystemPort,
) -> Verdict:
    newest = fs.newest_mtime(local_path)
    if newest is None:
        return Verdict(False, VerifyReason.NO_FILES_FOUND)
    if baseline is not None and baseline.tzinfo is None:
        baseline = baseline.replace(tzinfo=timezone.utc)
    if baseline is not None and newest > baseline:
        return Verdict(False, VerifyReason.UNCOMMITTED_WORK)
    return Verdict(True, VerifyReason.SAFE_BY_MTIME)


__all__ = ["hash_precheck_baseline", "mtime_baseline", "verify"]
