"""
Summary: Build per-project reports (size, newest mtime, safety verdict) for grabbed projects.
Why: Selection and the report command must judge projects identically.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from pathlib import Path

from parkr.features.hashing import TreeHashError, hash_tree
from parkr.features.safety import VerifyMode, VerifyReason, describe, verify
from parkr.features.state import Project
from parkr.platform.filesystem import FilesystemPort, LocalFilesystem

from ..domain.models import ProjectReport, ReportSummary, SortField

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def build_project_report(
    name: str,
    project: Project,
    *,
    mode: VerifyMode = VerifyMode.AUTO,
    filesystem: FilesystemPort | None = None,
    hasher: Callable[[Path], str] = hash_tree,
) -> ProjectReport:
    """Measure ``project`` on disk and attach its verdict under ``mode``.

    Hashing or I/O failures mark the project unsafe instead of raising.
    """

    fs = filesystem or LocalFilesystem()
    local_size = 0
    last_modified: datetime | None = None
    local_path = project.local_path

    if local_path is not None and fs.is_directory(local_path):
        try:
            local_size = fs.dir_size(local_path)
            last_modified = fs.newest_mtime(local_path)
        except OSError as exc:
            logger.warning("Could not measure %s (%s): %s", name, local_path, exc)

    try:
        verdict = verify(project, mode, filesystem=fs, hasher=hasher)
    except TreeHashError as exc:
        logger.warning("Could not hash %s: %s", name, exc)
        return _report(name, project, local_size, last_modified, False, None, "Error computing hash")
    except OSError as exc:
        logger.warning("Could not verify %s: %s", name, exc)
        return _report(name, project, local_size, last_modified, False, None, "Error reading project")

    return _report(
        name,
        project,
        local_size,
        last_modified,
        verdict.safe,
        verdict.reason,
        describe(verdict.reason),
    )


def _report(
    name: str,
    project: Project,
    local_size: int,
    last_modified: datetime | None,
    is_safe: bool,
    reason: VerifyReason | None,
    status: str,
) -> ProjectReport:
    return ProjectReport(
        name=name,
        local_path=project.local_path,
        local_size=local_size,
        last_modified=last_modified,
        last_park_at=project.last_park_at,
        never_parked=project.last_park_at is None,
        no_hash_mode=project.no_hash_mode,
        is_safe=is_safe,
        reason=reason,
        status=status,
    )


def oldest_first_key(report: ProjectReport) -> tuple[datetime, str]:
    """Sort key: oldest ``last_modified`` first; projects without files lead; name breaks ties."""

    return (report.last_modified or _EPOCH, report.name)


def sort_reports(reports: list[ProjectReport], sort_field: SortField) -> list[ProjectReport]:
    """Return ``reports`` ordered by ``sort_field`` (size: largest first)."""

    if sort_field is SortField.SIZE:
        return sorted(reports, key=lambda report: (-report.local_size, report.name))
    if sort_field is SortField.NAME:
        return sorted(reports, key=lambda report: report.name)
    return sorted(reports, key=oldest_first_key)


def generate_report(
    projects: Mapping[str, Project],
    *,
    mode: VerifyMode = VerifyMode.MTIME_ONLY,
    sort_field: SortField = SortField.MODIFIED,
    filesystem: FilesystemPort | None = None,
    hasher: Callable[[Path], str] = hash_tree,
) -> ReportSummary:
    """Report on every grabbed project in ``projects``."""

    summary = ReportSummary()
    reports: list[ProjectReport] = []
    for name, project in projects.items():
        if not project.is_grabbed:
            continue
        report = build_project_report(
            name, project, mode=mode, filesystem=filesystem, hasher=hasher
        )
        reports.append(report)
        summary.total_size += report.local_size
        if report.is_safe:
            summary.safe_to_delete += 1
            summary.recoverable_space += report.local_size

    summary.projects = sort_reports(reports, sort_field)
    return summary


__all__ = [
    "build_project_report",
    "generate_report",
    "oldest_first_key",
    "sort_reports",
]
