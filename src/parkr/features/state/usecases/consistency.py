"""
Summary: Cross-check the state document against the filesystem.
Why: Surface records that would make prune decisions unreliable before they matter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..domain.errors import StateError
from ..domain.models import State


@dataclass(slots=True)
class ConsistencyReport:
    """Problems found in the state document, split by severity."""

    issues: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.issues and not self.warnings


def check_state(state: State) -> ConsistencyReport:
    """Return the issues and warnings found in ``state``.

    Issues are records the tool cannot act on safely (missing archive or
    local directories). Warnings are inconsistencies worth a look, such as a
    ``last_park_at`` recorded without the matching ``last_park_mtime``.
    """

    report = ConsistencyReport()

    for master_name, categories in sorted(state.masters.items()):
        for category_name, category_path in sorted(categories.items()):
            if not Path(category_path).exists():
                report.warnings.append(
                    f"Master '{master_name}' category '{category_name}' path does not exist: {category_path}"
                )

    for name, project in sorted(state.projects.items()):
        try:
            archive_path = state.archive_path(name)
        except StateError as exc:
            report.issues.append(f"Project '{name}': {exc}")
        else:
            if not archive_path.exists():
                report.issues.append(
                    f"Project '{name}': archive path does not exist: {archive_path}"
                )

        if project.is_grabbed:
            if project.local_path is None:
                report.issues.append(f"Project '{name}': marked as grabbed but no local path set")
            elif not project.local_path.exists():
                report.issues.append(
                    f"Project '{name}': marked as grabbed but local path does not exist: {project.local_path}"
                )
            if project.grabbed_at is None:
                report.warnings.append(f"Project '{name}': grabbed but no grabbed_at timestamp")
        elif project.local_path is not None and project.local_path.exists():
            report.warnings.append(
                f"Project '{name}': not marked as grabbed but local path exists: {project.local_path}"
            )

        if (
            not project.no_hash_mode
            and project.local_content_hash is not None
            and project.local_hash_computed_at is None
        ):
            report.warnings.append(
                f"Project '{name}': has local hash but no hash computed timestamp"
            )

        if project.last_park_at is not None and project.last_park_mtime is None:
            report.warnings.append(
                f"Project '{name}': has last_park_at but no last_park_mtime"
            )

    tracked = {
        project.local_path.resolve()
        for project in state.projects.values()
        if project.is_grabbed and project.local_path is not None
    }
    for directory in state.local_directories:
        local_dir = Path(directory).expanduser()
        if not local_dir.is_dir():
            continue
        for entry in sorted(local_dir.iterdir()):
            if not entry.is_dir() or entry.name.startswith("."):
                continue
            if entry.resolve() not in tracked:
                report.warnings.append(f"Untracked project found in local directory: {entry}")

    return report


__all__ = ["ConsistencyReport", "check_state"]
