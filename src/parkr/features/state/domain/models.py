"""Where: src/parkr/features/state/domain/models.py
What: Project records and the state document that owns them.
Why: Give the selector and executor a typed view of the persisted JSON.
Assumptions: - Timestamps are stored as ISO 8601 strings; naive values mean UTC.
Trade-offs: - Unknown JSON keys are dropped on load rather than round-tripped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Final

from .errors import StateError

_TIMESTAMP_FIELDS: Final[tuple[str, ...]] = (
    "grabbed_at",
    "last_park_at",
    "local_hash_computed_at",
    "last_park_mtime",
)

DEFAULT_MASTER: Final[str] = "primary"
DEFAULT_CATEGORIES: Final[tuple[str, ...]] = ("code", "pycharm", "rstudio", "misc")


def _parse_timestamp(value: object) -> datetime | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise StateError(f"invalid timestamp: {value!r}")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise StateError(f"invalid timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


@dataclass(slots=True)
class Project:
    """One project tracked in the state document."""

    local_path: Path | None = None
    master: str = DEFAULT_MASTER
    archive_category: str = "code"
    grabbed_at: datetime | None = None
    last_park_at: datetime | None = None
    archive_content_hash: str | None = None
    local_content_hash: str | None = None
    local_hash_computed_at: datetime | None = None
    last_park_mtime: datetime | None = None
    no_hash_mode: bool = False
    is_grabbed: bool = False

    def mark_pruned(self) -> None:
        """Record that the local copy no longer exists."""

        self.is_grabbed = False
        self.grabbed_at = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation."""

        payload: dict[str, Any] = {
            "local_path": str(self.local_path) if self.local_path is not None else "",
            "master": self.master,
            "archive_category": self.archive_category,
            "archive_content_hash": self.archive_content_hash,
            "local_content_hash": self.local_content_hash,
            "no_hash_mode": self.no_hash_mode,
            "is_grabbed": self.is_grabbed,
        }
        for name in _TIMESTAMP_FIELDS:
            payload[name] = _format_timestamp(getattr(self, name))
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Project":
        """Build a project from its JSON representation."""

        local_path = payload.get("local_path") or None
        project = cls(
            local_path=Path(local_path) if local_path else None,
            master=str(payload.get("master") or DEFAULT_MASTER),
            archive_category=str(payload.get("archive_category") or "code"),
            archive_content_hash=payload.get("archive_content_hash") or None,
            local_content_hash=payload.get("local_content_hash") or None,
            no_hash_mode=bool(payload.get("no_hash_mode", False)),
            is_grabbed=bool(payload.get("is_grabbed", False)),
        )
        for name in _TIMESTAMP_FIELDS:
            setattr(project, name, _parse_timestamp(payload.get(name)))
        return project


@dataclass(slots=True)
class State:
    """The whole persisted document: archive masters plus tracked projects."""

    masters: dict[str, dict[str, str]] = field(default_factory=dict)
    default_master: str = DEFAULT_MASTER
    projects: dict[str, Project] = field(default_factory=dict)
    local_directories: list[str] = field(default_factory=list)

    @classmethod
    def with_archive_root(cls, archive_root: Path) -> "State":
        """Create an empty state whose default master lives under ``archive_root``."""

        return cls(
            masters={
                DEFAULT_MASTER: {
                    category: str(archive_root / category) for category in DEFAULT_CATEGORIES
                }
            },
            default_master=DEFAULT_MASTER,
        )

    def archive_path(self, name: str) -> Path:
        """Resolve the archive directory of project ``name``."""

        project = self.projects.get(name)
        if project is None:
            raise StateError(f"project '{name}' not found in state")
        master = self.masters.get(project.master)
        if master is None:
            raise StateError(f"master '{project.master}' not found")
        category_path = master.get(project.archive_category)
        if category_path is None:
            raise StateError(
                f"category '{project.archive_category}' not found in master '{project.master}'"
            )
        return Path(category_path) / name

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation."""

        payload: dict[str, Any] = {
            "masters": self.masters,
            "default_master": self.default_master,
            "projects": {name: project.to_dict() for name, project in self.projects.items()},
        }
        if self.local_directories:
            payload["local_directories"] = list(self.local_directories)
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "State":
        """Build the state from its JSON representation."""

        if not isinstance(payload, dict):
            raise StateError("state document must be a JSON object")
        projects_raw = payload.get("projects") or {}
        if not isinstance(projects_raw, dict):
            raise StateError("'projects' must be a JSON object")
        return cls(
            masters={
                str(master): {str(k): str(v) for k, v in (categories or {}).items()}
                for master, categories in (payload.get("masters") or {}).items()
            },
            default_master=str(payload.get("default_master") or DEFAULT_MASTER),
            projects={
                str(name): Project.from_dict(raw or {}) for name, raw in projects_raw.items()
            },
            local_directories=[str(item) for item in payload.get("local_directories") or []],
        )


__all__ = ["DEFAULT_CATEGORIES", "DEFAULT_MASTER", "Project", "State"]
