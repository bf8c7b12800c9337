"""JSON file adapter for the project state store."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from ..domain.errors import StateError, StateFileNotFoundError, StateSaveError
from ..domain.models import State
from ..usecases.ports import ProjectStore

logger = logging.getLogger(__name__)


class JsonProjectStore(ProjectStore):
    """Load and save the state document as indented JSON.

    Saves write ``<path>.tmp`` first and ``os.replace`` it over the target so
    readers never observe a half-written document.
    """

    _path: Path
    _state: State | None

    def __init__(self, path: Path, state: State | None = None) -> None:
        self._path = path
        self._state = state

    @property
    def path(self) -> Path:
        return self._path

    @property
    def state(self) -> State:
        if self._state is None:
            self._state = self.load()
        return self._state

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> State:
        """Read the document from disk and make it the current state."""

        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise StateFileNotFoundError(self._path) from exc
        except OSError as exc:
            raise StateError(f"failed to read state file: {exc}") from exc

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StateError(f"failed to parse state file: {exc}") from exc

        self._state = State.from_dict(payload)
        logger.debug("Loaded %d projects from %s", len(self._state.projects), self._path)
        return self._state

    def save(self) -> None:
        """Persist the current state atomically."""

        state = self.state
        data = json.dumps(state.to_dict(), indent=2)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            _ = tmp_path.write_text(data, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise StateSaveError(f"failed to save state file {self._path}: {exc}") from exc
        logger.debug("Saved state to %s", self._path)

    def create_with_root(self, archive_root: Path) -> State:
        """Initialise a fresh document whose default master lives under ``archive_root``."""

        self._state = State.with_archive_root(archive_root)
        self.save()
        return self._state


__all__ = ["JsonProjectStore"]
