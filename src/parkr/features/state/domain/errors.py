"""Errors raised by the project state store."""

from __future__ import annotations

from pathlib import Path


class StateError(Exception):
    """The state document is missing, unreadable or inconsistent."""


class StateFileNotFoundError(StateError):
    """No state document exists at the configured location."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"state file not found at {path} - run 'parkr init' first")
        self.path = path


class StateSaveError(StateError):
    """Persisting the state document failed; the previous file is left in place."""
