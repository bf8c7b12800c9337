"""Ports for the state feature."""

from __future__ import annotations

from typing import Protocol

from ..domain.models import State


class ProjectStore(Protocol):
    """Handle on the loaded state document.

    ``save`` persists the whole document atomically; the core treats a raised
    exception as "nothing was written".
    """

    @property
    def state(self) -> State:
        """Return the in-memory document shared by selector and executor."""

        ...

    def save(self) -> None:
        """Durably persist ``state``."""

        ...
