"""In-memory project store used for dry runs and tests."""

from __future__ import annotations

import copy

from ..domain.models import State
from ..usecases.ports import ProjectStore


class InMemoryProjectStore(ProjectStore):
    """Keep the state in memory; ``save`` snapshots it into ``saved``."""

    _state: State
    saved: State | None
    save_count: int

    def __init__(self, state: State | None = None) -> None:
        self._state = state or State()
        self.saved = None
        self.save_count = 0

    @property
    def state(self) -> State:
        return self._state

    def save(self) -> None:
        self.saved = copy.deepcopy(self._state)
        self.save_count += 1


__all__ = ["InMemoryProjectStore"]
