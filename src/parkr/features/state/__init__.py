"""Public surface for the project state feature."""

from .adapters.json_store import JsonProjectStore
from .adapters.memory_store import InMemoryProjectStore
from .domain.errors import StateError, StateFileNotFoundError, StateSaveError
from .domain.models import Project, State
from .usecases.consistency import ConsistencyReport, check_state
from .usecases.ports import ProjectStore

__all__ = [
    "ConsistencyReport",
    "InMemoryProjectStore",
    "JsonProjectStore",
    "Project",
    "ProjectStore",
    "State",
    "StateError",
    "StateFileNotFoundError",
    "StateSaveError",
    "check_state",
]
