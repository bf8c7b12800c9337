"""Application services used by the CLI."""

from .prune_service import PruneRequest, PruneService
from .state_service import StateService

__all__ = ["PruneRequest", "PruneService", "StateService"]
