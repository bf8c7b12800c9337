"""Application service that selects and deletes local project copies."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from logging import Logger, getLogger
from pathlib import Path
from typing import final

from parkr.features.hashing import hash_tree
from parkr.features.prune import (
    ExecutionResult,
    ProgressCallback,
    PruneCandidate,
    SelectionResult,
    execute_prune,
    select_candidates,
)
from parkr.features.safety import VerifyMode
from parkr.features.state import ProjectStore
from parkr.platform.filesystem import FilesystemPort, LocalFilesystem


@dataclass(slots=True)
class PruneRequest:
    """Parameters describing a prune run."""

    target_bytes: int
    mode: VerifyMode = VerifyMode.AUTO
    force: bool = False

    @property
    def effective_mode(self) -> VerifyMode:
        """Verification mode actually applied by selection and execution."""

        return VerifyMode.FORCE_SKIP if self.force else self.mode


@final
class PruneService:
    """Application façade wiring the store and filesystem into selection and execution."""

    _store: ProjectStore
    _filesystem: FilesystemPort
    _hasher: Callable[[Path], str]
    _logger: Logger

    def __init__(
        self,
        store: ProjectStore,
        *,
        filesystem: FilesystemPort | None = None,
        hasher: Callable[[Path], str] = hash_tree,
        logger: Logger | None = None,
    ) -> None:
        self._store = store
        self._filesystem = filesystem or LocalFilesystem()
        self._hasher = hasher
        self._logger = logger or getLogger(__name__)

    def select(self, request: PruneRequest) -> SelectionResult:
        """Build the candidate pool and automatic selection for ``request``."""

        return select_candidates(
            self._store.state.projects,
            request.target_bytes,
            force=request.force,
            mode=request.mode,
            filesystem=self._filesystem,
            hasher=self._hasher,
        )

    def execute(
        self,
        request: PruneRequest,
        selection: SelectionResult,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> ExecutionResult:
        """Delete the selected candidates, saving the store after each success."""

        return execute_prune(
            selection,
            self._store,
            mode=request.effective_mode,
            on_progress=on_progress,
            filesystem=self._filesystem,
            hasher=self._hasher,
        )

    def apply_choice(
        self,
        selection: SelectionResult,
        chosen: Sequence[PruneCandidate],
    ) -> SelectionResult:
        """Replace the automatic selection with the candidates a user picked."""

        chosen_ids = {id(candidate) for candidate in chosen}
        for candidate in selection.candidates:
            candidate.selected = id(candidate) in chosen_ids
        _ = selection.recompute_total()
        self._logger.debug(
            "Applied manual selection: %d projects, %d bytes",
            len(chosen_ids),
            selection.total_selected,
        )
        return selection
