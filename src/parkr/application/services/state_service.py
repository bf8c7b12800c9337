"""Application service for the state document: init, report and consistency check."""

from __future__ import annotations

from collections.abc import Callable
from logging import Logger, getLogger
from pathlib import Path
from typing import final

from parkr.config.config import Config
from parkr.config.paths import default_config_path
from parkr.features.hashing import hash_tree
from parkr.features.prune import ReportSummary, SortField, generate_report
from parkr.features.safety import VerifyMode
from parkr.features.state import ConsistencyReport, JsonProjectStore, State, check_state
from parkr.platform.filesystem import FilesystemPort, LocalFilesystem


@final
class StateService:
    """Operations on a JSON state document that do not delete anything."""

    _store: JsonProjectStore
    _filesystem: FilesystemPort
    _hasher: Callable[[Path], str]
    _logger: Logger

    def __init__(
        self,
        store: JsonProjectStore,
        *,
        filesystem: FilesystemPort | None = None,
        hasher: Callable[[Path], str] = hash_tree,
        logger: Logger | None = None,
    ) -> None:
        self._store = store
        self._filesystem = filesystem or LocalFilesystem()
        self._hasher = hasher
        self._logger = logger or getLogger(__name__)

    @property
    def store(self) -> JsonProjectStore:
        return self._store

    def initialise(self, archive_root: Path, *, write_config: bool = True) -> State:
        """Create the state document and, if missing, the default config file.

        Raises:
            FileExistsError: If the state document already exists.
        """

        if self._store.exists():
            raise FileExistsError(f"state file already exists: {self._store.path}")

        state = self._store.create_with_root(archive_root.expanduser().resolve())
        self._logger.info("Created state file at %s", self._store.path)

        if write_config:
            configuration = Config.load()
            if configuration.state_file is None:
                configuration.state_file = self._store.path
            target = default_config_path()
            if not target.exists():
                _ = configuration.save(target)
        return state

    def report(
        self,
        *,
        verify_hash: bool = False,
        sort_field: SortField = SortField.MODIFIED,
    ) -> ReportSummary:
        """Summarise every grabbed project; hash verification only when asked."""

        mode = VerifyMode.AUTO if verify_hash else VerifyMode.MTIME_ONLY
        return generate_report(
            self._store.state.projects,
            mode=mode,
            sort_field=sort_field,
            filesystem=self._filesystem,
            hasher=self._hasher,
        )

    def check(self) -> ConsistencyReport:
        """Run the consistency check over the loaded document."""

        report = check_state(self._store.state)
        self._logger.debug(
            "Consistency check: %d issues, %d warnings", len(report.issues), len(report.warnings)
        )
        return report
