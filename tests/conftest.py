"""Shared pytest fixtures for parkr tests."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Keep the import-time logger and config away from the real home directory.
os.environ["PARKR_HOME"] = tempfile.mkdtemp(prefix="parkr-test-home-")
os.environ.pop("PARKR_STATE_FILE", None)

from parkr.features.state import Project  # noqa: E402

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

ProjectFactory = Callable[..., tuple[Path, Project]]


def write_tree(root: Path, files: dict[str, bytes], mtime: datetime) -> Path:
    """Create ``files`` under ``root`` and stamp every file with ``mtime``."""

    root.mkdir(parents=True, exist_ok=True)
    stamp = mtime.timestamp()
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        _ = target.write_bytes(content)
        os.utime(target, (stamp, stamp))
    return root


@pytest.fixture
def make_project(tmp_path: Path) -> ProjectFactory:
    """Build a grabbed project on disk that was parked after its last edit."""

    def _factory(
        name: str,
        *,
        size: int = 10,
        modified: datetime = NOW - timedelta(days=10),
        parked: datetime | None = NOW - timedelta(days=5),
        archive_hash: str | None = None,
        local_hash: str | None = None,
        no_hash_mode: bool = True,
    ) -> tuple[Path, Project]:
        root = write_tree(tmp_path / "local" / name, {"data.bin": b"x" * size}, modified)
        project = Project(
            local_path=root,
            grabbed_at=NOW - timedelta(days=20),
            last_park_at=parked,
            last_park_mtime=parked,
            archive_content_hash=archive_hash,
            local_content_hash=local_hash,
            local_hash_computed_at=parked if local_hash else None,
            no_hash_mode=no_hash_mode,
            is_grabbed=True,
        )
        return root, project

    return _factory


@pytest.fixture
def config_runtime_env() -> Iterator[None]:
    """Reset configuration singletons around a test run."""

    import parkr.config.config as config_module

    original_instance = config_module.Config._instance  # pyright: ignore[reportPrivateUsage]
    original_loaded_from = config_module.Config._loaded_from  # pyright: ignore[reportPrivateUsage]
    original_config = config_module.config

    config_module.Config._instance = None  # pyright: ignore[reportPrivateUsage]
    config_module.Config._loaded_from = None  # pyright: ignore[reportPrivateUsage]

    try:
        yield None
    finally:
        config_module.Config._instance = original_instance  # pyright: ignore[reportPrivateUsage]
        config_module.Config._loaded_from = original_loaded_from  # pyright: ignore[reportPrivateUsage]
        config_module.config = original_config
