"""Shared path utilities for configuration and data locations.

This module centralizes how the application discovers locations for the
state document, the config file and logs.

Policy:
- Data: ``~/.parkr`` unless overridden by ``PARKR_HOME``.
- State: ``<data_dir>/state.json`` unless overridden by ``PARKR_STATE_FILE``.
- Config: ``<data_dir>/config.toml``.
- Logs: ``<data_dir>/logs/parkr.log``.
"""

from __future__ import annotations

import os
from pathlib import Path
from collections.abc import Mapping
from typing import Callable, Final


_ENV_DATA_DIR: Final[str] = "PARKR_HOME"
_ENV_STATE_FILE: Final[str] = "PARKR_STATE_FILE"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a configuration path honoring explicit and environment overrides."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = mapping.get(env_var) or ""
        candidate = candidate.strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    default_path = default_factory()
    return default_path.expanduser().resolve()


def default_data_dir(env: Mapping[str, str] | None = None) -> Path:
    """Get the directory holding state, config and logs."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=_ENV_DATA_DIR,
        default_factory=lambda: Path.home() / ".parkr",
    )


def default_state_path(env: Mapping[str, str] | None = None) -> Path:
    """Get the default path of the persisted project state document."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=_ENV_STATE_FILE,
        default_factory=lambda: default_data_dir(env) / "state.json",
    )


def default_config_path() -> Path:
    """Get the default path to the TOML config file."""

    return (default_data_dir() / "config.toml").resolve()


def default_log_dir() -> Path:
    """Get the default directory for log files."""

    return (default_data_dir() / "logs").resolve()


def default_log_file() -> Path:
    """Get the default log file path."""

    return (default_log_dir() / "parkr.log").resolve()


__all__ = [
    "default_config_path",
    "default_data_dir",
    "default_log_dir",
    "default_log_file",
    "default_state_path",
    "resolve_overridable_path",
]
