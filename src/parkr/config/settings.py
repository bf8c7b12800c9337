"""Where: src/parkr/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to feature layers without file I/O.
Assumptions: - Config defaults remain compatible with current runtime expectations.
Trade-offs: - Validation is limited to simple boundary checks for speed.
"""

from __future__ import annotations

from pathlib import Path

from parkr.config.config import (
    FILE_HASH_CHUNK_SIZE_DEFAULT,
    VERIFY_MODE_CHOICES,
    config as app_config,
)
from parkr.config.paths import default_state_path

_file_hash_chunk_size = getattr(app_config, "file_hash_chunk_size", FILE_HASH_CHUNK_SIZE_DEFAULT)
FILE_HASH_CHUNK_SIZE: int = (
    _file_hash_chunk_size
    if isinstance(_file_hash_chunk_size, int) and _file_hash_chunk_size > 0
    else FILE_HASH_CHUNK_SIZE_DEFAULT
)

_verify_mode = str(getattr(app_config, "default_verify_mode", "auto")).strip().lower()
DEFAULT_VERIFY_MODE: str = _verify_mode if _verify_mode in VERIFY_MODE_CHOICES else "auto"

CONFIRM_INTERACTIVE: bool = bool(getattr(app_config, "confirm_interactive", True))


def resolve_state_file(explicit: Path | None = None) -> Path:
    """Return the state document path: explicit argument, config, then environment."""

    if explicit is not None:
        return explicit.expanduser().resolve()
    if app_config.state_file is not None:
        return app_config.state_file.expanduser().resolve()
    return default_state_path()


__all__ = [
    "CONFIRM_INTERACTIVE",
    "DEFAULT_VERIFY_MODE",
    "FILE_HASH_CHUNK_SIZE",
    "resolve_state_file",
]
