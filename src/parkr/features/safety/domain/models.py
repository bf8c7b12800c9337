"""Data structures that describe a safety verification outcome."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Final


class VerifyMode(str, Enum):
    """How a project's local copy is checked before deletion."""

    AUTO = "auto"
    MTIME_ONLY = "mtime"
    HASH_ONLY = "hash"
    FORCE_SKIP = "force"

    @staticmethod
    def from_user_input(value: str) -> "VerifyMode":
        """Translate raw config or CLI input into the matching mode."""

        normalized = value.strip().lower()
        for mode in VerifyMode:
            if mode.value == normalized:
                return mode
        valid: Final[str] = ", ".join(m.value for m in VerifyMode)
        msg = f"Unsupported verify mode '{value}'. Valid options: {valid}"
        raise ValueError(msg)


class VerifyReason(str, Enum):
    """Why a project was judged safe or unsafe to delete."""

    NEVER_PARKED = "never_parked"
    FORCED_NO_VERIFICATION = "forced_no_verification"
    HASH_UNAVAILABLE = "hash_unavailable"
    LOCAL_PATH_MISSING = "local_path_missing"
    NO_FILES_FOUND = "no_files_found"
    UNCOMMITTED_WORK = "uncommitted_work"
    SAFE_BY_MTIME = "safe_by_mtime"
    MISSING_HASH_DATA = "missing_hash_data"
    CONTENT_MISMATCH = "content_mismatch"
    SAFE_BY_HASH = "safe_by_hash"


_STATUS_TEXT: Final[dict[VerifyReason, str]] = {
    VerifyReason.NEVER_PARKED: "Never checked in",
    VerifyReason.FORCED_NO_VERIFICATION: "Forced (not verified)",
    VerifyReason.HASH_UNAVAILABLE: "Hash verification unavailable (no-hash mode)",
    VerifyReason.LOCAL_PATH_MISSING: "Local path not found",
    VerifyReason.NO_FILES_FOUND: "No files found",
    VerifyReason.UNCOMMITTED_WORK: "Has uncommitted work",
    VerifyReason.SAFE_BY_MTIME: "Safe to delete",
    VerifyReason.MISSING_HASH_DATA: "Missing hash data",
    VerifyReason.CONTENT_MISMATCH: "Content differs from archive",
    VerifyReason.SAFE_BY_HASH: "Safe to delete (hash verified)",
}


def describe(reason: VerifyReason) -> str:
    """Return the human-readable status string for ``reason``."""

    return _STATUS_TEXT[reason]


@dataclass(slots=True, frozen=True)
class Verdict:
    """Outcome of a single verification; unpacks as ``(safe, reason)``."""

    safe: bool
    reason: VerifyReason

    def __iter__(self) -> Iterator[object]:
        return iter((self.safe, self.reason))

    @property
    def status(self) -> str:
        return describe(self.reason)
