"""
Summary: Blocking filesystem primitives shared by hashing, verification and pruning.
Why: Keep one traversal rule (symlinks and special files skipped) for every caller.
"""

from __future__ import annotations

import os
import shutil
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True, slots=True)
class RegularFile:
    """A regular file found under a traversal root."""

    path: Path
    relative_path: str
    size: int
    mtime: datetime


def _mtime_from_ns(mtime_ns: int) -> datetime:
    """Convert a nanosecond mtime to a UTC datetime, truncated to microseconds.

    Recorded timestamps are truncated the same way when parsed, so an unchanged
    file compares equal to the mtime recorded for it.
    """

    seconds, nanos = divmod(mtime_ns, 1_000_000_000)
    return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(microsecond=nanos // 1000)


def iter_regular_files(root: Path) -> Iterator[RegularFile]:
    """Yield every regular file below ``root``.

    Symbolic links are never followed nor reported, whatever they point to.
    Devices, sockets and FIFOs are skipped. ``relative_path`` always uses
    ``/`` separators. ``OSError`` from listing or stat propagates.
    """

    pending: list[tuple[Path, str]] = [(root, "")]
    while pending:
        directory, prefix = pending.pop()
        with os.scandir(directory) as entries:
            for entry in entries:
                relative = f"{prefix}{entry.name}"
                if entry.is_symlink():
                    continue
                info = entry.stat(follow_symlinks=False)
                if stat.S_ISDIR(info.st_mode):
                    pending.append((Path(entry.path), f"{relative}/"))
                elif stat.S_ISREG(info.st_mode):
                    yield RegularFile(
                        path=Path(entry.path),
                        relative_path=relative,
                        size=info.st_size,
                        mtime=_mtime_from_ns(info.st_mtime_ns),
                    )


def dir_size(root: Path) -> int:
    """Return the total size in bytes of the regular files under ``root``."""

    return sum(entry.size for entry in iter_regular_files(root))


def newest_mtime(root: Path) -> datetime | None:
    """Return the newest regular-file modification time, or ``None`` without files."""

    newest: datetime | None = None
    for entry in iter_regular_files(root):
        if newest is None or entry.mtime > newest:
            newest = entry.mtime
    return newest


def is_directory(path: Path) -> bool:
    """Return whether ``path`` is a real directory (a symlink to one does not count)."""

    try:
        info = path.lstat()
    except OSError:
        return False
    return stat.S_ISDIR(info.st_mode)


def remove_tree(root: Path) -> None:
    """Delete ``root`` recursively; a symlinked root is unlinked, not followed."""

    if root.is_symlink():
        root.unlink()
        return
    shutil.rmtree(root)


class FilesystemPort(Protocol):
    """Filesystem operations consumed by the selector and the executor."""

    def dir_size(self, root: Path) -> int:
        """Return the total size of regular files under ``root``."""

        ...

    def newest_mtime(self, root: Path) -> datetime | None:
        """Return the newest regular-file mtime under ``root``."""

        ...

    def is_directory(self, path: Path) -> bool:
        """Return whether ``path`` is an existing directory."""

        ...

    def remove_tree(self, root: Path) -> None:
        """Delete ``root`` and everything beneath it."""

        ...


class LocalFilesystem(FilesystemPort):
    """Thin wrapper around the module-level primitives."""

    def dir_size(self, root: Path) -> int:
        return dir_size(root)

    def newest_mtime(self, root: Path) -> datetime | None:
        return newest_mtime(root)

    def is_directory(self, path: Path) -> bool:
        return is_directory(path)

    def remove_tree(self, root: Path) -> None:
        remove_tree(root)


__all__ = [
    "FilesystemPort",
    "LocalFilesystem",
    "RegularFile",
    "dir_size",
    "is_directory",
    "iter_regular_files",
    "newest_mtime",
    "remove_tree",
]
