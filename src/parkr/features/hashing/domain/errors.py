"""Errors raised while computing a tree content hash."""

from __future__ import annotations

from pathlib import Path


class TreeHashError(Exception):
    """Base class for tree hashing failures."""

    path: Path

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class EmptyTreeError(TreeHashError):
    """The tree holds no regular file, so no digest may be produced."""

    def __init__(self, root: Path) -> None:
        super().__init__(root, f"no regular files to hash under {root}")


class TreeHashIOError(TreeHashError):
    """A stat or read failed while walking or hashing the tree."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(path, f"failed to read {path}: {cause.strerror or cause}")
        self.__cause__ = cause
