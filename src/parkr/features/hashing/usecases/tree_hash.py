"""
Summary: Deterministic whole-tree SHA-256 content hash of a project directory.
Why: Prove the local copy equals the archived copy before it is deleted.
"""

from __future__ import annotations

import hashlib
import logging
import os
from pathlib import Path

from parkr.config.settings import FILE_HASH_CHUNK_SIZE
from parkr.platform.filesystem import iter_regular_files

from ..domain.errors import EmptyTreeError, TreeHashIOError

logger = logging.getLogger(__name__)

_SEPARATOR = b"\x00"


def hash_file(file_path: Path) -> bytes:
    """Return the raw SHA-256 digest of ``file_path`` read in chunks."""

    sha256_hash = hashlib.sha256()
    with open(file_path, "rb") as handle:
        for byte_block in iter(lambda: handle.read(FILE_HASH_CHUNK_SIZE), b""):
            sha256_hash.update(byte_block)
    return sha256_hash.digest()


def hash_tree(root: Path) -> str:
    """Compute the hex content hash of every regular file under ``root``.

    Symlinks and special files are ignored. Each file contributes its
    ``/``-separated relative path, a NUL byte and the SHA-256 of its bytes;
    entries are ordered by the byte encoding of the path so the result does not
    depend on traversal order or platform. A rename changes the digest.

    Raises:
        EmptyTreeError: When no regular file exists below ``root``.
        TreeHashIOError: When the tree cannot be walked or a file cannot be read.
    """

    try:
        entries = [(os.fsencode(entry.relative_path), entry.path) for entry in iter_regular_files(root)]
    except OSError as exc:
        raise TreeHashIOError(Path(exc.filename) if exc.filename else root, exc) from exc

    if not entries:
        raise EmptyTreeError(root)

    entries.sort(key=lambda item: item[0])

    tree_hash = hashlib.sha256()
    for relative_path, file_path in entries:
        try:
            file_digest = hash_file(file_path)
        except OSError as exc:
            raise TreeHashIOError(file_path, exc) from exc
        tree_hash.update(relative_path)
        tree_hash.update(_SEPARATOR)
        tree_hash.update(file_digest)

    digest = tree_hash.hexdigest()
    logger.debug("Hashed %d files under %s: %s", len(entries), root, digest)
    return digest


__all__ = ["hash_file", "hash_tree"]
