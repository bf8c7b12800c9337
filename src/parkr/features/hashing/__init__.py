"""Public surface for the content hashing feature."""

from .domain.errors import EmptyTreeError, TreeHashError, TreeHashIOError
from .usecases.tree_hash import hash_file, hash_tree

__all__ = [
    "EmptyTreeError",
    "TreeHashError",
    "TreeHashIOError",
    "hash_file",
    "hash_tree",
]
