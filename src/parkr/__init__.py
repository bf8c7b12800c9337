"""parkr: reclaim local disk space from projects safely parked in an archive."""

__version__ = "0.1.0"
