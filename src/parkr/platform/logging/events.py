"""Structured event identifiers attached to prune log records."""

from __future__ import annotations

from enum import StrEnum


class PruneEvent(StrEnum):
    """Values for the ``prune_event`` extra consumed by ``PruneRichHandler``."""

    SELECTION_COMPLETE = "prune.selection.complete"
    SELECTION_FORCED = "prune.selection.forced"
    BATCH_START = "prune.batch.start"
    BATCH_COMPLETE = "prune.batch.complete"
    DELETE_START = "prune.delete.start"
    DELETE_SUCCESS = "prune.delete.success"
    DELETE_FAILED = "prune.delete.failed"
    VERIFY_FAILED = "prune.verify.failed"
    STATE_SAVE_FAILED = "prune.state.save_failed"
    TARGET_REACHED = "prune.target.reached"
