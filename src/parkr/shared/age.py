"""Relative age strings for last-modified timestamps."""

from __future__ import annotations

from datetime import datetime, timezone

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_MONTH = 30 * _DAY


def _plural(count: int, unit: str) -> str:
    if count == 1:
        return f"1 {unit} ago"
    return f"{count} {unit}s ago"


def format_age(moment: datetime | None, now: datetime | None = None) -> str:
    """Describe how long ago ``moment`` was, e.g. ``"3 days ago"``; ``None`` is ``"never"``."""

    if moment is None:
        return "never"

    reference = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=timezone.utc)

    seconds = (reference - moment).total_seconds()
    if seconds < _MINUTE:
        return "just now"
    if seconds < _HOUR:
        return _plural(int(seconds // _MINUTE), "min")
    if seconds < _DAY:
        return _plural(int(seconds // _HOUR), "hour")
    if seconds < _WEEK:
        return _plural(int(seconds // _DAY), "day")
    if seconds < _MONTH:
        return _plural(int(seconds // _WEEK), "week")
    return _plural(int(seconds // _MONTH), "month")


__all__ = ["format_age"]
