"""
Summary: Parse human-readable size targets and render byte counts for display.
Why: Prune targets arrive as strings like "10G" and every report prints sizes.
"""

from __future__ import annotations

import re
from typing import Final

KILOBYTE: Final[int] = 1024
MEGABYTE: Final[int] = 1024 * KILOBYTE
GIGABYTE: Final[int] = 1024 * MEGABYTE
TERABYTE: Final[int] = 1024 * GIGABYTE

_SIZE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(\d+(?:\.\d+)?)\s*([KMGT]B?)$", re.IGNORECASE
)
_MULTIPLIERS: Final[dict[str, int]] = {
    "K": KILOBYTE,
    "M": MEGABYTE,
    "G": GIGABYTE,
    "T": TERABYTE,
}
_UNITS: Final[tuple[tuple[int, str], ...]] = (
    (TERABYTE, "T"),
    (GIGABYTE, "G"),
    (MEGABYTE, "M"),
    (KILOBYTE, "K"),
)


class SizeParseError(ValueError):
    """Raised when a size string cannot be turned into a positive byte count."""


def parse_size(value: str) -> int:
    """Convert ``value`` such as ``10G``, ``1.5GB`` or ``500m`` into bytes.

    Units are binary multiples (K=1024) and case-insensitive; the trailing
    ``B`` is optional.

    Raises:
        SizeParseError: For empty, malformed, zero or negative sizes.
    """

    stripped = value.strip()
    if not stripped:
        raise SizeParseError("empty size string")

    match = _SIZE_PATTERN.match(stripped)
    if match is None:
        raise SizeParseError(
            f"invalid size format: {value!r} (expected format like 10G, 500M, 1.5GB)"
        )

    number = float(match.group(1))
    if number <= 0:
        raise SizeParseError(f"size must be positive: {value!r}")

    unit = match.group(2).upper().rstrip("B")
    size_bytes = int(number * _MULTIPLIERS[unit])
    if size_bytes <= 0:
        raise SizeParseError(f"size must be at least one byte: {value!r}")
    return size_bytes


def format_size(size_bytes: int) -> str:
    """Render ``size_bytes`` with one decimal and a spaced unit (``1.5 GB``)."""

    for multiplier, unit in _UNITS:
        if size_bytes >= multiplier:
            return f"{size_bytes / multiplier:.1f} {unit}B"
    return f"{size_bytes} B"


def format_size_compact(size_bytes: int) -> str:
    """Render ``size_bytes`` in the short form accepted by ``parse_size`` (``1.5G``)."""

    if size_bytes <= 0:
        return f"{size_bytes}B"

    for multiplier, unit in _UNITS:
        if size_bytes >= multiplier:
            value = size_bytes / multiplier
            if value == int(value):
                return f"{int(value)}{unit}"
            formatted = f"{value:.2f}".rstrip("0").rstrip(".")
            return f"{formatted}{unit}"
    return f"{size_bytes}B"


__all__ = [
    "GIGABYTE",
    "KILOBYTE",
    "MEGABYTE",
    "SizeParseError",
    "TERABYTE",
    "format_size",
    "format_size_compact",
    "parse_size",
]
