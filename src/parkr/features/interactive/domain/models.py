"""States of the interactive selector."""

from __future__ import annotations

from enum import Enum


class SelectorState(str, Enum):
    """``ACTIVE`` accepts keys; ``CONFIRMED`` and ``QUIT`` are terminal."""

    ACTIVE = "active"
    CONFIRMED = "confirmed"
    QUIT = "quit"
