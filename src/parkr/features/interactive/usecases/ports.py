"""Ports for the interactive selection feature."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol


class TerminalPort(Protocol):
    """Keystroke source and screen sink for the selector loop."""

    def raw_mode(self) -> AbstractContextManager[None]:
        """Context manager that enables raw input and restores the terminal on exit."""

        ...

    def read_key(self) -> str:
        """Block until one key is pressed and return its token."""

        ...

    def write(self, text: str) -> None:
        """Write ``text`` to the screen."""

        ...
