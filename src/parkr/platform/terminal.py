"""Terminal control helpers for the interactive selector.

Owns the raw-mode lifecycle and decodes raw stdin bytes into key tokens.
"""

from __future__ import annotations

import contextlib
import os
import select
import termios
import tty
from collections.abc import Iterator

ESC_SEQUENCE_TIMEOUT_MS = 25


class NotATerminalError(RuntimeError):
    """Interactive selection needs a TTY on stdin."""

    def __init__(self, fd: int) -> None:
        super().__init__(f"interactive mode requires a terminal (fd {fd} is not a TTY)")
        self.fd = fd


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def read_key(fd: int) -> str:
    """Block for one keystroke on ``fd`` and return its token.

    Tokens: ``UP``, ``DOWN``, ``LEFT``, ``RIGHT``, ``ESC``, ``ENTER_CR``,
    ``ENTER_LF``, ``CTRL_C``, ``EOF`` or the decoded character itself.
    """

    ch = os.read(fd, 1)
    if not ch:
        return "EOF"
    if ch == b"\x03":
        return "CTRL_C"
    if ch == b"\r":
        return "ENTER_CR"
    if ch == b"\n":
        return "ENTER_LF"
    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq == b"A":
        return "UP"
    if seq == b"B":
        return "DOWN"
    if seq == b"C":
        return "RIGHT"
    if seq == b"D":
        return "LEFT"
    return "ESC"


class TerminalSession:
    """Raw-mode terminal bound to a pair of file descriptors."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        if not os.isatty(stdin_fd):
            raise NotATerminalError(stdin_fd)
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Enter raw mode and hide the cursor; restore both on every exit path."""

        saved_tty_state = termios.tcgetattr(self.stdin_fd)
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
            self.write("\x1b[?25l")
            yield
        finally:
            # Clear the selector screen and show the cursor again.
            self.write("\x1b[H\x1b[2J\x1b[?25h")
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, saved_tty_state)

    def read_key(self) -> str:
        return read_key(self.stdin_fd)

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8"))


__all__ = ["NotATerminalError", "TerminalSession", "read_key"]
