"""
Summary: Keyboard-driven state machine that lets a human adjust the automatic prune selection.
Why: Operators sometimes know better than "oldest first" which local copies can go.
"""

from __future__ import annotations

import io
import logging
import sys
from collections.abc import Sequence
from datetime import datetime

from parkr.features.prune import PruneCandidate
from parkr.platform.terminal import NotATerminalError, TerminalSession
from parkr.shared import format_age, format_size

from ..domain.models import SelectorState
from .ports import TerminalPort

logger = logging.getLogger(__name__)

_UP_KEYS = frozenset({"UP", "k"})
_DOWN_KEYS = frozenset({"DOWN", "j"})
_CONFIRM_KEYS = frozenset({"ENTER_CR", "ENTER_LF"})
_QUIT_KEYS = frozenset({"q", "ESC", "CTRL_C", "EOF"})

CONTROLS_LINE = "Controls: j/k or arrows=move  space=toggle  a=select all  enter=confirm  q=quit"


class InteractiveSelector:
    """Cursor, selection and running total over a fixed list of candidates.

    The selection starts from each candidate's ``selected`` flag. The
    candidates themselves are never modified; callers apply the outcome.
    """

    def __init__(self, candidates: Sequence[PruneCandidate], target_bytes: int) -> None:
        self.candidates = list(candidates)
        self.target_bytes = target_bytes
        self.cursor = 0
        self.state = SelectorState.ACTIVE
        self._selected: set[int] = {
            index for index, candidate in enumerate(self.candidates) if candidate.selected
        }
        self.total_selected = sum(self.candidates[index].local_size for index in self._selected)

    @property
    def confirmed(self) -> bool:
        return self.state is SelectorState.CONFIRMED

    @property
    def quitting(self) -> bool:
        return self.state is SelectorState.QUIT

    def is_selected(self, index: int) -> bool:
        return index in self._selected

    def handle_key(self, key: str) -> bool:
        """Apply one key token; return ``False`` once the selector reached a terminal state."""

        if self.state is not SelectorState.ACTIVE:
            return False

        if key in _QUIT_KEYS:
            self.state = SelectorState.QUIT
            self._selected.clear()
            self.total_selected = 0
            return False
        if key in _CONFIRM_KEYS:
            self.state = SelectorState.CONFIRMED
            return False
        if key in _UP_KEYS:
            self.cursor = max(0, self.cursor - 1)
        elif key in _DOWN_KEYS:
            self.cursor = min(max(len(self.candidates) - 1, 0), self.cursor + 1)
        elif key == " ":
            self._toggle(self.cursor)
        elif key == "a":
            self._toggle_all()
        return True

    def _toggle(self, index: int) -> None:
        if not 0 <= index < len(self.candidates):
            return
        size = self.candidates[index].local_size
        if index in self._selected:
            self._selected.discard(index)
            self.total_selected -= size
        else:
            self._selected.add(index)
            self.total_selected += size

    def _toggle_all(self) -> None:
        if len(self._selected) == len(self.candidates):
            self._selected.clear()
        else:
            self._selected = set(range(len(self.candidates)))
        self.total_selected = sum(self.candidates[index].local_size for index in self._selected)

    def selected_candidates(self) -> list[PruneCandidate]:
        """Chosen candidates in list order; always empty after quitting."""

        return [
            candidate
            for index, candidate in enumerate(self.candidates)
            if index in self._selected
        ]

    def render(self, now: datetime | None = None) -> str:
        """Return the full screen for the current state, lines separated by ``\\n``."""

        lines = [f"Need to free up {format_size(self.target_bytes)}. Select projects to delete:", ""]
        for index, candidate in enumerate(self.candidates):
            pointer = ">" if index == self.cursor else " "
            checkbox = "[x]" if index in self._selected else "[ ]"
            size = format_size(candidate.local_size)
            age = format_age(candidate.report.last_modified, now)
            lines.append(f"{pointer} {checkbox} {candidate.name} ({size}) - {age}")

        footer = (
            f"Selected: {format_size(self.total_selected)} / Target: {format_size(self.target_bytes)}"
        )
        if self.total_selected >= self.target_bytes:
            footer += " (target reached)"
        else:
            footer += f" (need {format_size(self.target_bytes - self.total_selected)} more)"
        lines.extend(["", footer, "", CONTROLS_LINE])
        return "\n".join(lines)


def _default_terminal() -> TerminalSession:
    try:
        stdin_fd = sys.stdin.fileno()
        stdout_fd = sys.stdout.fileno()
    except (AttributeError, ValueError, io.UnsupportedOperation) as exc:
        raise NotATerminalError(-1) from exc
    return TerminalSession(stdin_fd, stdout_fd)


def run_interactive_selection(
    candidates: Sequence[PruneCandidate],
    target_bytes: int,
    *,
    terminal: TerminalPort | None = None,
) -> InteractiveSelector:
    """Run the render-then-read loop until the user confirms or quits.

    The returned selector holds the outcome; ``candidates`` are left untouched.

    Raises:
        NotATerminalError: When no terminal is given and stdin is not a TTY.
    """

    selector = InteractiveSelector(candidates, target_bytes)
    term = terminal or _default_terminal()

    with term.raw_mode():
        while True:
            # Raw mode disables output post-processing, so emit CR LF.
            term.write("\x1b[H\x1b[2J" + selector.render().replace("\n", "\r\n"))
            if not selector.handle_key(term.read_key()):
                break

    if selector.confirmed:
        logger.debug(
            "Interactive selection confirmed: %d projects", len(selector.selected_candidates())
        )
    else:
        logger.debug("Interactive selection cancelled")
    return selector


__all__ = ["CONTROLS_LINE", "InteractiveSelector", "run_interactive_selection"]
