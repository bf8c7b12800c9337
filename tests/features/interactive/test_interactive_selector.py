"""
Summary: Tests for the keyboard selection state machine and its terminal loop.
Why: Quitting must never delete anything and raw mode must always be restored.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from parkr.features.interactive import (
    InteractiveSelector,
    NotATerminalError,
    SelectorState,
    run_interactive_selection,
)
from parkr.features.prune import ProjectReport, PruneCandidate
from parkr.features.safety import VerifyReason

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _candidate(name: str, size: int, *, selected: bool = False, age_days: int = 3) -> PruneCandidate:
    report = ProjectReport(
        name=name,
        local_path=Path("/local") / name,
        local_size=size,
        last_modified=NOW - timedelta(days=age_days),
        last_park_at=NOW - timedelta(days=1),
        never_parked=False,
        no_hash_mode=True,
        is_safe=True,
        reason=VerifyReason.SAFE_BY_MTIME,
        status="Safe to delete",
    )
    return PruneCandidate(report=report, selected=selected)


@pytest.fixture
def candidates() -> list[PruneCandidate]:
    return [
        _candidate("alpha", 1024, selected=True),
        _candidate("beta", 2048),
        _candidate("gamma", 4096),
    ]


class FakeTerminal:
    """Scripted terminal recording writes and raw-mode transitions."""

    def __init__(self, keys: list[str]) -> None:
        self.keys = list(keys)
        self.writes: list[str] = []
        self.raw_active = False
        self.restored = False

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        self.raw_active = True
        try:
            yield
        finally:
            self.raw_active = False
            self.restored = True

    def read_key(self) -> str:
        if not self.keys:
            return "EOF"
        return self.keys.pop(0)

    def write(self, text: str) -> None:
        assert self.raw_active
        self.writes.append(text)


def test_initial_selection_is_seeded_from_candidates(candidates: list[PruneCandidate]) -> None:
    selector = InteractiveSelector(candidates, 3000)

    assert selector.cursor == 0
    assert selector.state is SelectorState.ACTIVE
    assert selector.total_selected == 1024
    assert selector.is_selected(0)


def test_cursor_movement_is_clamped(candidates: list[PruneCandidate]) -> None:
    selector = InteractiveSelector(candidates, 3000)

    for key in ["UP", "k"]:
        assert selector.handle_key(key)
    assert selector.cursor == 0

    for key in ["DOWN", "j", "DOWN", "j"]:
        _ = selector.handle_key(key)
    assert selector.cursor == 2


def test_space_toggles_and_updates_total(candidates: list[PruneCandidate]) -> None:
    selector = InteractiveSelector(candidates, 3000)

    _ = selector.handle_key(" ")
    assert selector.total_selected == 0
    _ = selector.handle_key("j")
    _ = selector.handle_key(" ")
    assert selector.total_selected == 2048
    assert [c.name for c in selector.selected_candidates()] == ["beta"]


def test_select_all_then_deselect_all(candidates: list[PruneCandidate]) -> None:
    selector = InteractiveSelector(candidates, 3000)

    _ = selector.handle_key("a")
    assert selector.total_selected == 1024 + 2048 + 4096
    _ = selector.handle_key("a")
    assert selector.total_selected == 0
    assert selector.selected_candidates() == []


def test_enter_confirms_and_later_keys_are_ignored(candidates: list[PruneCandidate]) -> None:
    selector = InteractiveSelector(candidates, 3000)

    assert selector.handle_key("ENTER_CR") is False
    assert selector.confirmed
    assert selector.handle_key("a") is False
    assert selector.total_selected == 1024


@pytest.mark.parametrize("key", ["q", "ESC", "CTRL_C"])
def test_quit_discards_selection(candidates: list[PruneCandidate], key: str) -> None:
    selector = InteractiveSelector(candidates, 3000)
    _ = selector.handle_key("a")

    assert selector.handle_key(key) is False

    assert selector.quitting
    assert selector.selected_candidates() == []
    assert selector.total_selected == 0


def test_selector_never_mutates_candidates(candidates: list[PruneCandidate]) -> None:
    selector = InteractiveSelector(candidates, 3000)

    for key in ["a", "j", " ", "ENTER_LF"]:
        _ = selector.handle_key(key)

    assert [c.selected for c in candidates] == [True, False, False]


def test_render_shows_cursor_checkboxes_and_progress(candidates: list[PruneCandidate]) -> None:
    selector = InteractiveSelector(candidates, 3000)

    screen = selector.render(now=NOW)

    lines = screen.split("\n")
    assert lines[0] == "Need to free up 2.9 KB. Select projects to delete:"
    assert "> [x] alpha (1.0 KB) - 3 days ago" in lines
    assert "  [ ] beta (2.0 KB) - 3 days ago" in lines
    assert "Selected: 1.0 KB / Target: 2.9 KB (need 1.9 KB more)" in lines

    _ = selector.handle_key("a")
    assert "(target reached)" in selector.render(now=NOW)


def test_run_loop_renders_and_restores_terminal(candidates: list[PruneCandidate]) -> None:
    terminal = FakeTerminal(["j", " ", "ENTER_CR"])

    selector = run_interactive_selection(candidates, 3000, terminal=terminal)

    assert selector.confirmed
    assert [c.name for c in selector.selected_candidates()] == ["alpha", "beta"]
    assert terminal.restored
    assert len(terminal.writes) == 3
    assert all(write.startswith("\x1b[H\x1b[2J") for write in terminal.writes)
    assert "\r\n" in terminal.writes[0]


def test_run_loop_treats_eof_as_quit(candidates: list[PruneCandidate]) -> None:
    terminal = FakeTerminal([])

    selector = run_interactive_selection(candidates, 3000, terminal=terminal)

    assert selector.quitting
    assert terminal.restored


def test_run_loop_restores_terminal_on_error(candidates: list[PruneCandidate]) -> None:
    class BrokenTerminal(FakeTerminal):
        def read_key(self) -> str:
            raise KeyboardInterrupt

    terminal = BrokenTerminal([])

    with pytest.raises(KeyboardInterrupt):
        _ = run_interactive_selection(candidates, 3000, terminal=terminal)

    assert terminal.restored


def test_requires_a_tty_without_a_terminal(
    candidates: list[PruneCandidate], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("parkr.platform.terminal.os.isatty", lambda _fd: False)

    with pytest.raises(NotATerminalError):
        _ = run_interactive_selection(candidates, 3000)
