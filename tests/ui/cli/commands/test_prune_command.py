"""Tests for the prune command flows (dry run, exec, interactive)."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import timedelta
from io import StringIO
from pathlib import Path

import pytest
from pytest_mock import MockerFixture
from rich.console import Console

from conftest import NOW, ProjectFactory
from parkr.application.services import PruneService
from parkr.features.interactive import InteractiveSelector
from parkr.features.prune import PruneCandidate
from parkr.features.safety import VerifyMode
from parkr.features.state import InMemoryProjectStore, State
from parkr.ui.cli.args.options import PruneArgs
from parkr.ui.cli.commands import PruneCommand
from parkr.ui.cli.display import PruneResultDisplay


def _args(**overrides: object) -> PruneArgs:
    values: dict[str, object] = {
        "command": "prune",
        "target_bytes": 5,
        "state_file": Path("unused.json"),
        "execute": False,
        "interactive": False,
        "mode": VerifyMode.AUTO,
        "force": False,
        "verbose": False,
        "quiet": False,
    }
    values.update(overrides)
    return PruneArgs(**values)  # pyright: ignore[reportArgumentType]


@pytest.fixture
def store(make_project: ProjectFactory) -> InMemoryProjectStore:
    _, old = make_project("old", size=10, modified=NOW - timedelta(days=30))
    _, new = make_project("new", size=20, modified=NOW - timedelta(days=7))
    return InMemoryProjectStore(State(projects={"old": old, "new": new}))


@pytest.fixture
def output() -> StringIO:
    return StringIO()


def _command(
    args: PruneArgs,
    store: InMemoryProjectStore,
    output: StringIO,
    **kwargs: object,
) -> PruneCommand:
    display = PruneResultDisplay(Console(file=output, width=120))
    return PruneCommand(args, service=PruneService(store), display=display, **kwargs)  # pyright: ignore[reportArgumentType]


def _path(store: InMemoryProjectStore, name: str) -> Path:
    local_path = store.state.projects[name].local_path
    assert local_path is not None
    return local_path


def test_dry_run_deletes_nothing(store: InMemoryProjectStore, output: StringIO) -> None:
    result = _command(_args(), store, output).execute()

    assert result is None
    assert _path(store, "old").exists()
    text = output.getvalue()
    assert "DRY-RUN" in text
    assert "1. old (10 B)" in text
    assert "Run with --exec to actually delete." in text


def test_exec_deletes_selected(store: InMemoryProjectStore, output: StringIO) -> None:
    result = _command(_args(execute=True), store, output).execute()

    assert result is not None
    assert [r.name for r in result.deleted] == ["old"]
    assert not _path(store, "old").exists()
    assert "Successfully freed 10 B" in output.getvalue()


def test_no_candidates_message(output: StringIO) -> None:
    empty = InMemoryProjectStore(State())

    result = _command(_args(execute=True), empty, output).execute()

    assert result is None
    assert "No safe candidates available for pruning." in output.getvalue()


def _runner(keys: Sequence[str]) -> Callable[[Sequence[PruneCandidate], int], InteractiveSelector]:
    def run(candidates: Sequence[PruneCandidate], target_bytes: int) -> InteractiveSelector:
        selector = InteractiveSelector(candidates, target_bytes)
        for key in keys:
            _ = selector.handle_key(key)
        return selector

    return run


def test_interactive_quit_deletes_nothing(store: InMemoryProjectStore, output: StringIO) -> None:
    command = _command(_args(interactive=True), store, output, interactive_runner=_runner(["a", "q"]))

    assert command.execute() is None
    assert _path(store, "old").exists()
    assert _path(store, "new").exists()
    assert store.save_count == 0
    assert "Selection cancelled" in output.getvalue()


def test_interactive_confirmed_choice_is_executed(
    store: InMemoryProjectStore, output: StringIO, mocker: MockerFixture
) -> None:
    ask = mocker.patch("parkr.ui.cli.commands.prune.Confirm.ask", return_value=True)
    # Deselect "old", select "new", confirm.
    command = _command(
        _args(interactive=True), store, output, interactive_runner=_runner([" ", "j", " ", "ENTER_CR"])
    )

    result = command.execute()

    ask.assert_called_once()
    assert result is not None
    assert [r.name for r in result.deleted] == ["new"]
    assert _path(store, "old").exists()
    assert not _path(store, "new").exists()


def test_interactive_declined_confirmation(
    store: InMemoryProjectStore, output: StringIO, mocker: MockerFixture
) -> None:
    _ = mocker.patch("parkr.ui.cli.commands.prune.Confirm.ask", return_value=False)
    command = _command(_args(interactive=True), store, output, interactive_runner=_runner(["ENTER_CR"]))

    assert command.execute() is None
    assert _path(store, "old").exists()
    assert "Deletion cancelled." in output.getvalue()


def test_interactive_without_confirmation_prompt(
    store: InMemoryProjectStore, output: StringIO, mocker: MockerFixture
) -> None:
    ask = mocker.patch("parkr.ui.cli.commands.prune.Confirm.ask")
    command = _command(
        _args(interactive=True),
        store,
        output,
        interactive_runner=_runner(["ENTER_LF"]),
        confirm_interactive=False,
    )

    result = command.execute()

    ask.assert_not_called()
    assert result is not None
    assert [r.name for r in result.deleted] == ["old"]
