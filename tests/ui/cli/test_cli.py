"""Tests for CLI exit-code handling."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from parkr.features.prune import ExecutionResult, FailedDeletion, FailureKind, ProjectReport
from parkr.features.safety import VerifyMode
from parkr.features.state import ConsistencyReport, StateFileNotFoundError
from parkr.ui.cli import CommandProcessor, main
from parkr.ui.cli.args.options import CheckArgs, PruneArgs


@pytest.fixture
def prune_args() -> PruneArgs:
    return PruneArgs(
        command="prune",
        target_bytes=10,
        state_file=Path("state.json"),
        execute=True,
        interactive=False,
        mode=VerifyMode.AUTO,
        force=False,
        verbose=False,
        quiet=True,
    )


def _report(name: str) -> ProjectReport:
    return ProjectReport(
        name=name,
        local_path=None,
        local_size=1,
        last_modified=None,
        last_park_at=None,
        never_parked=True,
        no_hash_mode=False,
        is_safe=False,
        reason=None,
        status="",
    )


@pytest.fixture
def mock_process_args(mocker: MockerFixture) -> MagicMock:
    return mocker.patch("parkr.ui.cli.cli.ArgumentParser.process_args")


def _exit_code(args_list: list[str] | None = None) -> int:
    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(args_list or [])
    code = excinfo.value.code
    assert isinstance(code, int)
    return code


def test_successful_prune_returns_normally(
    mocker: MockerFixture, mock_process_args: MagicMock, prune_args: PruneArgs
) -> None:
    mock_process_args.return_value = prune_args
    command = mocker.patch("parkr.ui.cli.cli.PruneCommand")
    command.return_value.execute.return_value = ExecutionResult(
        target_bytes=10, deleted=[_report("a")], total_freed=10
    )

    CommandProcessor.process_command([])


def test_state_save_failure_exits_2(
    mocker: MockerFixture, mock_process_args: MagicMock, prune_args: PruneArgs
) -> None:
    mock_process_args.return_value = prune_args
    command = mocker.patch("parkr.ui.cli.cli.PruneCommand")
    command.return_value.execute.return_value = ExecutionResult(
        target_bytes=10,
        failed=[FailedDeletion(_report("a"), FailureKind.STATE_SAVE_FAILED, "x")],
    )

    assert _exit_code() == 2


def test_other_failures_exit_1(
    mocker: MockerFixture, mock_process_args: MagicMock, prune_args: PruneArgs
) -> None:
    mock_process_args.return_value = prune_args
    command = mocker.patch("parkr.ui.cli.cli.PruneCommand")
    command.return_value.execute.return_value = ExecutionResult(
        target_bytes=10,
        failed=[FailedDeletion(_report("a"), FailureKind.DELETE_FAILED, "x")],
    )

    assert _exit_code() == 1


def test_keyboard_interrupt_exits_130(
    mocker: MockerFixture, mock_process_args: MagicMock, prune_args: PruneArgs
) -> None:
    mock_process_args.return_value = prune_args
    command = mocker.patch("parkr.ui.cli.cli.PruneCommand")
    command.return_value.execute.side_effect = KeyboardInterrupt

    assert _exit_code() == 130


def test_missing_state_file_exits_1(
    mocker: MockerFixture,
    mock_process_args: MagicMock,
    prune_args: PruneArgs,
    caplog: pytest.LogCaptureFixture,
) -> None:
    mock_process_args.return_value = prune_args
    command = mocker.patch("parkr.ui.cli.cli.PruneCommand")
    command.return_value.execute.side_effect = StateFileNotFoundError(Path("state.json"))

    assert _exit_code() == 1
    assert "parkr init" in caplog.text


def test_check_with_issues_exits_1(mocker: MockerFixture, mock_process_args: MagicMock) -> None:
    mock_process_args.return_value = CheckArgs(
        command="check", state_file=Path("state.json"), verbose=False, quiet=True
    )
    command = mocker.patch("parkr.ui.cli.cli.CheckCommand")
    command.return_value.execute.return_value = ConsistencyReport(issues=["broken"])

    assert _exit_code() == 1


def test_check_with_only_warnings_succeeds(
    mocker: MockerFixture, mock_process_args: MagicMock
) -> None:
    mock_process_args.return_value = CheckArgs(
        command="check", state_file=Path("state.json"), verbose=False, quiet=True
    )
    command = mocker.patch("parkr.ui.cli.cli.CheckCommand")
    command.return_value.execute.return_value = ConsistencyReport(warnings=["meh"])

    CommandProcessor.process_command([])


def test_main_returns_zero(mocker: MockerFixture) -> None:
    process = mocker.patch("parkr.ui.cli.cli.CommandProcessor.process_command")

    assert main() == 0
    process.assert_called_once_with()
