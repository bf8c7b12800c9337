"""Tests for prune result rendering."""

from __future__ import annotations

from datetime import datetime, timezone
from io import StringIO
from pathlib import Path

from rich.console import Console

from parkr.features.prune import (
    ExecutionResult,
    FailedDeletion,
    FailureKind,
    ProjectReport,
    PruneCandidate,
    SelectionResult,
)
from parkr.ui.cli.display import PruneResultDisplay


def _report(name: str, size: int) -> ProjectReport:
    return ProjectReport(
        name=name,
        local_path=Path("/local") / name,
        local_size=size,
        last_modified=datetime(2024, 1, 1, tzinfo=timezone.utc),
        last_park_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
        never_parked=False,
        no_hash_mode=True,
        is_safe=True,
        reason=None,
        status="Safe to delete",
    )


def _display() -> tuple[PruneResultDisplay, StringIO]:
    output = StringIO()
    return PruneResultDisplay(Console(file=output, width=200)), output


def test_dry_run_warns_about_insufficient_space() -> None:
    display, output = _display()
    selection = SelectionResult(
        target_bytes=4096,
        candidates=[PruneCandidate(_report("app", 1024), selected=True)],
        total_selected=1024,
        insufficient_space=True,
    )

    display.show_dry_run(selection)

    text = output.getvalue()
    assert "Total to free: 1.0 KB (target: 4.0 KB)" in text
    assert "WARNING: Only 1.0 KB available for pruning." in text


def test_execution_summary_flags_state_inconsistency() -> None:
    display, output = _display()
    result = ExecutionResult(
        target_bytes=10,
        deleted=[_report("one", 4)],
        failed=[
            FailedDeletion(
                _report("two", 4),
                FailureKind.STATE_SAVE_FAILED,
                "directory deleted but state not saved: disk full",
            )
        ],
        skipped=[_report("three", 4)],
        total_freed=4,
    )

    display.show_execution(result)

    text = output.getvalue()
    assert "Successfully freed 4 B" in text
    assert "two: directory deleted but state not saved" in text
    assert "Not attempted: 1" in text
    assert "Deleted but not recorded: two" in text
    assert "Only freed 4 B of target 10 B" in text


def test_progress_lines() -> None:
    display, output = _display()

    display.show_progress(_report("ok", 2048), True, 2048)
    display.show_progress(_report("bad", 1), False, 0)

    text = output.getvalue()
    assert "Deleting ok... ✓ (freed 2.0 KB)" in text
    assert "Deleting bad... ✗ (failed)" in text


def test_quiet_console_prints_nothing() -> None:
    display, output = _display()
    display.console.quiet = True

    display.show_no_candidates(forced=True)

    assert output.getvalue() == ""
