"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from parkr.features.prune import SortField
from parkr.features.safety import VerifyMode


@final
@dataclass(slots=True)
class InitArgs:
    """Command line arguments for the ``init`` subcommand."""

    command: Literal["init"]
    archive_root: Path | None
    state_file: Path
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class PruneArgs:
    """Command line arguments for the ``prune`` subcommand."""

    command: Literal["prune"]
    target_bytes: int
    state_file: Path
    execute: bool
    interactive: bool
    mode: VerifyMode
    force: bool
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class ReportArgs:
    """Command line arguments for the ``report`` subcommand."""

    command: Literal["report"]
    state_file: Path
    sort_field: SortField
    verify_hash: bool
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class CheckArgs:
    """Command line arguments for the ``check`` subcommand."""

    command: Literal["check"]
    state_file: Path
    verbose: bool
    quiet: bool


CLIArgs = InitArgs | PruneArgs | ReportArgs | CheckArgs

__all__ = ["CLIArgs", "CheckArgs", "InitArgs", "PruneArgs", "ReportArgs"]
