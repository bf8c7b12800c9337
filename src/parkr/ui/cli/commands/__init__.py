"""Command execution package for CLI."""

from parkr.ui.cli.commands.check import CheckCommand
from parkr.ui.cli.commands.init import InitCommand
from parkr.ui.cli.commands.prune import PruneCommand
from parkr.ui.cli.commands.report import ReportCommand

__all__ = ["CheckCommand", "InitCommand", "PruneCommand", "ReportCommand"]
