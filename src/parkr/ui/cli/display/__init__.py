"""Display management for CLI interface."""

from parkr.ui.cli.display.check_result import StateCheckDisplay
from parkr.ui.cli.display.prune_result import PruneResultDisplay
from parkr.ui.cli.display.report import ReportDisplay

__all__ = ["PruneResultDisplay", "ReportDisplay", "StateCheckDisplay"]
