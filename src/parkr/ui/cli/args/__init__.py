"""Command line argument handling package."""

from parkr.ui.cli.args.options import CheckArgs, CLIArgs, InitArgs, PruneArgs, ReportArgs
from parkr.ui.cli.args.parser import ArgumentParser

__all__ = ["ArgumentParser", "CLIArgs", "CheckArgs", "InitArgs", "PruneArgs", "ReportArgs"]
