"""Command line interface for parkr."""

from parkr.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
