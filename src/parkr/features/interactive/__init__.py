"""Public surface for the interactive selection feature."""

from parkr.platform.terminal import NotATerminalError

from .domain.models import SelectorState
from .usecases.ports import TerminalPort
from .usecases.selector import InteractiveSelector, run_interactive_selection

__all__ = [
    "InteractiveSelector",
    "NotATerminalError",
    "SelectorState",
    "TerminalPort",
    "run_interactive_selection",
]
