# Where: parkr.shared.__init__
# What: Provide a concise import surface for shared formatting helpers.
# Why: Encourage consistent size and age rendering across CLI, logs and the selector.

"""Shared cross-cutting utilities exposed at the package level."""

from .age import format_age
from .sizes import SizeParseError, format_size, format_size_compact, parse_size

__all__ = [
    "SizeParseError",
    "format_age",
    "format_size",
    "format_size_compact",
    "parse_size",
]
