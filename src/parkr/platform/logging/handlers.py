"""Rich console handler with dedicated rendering for prune events."""

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import Any, ClassVar

from typing_extensions import override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text

from parkr.shared.sizes import format_size


class PruneRichHandler(RichHandler):
    """Rich handler that renders structured prune records as single styled lines."""

    _PRUNE_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "prune.selection.complete": ("🔎", "cyan"),
        "prune.selection.forced": ("⚠️", "yellow"),
        "prune.batch.start": ("🚀", "cyan"),
        "prune.batch.complete": ("✅", "green"),
        "prune.delete.start": ("🗑️", "blue"),
        "prune.delete.success": ("✔", "green"),
        "prune.delete.failed": ("✘", "red"),
        "prune.verify.failed": ("✘", "yellow"),
        "prune.state.save_failed": ("🚨", "bold red"),
        "prune.target.reached": ("🎯", "green"),
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 3

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with compact defaults.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str) -> Text:
        """Render ``path`` keeping only its trailing segments, separators in magenta."""

        pure_path = PurePath(path)
        parts = [part for part in pure_path.parts if part and part != pure_path.anchor]
        truncated = len(parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            parts = parts[-self._PATH_SEGMENT_LIMIT:]
            display = "…/" + "/".join(parts)
        else:
            display = str(pure_path)

        text = Text()
        for char in display:
            if char in {"/", "\\", "…"}:
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    def _render_prune_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured prune events with dedicated styling."""

        event = getattr(record, "prune_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._PRUNE_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style.parse(color) + Style(bold=True))
        body = Text(style=Style.parse(color))

        sequence = getattr(record, "sequence", None)
        total = getattr(record, "total", None)
        if isinstance(sequence, int) and sequence > 0:
            if isinstance(total, int) and total > 0:
                _ = body.append(f"[{sequence}/{total}] ")
            else:
                _ = body.append(f"[{sequence}] ")

        project = getattr(record, "project", None)
        details: list[str] = []

        if event.startswith("prune.batch") or event.startswith("prune.selection"):
            _ = body.append(record.getMessage())
            target = getattr(record, "target_bytes", None)
            if isinstance(target, int):
                details.append(f"target={format_size(target)}")
            for key in ("selected", "deleted", "failed", "skipped"):
                value = getattr(record, key, None)
                if isinstance(value, int):
                    details.append(f"{key}={value}")
            freed = getattr(record, "total_freed", None)
            if isinstance(freed, int):
                details.append(f"freed={format_size(freed)}")
        else:
            prefix = {
                "prune.delete.start": "Deleting ",
                "prune.delete.success": "Deleted ",
                "prune.delete.failed": "Failed to delete ",
                "prune.verify.failed": "Not safe to delete ",
                "prune.state.save_failed": "Directory deleted but state not saved for ",
                "prune.target.reached": "Target reached after ",
            }.get(event, "")
            _ = body.append(prefix)
            if project:
                _ = body.append(str(project), style=Style(bold=True))
            local_path = getattr(record, "local_path", None)
            if local_path:
                _ = body.append(" @ ")
                _ = body.append_text(self._format_path(str(local_path)))
            freed = getattr(record, "freed", None)
            if isinstance(freed, int) and event == "prune.delete.success":
                details.append(f"freed {format_size(freed)}")
            reason = getattr(record, "reason", None)
            if reason:
                details.append(str(reason))
            error_message = getattr(record, "error_message", None)
            if error_message:
                details.append(str(error_message))

        if details:
            _ = body.append(" (" + ", ".join(details) + ")")
        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for prune events."""

        prune_text = self._render_prune_message(record)
        if prune_text is not None:
            return prune_text
        return super().render_message(record, message)


__all__ = ["PruneRichHandler"]
