"""Rich console handler for filesystem events."""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class FsEventRichHandler(RichHandler):
    """Rich handler that renders structured ``fs_event`` records compactly."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "fs.mkdir.ancestor": ("📁", "cyan"),
        "fs.write.retry": ("↻", "yellow"),
        "fs.list.complete": ("✅", "green"),
        "fs.list.error": ("⚠️", "red"),
        "fs.batch.read": ("📄", "blue"),
    }
    _EVENT_PREFIXES: ClassVar[dict[str, str]] = {
        "fs.mkdir.ancestor": "Created missing ancestor ",
        "fs.write.retry": "Retrying write after creating ancestors ",
        "fs.list.complete": "Listed ",
        "fs.list.error": "Listing failed ",
        "fs.batch.read": "Read batch ",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str, base: str | None = None) -> Text:
        """Format a path with colored separators and compact rendering.

        Args:
            path: Absolute or relative path string to format.
            base: Optional base path used to relativize ``path`` when possible.

        Returns:
            Text: Formatted path with colored separators and ellipsis truncation.
        """
        pure_path = self._to_pure_path(path)
        base_path = self._to_pure_path(base) if base else None

        display_path: PurePath = pure_path
        if base_path is not None and pure_path.is_relative_to(base_path):
            relative_path = pure_path.relative_to(base_path)
            if str(relative_path) not in {"", "."}:
                display_path = relative_path

        is_windows = isinstance(display_path, PureWindowsPath)
        separator = "\\" if is_windows else "/"
        anchor = display_path.anchor
        body_parts = [part for part in display_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]

        display_string = ""
        if anchor:
            display_string = anchor.rstrip("\\/") + separator if is_windows else separator
        if truncated:
            display_string += "…" + separator
        display_string += separator.join(body_parts)

        return self._style_path_string(display_string or ".", separator)

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        """Return a platform-aware ``PurePath`` for the given raw string."""

        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    @staticmethod
    def _style_path_string(path_string: str, separator: str) -> Text:
        text = Text()
        separator_chars = {separator, "/"}
        for char in path_string:
            if char in separator_chars or char == "…":
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    def _render_fs_event(self, record: logging.LogRecord) -> Text | None:
        """Render structured filesystem events with dedicated styling."""

        event = getattr(record, "fs_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        body = Text(style=Style(color=color))
        _ = body.append(self._EVENT_PREFIXES.get(event, f"{event} "))

        path = getattr(record, "path", None)
        if path:
            _ = body.append_text(
                self._format_path(str(path), base=getattr(record, "base_path", None))
            )

        details: list[str] = []
        count = getattr(record, "count", None)
        if isinstance(count, int):
            details.append(f"files={count}")
        error_message = getattr(record, "error_message", None)
        if error_message:
            details.append(str(error_message))
        if details:
            _ = body.append(" (" + ", ".join(details) + ")")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for filesystem events."""

        event_text = self._render_fs_event(record)
        if event_text is not None:
            return event_text
        return super().render_message(record, message)


__all__ = ["FsEventRichHandler"]
