"""Where: src/snapdiff/platform/logging/handlers.py
What: Rich console handler that renders structured build events.
Why: Keep terminal formatting out of the orchestration code.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class SnapRichHandler(RichHandler):
    """Rich handler with dedicated rendering for ``snapdiff_event`` records."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "build.step.start": ("⏳", "cyan"),
        "build.step.success": ("✅", "green"),
        "build.step.fail": ("❌", "red"),
        "build.info": ("ℹ️", "blue"),
        "build.warning": ("⚠️", "yellow"),
        "build.error": ("⛔", "red"),
        "build.artifact": ("📄", "magenta"),
        "build.divider": ("", "bright_black"),
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4
    _DIVIDER_WIDTH: ClassVar[int] = 60

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str) -> Text:
        """Format a path with coloured separators, keeping only the last segments."""

        pure_path = self._to_pure_path(path)
        separator = "\\" if isinstance(pure_path, PureWindowsPath) else "/"
        anchor = pure_path.anchor
        body_parts = [part for part in pure_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]

        display = ""
        if anchor and not truncated:
            display = anchor if isinstance(pure_path, PureWindowsPath) else separator
        if truncated:
            display += "…" + separator
        display += separator.join(body_parts)

        text = Text()
        for char in display or ".":
            if char in {separator, "…"}:
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def _render_build_message(self, record: logging.LogRecord, message: str) -> Text | None:
        """Render structured build events with icons and colours."""

        event = getattr(record, "snapdiff_event", None)
        if not isinstance(event, str):
            return None

        if event == "build.divider":
            return Text("─" * self._DIVIDER_WIDTH, style=Style(color="bright_black"))

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        body = Text(style=Style(color=color))
        _ = body.append(message)

        artifact_path = getattr(record, "artifact_path", None)
        if event == "build.artifact" and artifact_path:
            _ = body.append(" ")
            _ = body.append_text(self._format_path(str(artifact_path)))

        details: list[str] = []
        duration_ms = getattr(record, "duration_ms", None)
        if isinstance(duration_ms, (int, float)):
            details.append(f"{duration_ms:.0f} ms")
        error_message = getattr(record, "error_message", None)
        if error_message:
            details.append(str(error_message))
        if details:
            _ = body.append(" (" + ", ".join(details) + ")")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for build events."""

        build_text = self._render_build_message(record, message)
        if build_text is not None:
            return build_text
        return super().render_message(record, message)


__all__ = ["SnapRichHandler"]
