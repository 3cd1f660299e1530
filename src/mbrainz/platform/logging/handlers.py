"""Rich console handler for request lifecycle events.

Where: platform/logging/handlers.py
What: Render structured ``mb_event`` log records as compact, colored lines.
Why: Retries and throttling are easier to follow when every attempt reads the same way.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, override
from urllib.parse import urlsplit

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class RequestRichHandler(RichHandler):
    """Rich handler that formats MusicBrainz request events."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "request.dispatch": ("→", "cyan"),
        "request.success": ("✓", "green"),
        "request.throttled": ("⏳", "yellow"),
        "request.rate_limited": ("⛔", "red"),
        "request.failed": ("✗", "red"),
    }
    _QUERY_LIMIT: ClassVar[int] = 80

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("show_time", False)
        kwargs.setdefault("show_path", False)
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    def _format_url(self, url: str) -> Text:
        """Show path and query only, with separators highlighted.

        Long query strings are cut with an ellipsis.
        """
        parts = urlsplit(url)
        display = parts.path or "/"
        if parts.query:
            query = parts.query
            if len(query) > self._QUERY_LIMIT:
                query = query[: self._QUERY_LIMIT] + "…"
            display += "?" + query

        text = Text()
        for char in display:
            if char in "/?&=…":
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    def _render_request_event(self, record: logging.LogRecord) -> Text | None:
        event = getattr(record, "mb_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("•", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        body = Text(style=Style(color=color))
        method = getattr(record, "method", None) or "GET"
        _ = body.append(f"{method} ")
        url = getattr(record, "url", None)
        if url:
            _ = body.append_text(self._format_url(str(url)))

        details: list[str] = []
        attempt = getattr(record, "attempt", None)
        if isinstance(attempt, int) and attempt > 0:
            details.append(f"attempt={attempt}")
        status = getattr(record, "status", None)
        if isinstance(status, int):
            details.append(f"status={status}")
        delay = getattr(record, "delay", None)
        if isinstance(delay, (int, float)):
            details.append(f"retry in {delay:.1f}s")
        error = getattr(record, "error_message", None)
        if error:
            details.append(str(error))
        if details:
            _ = body.append(" [" + ", ".join(details) + "]")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render request events with dedicated styling, else defer to Rich."""

        request_text = self._render_request_event(record)
        if request_text is not None:
            return request_text
        return super().render_message(record, message)


__all__ = ["RequestRichHandler"]
