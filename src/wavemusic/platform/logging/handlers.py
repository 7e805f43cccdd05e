"""Where: src/wavemusic/platform/logging/handlers.py
What: Rich console handler with compact rendering for Wave request events.
Why: Make structured request logs readable without changing their records.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar
from urllib.parse import urlsplit

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class WaveRichHandler(RichHandler):
    """Rich handler that renders structured ``request_event`` records on one line."""

    _REQUEST_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "wave.request.success": ("✅", "green"),
        "wave.request.http_error": ("⛔", "red"),
        "wave.request.transport_error": ("❌", "red"),
    }
    _QUERY_LIMIT: ClassVar[int] = 40

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    def _format_url(self, url: str) -> Text:
        """Drop the scheme and abbreviate long query strings."""

        parts = urlsplit(url)
        location = f"{parts.netloc}{parts.path}" if parts.netloc else url
        text = Text(location, style=Style(color="white"))
        if parts.query:
            query = parts.query
            if len(query) > self._QUERY_LIMIT:
                query = query[: self._QUERY_LIMIT] + "…"
            _ = text.append("?" + query, style=Style(color="magenta"))
        return text

    def _render_request_message(self, record: logging.LogRecord) -> Text | None:
        event = getattr(record, "request_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._REQUEST_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        method = getattr(record, "method", None) or "GET"
        _ = text.append(f"{method} ", style=Style(color=color, bold=True))

        url = getattr(record, "url", None)
        if url:
            _ = text.append_text(self._format_url(str(url)))

        status = getattr(record, "status", None)
        if isinstance(status, int):
            _ = text.append(f" -> {status}", style=Style(color=color))

        details: list[str] = []
        duration_ms = getattr(record, "duration_ms", None)
        if isinstance(duration_ms, (int, float)):
            details.append(f"{duration_ms:.1f} ms")
        error_message = getattr(record, "error_message", None)
        if error_message:
            details.append(str(error_message))
        if details:
            _ = text.append(" (" + ", ".join(details) + ")", style=Style(color=color))
        return text

    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        request_text = self._render_request_message(record)
        if request_text is not None:
            return request_text
        return super().render_message(record, message)


__all__ = ["WaveRichHandler"]
