"""Where: src/wavemusic/platform/wave/errors.py
What: Closed exception hierarchy raised by the Wave API client.
Why: Let callers match transport, status, decode and precondition failures exhaustively.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import MusicItem


class WaveError(Exception):
    """Base class for every failure surfaced by the Wave client."""


class TransportError(WaveError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""

    def __init__(self, url: str, reason: str) -> None:
        self.url: str = url
        self.reason: str = reason
        super().__init__(f"Request to {url} failed: {reason}")


class HttpStatusError(WaveError):
    """The server answered with a status outside the 2xx range."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code: int = status_code
        self.url: str = url
        super().__init__(f"Failed to fetch data: HTTP {status_code} from {url}")


class DecodeError(WaveError):
    """The response body was not valid JSON or did not match the search schema."""

    _EXCERPT_LIMIT: int = 200

    def __init__(self, message: str, body: str | bytes | None = None) -> None:
        self.message: str = message
        self.body_excerpt: str | None = _excerpt(body, self._EXCERPT_LIMIT)
        super().__init__(message)


class MissingIdError(WaveError):
    """A thumbnail was requested for an item that carries no identifier."""

    def __init__(self, item: MusicItem) -> None:
        self.item: MusicItem = item
        super().__init__(f"Cannot fetch a thumbnail for '{item}': item has no id")


def _excerpt(body: str | bytes | None, limit: int) -> str | None:
    if body is None:
        return None
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if len(body) <= limit:
        return body
    return body[:limit] + "…"


__all__ = [
    "DecodeError",
    "HttpStatusError",
    "MissingIdError",
    "TransportError",
    "WaveError",
]
