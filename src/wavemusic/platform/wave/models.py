"""Where: src/wavemusic/platform/wave/models.py
What: Immutable search result records and the JSON payload decoding for them.
Why: Keep schema interpretation apart from HTTP concerns so it can be tested offline.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final, cast

from wavemusic.platform.logging import logger

from .errors import DecodeError

# Durations are unsigned 32-bit on the wire.
_MAX_DURATION: Final[int] = 2**32 - 1

_TEXT_FIELDS: Final[tuple[tuple[str, str], ...]] = (
    ("title", "title"),
    ("uploader_name", "uploaderName"),
    ("uploader_url", "uploaderUrl"),
    ("id", "id"),
)


@dataclass(slots=True, frozen=True)
class MusicItem:
    """One entry of a Wave search response.

    Every field is optional: an absent or ``null`` JSON value maps to ``None``.
    """

    title: str | None = None
    uploader_name: str | None = None
    uploader_url: str | None = None
    duration_seconds: int | None = None
    id: str | None = None

    def __str__(self) -> str:
        return f"{self.title or ''} from {self.uploader_name or ''}"

    @property
    def has_id(self) -> bool:
        """Return True when the item can be used to request a thumbnail."""

        return bool(self.id)

    @classmethod
    def from_payload(cls, payload: object) -> "MusicItem":
        """Build an item from one decoded JSON object.

        Unknown keys are ignored; keys with an unexpected type raise ``DecodeError``.
        """

        if not isinstance(payload, Mapping):
            raise DecodeError(f"Expected a JSON object for a music item, got {_json_type(payload)}")
        data = cast(Mapping[str, Any], payload)

        values: dict[str, Any] = {}
        for attr, key in _TEXT_FIELDS:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise DecodeError(f"Field '{key}' must be a string or null, got {_json_type(value)}")
            values[attr] = value

        values["duration_seconds"] = _parse_duration(data.get("duration"))
        return cls(**values)

    def to_payload(self) -> dict[str, Any]:
        """Return the item using the JSON key names of the Wave API."""

        return {
            "title": self.title,
            "uploaderName": self.uploader_name,
            "uploaderUrl": self.uploader_url,
            "duration": self.duration_seconds,
            "id": self.id,
        }


@dataclass(slots=True, frozen=True)
class SearchResponse:
    """Wrapper matching the ``{"items": [...]}`` envelope of a search reply."""

    items: tuple[MusicItem, ...] = ()

    @classmethod
    def from_payload(cls, payload: object) -> "SearchResponse":
        if not isinstance(payload, Mapping):
            raise DecodeError(f"Expected a JSON object at the top level, got {_json_type(payload)}")
        data = cast(Mapping[str, Any], payload)
        if "items" not in data:
            raise DecodeError("missing field `items`")

        raw_items = data["items"]
        if not isinstance(raw_items, list):
            raise DecodeError(f"Field 'items' must be an array, got {_json_type(raw_items)}")

        items_list = cast(list[object], raw_items)
        return cls(items=tuple(MusicItem.from_payload(entry) for entry in items_list))

    def to_payload(self) -> dict[str, Any]:
        return {"items": [item.to_payload() for item in self.items]}


def parse_search_response(body: str | bytes) -> SearchResponse:
    """Decode a raw search response body.

    Args:
        body: Response body as received from the server.

    Returns:
        SearchResponse: Parsed envelope.

    Raises:
        DecodeError: If the body is not JSON or does not follow the search schema.
    """

    try:
        payload = json.loads(body)
    # ValueError covers JSONDecodeError, UnicodeDecodeError and the int digit limit.
    except (ValueError, RecursionError) as exc:
        logger.warning("Failed to parse JSON: %s", exc)
        raise DecodeError(f"Invalid JSON: {exc}", body) from exc

    try:
        return SearchResponse.from_payload(payload)
    except DecodeError as exc:
        logger.warning("Failed to parse JSON: %s", exc.message)
        raise DecodeError(exc.message, body) from exc


def _parse_duration(value: object) -> int | None:
    if value is None:
        return None
    # bool is an int subclass; JSON true/false is not a duration.
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"Field 'duration' must be an integer or null, got {_json_type(value)}")
    if not 0 <= value <= _MAX_DURATION:
        raise DecodeError(f"Field 'duration' out of range: {value}")
    return value


def _json_type(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


__all__ = [
    "MusicItem",
    "SearchResponse",
    "parse_search_response",
]
