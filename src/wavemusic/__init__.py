"""Client library for the Wave music-search API."""

from __future__ import annotations

from wavemusic.config.config import Config
from wavemusic.config.settings import APP_VERSION as __version__
from wavemusic.platform.wave.client import ThumbnailStream, WaveClient, search, thumbnail
from wavemusic.platform.wave.errors import (
    DecodeError,
    HttpStatusError,
    MissingIdError,
    TransportError,
    WaveError,
)
from wavemusic.platform.wave.models import MusicItem, SearchResponse, parse_search_response

__all__ = [
    "Config",
    "DecodeError",
    "HttpStatusError",
    "MissingIdError",
    "MusicItem",
    "SearchResponse",
    "ThumbnailStream",
    "TransportError",
    "WaveClient",
    "WaveError",
    "__version__",
    "parse_search_response",
    "search",
    "thumbnail",
]
