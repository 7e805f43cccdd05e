"""Where: src/wavemusic/config/settings.py
What: Fixed endpoint locations and transport defaults for the Wave API.
Why: Expose constants to the client and configuration layers without file I/O.
"""

from __future__ import annotations

from typing import Final

# Package identity ------------------------------------------------------------

APP_NAME: Final[str] = "wavemusic"
APP_VERSION: Final[str] = "0.1.0"


# Wave API endpoints -----------------------------------------------------------

WAVE_BASE_URL: Final[str] = "https://api.wireway.ch/wave"
SEARCH_PATH: Final[str] = "ytmusicsearch"
THUMBNAIL_PATH: Final[str] = "thumbnail"


# Transport defaults -----------------------------------------------------------

DEFAULT_CONNECT_TIMEOUT: Final[float] = 5.0
DEFAULT_READ_TIMEOUT: Final[float] = 15.0

# Chunk size used when streaming thumbnail bodies.
DEFAULT_CHUNK_SIZE: Final[int] = 64 * 1024


__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "WAVE_BASE_URL",
    "SEARCH_PATH",
    "THUMBNAIL_PATH",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_READ_TIMEOUT",
    "DEFAULT_CHUNK_SIZE",
]
