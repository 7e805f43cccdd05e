"""Where: src/wavemusic/config/config.py
What: Client configuration dataclass with validation and explicit TOML loading.
Why: Keep endpoints, timeouts, and request identity adjustable without environment lookups.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any
from urllib.parse import quote, urlsplit

from wavemusic.config.settings import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_READ_TIMEOUT,
    SEARCH_PATH,
    THUMBNAIL_PATH,
    WAVE_BASE_URL,
)
from wavemusic.platform.logging import logger
from wavemusic.platform.wave.user_agent import default_user_agent

_TABLE_NAME = "wave"


@dataclass(slots=True, frozen=True)
class Config:
    """Client configuration.

    Nothing here is read from the environment; callers either use the defaults
    or load a TOML file explicitly through ``Config.load``.
    """

    # Root of the Wave API, without trailing slash
    base_url: str = WAVE_BASE_URL

    # Transport timeouts in seconds
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT

    # Request identity; ``user_agent`` replaces the generated value entirely
    user_agent: str | None = None
    contact: str | None = None

    # Chunk size used when iterating thumbnail bodies
    thumbnail_chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        """Normalise the base URL and validate numeric limits."""

        if not isinstance(self.base_url, str):
            raise ValueError(f"base_url must be a string, got {self.base_url!r}")
        base = self.base_url.strip().rstrip("/")
        parts = urlsplit(base)
        if parts.scheme not in {"http", "https"} or not parts.netloc:
            raise ValueError(f"base_url must be an absolute http(s) URL, got '{self.base_url}'")
        object.__setattr__(self, "base_url", base)

        for name in ("connect_timeout", "read_timeout"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ValueError(f"{name} must be a positive number, got {value!r}")

        chunk = self.thumbnail_chunk_size
        if isinstance(chunk, bool) or not isinstance(chunk, int) or chunk <= 0:
            raise ValueError(f"thumbnail_chunk_size must be a positive integer, got {chunk!r}")

    @property
    def timeout(self) -> tuple[float, float]:
        return (float(self.connect_timeout), float(self.read_timeout))

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/{SEARCH_PATH}"

    def thumbnail_url(self, item_id: str) -> str:
        """Return the thumbnail endpoint for ``item_id`` encoded as a single path segment."""

        return f"{self.base_url}/{THUMBNAIL_PATH}/{quote(item_id, safe='')}"

    def effective_user_agent(self) -> str:
        if self.user_agent and self.user_agent.strip():
            return self.user_agent.strip()
        return default_user_agent(self.contact)

    @classmethod
    def load(cls, path: Path | str | None = None) -> "Config":
        """Load configuration from a TOML file.

        Args:
            path: File to read. ``None`` returns the defaults without touching disk.

        Returns:
            Config: Loaded configuration object.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the file contains unknown keys or invalid values.
        """

        if path is None:
            return cls()

        config_file = Path(path).expanduser().resolve()
        try:
            with open(config_file, "rb") as f:
                raw = tomllib.load(f)

            section = raw.get(_TABLE_NAME, raw)
            if not isinstance(section, dict):
                raise ValueError(f"[{_TABLE_NAME}] must be a table")

            config = cls.from_mapping(section)
        except (OSError, tomllib.TOMLDecodeError, ValueError, TypeError) as e:
            logger.error("Failed to load configuration from %s: %s", config_file, e)
            raise

        logger.info("Configuration loaded from %s", config_file)
        return config

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> "Config":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**values)


__all__ = ["Config"]
