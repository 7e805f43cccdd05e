"""Where: src/wavemusic/platform/wave/user_agent.py
What: Build the User-Agent string sent with Wave API requests.
Why: Centralise request identity shared by the transport and configuration.
"""

from __future__ import annotations

from wavemusic.config.settings import APP_NAME, APP_VERSION


def format_user_agent(app_name: str, app_version: str, contact: str | None = None) -> str:
    """Return ``App/Version (contact)`` when contact information is available."""

    stripped = (contact or "").strip()
    if stripped:
        return f"{app_name}/{app_version} ({stripped})"
    return f"{app_name}/{app_version}"


def default_user_agent(contact: str | None = None) -> str:
    """User agent identifying this library."""

    return format_user_agent(APP_NAME, APP_VERSION, contact)


__all__ = [
    "default_user_agent",
    "format_user_agent",
]
