"""Where: src/wavemusic/platform/wave/http_client.py
What: HTTP adapter translating ``requests`` outcomes into the Wave error taxonomy.
Why: Decouple network concerns from payload decoding and the public client facade.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Protocol

import requests

from wavemusic.config.settings import DEFAULT_CONNECT_TIMEOUT, DEFAULT_READ_TIMEOUT
from wavemusic.platform.logging import logger

from .errors import HttpStatusError, TransportError
from .user_agent import default_user_agent

JSON_ACCEPT = "application/json"
IMAGE_ACCEPT = "image/*"


class HTTPClient(Protocol):
    """Protocol for transports able to perform a single GET request."""

    def get(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        accept: str = JSON_ACCEPT,
        stream: bool = False,
    ) -> requests.Response:
        ...

    def close(self) -> None:
        ...


class WaveHTTPClient:
    """Perform GET requests through a ``requests.Session``.

    A session passed in by the caller is borrowed and left open by ``close``;
    otherwise the client creates and owns one.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        timeout: tuple[float, float] = (DEFAULT_CONNECT_TIMEOUT, DEFAULT_READ_TIMEOUT),
        user_agent: str | None = None,
    ) -> None:
        self._owns_session: bool = session is None
        self._session: requests.Session = session if session is not None else requests.Session()
        self._timeout: tuple[float, float] = timeout
        self._user_agent: str = user_agent or default_user_agent()

    @property
    def owns_session(self) -> bool:
        return self._owns_session

    def get(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        accept: str = JSON_ACCEPT,
        stream: bool = False,
    ) -> requests.Response:
        """Issue a GET request and return the response when its status is 2xx.

        Raises:
            TransportError: When no response could be obtained.
            HttpStatusError: When the server answered with a non-success status.
        """

        headers = {
            "Accept": accept,
            "User-Agent": self._user_agent,
        }

        started = time.perf_counter()
        try:
            response = self._session.get(
                url,
                params=params,
                headers=headers,
                timeout=self._timeout,
                stream=stream,
            )
        except requests.RequestException as exc:
            logger.warning(
                "Wave request error: %s",
                exc,
                extra={
                    "request_event": "wave.request.transport_error",
                    "method": "GET",
                    "url": url,
                    "error_message": type(exc).__name__,
                },
            )
            raise TransportError(url, str(exc)) from exc

        duration_ms = (time.perf_counter() - started) * 1000.0
        resolved_url = response.url or url
        status = int(response.status_code)

        if not 200 <= status < 300:
            response.close()
            logger.warning(
                "Wave HTTP error: status=%s",
                status,
                extra={
                    "request_event": "wave.request.http_error",
                    "method": "GET",
                    "url": resolved_url,
                    "status": status,
                    "duration_ms": duration_ms,
                },
            )
            raise HttpStatusError(status, resolved_url)

        logger.debug(
            "Wave request succeeded: status=%s",
            status,
            extra={
                "request_event": "wave.request.success",
                "method": "GET",
                "url": resolved_url,
                "status": status,
                "duration_ms": duration_ms,
            },
        )
        return response

    def close(self) -> None:
        if self._owns_session:
            self._session.close()


__all__ = [
    "HTTPClient",
    "IMAGE_ACCEPT",
    "JSON_ACCEPT",
    "WaveHTTPClient",
]
