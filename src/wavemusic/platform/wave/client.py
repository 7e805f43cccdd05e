"""Where: src/wavemusic/platform/wave/client.py
What: Facade exposing Wave API search and thumbnail retrieval.
Why: Combine configuration, transport, and payload decoding behind two calls.

Responsibilities are delegated to smaller helpers:
- ``http_client`` performs the GET and maps failures onto ``errors``
- ``models`` decodes the search envelope into ``MusicItem`` values
- ``wavemusic.config`` supplies endpoints, timeouts, and request identity

The module-level ``search`` and ``thumbnail`` functions create a fresh client
per call; long-lived callers should hold a ``WaveClient`` instead.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from types import TracebackType
from typing import BinaryIO

import requests

from wavemusic.config.config import Config

from .errors import MissingIdError, TransportError
from .http_client import IMAGE_ACCEPT, JSON_ACCEPT, HTTPClient, WaveHTTPClient
from .models import MusicItem, parse_search_response


class ThumbnailStream:
    """Streaming thumbnail body returned by ``WaveClient.thumbnail``.

    The caller owns the stream and must close it, preferably with ``with``.
    The body is read once: a second ``read``/``write_to``/``save`` or
    iteration raises ``RuntimeError``.
    """

    def __init__(
        self,
        response: requests.Response,
        *,
        item_id: str,
        chunk_size: int,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self._response: requests.Response = response
        self.item_id: str = item_id
        self._chunk_size: int = chunk_size
        self._on_close: Callable[[], None] | None = on_close
        self._closed: bool = False
        self._consumed: bool = False

    @property
    def content_type(self) -> str | None:
        return self._response.headers.get("Content-Type")

    @property
    def url(self) -> str:
        return self._response.url or ""

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def consumed(self) -> bool:
        return self._consumed

    def __iter__(self) -> Iterator[bytes]:
        """Yield body chunks; the body can be iterated only once."""

        if self._consumed:
            raise RuntimeError(f"Thumbnail stream for '{self.item_id}' was already consumed")
        self._consumed = True
        return self._chunks()

    def _chunks(self) -> Iterator[bytes]:
        try:
            for chunk in self._response.iter_content(chunk_size=self._chunk_size):
                if chunk:
                    yield chunk
        except requests.RequestException as exc:
            raise TransportError(self.url, str(exc)) from exc

    def read(self) -> bytes:
        """Consume and return the whole body."""

        return b"".join(self)

    def write_to(self, fileobj: BinaryIO) -> int:
        """Copy the body into ``fileobj`` and return the number of bytes written."""

        written = 0
        for chunk in self:
            _ = fileobj.write(chunk)
            written += len(chunk)
        return written

    def save(self, path: Path | str) -> Path:
        """Write the body to ``path``, creating parent directories as needed."""

        target = Path(path).expanduser()
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp = target.with_name(target.name + ".part")
        try:
            with open(tmp, "wb") as fh:
                _ = self.write_to(fh)
            _ = tmp.replace(target)
        finally:
            tmp.unlink(missing_ok=True)
        return target

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._response.close()
        finally:
            if self._on_close is not None:
                self._on_close()

    def __enter__(self) -> "ThumbnailStream":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class WaveClient:
    """Synchronous client for the Wave music-search API.

    Example:
        >>> with WaveClient() as client:
        ...     for item in client.search("daft punk"):
        ...         print(item)
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        session: requests.Session | None = None,
        http_client: HTTPClient | None = None,
    ) -> None:
        self.config: Config = config or Config()
        if http_client is not None:
            self._http: HTTPClient = http_client
            self._owns_http = False
        else:
            self._http = WaveHTTPClient(
                session,
                timeout=self.config.timeout,
                user_agent=self.config.effective_user_agent(),
            )
            self._owns_http = True

    def search(self, query: str) -> list[MusicItem]:
        """Search the Wave API.

        Args:
            query: Free-form search text; sent as the ``q`` query parameter.

        Returns:
            list[MusicItem]: Results in server order, possibly empty.

        Raises:
            TransportError: The request did not complete.
            HttpStatusError: The server returned a non-2xx status.
            DecodeError: The body is not the expected JSON shape.
        """

        response = self._http.get(self.config.search_url, params={"q": query}, accept=JSON_ACCEPT)
        try:
            body = response.content
        except requests.RequestException as exc:
            raise TransportError(self.config.search_url, str(exc)) from exc
        finally:
            response.close()
        return list(parse_search_response(body).items)

    def thumbnail(self, item: MusicItem) -> ThumbnailStream:
        """Open the thumbnail image of ``item`` as a byte stream.

        Raises:
            MissingIdError: ``item`` has no id; no request is made.
            TransportError: The request did not complete.
            HttpStatusError: The server returned a non-2xx status.
        """

        return self._open_thumbnail(item)

    def _open_thumbnail(
        self,
        item: MusicItem,
        on_close: Callable[[], None] | None = None,
    ) -> ThumbnailStream:
        if not item.id:
            raise MissingIdError(item)

        response = self._http.get(
            self.config.thumbnail_url(item.id),
            accept=IMAGE_ACCEPT,
            stream=True,
        )
        return ThumbnailStream(
            response,
            item_id=item.id,
            chunk_size=self.config.thumbnail_chunk_size,
            on_close=on_close,
        )

    def close(self) -> None:
        """Release the transport when this client created it."""

        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "WaveClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def search(query: str, config: Config | None = None) -> list[MusicItem]:
    """One-shot search using a client created for this call only."""

    with WaveClient(config) as client:
        return client.search(query)


def thumbnail(item: MusicItem, config: Config | None = None) -> ThumbnailStream:
    """One-shot thumbnail fetch; closing the stream also releases its session."""

    client = WaveClient(config)
    try:
        return client._open_thumbnail(item, on_close=client.close)
    except Exception:
        client.close()
        raise


__all__ = [
    "ThumbnailStream",
    "WaveClient",
    "search",
    "thumbnail",
]
