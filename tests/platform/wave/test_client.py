"""Tests for the WaveClient facade and the one-shot helpers."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

import pytest
import requests
from pytest_mock import MockerFixture

from wavemusic.config.config import Config
from wavemusic.platform.wave import client as client_module
from wavemusic.platform.wave.client import ThumbnailStream, WaveClient
from wavemusic.platform.wave.errors import (
    DecodeError,
    HttpStatusError,
    MissingIdError,
    TransportError,
    WaveError,
)
from wavemusic.platform.wave.models import MusicItem

SEARCH_URL = "https://api.wireway.ch/wave/ytmusicsearch"
THUMBNAIL_URL = "https://api.wireway.ch/wave/thumbnail"

SAMPLE_BODY = (
    '{"items":[{"title":"A","uploaderName":"B","uploaderUrl":null,"duration":180,"id":"xyz"}]}'
)


def test_search_then_thumbnail_end_to_end(fake_session: Any, make_response: Any) -> None:
    fake_session.get.side_effect = [
        make_response(200, SAMPLE_BODY),
        make_response(200, b"\xff\xd8jpeg-bytes", headers={"Content-Type": "image/jpeg"}),
    ]
    client = WaveClient(session=fake_session)

    items = client.search("A B")

    assert items == [
        MusicItem(title="A", uploader_name="B", uploader_url=None, duration_seconds=180, id="xyz")
    ]
    assert fake_session.get.call_args.args[0] == SEARCH_URL
    assert fake_session.get.call_args.kwargs["params"] == {"q": "A B"}

    with client.thumbnail(items[0]) as stream:
        assert stream.content_type == "image/jpeg"
        assert stream.item_id == "xyz"
        assert stream.read() == b"\xff\xd8jpeg-bytes"

    assert fake_session.get.call_args.args[0] == f"{THUMBNAIL_URL}/xyz"
    assert fake_session.get.call_args.kwargs["stream"] is True


def test_search_returns_empty_list(fake_session: Any, make_response: Any) -> None:
    fake_session.get.return_value = make_response(200, '{"items": []}')

    assert WaveClient(session=fake_session).search("") == []


def test_search_preserves_server_order(fake_session: Any, make_response: Any) -> None:
    fake_session.get.return_value = make_response(
        200, '{"items": [{"id": "3"}, {"id": "1"}, {"id": "2"}]}'
    )

    items = WaveClient(session=fake_session).search("x")

    assert [item.id for item in items] == ["3", "1", "2"]


def test_search_query_is_percent_encoded(fake_session: Any, make_response: Any) -> None:
    """Reserved characters travel as data, not as URL syntax."""

    fake_session.get.return_value = make_response(200, '{"items": []}')
    _ = WaveClient(session=fake_session).search("rock & roll #1")

    call = fake_session.get.call_args
    prepared = requests.Request("GET", call.args[0], params=call.kwargs["params"]).prepare()
    assert prepared.url == f"{SEARCH_URL}?q=rock+%26+roll+%231"


def test_search_missing_items_is_decode_error(fake_session: Any, make_response: Any) -> None:
    fake_session.get.return_value = make_response(200, '{"error": "nope"}')

    with pytest.raises(DecodeError):
        _ = WaveClient(session=fake_session).search("x")


def test_search_invalid_json_is_decode_error(fake_session: Any, make_response: Any) -> None:
    fake_session.get.return_value = make_response(200, "<html></html>")

    with pytest.raises(DecodeError):
        _ = WaveClient(session=fake_session).search("x")


@pytest.mark.parametrize("status", [404, 500])
def test_search_http_status_skips_parsing(
    fake_session: Any, make_response: Any, mocker: MockerFixture, status: int
) -> None:
    fake_session.get.return_value = make_response(status, SAMPLE_BODY)
    parse_spy = mocker.spy(client_module, "parse_search_response")

    with pytest.raises(HttpStatusError) as excinfo:
        _ = WaveClient(session=fake_session).search("x")

    assert excinfo.value.status_code == status
    parse_spy.assert_not_called()


@pytest.mark.parametrize("status", [404, 500])
def test_thumbnail_http_status(fake_session: Any, make_response: Any, status: int) -> None:
    fake_session.get.return_value = make_response(status, b"")

    with pytest.raises(HttpStatusError) as excinfo:
        _ = WaveClient(session=fake_session).thumbnail(MusicItem(id="xyz"))

    assert excinfo.value.status_code == status


def test_search_transport_error(fake_session: Any) -> None:
    fake_session.get.side_effect = requests.ConnectionError("dns failure")

    with pytest.raises(TransportError):
        _ = WaveClient(session=fake_session).search("x")


def test_thumbnail_transport_error(fake_session: Any) -> None:
    fake_session.get.side_effect = requests.Timeout("slow")

    with pytest.raises(TransportError):
        _ = WaveClient(session=fake_session).thumbnail(MusicItem(id="xyz"))


@pytest.mark.parametrize("item_id", [None, ""], ids=["absent", "empty"])
def test_thumbnail_without_id_makes_no_request(fake_session: Any, item_id: str | None) -> None:
    item = MusicItem(title="Song", id=item_id)

    with pytest.raises(MissingIdError) as excinfo:
        _ = WaveClient(session=fake_session).thumbnail(item)

    assert excinfo.value.item is item
    assert fake_session.get.call_count == 0


def test_thumbnail_without_id_with_injected_transport(mocker: MockerFixture) -> None:
    transport = mocker.Mock()

    with pytest.raises(MissingIdError):
        _ = WaveClient(http_client=transport).thumbnail(MusicItem())

    assert transport.get.call_count == 0


def test_thumbnail_id_is_a_single_path_segment(fake_session: Any, make_response: Any) -> None:
    fake_session.get.return_value = make_response(200, b"")

    with WaveClient(session=fake_session).thumbnail(MusicItem(id="a/b c")):
        pass

    assert fake_session.get.call_args.args[0] == f"{THUMBNAIL_URL}/a%2Fb%20c"


def test_every_failure_is_a_wave_error() -> None:
    for cls in (TransportError, HttpStatusError, DecodeError, MissingIdError):
        assert issubclass(cls, WaveError)


def test_custom_config_reaches_transport(fake_session: Any, make_response: Any) -> None:
    fake_session.get.return_value = make_response(200, '{"items": []}')
    config = Config(
        base_url="https://mirror.example.com/wave/",
        connect_timeout=1,
        read_timeout=2,
        user_agent="custom/9",
    )

    _ = WaveClient(config, session=fake_session).search("x")

    call = fake_session.get.call_args
    assert call.args[0] == "https://mirror.example.com/wave/ytmusicsearch"
    assert call.kwargs["timeout"] == (1.0, 2.0)
    assert call.kwargs["headers"]["User-Agent"] == "custom/9"


def test_client_does_not_close_injected_transport(mocker: MockerFixture) -> None:
    transport = mocker.Mock()

    with WaveClient(http_client=transport):
        pass

    transport.close.assert_not_called()


def test_stream_chunks_and_write_to(make_response: Any) -> None:
    stream = ThumbnailStream(make_response(200, b"abcdefgh"), item_id="x", chunk_size=3)
    sink = io.BytesIO()

    written = stream.write_to(sink)

    assert written == 8
    assert sink.getvalue() == b"abcdefgh"


def test_stream_iteration_yields_chunks(make_response: Any) -> None:
    stream = ThumbnailStream(make_response(200, b"abcdefgh"), item_id="x", chunk_size=3)

    assert list(stream) == [b"abc", b"def", b"gh"]


def test_stream_second_read_is_rejected(make_response: Any) -> None:
    """Re-reading is caller misuse, not a transport failure."""

    stream = ThumbnailStream(make_response(200, b"img"), item_id="xyz", chunk_size=8)

    assert stream.read() == b"img"
    assert stream.consumed

    with pytest.raises(RuntimeError, match="already consumed"):
        _ = stream.read()
    with pytest.raises(RuntimeError):
        _ = stream.write_to(io.BytesIO())


def test_search_oversized_integer_is_decode_error(fake_session: Any, make_response: Any) -> None:
    fake_session.get.return_value = make_response(
        200, '{"items":[{"duration":' + "9" * 5000 + "}]}"
    )

    with pytest.raises(DecodeError):
        _ = WaveClient(session=fake_session).search("x")


def test_stream_save_creates_parents(make_response: Any, tmp_path: Path) -> None:
    target = tmp_path / "covers" / "xyz.jpg"

    with ThumbnailStream(make_response(200, b"img"), item_id="xyz", chunk_size=1024) as stream:
        saved = stream.save(target)

    assert saved == target
    assert target.read_bytes() == b"img"
    assert not (tmp_path / "covers" / "xyz.jpg.part").exists()


def test_stream_read_failure_is_transport_error(mocker: MockerFixture, make_response: Any) -> None:
    response = make_response(200, b"")
    _ = mocker.patch.object(
        response, "iter_content", side_effect=requests.exceptions.ChunkedEncodingError("cut")
    )
    stream = ThumbnailStream(response, item_id="x", chunk_size=8)

    with pytest.raises(TransportError):
        _ = stream.read()


def test_stream_close_runs_callback_once(mocker: MockerFixture, make_response: Any) -> None:
    callback = mocker.Mock()
    stream = ThumbnailStream(make_response(200, b""), item_id="x", chunk_size=8, on_close=callback)

    stream.close()
    stream.close()

    assert stream.closed
    callback.assert_called_once()


def test_one_shot_search_closes_its_client(mocker: MockerFixture) -> None:
    close_spy = mocker.spy(WaveClient, "close")
    _ = mocker.patch.object(WaveClient, "search", return_value=[MusicItem(id="1")])

    assert client_module.search("q") == [MusicItem(id="1")]
    close_spy.assert_called_once()


def test_one_shot_thumbnail_releases_session_on_stream_close(
    mocker: MockerFixture, make_response: Any
) -> None:
    session_cls = mocker.patch("wavemusic.platform.wave.http_client.requests.Session")
    session = session_cls.return_value
    session.get.return_value = make_response(200, b"png")

    stream = client_module.thumbnail(MusicItem(id="xyz"))
    session.close.assert_not_called()

    assert stream.read() == b"png"
    stream.close()
    session.close.assert_called_once()


def test_one_shot_thumbnail_missing_id_releases_session(mocker: MockerFixture) -> None:
    session_cls = mocker.patch("wavemusic.platform.wave.http_client.requests.Session")

    with pytest.raises(MissingIdError):
        _ = client_module.thumbnail(MusicItem())

    session_cls.return_value.get.assert_not_called()
    session_cls.return_value.close.assert_called_once()
