"""Shared fixtures for Wave client tests: fake sessions and canned responses."""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import Any

import pytest
import requests
from pytest_mock import MockerFixture

ResponseFactory = Callable[..., requests.Response]


def build_response(
    status: int = 200,
    body: bytes | str = b"",
    *,
    headers: dict[str, str] | None = None,
    url: str | None = None,
) -> requests.Response:
    """Create a real ``requests.Response`` backed by an in-memory body."""

    raw = body.encode("utf-8") if isinstance(body, str) else body
    response = requests.Response()
    response.status_code = status
    response.raw = io.BytesIO(raw)
    response.url = url  # pyright: ignore[reportAttributeAccessIssue]
    if headers:
        response.headers.update(headers)
    return response


@pytest.fixture
def make_response() -> ResponseFactory:
    return build_response


@pytest.fixture
def fake_session(mocker: MockerFixture) -> Any:
    """A ``requests.Session`` stand-in whose ``get`` calls can be asserted."""

    return mocker.Mock(spec=requests.Session)
