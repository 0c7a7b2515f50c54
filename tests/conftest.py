"""Shared test fixtures: a fake ``requests.Session`` and response builder."""

import io
import json
import os
import sys
import time
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

# Ensure the project root is importable.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from botapi.client import BotClient

TOKEN = "1234567:4TT8bAc8GHUspu3ERYn-KGcvsvGB9u_n4ddy"


def make_response(status_code: int, body: Any = b"", url: str = "https://api.example.test") -> requests.Response:
    """Build a real :class:`requests.Response` whose body is read from memory.

    *body* may be a dict (JSON-encoded), a str, or raw bytes.
    """
    if isinstance(body, (dict, list)):
        body = json.dumps(body).encode("utf-8")
    elif isinstance(body, str):
        body = body.encode("utf-8")
    resp = requests.Response()
    resp.status_code = status_code
    resp.raw = io.BytesIO(body)
    resp.encoding = "utf-8"
    resp.url = url
    return resp


@pytest.fixture()
def session() -> MagicMock:
    """A fake transport; set ``session.request.return_value`` per test."""
    return MagicMock(spec=requests.Session)


@pytest.fixture()
def client(session: MagicMock) -> BotClient:
    return BotClient(TOKEN, session=session, timeout=5)


class SlowRaw:
    """Raw body yielding *chunk* every *delay* seconds, optionally failing after *fail_after* reads."""

    def __init__(self, chunk: bytes, count: int, delay: float = 0.0, fail_after: int | None = None) -> None:
        self._chunk = chunk
        self._remaining = count
        self._delay = delay
        self._fail_after = fail_after
        self.reads = 0
        self.closed = False

    def read(self, amt: int | None = None) -> bytes:
        if self._fail_after is not None and self.reads >= self._fail_after:
            raise requests.exceptions.ChunkedEncodingError("connection broken mid-body")
        self.reads += 1
        time.sleep(self._delay)
        if self._remaining <= 0:
            return b""
        self._remaining -= 1
        return self._chunk

    def close(self) -> None:
        self.closed = True


def track_close(response: requests.Response) -> requests.Response:
    """Record calls to ``response.close`` while keeping its behaviour."""
    response.close = MagicMock(side_effect=response.close)  # type: ignore[method-assign]
    return response
