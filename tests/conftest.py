"""
pytest configuration and fixtures.
"""

import io
from typing import Optional

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpcodec.http import ByteReader


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request without a body."""
    return (
        b"GET /hello HTTP/1.1\r\n"
        b"Host: localhost:3668\r\n"
        b"User-Agent: curl/7.81.0\r\n"
        b"Accept: */*\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample HTTP POST request with a 9-byte body."""
    return (
        b"POST / HTTP/1.1\r\n"
        b"content-length: 9\r\n"
        b"accept-encoding: gzip, deflate, br\r\n"
        b"Accept: */*\r\n"
        b"User-Agent: Thunder Client (https://www.thunderclient.com)\r\n"
        b"Content-Type: text/plain\r\n"
        b"Host: localhost:3668\r\n"
        b"Connection: close\r\n"
        b"\r\n"
        b"Hello bro"
    )


@pytest.fixture
def sample_response() -> bytes:
    """Sample HTTP response with a JSON body."""
    body = b'{"message": "Hello World"}'
    return (
        b"HTTP/1.1 200 OK\r\n"
        b"Content-Type: application/json\r\n"
        + (b"Content-Length: %d\r\n" % len(body))
        + b"Server: nginx/1.18.0\r\n"
        b"Connection: keep-alive\r\n"
        b"Cache-Control: no-cache\r\n"
        b"Date: Wed, 04 Jun 2025 10:30:00 GMT\r\n"
        b"\r\n"
    ) + body


@pytest.fixture
def reader_for():
    """Factory turning raw bytes into a ByteReader."""
    def make(data: bytes) -> ByteReader:
        return ByteReader(io.BytesIO(data))
    return make


class TrickleStream:
    """Binary stream that hands out at most ``chunk`` bytes per read(), like a socket."""

    def __init__(self, data: bytes, chunk: int = 3):
        self._data = data
        self._pos = 0
        self._chunk = chunk

    def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = len(self._data)
        size = min(size, self._chunk)
        out = self._data[self._pos:self._pos + size]
        self._pos += len(out)
        return out


class FailingStream:
    """Binary stream whose read() raises once its data runs out."""

    def __init__(self, data: bytes = b"", error: Optional[Exception] = None):
        self._stream = io.BytesIO(data)
        self._error = error or ConnectionResetError("connection reset by peer")

    def read(self, size: int = -1) -> bytes:
        chunk = self._stream.read(size)
        if not chunk:
            raise self._error
        return chunk


@pytest.fixture
def trickle_stream():
    return TrickleStream


@pytest.fixture
def failing_stream():
    return FailingStream
