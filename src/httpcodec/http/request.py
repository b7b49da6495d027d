"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Reads one HTTP/1.1 request from a byte source into an HTTPRequest.

=============================================================================
HTTP REQUEST ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │  POST /users?page=1 HTTP/1.1\r\n          ← REQUEST LINE            │
    │  ─┬── ──────┬────── ────┬───                                        │
    │   │         │           │                                            │
    │ Method    Target      Version                                        │
    │                                                                      │
    │  Host: localhost:3668\r\n                 ← HEADERS                  │
    │  Content-Type: text/plain\r\n                                        │
    │  Content-Length: 9\r\n                                               │
    │  \r\n                                     ← END OF HEADER BLOCK      │
    │                                                                      │
    │  Hello bro                                ← BODY (9 bytes)           │
    └─────────────────────────────────────────────────────────────────────┘

The request line must be exactly three tokens separated by single
spaces. The target is kept verbatim: no URL decoding, no path
normalization, no query parsing. Whatever routes the request decides
what the target means.

=============================================================================
WHAT GETS REJECTED
=============================================================================

    ""                               → NoRequestLineError
    "GET /"                          → UnrecognizedRequestFormatError
    "GET / HTTP/1.1 extra"           → UnrecognizedRequestFormatError
    "GET  / HTTP/1.1" (two spaces)   → UnrecognizedRequestFormatError
    "get / HTTP/1.1"                 → MethodNotFoundError
    "GET / HTTP/1.0"                 → InvalidHttpVersionError
    "Content-Length: ten"            → InvalidContentLengthError
    "Content-Length: 20000000"       → BodyTooLargeError (over 10 MiB)
    8192 bytes, no blank line        → HeadersTooLargeError

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, BinaryIO, Optional, Union
import io
import json
import logging

from ..config import CodecConfig
from .errors import (
    HTTPParseError,
    InvalidHttpVersionError,
    MethodNotFoundError,
    NoRequestLineError,
    UnrecognizedRequestFormatError,
)
from .headers import Headers
from .message import (
    parse_content_length,
    parse_headers,
    read_body,
    read_header_block,
    split_lines,
)
from .protocol import HTTPMethod, HTTPVersion
from .stream import ByteReader, as_reader


logger = logging.getLogger(__name__)

# Marks a JSON body cache that has not been filled yet (null is a valid body)
_UNPARSED = object()


@dataclass
class HTTPRequest:
    """
    A parsed HTTP request.

    Attributes:
        method:  HTTPMethod (GET, POST, ...)
        target:  Request target exactly as sent ("/users?page=1")
        version: Always HTTPVersion.HTTP_1_1 for parsed requests
        headers: Case-insensitive Headers, names stored lowercase
        body:    Exactly Content-Length bytes, or b"" without the header
    """

    method: HTTPMethod
    target: str
    version: HTTPVersion = HTTPVersion.HTTP_1_1
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""

    _body_json: Any = field(default=_UNPARSED, init=False, repr=False, compare=False)

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a header value (case-insensitive lookup).

        Example:
            request.get_header("Content-Type")   # same as "content-type"
        """
        return self.headers.get(name, default)

    @property
    def content_length(self) -> int:
        """Body length in bytes (0 when there is no body)."""
        return len(self.body)

    @property
    def content_type(self) -> Optional[str]:
        """Content-Type without parameters: "text/plain; charset=utf-8" → "text/plain"."""
        ct = self.headers.get("content-type", "")
        return ct.split(";")[0].strip().lower() or None

    @property
    def host(self) -> str:
        return self.headers.get("host", "")

    @property
    def user_agent(self) -> str:
        return self.headers.get("user-agent", "")

    @property
    def json(self) -> Any:
        """
        The body decoded as JSON, parsed once and cached.

        Raises:
            HTTPParseError: If the body is not valid UTF-8 JSON.
        """
        if not self.body:
            return None
        if self._body_json is _UNPARSED:
            try:
                self._body_json = json.loads(self.body.decode("utf-8"))
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise HTTPParseError(f"Invalid JSON body: {e}") from e
        return self._body_json


class RequestParser:
    """
    Parses HTTP/1.1 requests from a byte source.

    A parser holds only its (frozen) configuration, so one instance can be
    shared between threads; every parse() keeps its state in locals.

        parser = RequestParser()
        with sock.makefile("rb") as stream:
            request = parser.parse(stream)
    """

    def __init__(self, config: Optional[CodecConfig] = None):
        self.config = config or CodecConfig()
        self.config.validate()

    def parse(self, source: Union[ByteReader, BinaryIO]) -> HTTPRequest:
        """
        Read exactly one request from ``source``.

        The source is left positioned right after the body, so the
        caller can go on reading whatever follows.

        Args:
            source: A ByteReader or any binary readable.

        Returns:
            The parsed HTTPRequest.

        Raises:
            HTTPParseError: One of its subclasses, see module docstring.
        """
        reader = as_reader(source)
        try:
            request = self._parse(reader)
        except HTTPParseError as e:
            logger.debug(f"Rejected request: {type(e).__name__}: {e}")
            raise

        logger.debug(
            f"Parsed request {request.method} {request.target} "
            f"({len(request.headers)} headers, {len(request.body)} body bytes)"
        )
        return request

    def _parse(self, reader: ByteReader) -> HTTPRequest:
        # =====================================================================
        # PHASE 1: Accumulate the header block
        # =====================================================================
        block = read_header_block(reader, self.config.max_header_size)
        lines = split_lines(block)
        if not lines:
            raise NoRequestLineError("Missing request line")

        # =====================================================================
        # PHASE 2: Request line, then headers
        # =====================================================================
        method, target, version = self._parse_request_line(lines[0])
        headers = parse_headers(lines[1:])

        # =====================================================================
        # PHASE 3: Body, framed by Content-Length only
        # =====================================================================
        content_length = parse_content_length(headers)
        body = read_body(reader, content_length, self.config.max_request_body_size)

        return HTTPRequest(
            method=method,
            target=target,
            version=version,
            headers=headers,
            body=body,
        )

    def _parse_request_line(self, line: str) -> tuple[HTTPMethod, str, HTTPVersion]:
        """
        Split "METHOD SP TARGET SP VERSION" into its three parts.

        Splitting on a single space keeps empty tokens, so doubled spaces
        show up as a wrong token count instead of being silently merged.
        """
        tokens = line.split(" ")
        if len(tokens) != 3 or not all(tokens):
            raise UnrecognizedRequestFormatError(f"Invalid request line: {line!r}")

        method_token, target, version_token = tokens

        method = HTTPMethod.from_token(method_token)
        if method is None:
            raise MethodNotFoundError(f"Unknown method: {method_token!r}")

        version = HTTPVersion.from_token(version_token)
        if version is None:
            raise InvalidHttpVersionError(f"Unsupported HTTP version: {version_token!r}")

        return method, target, version


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

def parse_request(
    data: Union[bytes, ByteReader, BinaryIO],
    config: Optional[CodecConfig] = None,
) -> HTTPRequest:
    """
    Parse one request from raw bytes or a readable stream.

    Use RequestParser directly to reuse one configuration across many
    requests.
    """
    if isinstance(data, (bytes, bytearray)):
        data = io.BytesIO(data)
    return RequestParser(config).parse(data)
