"""
=============================================================================
HTTP RESPONSE: BUILDER, SERIALIZER AND PARSER
=============================================================================

One HTTPResponse type serves both directions:

    SERVER SIDE                               CLIENT SIDE
    ───────────                               ───────────
    HTTPResponse.create()                     ResponseParser().parse(stream)
        .set_status_code(201)                         │
        .set_header("Location", "/u/1")               ▼
        .set_body(b"...")                        HTTPResponse
        .to_bytes()  ───── wire bytes ─────►

=============================================================================
HTTP RESPONSE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │  HTTP/1.1 201 Created\r\n                 ← STATUS LINE             │
    │  ────┬─── ─┬─ ───┬───                                               │
    │   Version Code  Reason phrase (may contain spaces: "Not Found")     │
    │                                                                      │
    │  content-type: application/json\r\n       ← HEADERS                  │
    │  content-length: 6\r\n                                               │
    │  \r\n                                     ← BLANK LINE               │
    │  Hellow                                   ← BODY, no terminator      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
THE CONTENT-LENGTH INVARIANT
=============================================================================

set_body() ALWAYS rewrites content-length to the new body's byte count:

    response.set_body(b"Hellow")     content-length: 6
    response.set_body(b"")           content-length: 0

A later set_header("content-length", ...) overrides it without any
check. That is the caller's call to make (e.g. answering HEAD with the
length of a body that is not sent).

=============================================================================
PARSING IS STRICTER THAN BUILDING
=============================================================================

The builder accepts any status code (set_status_code(42) is fine); the
parser rejects anything outside 100-599. Validation happens where bytes
come IN, not where we produce them.

Response bodies have no size cap unless CodecConfig.max_response_body_size
is set, unlike request bodies (10 MiB). A client picks the server it
talks to; a server does not pick its clients.
=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, Optional, Union
import io
import json
import logging

from ..config import CodecConfig
from .errors import (
    HTTPParseError,
    InvalidHttpVersionError,
    InvalidStatusCodeError,
    NoResponseLineError,
    UnrecognizedResponseFormatError,
)
from .headers import Headers
from .message import (
    CRLF,
    encode_header_line,
    parse_content_length,
    parse_headers,
    read_body,
    read_header_block,
    split_lines,
)
from .protocol import SUPPORTED_VERSION, HTTPVersion
from .status_codes import HTTPStatus, is_valid_status, reason_phrase
from .stream import ByteReader, as_reader


logger = logging.getLogger(__name__)

# Marks a JSON body cache that has not been filled yet (null is a valid body)
_UNPARSED = object()


@dataclass(frozen=True)
class ResponseConfig:
    """
    Initial state for a response under construction.

    Defaults give "HTTP/1.1 200 OK". Only HTTP/1.1 is accepted as a version.
    """

    version: HTTPVersion = HTTPVersion.HTTP_1_1
    status_code: int = 200
    status_text: str = "OK"


@dataclass
class HTTPResponse:
    """
    An HTTP response, either parsed from the wire or under construction.

    Mutators return self, so calls can be chained:

        payload = (HTTPResponse.create()
            .set_status_code(404)
            .set_status_text("Not Found")
            .set_body("nope")
            .to_bytes())
    """

    version: HTTPVersion = HTTPVersion.HTTP_1_1
    status_code: int = 200
    status_text: str = "OK"
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""

    _body_json: Any = field(default=_UNPARSED, init=False, repr=False, compare=False)

    @classmethod
    def create(cls, config: Optional[ResponseConfig] = None) -> "HTTPResponse":
        """
        Start a new response with empty headers and an empty body.

        Raises:
            ValueError: config.version is not HTTP/1.1.
        """
        config = config or ResponseConfig()
        if config.version is not SUPPORTED_VERSION:
            raise ValueError(f"Unsupported HTTP version: {config.version}")
        return cls(
            version=config.version,
            status_code=config.status_code,
            status_text=config.status_text,
        )

    # =========================================================================
    # MUTATORS
    # =========================================================================

    def set_status_code(self, code: int) -> "HTTPResponse":
        """Store the status code as given. No range check here."""
        self.status_code = int(code)
        return self

    def set_status_text(self, text: str) -> "HTTPResponse":
        self.status_text = text
        return self

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        """Set a header (case-insensitive, replaces an existing one)."""
        self.headers.set(name, value)
        return self

    def set_body(self, body: Union[str, bytes]) -> "HTTPResponse":
        """
        Replace the body and recompute content-length.

        Strings are encoded as UTF-8; the header counts bytes, not
        characters.
        """
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.body = bytes(body)
        self._body_json = _UNPARSED
        return self.set_header("content-length", str(len(self.body)))

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(name, default)

    @property
    def status_line(self) -> str:
        """HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE, e.g. "HTTP/1.1 200 OK"."""
        return f"{self.version.value} {self.status_code} {self.status_text}"

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

    @property
    def json(self) -> Any:
        """Body decoded as JSON (cached). Raises HTTPParseError on bad JSON."""
        if not self.body:
            return None
        if self._body_json is _UNPARSED:
            try:
                self._body_json = json.loads(self.body.decode("utf-8"))
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise HTTPParseError(f"Invalid JSON body: {e}") from e
        return self._body_json

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_bytes(self) -> bytes:
        """
        Render the response as wire bytes.

            HTTP/1.1 201 Created\r\n
            content-type: application/json\r\n     ← one line per header,
            content-length: 6\r\n                    in Headers order
            \r\n
            Hellow                                 ← raw body, no CRLF after

        Nothing is added or changed: no Date, no Server, no computed
        Content-Length. The response itself is not modified.
        """
        lines = [self.status_line]
        for name, value in self.headers.items():
            lines.append(f"{name}: {value}")

        # Close the last line, then the blank line that ends the header block
        head = CRLF.join(encode_header_line(line) for line in lines) + CRLF + CRLF
        return head + self.body

    def __bytes__(self) -> bytes:
        return self.to_bytes()


class ResponseBuilder:
    """
    Fluent builder on top of HTTPResponse.

        payload = (ResponseBuilder()
            .status(HTTPStatus.CREATED)
            .header("Location", "/users/123")
            .json({"id": 123})
            .to_bytes())

    status() fills in the registered reason phrase when none is given,
    which HTTPResponse.set_status_code() deliberately does not do.
    """

    def __init__(self, config: Optional[ResponseConfig] = None):
        self._response = HTTPResponse.create(config)

    def status(self, code: Union[int, HTTPStatus], text: Optional[str] = None) -> "ResponseBuilder":
        """
        Set status code and reason phrase.

        Args:
            code: int or HTTPStatus.
            text: Reason phrase; looked up from the code when omitted
                  (empty for codes that are not registered).
        """
        self._response.set_status_code(code)
        if text is None:
            text = reason_phrase(code)
        self._response.set_status_text(text)
        return self

    def header(self, name: str, value: str) -> "ResponseBuilder":
        self._response.set_header(name, value)
        return self

    def headers(self, headers: Dict[str, str]) -> "ResponseBuilder":
        for name, value in headers.items():
            self._response.set_header(name, value)
        return self

    def content_type(self, content_type: str) -> "ResponseBuilder":
        return self.header("content-type", content_type)

    def body(self, body: Union[str, bytes]) -> "ResponseBuilder":
        self._response.set_body(body)
        return self

    def text(self, text: str, content_type: str = "text/plain; charset=utf-8") -> "ResponseBuilder":
        return self.content_type(content_type).body(text)

    def json(self, data: Any, pretty: bool = False) -> "ResponseBuilder":
        """Serialize ``data`` as the body with a JSON content type."""
        indent = 2 if pretty else None
        encoded = json.dumps(data, indent=indent, ensure_ascii=False)
        return self.content_type("application/json; charset=utf-8").body(encoded)

    def build(self) -> HTTPResponse:
        """
        Return a snapshot of the response.

        The builder keeps its own state, so further builder calls do not
        leak into responses that were already built.
        """
        r = self._response
        return HTTPResponse(
            version=r.version,
            status_code=r.status_code,
            status_text=r.status_text,
            headers=r.headers.copy(),
            body=r.body,
        )

    def to_bytes(self) -> bytes:
        return self._response.to_bytes()


class ResponseParser:
    """
    Parses HTTP/1.1 responses from a byte source (client side).

    Same header-block and body framing as RequestParser; only the
    status line differs.
    """

    def __init__(self, config: Optional[CodecConfig] = None):
        self.config = config or CodecConfig()
        self.config.validate()

    def parse(self, source: Union[ByteReader, BinaryIO]) -> HTTPResponse:
        """
        Read exactly one response from ``source``.

        Raises:
            HTTPParseError: One of its subclasses.
        """
        reader = as_reader(source)
        try:
            response = self._parse(reader)
        except HTTPParseError as e:
            logger.debug(f"Rejected response: {type(e).__name__}: {e}")
            raise

        logger.debug(
            f"Parsed response {response.status_code} {response.status_text!r} "
            f"({len(response.headers)} headers, {len(response.body)} body bytes)"
        )
        return response

    def _parse(self, reader: ByteReader) -> HTTPResponse:
        block = read_header_block(reader, self.config.max_header_size)
        lines = split_lines(block)
        if not lines:
            raise NoResponseLineError("Missing status line")

        version, status_code, status_text = self._parse_status_line(lines[0])
        headers = parse_headers(lines[1:])

        content_length = parse_content_length(headers)
        body = read_body(reader, content_length, self.config.max_response_body_size)

        return HTTPResponse(
            version=version,
            status_code=status_code,
            status_text=status_text,
            headers=headers,
            body=body,
        )

    def _parse_status_line(self, line: str) -> tuple[HTTPVersion, int, str]:
        """
        Split "VERSION SP STATUS SP REASON" at the first two spaces.

            "HTTP/1.1 404 Not Found"
                     ^   ^
                     │   └── second space: reason is everything after,
                     │       spaces included
                     └────── first space: end of version
        """
        version_token, sep, rest = line.partition(" ")
        if not sep:
            raise UnrecognizedResponseFormatError(f"Invalid status line: {line!r}")

        status_token, sep, status_text = rest.partition(" ")
        if not sep:
            raise UnrecognizedResponseFormatError(f"Invalid status line: {line!r}")

        version = HTTPVersion.from_token(version_token)
        if version is None:
            raise InvalidHttpVersionError(f"Unsupported HTTP version: {version_token!r}")

        if not status_token.isascii() or not status_token.isdigit():
            raise InvalidStatusCodeError(f"Invalid status code: {status_token!r}")
        status_code = int(status_token)
        if not is_valid_status(status_code):
            raise InvalidStatusCodeError(f"Status code out of range: {status_code}")

        return version, status_code, status_text


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def parse_response(
    data: Union[bytes, ByteReader, BinaryIO],
    config: Optional[CodecConfig] = None,
) -> HTTPResponse:
    """Parse one response from raw bytes or a readable stream."""
    if isinstance(data, (bytes, bytearray)):
        data = io.BytesIO(data)
    return ResponseParser(config).parse(data)

