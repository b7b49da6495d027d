"""
=============================================================================
HTTP MESSAGE CODEC
=============================================================================

Turns bytes from a stream into HTTP messages, and response objects back
into bytes.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ protocol.py       HTTPMethod, HTTPVersion                           │
    │ status_codes.py   HTTPStatus + reason phrases                       │
    │ headers.py        Headers (case-insensitive, last write wins)       │
    │ stream.py         ByteReader: read_byte() / read_exact(n)           │
    │ message.py        header block, header lines, Content-Length body   │
    │ request.py        HTTPRequest, RequestParser                        │
    │ response.py       HTTPResponse, ResponseBuilder, ResponseParser     │
    │ errors.py         HTTPParseError and one subclass per failure       │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
HTTP MESSAGE FORMAT (RFC 7230)
=============================================================================

    REQUEST:                          RESPONSE:
    ─────────                         ──────────
    GET /path HTTP/1.1\r\n            HTTP/1.1 200 OK\r\n
    Header: Value\r\n                 Header: Value\r\n
    \r\n                              \r\n
    [body]                            [body]

Key points:
- Lines end with CRLF (\r\n), not just \n
- Headers and body are separated by an empty line (\r\n\r\n)
- Header names are case-insensitive ("Content-Type" = "content-type")
- Body length comes from Content-Length, nothing else
=============================================================================
"""

from .errors import (
    BodyTooLargeError,
    EndOfStreamError,
    HeadersTooLargeError,
    HTTPParseError,
    InvalidContentLengthError,
    InvalidHttpVersionError,
    InvalidStatusCodeError,
    MethodNotFoundError,
    NoRequestLineError,
    NoResponseLineError,
    ReaderError,
    UnrecognizedRequestFormatError,
    UnrecognizedResponseFormatError,
)
from .headers import Headers
from .protocol import HTTPMethod, HTTPVersion
from .request import HTTPRequest, RequestParser, parse_request
from .response import (
    HTTPResponse,
    ResponseBuilder,
    ResponseConfig,
    ResponseParser,
    parse_response,
)
from .status_codes import HTTPStatus
from .stream import ByteReader

__all__ = [
    # Vocabulary
    "HTTPMethod",
    "HTTPVersion",
    "HTTPStatus",
    "Headers",
    "ByteReader",

    # Requests
    "HTTPRequest",
    "RequestParser",
    "parse_request",

    # Responses
    "HTTPResponse",
    "ResponseBuilder",
    "ResponseConfig",
    "ResponseParser",
    "parse_response",

    # Errors
    "HTTPParseError",
    "NoRequestLineError",
    "MethodNotFoundError",
    "UnrecognizedRequestFormatError",
    "NoResponseLineError",
    "UnrecognizedResponseFormatError",
    "InvalidStatusCodeError",
    "InvalidHttpVersionError",
    "InvalidContentLengthError",
    "HeadersTooLargeError",
    "BodyTooLargeError",
    "ReaderError",
    "EndOfStreamError",
]
