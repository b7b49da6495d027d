"""
=============================================================================
httpcodec - HTTP/1.1 MESSAGE PARSING AND SERIALIZATION
=============================================================================

A building block for servers, clients and proxies: it reads exactly one
HTTP/1.1 message from a byte stream and writes responses back as bytes.
It does not open sockets, keep connections alive or route requests;
that is the transport layer's job.

    ┌─────────────┐   bytes    ┌──────────────┐   HTTPRequest   ┌─────────┐
    │  transport  │ ─────────► │ RequestParser│ ──────────────► │ handler │
    │  (sockets)  │            └──────────────┘                 │         │
    │             │   bytes    ┌──────────────┐   HTTPResponse  │         │
    │             │ ◄───────── │  to_bytes()  │ ◄────────────── │         │
    └─────────────┘            └──────────────┘                 └─────────┘

=============================================================================
QUICK START
=============================================================================

    from httpcodec import RequestParser, ResponseBuilder, HTTPStatus

    with conn.makefile("rb") as stream:
        request = RequestParser().parse(stream)

    payload = (ResponseBuilder()
        .status(HTTPStatus.OK)
        .text(f"you asked for {request.target}")
        .to_bytes())
    conn.sendall(payload)

=============================================================================
LIMITS
=============================================================================

    header block   8192 bytes   HeadersTooLargeError
    request body   10 MiB       BodyTooLargeError
    response body  unbounded    (configurable, see CodecConfig)

=============================================================================
"""

__version__ = "1.0.0"

from .config import CodecConfig
from .http import (
    ByteReader,
    Headers,
    HTTPMethod,
    HTTPParseError,
    HTTPRequest,
    HTTPResponse,
    HTTPStatus,
    HTTPVersion,
    RequestParser,
    ResponseBuilder,
    ResponseConfig,
    ResponseParser,
    parse_request,
    parse_response,
)

__all__ = [
    "CodecConfig",
    "ByteReader",
    "Headers",
    "HTTPMethod",
    "HTTPVersion",
    "HTTPStatus",
    "HTTPParseError",
    "HTTPRequest",
    "HTTPResponse",
    "RequestParser",
    "ResponseBuilder",
    "ResponseConfig",
    "ResponseParser",
    "parse_request",
    "parse_response",
    "__version__",
]
