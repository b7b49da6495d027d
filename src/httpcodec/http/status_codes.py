"""
=============================================================================
HTTP STATUS CODES (RFC 9110 §15)
=============================================================================

Status codes are three-digit integers grouped by their first digit:

    ┌────────┬─────────────────────────────────────────────────────────┐
    │  1xx   │ INFORMATIONAL   100 Continue, 101 Switching Protocols  │
    │  2xx   │ SUCCESS         200 OK, 201 Created, 204 No Content    │
    │  3xx   │ REDIRECTION     301 Moved Permanently, 304 Not Modified│
    │  4xx   │ CLIENT ERROR    400 Bad Request, 404 Not Found         │
    │  5xx   │ SERVER ERROR    500 Internal Server Error, 502 ...     │
    └────────┴─────────────────────────────────────────────────────────┘

Anything outside 100-599 is not a status code. The response parser
rejects it with InvalidStatusCodeError; the builder stores whatever it
is given and leaves validation to the peer.

Because HTTPStatus is an IntEnum, members compare equal to plain ints:

    >>> HTTPStatus.CREATED == 201
    True
    >>> HTTPStatus.CREATED.phrase
    'Created'
=============================================================================
"""

from enum import IntEnum


MIN_STATUS_CODE = 100
MAX_STATUS_CODE = 599


class HTTPStatus(IntEnum):
    """Registered HTTP status codes with their reason phrases."""

    # 1xx
    CONTINUE = 100
    SWITCHING_PROTOCOLS = 101
    PROCESSING = 102
    EARLY_HINTS = 103

    # 2xx
    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NON_AUTHORITATIVE_INFORMATION = 203
    NO_CONTENT = 204
    RESET_CONTENT = 205
    PARTIAL_CONTENT = 206

    # 3xx
    MULTIPLE_CHOICES = 300
    MOVED_PERMANENTLY = 301
    FOUND = 302
    SEE_OTHER = 303
    NOT_MODIFIED = 304
    TEMPORARY_REDIRECT = 307
    PERMANENT_REDIRECT = 308

    # 4xx
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    PAYMENT_REQUIRED = 402
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    NOT_ACCEPTABLE = 406
    REQUEST_TIMEOUT = 408
    CONFLICT = 409
    GONE = 410
    LENGTH_REQUIRED = 411
    PRECONDITION_FAILED = 412
    PAYLOAD_TOO_LARGE = 413
    URI_TOO_LONG = 414
    UNSUPPORTED_MEDIA_TYPE = 415
    RANGE_NOT_SATISFIABLE = 416
    EXPECTATION_FAILED = 417
    IM_A_TEAPOT = 418
    UNPROCESSABLE_ENTITY = 422
    TOO_MANY_REQUESTS = 429
    REQUEST_HEADER_FIELDS_TOO_LARGE = 431

    # 5xx
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504
    HTTP_VERSION_NOT_SUPPORTED = 505

    @property
    def phrase(self) -> str:
        """Reason phrase, e.g. "Not Found" for 404."""
        return _PHRASES[self]

    @property
    def is_success(self) -> bool:
        return 200 <= self < 300

    @property
    def is_error(self) -> bool:
        return self >= 400


# Phrases that don't fall out of the member name by title-casing.
_SPECIAL_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NON_AUTHORITATIVE_INFORMATION: "Non-Authoritative Information",
    HTTPStatus.URI_TOO_LONG: "URI Too Long",
    HTTPStatus.IM_A_TEAPOT: "I'm a teapot",
    HTTPStatus.HTTP_VERSION_NOT_SUPPORTED: "HTTP Version Not Supported",
}

_PHRASES = {
    status: _SPECIAL_PHRASES.get(status, status.name.replace("_", " ").title())
    for status in HTTPStatus
}


def is_valid_status(code: int) -> bool:
    """True if ``code`` is inside the 100-599 status code range."""
    return MIN_STATUS_CODE <= code <= MAX_STATUS_CODE


def reason_phrase(code: int, default: str = "") -> str:
    """
    Look up the reason phrase for any integer status code.

    Returns ``default`` for codes that are not registered (e.g. 299).
    """
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return default
