"""
=============================================================================
PARSE ERRORS
=============================================================================

Every way a parse can fail has its own exception class, all rooted at
HTTPParseError. Callers can catch the base class to handle "anything
went wrong" or a specific subclass to react to one failure:

    try:
        request = parser.parse(reader)
    except HeadersTooLargeError:
        send(431)
    except HTTPParseError as e:
        send(e.status_code)

Each error carries the status code a server would answer with, so the
transport layer never has to keep its own mapping table.

    ┌───────────────────────────────────┬──────────────┬───────────────┐
    │ Error                             │ Raised by    │ status_code   │
    ├───────────────────────────────────┼──────────────┼───────────────┤
    │ NoRequestLineError                │ request      │ 400           │
    │ UnrecognizedRequestFormatError    │ request      │ 400           │
    │ MethodNotFoundError               │ request      │ 501           │
    │ NoResponseLineError               │ response     │ 502           │
    │ UnrecognizedResponseFormatError   │ response     │ 502           │
    │ InvalidStatusCodeError            │ response     │ 502           │
    │ InvalidHttpVersionError           │ both         │ 505           │
    │ InvalidContentLengthError         │ both         │ 400           │
    │ HeadersTooLargeError              │ both         │ 431           │
    │ BodyTooLargeError                 │ both         │ 413           │
    │ ReaderError / EndOfStreamError    │ both         │ 400           │
    └───────────────────────────────────┴──────────────┴───────────────┘

The 5xx codes on the response side are what a proxy would return to
its own client when the upstream sends garbage (502 Bad Gateway).

Memory exhaustion is not wrapped: MemoryError propagates untouched.
=============================================================================
"""

from typing import Optional


class HTTPParseError(Exception):
    """
    Raised when an HTTP message cannot be parsed.

    Attributes:
        status_code: HTTP status a server should reply with.
    """

    default_status_code = 400

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        if status_code is None:
            status_code = self.default_status_code
        self.status_code = status_code  # HTTP status to return


# =============================================================================
# REQUEST LINE
# =============================================================================

class NoRequestLineError(HTTPParseError):
    """The header block was empty, so there is no request line."""


class UnrecognizedRequestFormatError(HTTPParseError):
    """The request line is not exactly METHOD SP TARGET SP VERSION."""


class MethodNotFoundError(HTTPParseError):
    default_status_code = 501


# =============================================================================
# STATUS LINE
# =============================================================================

class NoResponseLineError(HTTPParseError):
    default_status_code = 502


class UnrecognizedResponseFormatError(HTTPParseError):
    """The status line is missing its first or second space."""

    default_status_code = 502


class InvalidStatusCodeError(HTTPParseError):
    """Status code is not an integer in [100, 599]."""

    default_status_code = 502


# =============================================================================
# SHARED
# =============================================================================

class InvalidHttpVersionError(HTTPParseError):
    default_status_code = 505


class InvalidContentLengthError(HTTPParseError):
    pass


class HeadersTooLargeError(HTTPParseError):
    default_status_code = 431


class BodyTooLargeError(HTTPParseError):
    default_status_code = 413


class ReaderError(HTTPParseError):
    """The byte source failed while the message was being read."""


class EndOfStreamError(ReaderError):
    """The byte source ran out before the message was complete."""
