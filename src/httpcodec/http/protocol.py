"""
=============================================================================
HTTP VOCABULARY: METHODS AND VERSIONS
=============================================================================

The two closed sets the parsers and the builder speak in.

    ┌──────────────────────────────────────────────────────────────────┐
    │  GET /hello HTTP/1.1                                             │
    │  ─┬─        ────┬───                                             │
    │   │             │                                                │
    │ HTTPMethod   HTTPVersion                                         │
    └──────────────────────────────────────────────────────────────────┘

Matching is exact and case-sensitive: "get" is not a method and
"http/1.1" is not a version. The wire only ever carries the uppercase
tokens, and being lenient here would let two parsers disagree about
what a message means.

Only HTTP/1.1 is accepted anywhere in the codec. HTTP/1.0 and HTTP/2.0
are named so error messages and callers can talk about them, but
from_token() refuses them.
=============================================================================
"""

from enum import Enum
from typing import Optional


class HTTPMethod(str, Enum):
    """Request methods understood by the request parser."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def from_token(cls, token: str) -> Optional["HTTPMethod"]:
        """
        Look up a method by its exact wire token.

        Returns None for anything that is not one of the seven methods,
        including lowercase spellings and CONNECT/TRACE.
        """
        return _METHODS_BY_TOKEN.get(token)

    def __str__(self) -> str:
        return self.value


class HTTPVersion(str, Enum):
    """Protocol versions. Only HTTP_1_1 is ever accepted."""

    HTTP_1_0 = "HTTP/1.0"
    HTTP_1_1 = "HTTP/1.1"
    HTTP_2_0 = "HTTP/2.0"

    @classmethod
    def from_token(cls, token: str) -> Optional["HTTPVersion"]:
        # Recognising HTTP/1.0 here would make it parseable; keep it out.
        if token == cls.HTTP_1_1.value:
            return cls.HTTP_1_1
        return None

    @property
    def is_supported(self) -> bool:
        return self is HTTPVersion.HTTP_1_1

    def __str__(self) -> str:
        return self.value


_METHODS_BY_TOKEN = {method.value: method for method in HTTPMethod}

SUPPORTED_VERSION = HTTPVersion.HTTP_1_1
