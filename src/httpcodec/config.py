"""
=============================================================================
CODEC CONFIGURATION
=============================================================================

Limits the parsers enforce, plus the log level used by the command line.

=============================================================================
WHY LIMITS?
=============================================================================

A parser reading from the network is reading attacker-controlled input.
Without a cap, a peer could send an endless header block or announce a
50 GB body and make us allocate until the process dies.

    ┌──────────────────────────┬───────────────┬──────────────────────┐
    │ Limit                    │ Default       │ Exceeded             │
    ├──────────────────────────┼───────────────┼──────────────────────┤
    │ max_header_size          │ 8192 bytes    │ HeadersTooLargeError │
    │ max_request_body_size    │ 10 MiB        │ BodyTooLargeError    │
    │ max_response_body_size   │ None (no cap) │ BodyTooLargeError    │
    └──────────────────────────┴───────────────┴──────────────────────┘

Response bodies are unbounded by default: a client is usually talking to
a server it chose to trust. Set max_response_body_size when that is not
the case (e.g. a proxy talking to arbitrary upstreams).

=============================================================================
USAGE
=============================================================================

    # Defaults
    parser = RequestParser()

    # Tighter limits for an embedded device
    parser = RequestParser(CodecConfig(max_request_body_size=64 * 1024))

    # From the environment
    HTTPCODEC_MAX_HEADER_SIZE=16384 python -m httpcodec request dump.http

=============================================================================
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_MAX_HEADER_SIZE = 8192
DEFAULT_MAX_REQUEST_BODY_SIZE = 10 * 1024 * 1024  # 10 MiB

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class CodecConfig:
    """
    Parser limits and logging settings.

    Frozen so one instance can be shared by parsers on many threads.
    """

    # ─────────────────────────────────────────────────────────────────────
    # HEADER BLOCK
    # ─────────────────────────────────────────────────────────────────────

    max_header_size: int = DEFAULT_MAX_HEADER_SIZE
    """
    Maximum size of the header block in bytes, terminator included.
    Reaching it without seeing CRLFCRLF fails the parse.
    """

    # ─────────────────────────────────────────────────────────────────────
    # BODIES
    # ─────────────────────────────────────────────────────────────────────

    max_request_body_size: int = DEFAULT_MAX_REQUEST_BODY_SIZE
    """Largest Content-Length accepted on a request."""

    max_response_body_size: Optional[int] = None
    """Largest Content-Length accepted on a response. None = no cap."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "CodecConfig":
        """
        Create configuration from environment variables.

        HTTPCODEC_MAX_HEADER_SIZE     Header block cap (default: 8192)
        HTTPCODEC_MAX_REQUEST_BODY    Request body cap (default: 10485760)
        HTTPCODEC_MAX_RESPONSE_BODY   Response body cap (default: unset)
        HTTPCODEC_LOG_LEVEL           Logging level (default: INFO)
        """
        max_response = os.getenv("HTTPCODEC_MAX_RESPONSE_BODY")
        return cls(
            max_header_size=int(os.getenv(
                "HTTPCODEC_MAX_HEADER_SIZE", str(DEFAULT_MAX_HEADER_SIZE)
            )),
            max_request_body_size=int(os.getenv(
                "HTTPCODEC_MAX_REQUEST_BODY", str(DEFAULT_MAX_REQUEST_BODY_SIZE)
            )),
            max_response_body_size=int(max_response) if max_response else None,
            log_level=os.getenv("HTTPCODEC_LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> None:
        """Raise ValueError if any limit or the log level is unusable."""
        # Must at least fit the 4-byte terminator
        if self.max_header_size < 4:
            raise ValueError(f"max_header_size must be >= 4, got {self.max_header_size}")

        if self.max_request_body_size < 0:
            raise ValueError("max_request_body_size must be >= 0")

        if self.max_response_body_size is not None and self.max_response_body_size < 0:
            raise ValueError("max_response_body_size must be >= 0 or None")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}")

    @property
    def logging_level(self) -> int:
        """The log_level as a logging module constant."""
        return getattr(logging, self.log_level.upper(), logging.INFO)
