"""
=============================================================================
MESSAGE FRAMING SHARED BY BOTH PARSERS
=============================================================================

Requests and responses only differ in their first line. Everything
around it is identical and lives here:

    ┌───────────────────────────────────────────────────────────────────┐
    │  PHASE 1: ACCUMULATE HEADER BLOCK          read_header_block()    │
    │     read one byte at a time until CRLFCRLF or the size cap        │
    │                                                                    │
    │  PHASE 2: SPLIT + PARSE HEADERS    split_lines(), parse_headers() │
    │     first line handed back to the caller, rest → Headers          │
    │                                                                    │
    │  PHASE 3: READ BODY                                  read_body()  │
    │     Content-Length present? read exactly that many bytes          │
    └───────────────────────────────────────────────────────────────────┘

=============================================================================
WHY ONE BYTE AT A TIME?
=============================================================================

The header block has no length prefix. If we read in big chunks we
would pull part of the body (or the next message) into our buffer and
then have to hand the leftovers back to the caller. Reading byte by
byte means the stream is positioned exactly at the first body byte
when the terminator is seen, so the body read is a plain read_exact().

Wrap sockets in a buffered file (sock.makefile("rb")) so single-byte
reads are served from memory, not one syscall each.
=============================================================================
"""

import logging
import sys
from typing import Optional

from .errors import (
    BodyTooLargeError,
    EndOfStreamError,
    HeadersTooLargeError,
    InvalidContentLengthError,
)
from .headers import Headers
from .stream import ByteReader


logger = logging.getLogger(__name__)

CRLF = b"\r\n"
HEADER_TERMINATOR = b"\r\n\r\n"

# Header bytes are decoded as Latin-1: one byte → one character, never fails.
HEADER_ENCODING = "iso-8859-1"

# Optional whitespace around header names and values (RFC 7230 OWS).
OWS = " \t"

# Longest Content-Length that still fits a Py_ssize_t read size.
_MAX_LENGTH_DIGITS = len(str(sys.maxsize))


def read_header_block(reader: ByteReader, max_size: int) -> bytes:
    """
    Read up to and including the CRLFCRLF that ends the header block.

    Args:
        reader: Byte source positioned at the start of a message.
        max_size: Hard cap on the block size, terminator included.

    Returns:
        The header block WITHOUT the trailing CRLFCRLF.

    Raises:
        HeadersTooLargeError: max_size bytes read and no terminator yet.
        EndOfStreamError: The stream ended before the terminator.
    """
    buffer = bytearray()

    while len(buffer) < max_size:
        try:
            buffer.append(reader.read_byte())
        except EndOfStreamError:
            raise EndOfStreamError(
                f"Stream ended after {len(buffer)} bytes, before end of headers"
            ) from None

        # Only the last four bytes can complete the terminator
        if buffer.endswith(HEADER_TERMINATOR):
            return bytes(buffer[:-len(HEADER_TERMINATOR)])

    raise HeadersTooLargeError(
        f"Header block exceeds {max_size} bytes without terminator"
    )


def split_lines(block: bytes) -> list[str]:
    """
    Decode a header block and split it on CRLF.

    Empty lines are dropped, so a block that is nothing but the
    terminator yields an empty list (no start line).
    """
    text = block.decode(HEADER_ENCODING)
    return [line for line in text.split("\r\n") if line]


def parse_headers(lines: list[str]) -> Headers:
    """
    Parse "Name: value" lines into a Headers collection.

    - split at the FIRST colon, so values may contain colons
      ("Host: localhost:3668")
    - name and value are trimmed of spaces/tabs, name is lowercased
    - a line without a colon is skipped (lenient, not an error)
    - repeated names: last one wins
    """
    headers = Headers()
    for line in lines:
        name, sep, value = line.partition(":")
        if not sep:
            logger.debug(f"Skipping header line without colon: {line!r}")
            continue
        headers.set(name.strip(OWS), value.strip(OWS))
    return headers


def encode_header_line(line: str) -> bytes:
    """
    Encode one status or header line for the wire.

    Latin-1 keeps every parsed byte as it was. Text outside Latin-1 can
    only come from application code and is sent as UTF-8 instead.
    """
    try:
        return line.encode(HEADER_ENCODING)
    except UnicodeEncodeError:
        return line.encode("utf-8")


def parse_content_length(headers: Headers) -> Optional[int]:
    """
    Read the Content-Length header as a non-negative integer.

    Returns:
        The length, or None if the header is absent.

    Raises:
        InvalidContentLengthError: Value is not a plain decimal number, or
            is too large to be a byte count.
    """
    raw = headers.get("content-length")
    if raw is None:
        return None

    # int() would also accept "+5", " 5" and "1_000"; the wire form is digits only
    if not raw.isascii() or not raw.isdigit():
        raise InvalidContentLengthError(f"Invalid Content-Length: {raw!r}")

    # Checked before int() so huge digit strings never reach the converter
    digits = raw.lstrip("0") or "0"
    if len(digits) > _MAX_LENGTH_DIGITS or int(digits) > sys.maxsize:
        raise InvalidContentLengthError(
            f"Content-Length out of range: {raw[:32]}{'...' if len(raw) > 32 else ''}"
        )
    return int(digits)


def read_body(
    reader: ByteReader,
    content_length: Optional[int],
    max_size: Optional[int],
) -> bytes:
    """
    Read a Content-Length-framed body.

    Args:
        reader: Byte source positioned just after the header block.
        content_length: Declared length, or None for "no body".
        max_size: Largest acceptable length, or None for no cap.

    Raises:
        BodyTooLargeError: content_length exceeds max_size.
        EndOfStreamError: The stream ended before content_length bytes.
    """
    if content_length is None or content_length == 0:
        return b""

    if max_size is not None and content_length > max_size:
        raise BodyTooLargeError(
            f"Body too large: {content_length} bytes (limit {max_size})"
        )

    return reader.read_exact(content_length)
