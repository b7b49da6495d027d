"""
=============================================================================
BYTE SOURCE ADAPTER
=============================================================================

The parsers never touch sockets directly. They read from a ByteReader,
which wraps anything with a ``read(n)`` method:

    ByteReader(io.BytesIO(raw))               # in-memory bytes (tests)
    ByteReader(sock.makefile("rb"))           # a connected socket
    ByteReader(open("dump.http", "rb"))       # a captured message on disk

Only two operations are needed:

    read_byte()      one byte, or EndOfStreamError
    read_exact(n)    exactly n bytes, or EndOfStreamError

=============================================================================
WHY A WRAPPER?
=============================================================================

``read(n)`` on a socket file or a raw stream may return FEWER than n
bytes (TCP hands data over in arbitrary chunks). read_exact() loops
until it has everything, so the body read is exact no matter how the
peer's bytes were split into packets.

I/O failures (connection reset, socket timeout) come out of the stream
as OSError. They are re-raised as ReaderError so callers can catch every
parse failure through HTTPParseError, with the original error chained
as __cause__.

The reader never writes and never closes the wrapped stream: whoever
opened it owns it.
=============================================================================
"""

from typing import BinaryIO, Union

from .errors import EndOfStreamError, ReaderError

# Upper bound per read() call, so a declared length is never allocated up front
READ_CHUNK_SIZE = 64 * 1024


class ByteReader:
    """Blocking byte source over a binary readable."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self.bytes_read = 0  # Total consumed, handy for logging

    def read_byte(self) -> int:
        """
        Read a single byte.

        Returns:
            The byte as an int (0-255).

        Raises:
            EndOfStreamError: The stream is exhausted.
            ReaderError: The stream raised an I/O error.
        """
        chunk = self._read(1)
        if not chunk:
            raise EndOfStreamError("Unexpected end of stream")
        self.bytes_read += 1
        return chunk[0]

    def read_exact(self, size: int) -> bytes:
        """
        Read exactly ``size`` bytes, looping over short reads.

        Raises:
            EndOfStreamError: Fewer than ``size`` bytes were available.
            ReaderError: The stream raised an I/O error.
        """
        if size <= 0:
            return b""

        chunks = []
        remaining = size
        while remaining > 0:
            chunk = self._read(min(remaining, READ_CHUNK_SIZE))
            if not chunk:
                raise EndOfStreamError(
                    f"Unexpected end of stream: expected {size} bytes, "
                    f"got {size - remaining}"
                )
            chunks.append(chunk)
            remaining -= len(chunk)

        self.bytes_read += size
        return b"".join(chunks)

    def _read(self, size: int) -> bytes:
        try:
            return self._stream.read(size)
        except OSError as e:
            raise ReaderError(f"Failed to read from stream: {e}") from e


def as_reader(source: Union[ByteReader, BinaryIO]) -> ByteReader:
    """Wrap a binary readable in a ByteReader unless it already is one."""
    if isinstance(source, ByteReader):
        return source
    return ByteReader(source)
