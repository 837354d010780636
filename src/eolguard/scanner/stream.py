"""Streaming EOL scanner — classify a byte stream chunk by chunk.

Only one chunk (plus at most one carried-over byte) is held in memory at a
time. A ``\\r`` at the end of a chunk is held back until the next read shows
whether it starts a CRLF pair.
"""

from __future__ import annotations

from typing import BinaryIO, Protocol

from eolguard.scanner.eol import EOLStat, calc_eol_stat

DEFAULT_CHUNK_SIZE = 1024 * 1024


class Readable(Protocol):
    def read(self, size: int = ...) -> bytes: ...


def calc_eol_stat_stream(stream: Readable, chunk_size: int = DEFAULT_CHUNK_SIZE) -> EOLStat:
    """Return the EOL counters for everything *stream* yields.

    ``read`` returning ``b""`` marks the end of input. Any ``OSError`` raised
    by ``read`` propagates and the partial counts are discarded.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")

    total = EOLStat()
    carry = b""
    while True:
        chunk = stream.read(chunk_size)
        eof = not chunk
        window = carry + chunk if carry else chunk
        if not eof and window.endswith(b"\r"):
            window, carry = window[:-1], window[-1:]
        else:
            carry = b""
        if window:
            total += calc_eol_stat(window)
        if eof:
            return total


class EOLScanner:
    """Classify files or streams with a fixed chunk size."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")
        self.chunk_size = chunk_size

    def scan(self, stream: BinaryIO) -> EOLStat:
        return calc_eol_stat_stream(stream, self.chunk_size)

    def scan_file(self, file) -> EOLStat:
        """Open *file* (a :class:`eolguard.git.files.File`) and scan it.

        The stream is closed before returning, including when the read fails.
        """
        with file.open() as stream:
            return self.scan(stream)
