"""Raw diff record parser — ``git diff-index`` / ``git diff-tree`` output.

Each record looks like::

    :100644 100644 <src-hash> <dst-hash> M<TAB>path<LF>
    :100644 100644 <src-hash> <dst-hash> R086<TAB>old<TAB>new<LF>

With ``-z`` both the TAB and the LF become NUL. The parser walks the buffer
with a single cursor and stops at the first malformed byte; it never
returns a partial record list.
"""

from __future__ import annotations

from typing import List, Optional

from eolguard.git.models import ChangeRecord, FileStatus

_STATUS_CODES = {s.value.encode("ascii")[0]: s for s in FileStatus}

_SEP_NAMES = {
    0x00: "NUL",
    0x09: "TAB",
    0x0A: "LF",
    0x20: "SP",
}


def _sep_name(sep: int) -> str:
    if sep in _SEP_NAMES:
        return _SEP_NAMES[sep]
    if sep < 0x20:
        return f"'\\x{sep:02x}'"
    return f"'{chr(sep)}'"


def _decode_path(raw: bytes) -> str:
    return raw.decode("utf-8", errors="surrogateescape")


class DiffFormatError(Exception):
    """Raised when a raw diff buffer does not follow the record grammar."""

    def __init__(self, message: str, position: int, expected: Optional[str] = None) -> None:
        super().__init__(message)
        self.position = position
        self.expected = expected


class DiffRecordParser:
    """Parse a raw diff buffer into :class:`ChangeRecord` objects.

    Usage::

        records = DiffRecordParser(output, nul_delimited=True).parse()
    """

    def __init__(self, data: bytes, *, nul_delimited: bool = False) -> None:
        self._data = data
        self._pos = 0
        if nul_delimited:
            self._field_sep, self._record_sep = 0x00, 0x00
        else:
            self._field_sep, self._record_sep = 0x09, 0x0A

    def done(self) -> bool:
        return self._pos == len(self._data)

    def parse(self) -> List[ChangeRecord]:
        records: List[ChangeRecord] = []
        while not self.done():
            records.append(self._record())
        return records

    # ---- grammar ----

    def _record(self) -> ChangeRecord:
        self._accept(ord(":"))
        src_mode = self._field()
        dst_mode = self._field()
        src_hash = self._field()
        dst_hash = self._field()

        status_pos = self._pos
        code = self._byte()
        status = _STATUS_CODES.get(code)
        if status is None:
            raise DiffFormatError(
                f"Unknown status {chr(code)!r} at position {status_pos}", status_pos
            )

        score_pos = self._pos
        raw_score = self._word(self._field_sep)
        score: Optional[int] = None
        if raw_score:
            if not raw_score.isdigit():
                shown = raw_score.decode("utf-8", errors="backslashreplace")
                raise DiffFormatError(
                    f"Invalid similarity score {shown!r} at position {score_pos}",
                    score_pos,
                )
            score = int(raw_score)

        if status.has_two_paths:
            src_path = _decode_path(self._word(self._field_sep))
            dst_path: Optional[str] = _decode_path(self._word(self._record_sep))
        else:
            src_path = _decode_path(self._word(self._record_sep))
            dst_path = None

        return ChangeRecord(
            src_mode=src_mode,
            dst_mode=dst_mode,
            src_hash=src_hash,
            dst_hash=dst_hash,
            status=status,
            src_path=src_path,
            dst_path=dst_path,
            score=score,
        )

    # ---- cursor primitives ----

    def _unexpected_end(self, expected: str) -> DiffFormatError:
        return DiffFormatError(
            f"Unexpected end of input at position {self._pos} (expected {expected})",
            self._pos,
            expected,
        )

    def _byte(self) -> int:
        if self._pos >= len(self._data):
            raise self._unexpected_end("status")
        b = self._data[self._pos]
        self._pos += 1
        return b

    def _accept(self, marker: int) -> None:
        expected = _sep_name(marker)
        if self._pos >= len(self._data):
            raise self._unexpected_end(expected)
        if self._data[self._pos] != marker:
            raise DiffFormatError(
                f"Missing {expected} at position {self._pos}", self._pos, expected
            )
        self._pos += 1

    def _field(self) -> str:
        """Return one space-terminated ASCII field (mode or hash)."""
        start = self._pos
        raw = self._word(0x20)
        try:
            return raw.decode("ascii")
        except UnicodeDecodeError as exc:
            raise DiffFormatError(
                f"Non-ASCII field at position {start}", start
            ) from exc

    def _word(self, sep: int) -> bytes:
        """Return the bytes up to *sep* and step past it."""
        end = self._data.find(bytes((sep,)), self._pos)
        if end == -1:
            self._pos = len(self._data)
            raise self._unexpected_end(_sep_name(sep))
        word = self._data[self._pos:end]
        self._pos = end + 1
        return word


def parse_diff_records(data: bytes, *, nul_delimited: bool = False) -> List[ChangeRecord]:
    """Parse a whole raw diff buffer. Raises :class:`DiffFormatError`."""
    return DiffRecordParser(data, nul_delimited=nul_delimited).parse()
