"""Line-ending tokenizer and accumulator.

A byte window is split into tokens, each of which is exactly one of:

- a single EOL (``\\r``, ``\\n`` or ``\\r\\n``)
- a single NUL byte
- a maximal run of bytes containing neither NUL nor an EOL byte

Concatenating the tokens of a window reproduces the window.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Dict, Iterator, List, Tuple

CR = 0x0D
LF = 0x0A
NUL = 0x00

_SPECIAL_RE = re.compile(rb"[\x00\r\n]")


def _token_end(data: bytes, start: int) -> int:
    """Return the offset just past the token beginning at *start*."""
    first = data[start]
    if first == LF or first == NUL:
        return start + 1
    if first == CR:
        if start + 1 < len(data) and data[start + 1] == LF:
            return start + 2
        return start + 1
    m = _SPECIAL_RE.search(data, start)
    return m.start() if m else len(data)


def split_eol(data: bytes) -> Tuple[bytes, bytes]:
    """Split *data* into its first token and the remaining bytes.

    An empty window yields ``(b"", b"")``, the "no more tokens" sentinel.
    A trailing lone ``\\r`` is returned as a bare CR; callers reading a
    stream must hold it back until the next byte is known.
    """
    if not data:
        return b"", b""
    end = _token_end(data, 0)
    return data[:end], data[end:]


def iter_eol_tokens(data: bytes) -> Iterator[bytes]:
    """Yield every token of *data* in order."""
    pos = 0
    total = len(data)
    while pos < total:
        end = _token_end(data, pos)
        yield data[pos:end]
        pos = end


@dataclass(frozen=True)
class EOLStat:
    """Line-ending counters for one file (or one window of it)."""

    cr: int = 0
    crlf: int = 0
    lf: int = 0
    nul: int = 0

    def __add__(self, other: "EOLStat") -> "EOLStat":
        if not isinstance(other, EOLStat):
            return NotImplemented
        return EOLStat(
            cr=self.cr + other.cr,
            crlf=self.crlf + other.crlf,
            lf=self.lf + other.lf,
            nul=self.nul + other.nul,
        )

    @property
    def is_binary(self) -> bool:
        return self.nul != 0

    @property
    def is_mixed(self) -> bool:
        return sum(1 for n in (self.cr, self.crlf, self.lf) if n) > 1

    # A file without any EOL is pure CR, pure CRLF and pure LF at once:
    # there is nothing in it to contradict a policy.

    @property
    def is_cr(self) -> bool:
        return self.crlf == 0 and self.lf == 0

    @property
    def is_crlf(self) -> bool:
        return self.cr == 0 and self.lf == 0

    @property
    def is_lf(self) -> bool:
        return self.cr == 0 and self.crlf == 0

    @property
    def styles(self) -> List[str]:
        """EOL kinds present, always in CR, CRLF, LF order."""
        kinds = (("CR", self.cr), ("CRLF", self.crlf), ("LF", self.lf))
        return [name for name, count in kinds if count]

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def __str__(self) -> str:
        if self.is_binary:
            return "binary"
        return " ".join(self.styles)


def calc_eol_stat(data: bytes) -> EOLStat:
    """Count the EOLs and NUL bytes in a single window.

    No attempt is made to handle a CRLF split across windows; see
    :func:`eolguard.scanner.stream.calc_eol_stat_stream` for that.
    """
    cr = crlf = lf = nul = 0
    for token in iter_eol_tokens(data):
        first = token[0]
        if first == CR:
            if len(token) == 2:
                crlf += 1
            else:
                cr += 1
        elif first == LF:
            lf += 1
        elif first == NUL:
            nul += 1
    return EOLStat(cr=cr, crlf=crlf, lf=lf, nul=nul)
