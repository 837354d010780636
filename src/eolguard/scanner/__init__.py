"""Scanner — EOL tokenizer, accumulator and streaming scanner.

The check engine lives in :mod:`eolguard.scanner.engine`.
"""

from eolguard.scanner.eol import EOLStat, calc_eol_stat, iter_eol_tokens, split_eol
from eolguard.scanner.stream import DEFAULT_CHUNK_SIZE, EOLScanner, calc_eol_stat_stream

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "EOLScanner",
    "EOLStat",
    "calc_eol_stat",
    "calc_eol_stat_stream",
    "iter_eol_tokens",
    "split_eol",
]
