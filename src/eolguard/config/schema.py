"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

OutputFormat = Literal["terminal", "json"]
OUTPUT_FORMATS = ("terminal", "json")


@dataclass
class CheckConfig:
    case_sensitive: bool = False  # compare file extensions case-sensitively
    detect_renames: bool = True  # pass -M to git so renames keep their new path
    chunk_size_kb: int = 1024  # read buffer for each file


@dataclass
class PoliciesConfig:
    # Extensions (with or without the leading dot) that must use one style.
    crlf: List[str] = field(default_factory=list)
    lf: List[str] = field(default_factory=list)
    cr: List[str] = field(default_factory=list)
    disable: List[str] = field(default_factory=list)  # policy ids to switch off


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    verbose: bool = False  # list every file, not only the offending ones


@dataclass
class IgnoreConfig:
    files: List[str] = field(default_factory=list)  # fnmatch globs


@dataclass
class EolGuardConfig:
    version: str = "1.0"
    check: CheckConfig = field(default_factory=CheckConfig)
    policies: PoliciesConfig = field(default_factory=PoliciesConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)

    @property
    def chunk_size(self) -> int:
        return max(1, self.check.chunk_size_kb) * 1024
