"""Check result data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from eolguard.scanner.eol import EOLStat

MIXED = "mixed"


@dataclass
class FileReport:
    """Outcome of checking one file."""

    name: str
    hash: str = ""
    stat: Optional[EOLStat] = None
    violations: List[str] = field(default_factory=list)  # "mixed" and/or policy ids
    error: Optional[str] = None  # open or read failure

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def is_violation(self) -> bool:
        return bool(self.violations)

    @property
    def is_bad(self) -> bool:
        return self.is_error or self.is_violation


@dataclass
class CheckResult:
    """Complete result of a check run."""

    reports: List[FileReport] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def checked_files(self) -> int:
        return len(self.reports)

    @property
    def violations(self) -> List[FileReport]:
        return [r for r in self.reports if r.is_violation]

    @property
    def errors(self) -> List[FileReport]:
        return [r for r in self.reports if r.is_error]

    @property
    def error_count(self) -> int:
        """Offending files plus files that could not be read."""
        return sum(1 for r in self.reports if r.is_bad)

    @property
    def blocked(self) -> bool:
        return self.error_count > 0
