"""Check results — per-file reports."""

from eolguard.findings.models import MIXED, CheckResult, FileReport

__all__ = ["MIXED", "CheckResult", "FileReport"]
