"""Check engine — classify each file and apply the line-ending policies.

A file that cannot be opened or read is reported and counted, and the
remaining files are still checked.
"""

from __future__ import annotations

import time
from fnmatch import fnmatch
from pathlib import PurePosixPath
from typing import Iterable, List

from eolguard.config.schema import EolGuardConfig
from eolguard.findings.models import MIXED, CheckResult, FileReport
from eolguard.git.adapter import GitError
from eolguard.git.files import File
from eolguard.policy.registry import PolicyRegistry
from eolguard.scanner.eol import EOLStat
from eolguard.scanner.stream import EOLScanner


def is_ignored(name: str, patterns: List[str]) -> bool:
    """Return True if *name* (or its basename) matches an ignore glob."""
    basename = PurePosixPath(name).name
    return any(fnmatch(name, pat) or fnmatch(basename, pat) for pat in patterns)


def evaluate(name: str, stat: EOLStat, registry: PolicyRegistry) -> List[str]:
    """Return the violations for one classified file.

    Binary files never violate anything.
    """
    if stat.is_binary:
        return []
    violations: List[str] = []
    if stat.is_mixed:
        violations.append(MIXED)
    violations.extend(p.id for p in registry.violations(name, stat))
    return violations


def check_file(file: File, registry: PolicyRegistry, scanner: EOLScanner) -> FileReport:
    try:
        stat = scanner.scan_file(file)
        digest = file.hash
    except (OSError, GitError) as exc:
        return FileReport(name=file.name, error=str(exc))
    return FileReport(
        name=file.name,
        hash=digest,
        stat=stat,
        violations=evaluate(file.name, stat, registry),
    )


def check_files(
    files: Iterable[File],
    registry: PolicyRegistry,
    config: EolGuardConfig,
) -> CheckResult:
    """Check every file in order and collect the reports."""
    start = time.perf_counter()
    scanner = EOLScanner(config.chunk_size)
    result = CheckResult()

    for file in files:
        if is_ignored(file.name, config.ignore.files):
            result.skipped_files.append(file.name)
            continue
        result.reports.append(check_file(file, registry, scanner))

    result.duration_ms = (time.perf_counter() - start) * 1000
    return result
