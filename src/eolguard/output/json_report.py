"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from eolguard.findings.models import CheckResult


def to_dict(result: CheckResult) -> Dict[str, Any]:
    """Convert CheckResult to a JSON-serialisable dict."""
    files: List[Dict[str, Any]] = []
    for r in result.reports:
        files.append({
            "file": r.name,
            "hash": r.hash,
            "eol": str(r.stat) if r.stat is not None else None,
            **({"counts": r.stat.to_dict()} if r.stat is not None else {}),
            "binary": r.stat.is_binary if r.stat is not None else None,
            "violations": r.violations,
            **({"error": r.error} if r.error else {}),
        })

    return {
        "version": "1.0",
        "checked_files": result.checked_files,
        "errors": result.error_count,
        "blocked": result.blocked,
        "files": files,
        "skipped_files": result.skipped_files,
        "duration_ms": result.duration_ms,
    }


def render(result: CheckResult) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2)
