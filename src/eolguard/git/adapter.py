"""Git subprocess wrapper — repo root, staged records, commit ranges."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional

from eolguard.git.diff_parser import parse_diff_records
from eolguard.git.models import ChangeRecord

# Object id of the empty tree; diffing the index against it lists every
# staged file in a repository that has no commits yet.
EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error.

    ``returncode`` is set only when git ran and exited non-zero; it stays
    ``None`` when git could not be started or timed out.
    """

    def __init__(self, message: str, returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.returncode = returncode


def _run_git(args: list[str], cwd: Path, timeout: int = 30) -> bytes:
    """Run a git command and return raw stdout. Raises GitError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise GitError(
            f"git {args[0]} failed: {stderr or f'exit status {result.returncode}'}",
            returncode=result.returncode,
        )
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.decode("utf-8", errors="surrogateescape").strip())


def get_hooks_dir(repo_root: Path) -> Path:
    """Return the directory git runs hooks from.

    Follows ``core.hooksPath`` and the shared git directory of linked
    worktrees, where ``.git`` is a file rather than a directory.
    """
    out = _run_git(["rev-parse", "--git-path", "hooks"], cwd=repo_root)
    hooks = Path(out.decode("utf-8", errors="surrogateescape").rstrip("\n"))
    if not hooks.is_absolute():
        hooks = repo_root / hooks
    return hooks


def repo_head(repo_root: Path) -> str:
    """Return ``HEAD``, or the empty tree when nothing is committed yet."""
    try:
        _run_git(["rev-parse", "--verify", "--quiet", "HEAD"], cwd=repo_root)
    except GitError as exc:
        if exc.returncode is None:
            raise
        return EMPTY_TREE
    return "HEAD"


def get_staged_records(repo_root: Path, *, detect_renames: bool = True) -> List[ChangeRecord]:
    """Return the raw diff records of the index against HEAD."""
    args = ["diff-index", "--cached", "-z"]
    if detect_renames:
        args.append("-M")
    args.append(repo_head(repo_root))
    return parse_diff_records(_run_git(args, cwd=repo_root), nul_delimited=True)


def get_range_records(
    repo_root: Path, base: str, head: str, *, detect_renames: bool = True
) -> List[ChangeRecord]:
    """Return the raw diff records between two commits (CI mode)."""
    args = ["diff-tree", "-r", "-z", "--no-commit-id"]
    if detect_renames:
        args.append("-M")
    args.extend([base, head])
    return parse_diff_records(_run_git(args, cwd=repo_root), nul_delimited=True)
