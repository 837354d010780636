"""Pre-commit hook management for ``eolguard install`` / ``eolguard uninstall``.

The hook is located through git itself, so linked worktrees, submodules
and a configured ``core.hooksPath`` all get the hook where git will run it.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Tuple

from eolguard.git.adapter import get_hooks_dir

HOOK_NAME = "pre-commit"
MARKER = "# eolguard-hook"
SCRIPT = f"""\
#!/bin/sh
{MARKER}
# Checks staged files for mixed line endings and extension policies.
# Remove with: eolguard uninstall

exec eolguard check
"""


class HookState(str, Enum):
    ABSENT = "absent"
    OURS = "ours"
    FOREIGN = "foreign"


def hook_path(repo_root: Path) -> Path:
    """Path of the pre-commit hook git would run for ``repo_root``."""
    return get_hooks_dir(repo_root) / HOOK_NAME


def hook_state(path: Path) -> HookState:
    if not path.is_file():
        return HookState.ABSENT
    if MARKER in path.read_text(encoding="utf-8", errors="replace"):
        return HookState.OURS
    return HookState.FOREIGN


def install_hook(repo_root: Path, *, force: bool = False) -> Tuple[bool, str]:
    """Write the eolguard pre-commit hook; a foreign hook is kept unless ``force``.

    Raises GitError when the hooks directory cannot be resolved.
    """
    path = hook_path(repo_root)
    state = hook_state(path)

    if state is HookState.OURS:
        return True, f"eolguard hook already present at {path}"
    if state is HookState.FOREIGN and not force:
        return False, (
            f"{path} belongs to another tool. "
            "Re-run with --force to replace it, or call 'eolguard check' from it."
        )

    # core.hooksPath may name a directory that does not exist yet
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(SCRIPT, encoding="utf-8")
    mode = path.stat().st_mode
    path.chmod(mode | 0o111)
    return True, f"Installed pre-commit hook at {path}"


def uninstall_hook(repo_root: Path) -> Tuple[bool, str]:
    """Delete the pre-commit hook if eolguard wrote it."""
    path = hook_path(repo_root)
    state = hook_state(path)

    if state is HookState.ABSENT:
        return True, "No pre-commit hook installed, nothing to do."
    if state is HookState.FOREIGN:
        return False, f"{path} was not written by eolguard, leaving it alone."

    path.unlink()
    return True, f"Removed pre-commit hook from {path}"
