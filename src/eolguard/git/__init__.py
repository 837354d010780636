"""Git interface layer — adapter, raw diff parsing, models, file sources."""

from eolguard.git.adapter import (
    EMPTY_TREE,
    GitError,
    get_hooks_dir,
    get_range_records,
    get_repo_root,
    get_staged_records,
    repo_head,
)
from eolguard.git.diff_parser import DiffFormatError, DiffRecordParser, parse_diff_records
from eolguard.git.files import File, GitFile, LocalFile, MemoryFile, changed_files
from eolguard.git.models import ChangeRecord, FileStatus

__all__ = [
    "EMPTY_TREE",
    "ChangeRecord",
    "DiffFormatError",
    "DiffRecordParser",
    "File",
    "FileStatus",
    "GitError",
    "GitFile",
    "LocalFile",
    "MemoryFile",
    "changed_files",
    "get_hooks_dir",
    "get_range_records",
    "get_repo_root",
    "get_staged_records",
    "parse_diff_records",
    "repo_head",
]
