"""Data models for raw diff records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FileStatus(str, Enum):
    MODIFIED = "M"
    COPIED = "C"
    RENAMED = "R"
    ADDED = "A"
    DELETED = "D"
    TYPE_CHANGED = "T"
    UNMERGED = "U"
    UNKNOWN = "X"
    BROKEN = "B"

    @property
    def has_two_paths(self) -> bool:
        return self in (FileStatus.COPIED, FileStatus.RENAMED)


# Statuses whose destination blob holds new content worth checking.
CONTENT_STATUSES = frozenset(
    {FileStatus.MODIFIED, FileStatus.COPIED, FileStatus.RENAMED, FileStatus.ADDED}
)


@dataclass(frozen=True)
class ChangeRecord:
    """One ``git diff-index`` / ``git diff-tree`` raw output record."""

    src_mode: str
    dst_mode: str
    src_hash: str
    dst_hash: str
    status: FileStatus
    src_path: str
    dst_path: Optional[str] = None  # set on copies and renames
    score: Optional[int] = None  # similarity, when git reports one

    @property
    def path(self) -> str:
        """The path the change ends up at."""
        return self.dst_path if self.dst_path else self.src_path

    @property
    def is_content_change(self) -> bool:
        return self.status in CONTENT_STATUSES
