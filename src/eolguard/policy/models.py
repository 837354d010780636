"""Line-ending policy model — which extensions must use which style."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Iterable, List

from eolguard.scanner.eol import EOLStat


class EOLStyle(str, Enum):
    CR = "cr"
    CRLF = "crlf"
    LF = "lf"

    def allows(self, stat: EOLStat) -> bool:
        """True if *stat* uses no line ending other than this style."""
        if self is EOLStyle.CR:
            return stat.is_cr
        if self is EOLStyle.CRLF:
            return stat.is_crlf
        return stat.is_lf


def normalize_extensions(exts: Iterable[str]) -> List[str]:
    """``["sh", ".py", ""]`` -> ``[".sh", ".py"]``."""
    out: List[str] = []
    for ext in exts:
        ext = ext.strip()
        if not ext:
            continue
        out.append(ext if ext.startswith(".") else "." + ext)
    return out


def file_extension(name: str) -> str:
    """Suffix of the last path element; dotfiles such as ``.bashrc`` have none."""
    return PurePosixPath(name.replace("\\", "/")).suffix


@dataclass
class Policy:
    """Files whose extension is in ``extensions`` must be pure ``style``."""

    id: str
    style: EOLStyle
    extensions: List[str] = field(default_factory=list)
    description: str = ""
    enabled: bool = True

    def __post_init__(self) -> None:
        self.style = EOLStyle(self.style)
        self.extensions = normalize_extensions(self.extensions)

    def matches(self, name: str, *, case_sensitive: bool = False) -> bool:
        ext = file_extension(name)
        if not ext:
            return False
        if case_sensitive:
            return ext in self.extensions
        ext = ext.lower()
        return any(ext == x.lower() for x in self.extensions)

    def violated_by(self, name: str, stat: EOLStat, *, case_sensitive: bool = False) -> bool:
        return self.matches(name, case_sensitive=case_sensitive) and not self.style.allows(stat)
