"""Named byte sources — staged blobs, working-tree files, in-memory data.

Every source exposes a display ``name``, a content ``hash`` and ``open()``,
a context manager yielding a fresh binary stream. The stream is closed when
the ``with`` block exits, whether or not reading succeeded.
"""

from __future__ import annotations

import hashlib
import io
import os
import subprocess
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, ContextManager, Iterator, List, Optional, Protocol

from eolguard.git.adapter import GitError
from eolguard.git.models import ChangeRecord


class File(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def hash(self) -> str: ...

    def open(self) -> ContextManager[BinaryIO]: ...


class GitFile:
    """A blob in the object store, streamed through ``git cat-file``."""

    def __init__(self, name: str, hash: str, repo_root: Path) -> None:
        self._name = name
        self._hash = hash
        self._repo_root = repo_root

    @property
    def name(self) -> str:
        return self._name

    @property
    def hash(self) -> str:
        return self._hash

    @contextmanager
    def open(self) -> Iterator[BinaryIO]:
        try:
            proc = subprocess.Popen(
                ["git", "cat-file", "blob", self._hash],
                cwd=self._repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError:
            raise GitError("git is not installed or not on PATH")

        assert proc.stdout is not None and proc.stderr is not None
        try:
            yield proc.stdout
        finally:
            proc.stdout.close()
            stderr = proc.stderr.read()
            proc.stderr.close()
            proc.wait()
        if proc.returncode != 0:
            msg = stderr.decode("utf-8", errors="replace").strip()
            raise GitError(f"{self._name}: cannot read blob {self._hash}: {msg}")

    def __repr__(self) -> str:
        return f"GitFile({self._name!r}, {self._hash!r})"


def _blob_hash(path: Path, chunk_size: int = 64 * 1024) -> str:
    """Git blob object id of the file at *path*."""
    h = hashlib.sha1(f"blob {os.path.getsize(path)}\0".encode("ascii"))
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


class LocalFile:
    """A file on disk (working tree)."""

    def __init__(self, path: Path, name: Optional[str] = None) -> None:
        self._path = Path(path)
        self._name = name or str(path)
        self._hash: Optional[str] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def hash(self) -> str:
        if self._hash is None:
            self._hash = _blob_hash(self._path)
        return self._hash

    def open(self) -> ContextManager[BinaryIO]:
        return open(self._path, "rb")


class MemoryFile:
    """Bytes held in memory."""

    def __init__(self, name: str, data: bytes, hash: str = "") -> None:
        self._name = name
        self._data = data
        self._hash = hash

    @property
    def name(self) -> str:
        return self._name

    @property
    def hash(self) -> str:
        return self._hash

    def open(self) -> ContextManager[BinaryIO]:
        return io.BytesIO(self._data)


GITLINK_MODE = "160000"


def changed_files(records: List[ChangeRecord], repo_root: Path) -> List[GitFile]:
    """Blobs worth checking: added, modified, copied and renamed files.

    Submodule pointers have no blob and are left out.
    """
    return [
        GitFile(r.path, r.dst_hash, repo_root)
        for r in records
        if r.is_content_change and r.dst_mode != GITLINK_MODE
    ]
