"""Tests for the git adapter and file sources — run against real repos."""

import hashlib
import subprocess
from pathlib import Path

import pytest

from eolguard.git.adapter import (
    EMPTY_TREE,
    GitError,
    get_hooks_dir,
    get_range_records,
    get_repo_root,
    get_staged_records,
    repo_head,
)
from eolguard.git.files import GitFile, LocalFile, MemoryFile, changed_files
from eolguard.git.models import FileStatus
from eolguard.scanner.eol import EOLStat
from eolguard.scanner.stream import EOLScanner


def _commit(repo: Path, msg: str = "wip") -> str:
    subprocess.run(["git", "commit", "-m", msg], cwd=repo, capture_output=True, check=True)
    out = subprocess.run(
        ["git", "rev-parse", "HEAD"], cwd=repo, capture_output=True, check=True, text=True
    )
    return out.stdout.strip()


class TestAdapter:
    def test_repo_root(self, tmp_git_repo: Path):
        sub = tmp_git_repo / "sub"
        sub.mkdir()
        assert get_repo_root(sub).resolve() == tmp_git_repo.resolve()

    def test_not_a_repo(self, tmp_path: Path):
        with pytest.raises(GitError):
            get_repo_root(tmp_path)

    def test_head(self, tmp_git_repo: Path, empty_git_repo: Path):
        assert repo_head(tmp_git_repo) == "HEAD"
        assert repo_head(empty_git_repo) == EMPTY_TREE

    def test_staged_records(self, tmp_git_repo: Path, stage):
        stage(tmp_git_repo, "new file.txt", b"x\n")
        stage(tmp_git_repo, "README.md", b"# Changed\r\n")
        records = {r.path: r for r in get_staged_records(tmp_git_repo)}
        assert records["new file.txt"].status == FileStatus.ADDED
        assert records["README.md"].status == FileStatus.MODIFIED

    def test_staged_records_without_commits(self, empty_git_repo: Path, stage):
        stage(empty_git_repo, "first.txt", b"hello\n")
        records = get_staged_records(empty_git_repo)
        assert [(r.status, r.path) for r in records] == [(FileStatus.ADDED, "first.txt")]

    def test_nothing_staged(self, tmp_git_repo: Path):
        assert get_staged_records(tmp_git_repo) == []

    def test_rename_detected(self, tmp_git_repo: Path):
        body = b"".join(b"line %d\n" % i for i in range(50))
        (tmp_git_repo / "old.txt").write_bytes(body)
        subprocess.run(["git", "add", "old.txt"], cwd=tmp_git_repo, check=True)
        _commit(tmp_git_repo)
        subprocess.run(["git", "mv", "old.txt", "new.txt"], cwd=tmp_git_repo, check=True)
        records = get_staged_records(tmp_git_repo)
        assert len(records) == 1
        assert records[0].status == FileStatus.RENAMED
        assert records[0].src_path == "old.txt"
        assert records[0].path == "new.txt"
        assert records[0].score == 100

    def test_range_records(self, tmp_git_repo: Path, stage):
        base = subprocess.run(
            ["git", "rev-parse", "HEAD"], cwd=tmp_git_repo, capture_output=True, check=True, text=True
        ).stdout.strip()
        stage(tmp_git_repo, "a.txt", b"a\n")
        head = _commit(tmp_git_repo)
        records = get_range_records(tmp_git_repo, base, head)
        assert [(r.status, r.path) for r in records] == [(FileStatus.ADDED, "a.txt")]

    def test_bad_ref(self, tmp_git_repo: Path):
        with pytest.raises(GitError) as info:
            get_range_records(tmp_git_repo, "no-such-ref", "HEAD")
        assert info.value.returncode not in (None, 0)

    def test_head_without_git(self, tmp_git_repo: Path, monkeypatch):
        def missing(*args, **kwargs):
            raise FileNotFoundError("git")

        monkeypatch.setattr(subprocess, "run", missing)
        with pytest.raises(GitError, match="not installed") as info:
            repo_head(tmp_git_repo)
        assert info.value.returncode is None

    def test_head_timeout(self, tmp_git_repo: Path, monkeypatch):
        def slow(cmd, **kwargs):
            raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))

        monkeypatch.setattr(subprocess, "run", slow)
        with pytest.raises(GitError, match="timed out"):
            repo_head(tmp_git_repo)


class TestHooksDir:
    def test_plain_repo(self, tmp_git_repo: Path):
        assert get_hooks_dir(tmp_git_repo).resolve() == (tmp_git_repo / ".git" / "hooks").resolve()

    def test_linked_worktree(self, tmp_git_repo: Path, tmp_path_factory):
        tree = tmp_path_factory.mktemp("linked") / "tree"
        subprocess.run(
            ["git", "worktree", "add", "-q", "--detach", str(tree)],
            cwd=tmp_git_repo, capture_output=True, check=True,
        )
        assert (tree / ".git").is_file()
        assert get_hooks_dir(tree).resolve() == (tmp_git_repo / ".git" / "hooks").resolve()

    def test_core_hooks_path(self, tmp_git_repo: Path, tmp_path_factory):
        shared = tmp_path_factory.mktemp("shared-hooks")
        subprocess.run(
            ["git", "config", "core.hooksPath", str(shared)],
            cwd=tmp_git_repo, capture_output=True, check=True,
        )
        assert get_hooks_dir(tmp_git_repo).resolve() == shared.resolve()


class TestFiles:
    def test_git_file_streams_blob(self, tmp_git_repo: Path, stage):
        stage(tmp_git_repo, "w.bat", b"echo\r\necho\r\n")
        files = changed_files(get_staged_records(tmp_git_repo), tmp_git_repo)
        assert [f.name for f in files] == ["w.bat"]
        assert EOLScanner(chunk_size=3).scan_file(files[0]) == EOLStat(crlf=2)

    def test_git_file_bad_hash(self, tmp_git_repo: Path):
        f = GitFile("missing.txt", "f" * 40, tmp_git_repo)
        with pytest.raises(GitError, match="missing.txt"):
            EOLScanner().scan_file(f)

    def test_deleted_files_not_checked(self, tmp_git_repo: Path):
        subprocess.run(["git", "rm", "-q", "README.md"], cwd=tmp_git_repo, check=True)
        records = get_staged_records(tmp_git_repo)
        assert records[0].status == FileStatus.DELETED
        assert changed_files(records, tmp_git_repo) == []

    def test_local_file_hash_matches_git(self, tmp_git_repo: Path):
        path = tmp_git_repo / "h.txt"
        path.write_bytes(b"hash me\r\n")
        expected = subprocess.run(
            ["git", "hash-object", "h.txt"], cwd=tmp_git_repo, capture_output=True, check=True, text=True
        ).stdout.strip()
        assert LocalFile(path).hash == expected

    def test_local_file_scan(self, tmp_path: Path):
        path = tmp_path / "mac.txt"
        path.write_bytes(b"a\rb\r")
        assert EOLScanner().scan_file(LocalFile(path)) == EOLStat(cr=2)

    def test_memory_file(self):
        f = MemoryFile("m.txt", b"x\n", hash="abc")
        assert (f.name, f.hash) == ("m.txt", "abc")
        with f.open() as stream:
            assert stream.read() == b"x\n"

    def test_empty_blob_hash(self, tmp_path: Path):
        path = tmp_path / "empty"
        path.write_bytes(b"")
        assert LocalFile(path).hash == hashlib.sha1(b"blob 0\0").hexdigest()
