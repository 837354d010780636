"""Shared test fixtures — raw diff buffers, configs, temp git repos."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

H1 = "1" * 40
H2 = "2" * 40
H3 = "3" * 40
ZERO = "0" * 40


@pytest.fixture
def raw_diff_tab() -> bytes:
    """``git diff-index --cached -M HEAD`` output, TAB/LF delimited."""
    return (
        f":100644 100644 {H1} {H2} M\tsrc/app.py\n"
        f":000000 100644 {ZERO} {H3} A\tREADME.md\n"
        f":100644 100644 {H1} {H2} R086\told name.txt\tnew name.txt\n"
        f":100644 000000 {H1} {ZERO} D\tgone.c\n"
    ).encode()


@pytest.fixture
def raw_diff_nul() -> bytes:
    """The same report produced with ``-z``."""
    return (
        f":100644 100644 {H1} {H2} M\0src/app.py\0"
        f":000000 100644 {ZERO} {H3} A\0README.md\0"
        f":100644 100644 {H1} {H2} R086\0old name.txt\0new name.txt\0"
        f":100644 000000 {H1} {ZERO} D\0gone.c\0"
    ).encode()


@pytest.fixture
def raw_diff_all_statuses() -> bytes:
    """One record per status letter git can emit."""
    return (
        f":100644 100644 {H1} {H2} M\tm.txt\n"
        f":100644 100644 {H1} {H2} C075\tsrc.txt\tcopy.txt\n"
        f":100644 100644 {H1} {H2} R100\tbefore.txt\tafter.txt\n"
        f":000000 100644 {ZERO} {H2} A\ta.txt\n"
        f":100644 000000 {H1} {ZERO} D\td.txt\n"
        f":100644 120000 {H1} {H2} T\tt.txt\n"
        f":000000 000000 {ZERO} {ZERO} U\tu.txt\n"
        f":100644 100644 {H1} {H2} X\tx.txt\n"
        f":100644 100644 {H1} {H2} B\tb.txt\n"
    ).encode()


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, capture_output=True, check=True)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one commit."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    _git(tmp_path, "config", "user.email", "test@test.com")
    _git(tmp_path, "config", "user.name", "Test")
    _git(tmp_path, "config", "core.autocrlf", "false")
    readme = tmp_path / "README.md"
    readme.write_bytes(b"# Test\n")
    _git(tmp_path, "add", ".")
    _git(tmp_path, "commit", "-m", "init")
    return tmp_path


@pytest.fixture
def empty_git_repo(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """A git repository without any commit, separate from ``tmp_git_repo``."""
    repo = tmp_path_factory.mktemp("empty")
    subprocess.run(["git", "init", str(repo)], capture_output=True, check=True)
    _git(repo, "config", "core.autocrlf", "false")
    return repo


@pytest.fixture
def stage():
    """Write bytes to a file in a repo and ``git add`` it."""

    def _stage(repo: Path, name: str, data: bytes) -> Path:
        path = repo / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        _git(repo, "--literal-pathspecs", "add", name)
        return path

    return _stage
