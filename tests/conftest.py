"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

GIT_IDENTITY = (
    "-c",
    "user.name=safe-rm tests",
    "-c",
    "user.email=tests@example.com",
    "-c",
    "commit.gpgsign=false",
    "-c",
    "init.defaultBranch=main",
)


def git(repo: Path, *args: str) -> str:
    """Run a git command inside a test repository and return stdout."""
    result = subprocess.run(
        ["git", *GIT_IDENTITY, *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point SAFE_RM_CONFIG at a per-test location that does not exist yet."""
    config_path = tmp_path_factory.mktemp("config") / "safe-rm" / "config.toml"
    monkeypatch.setenv("SAFE_RM_CONFIG", str(config_path))
    return config_path


@pytest.fixture
def write_file() -> Callable[..., Path]:
    """Create a file (and its parent directories) with some content."""

    def _write(path: Path, content: str = "content\n") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def run_git() -> Callable[..., str]:
    """Run git commands inside a test repository."""
    return git


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Repository with committed files and an ignore file.

    Layout after the initial commit:
        clean.txt          committed, unchanged
        src/app.py         committed, unchanged
        .gitignore         ignores *.log and build/
    """
    repo = tmp_path.resolve() / "project"
    repo.mkdir()
    git(repo, "init", "-q")

    (repo / "clean.txt").write_text("clean\n")
    (repo / "src").mkdir()
    (repo / "src" / "app.py").write_text("print('hi')\n")
    (repo / ".gitignore").write_text("*.log\nbuild/\n")

    git(repo, "add", "-A")
    git(repo, "commit", "-q", "-m", "initial")
    return repo


@pytest.fixture
def outside_dir(tmp_path: Path) -> Path:
    """Directory next to the repository, outside its work tree."""
    outside = tmp_path.resolve() / "outside"
    outside.mkdir()
    return outside
