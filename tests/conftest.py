"""Shared fixtures: isolated user config and throwaway git repositories."""

import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Points every user-level location at a temporary directory.

    Keeps the developer's own roster, git-pair config and global git config
    (e.g. `core.hooksPath`) out of the tests.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_PAIR_ROSTER_FILE", str(home / "roster"))
    monkeypatch.setattr(
        "git_pair.constants.CONFIG_FILE", home / ".config/git-pair/config.toml"
    )
    return home


@pytest.fixture
def roster_file(isolated_home: Path) -> Path:
    return isolated_home / "roster"


@pytest.fixture
def run_git() -> Callable[..., str]:
    """Returns a helper running git in a given directory."""

    def _run(cwd: Path, *args: str) -> str:
        res = subprocess.run(
            ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
        )
        return res.stdout.strip()

    return _run


@pytest.fixture
def git_repo(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, run_git: Callable[..., str]
) -> Path:
    """Creates a repository on branch `main` and makes it the cwd."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")

    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(repo, "init", "-q")
    run_git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    run_git(repo, "config", "user.name", "Test User")
    run_git(repo, "config", "user.email", "test@example.com")
    run_git(repo, "config", "commit.gpgsign", "false")
    monkeypatch.chdir(repo)
    return repo
