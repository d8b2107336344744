"""Tests for the Command Line Interface (CLI) module."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from git_pair import cli


def test_version_flag(capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--version"])

    assert exc_info.value.code == 0
    assert "git-pair 0.1.0" in capsys.readouterr().out


def test_help_command(capsys: pytest.CaptureFixture) -> None:
    cli.main(["help"])

    out = capsys.readouterr().out
    assert "init" in out
    assert "GIT_PAIR_ROSTER_FILE" in out


def test_init_add_status_flow(git_repo: Path, capsys: pytest.CaptureFixture) -> None:
    """Verifies the primary workflow end to end through the CLI."""
    cli.main(["init"])
    assert "Successfully initialized git-pair" in capsys.readouterr().out

    cli.main(["init"])
    assert "already initialized" in capsys.readouterr().out

    cli.main(["add", "Carol Davis", "carol@x.com"])
    assert "Added co-author: Carol Davis <carol@x.com>" in capsys.readouterr().out

    cli.main(["status"])
    out = capsys.readouterr().out
    assert "Current co-authors:" in out
    assert "Carol Davis <carol@x.com>" in out

    cli.main(["clear"])
    assert "Cleared all co-authors" in capsys.readouterr().out

    cli.main(["status"])
    assert "No co-authors configured" in capsys.readouterr().out


def test_commit_carries_trailers(
    git_repo: Path, run_git: Callable[..., str], capsys: pytest.CaptureFixture
) -> None:
    cli.main(["add", "--global", "alice", "Alice Johnson", "alice@x.com"])
    cli.main(["init"])
    cli.main(["add", "alice"])

    (git_repo / "notes.txt").write_text("pairing")
    run_git(git_repo, "add", "notes.txt")
    run_git(git_repo, "commit", "-q", "-m", "Pair session")

    message = run_git(git_repo, "log", "-1", "--format=%B")
    assert message.endswith("Co-authored-by: Alice Johnson <alice@x.com>")


def test_add_without_init_fails(git_repo: Path, capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["add", "Carol Davis", "carol@x.com"])

    assert exc_info.value.code == 1
    assert "not initialized for branch 'main'" in capsys.readouterr().err


def test_add_unknown_alias_fails(git_repo: Path, capsys: pytest.CaptureFixture) -> None:
    cli.main(["init"])

    with pytest.raises(SystemExit):
        cli.main(["add", "carol"])

    assert "not found in global roster" in capsys.readouterr().err


def test_status_outside_repository(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["status"])

    assert exc_info.value.code == 1
    assert "Not in a git repository" in capsys.readouterr().err


def test_status_not_initialized(git_repo: Path, capsys: pytest.CaptureFixture) -> None:
    """Verifies that an uninitialized branch is reported, not raised."""
    cli.main(["status"])

    assert "not initialized" in capsys.readouterr().out


def test_global_roster_outside_repository(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture,
    roster_file: Path,
) -> None:
    """Verifies that roster commands do not require a repository."""
    monkeypatch.chdir(tmp_path)

    cli.main(["list", "--global"])
    assert "No entries in global roster" in capsys.readouterr().out

    cli.main(["add", "--global", "alice", "Alice Johnson", "alice@x.com"])
    cli.main(["add", "--global", "bob", "Bob Wilson", "bob@x.com"])
    assert "Added 'bob'" in capsys.readouterr().out

    cli.main(["list", "--global"])
    out = capsys.readouterr().out
    assert out.index("alice") < out.index("bob")
    assert "roster" in roster_file.read_text()


def test_add_global_duplicate_alias(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    monkeypatch.chdir(tmp_path)
    cli.main(["add", "--global", "alice", "Alice Johnson", "alice@x.com"])

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["add", "--global", "alice", "Alice Smith", "smith@x.com"])

    assert exc_info.value.code == 1
    assert "already exists" in capsys.readouterr().err


def test_add_global_wrong_arity(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit):
        cli.main(["add", "--global", "alice", "alice@x.com"])

    assert "Usage: git pair add --global" in capsys.readouterr().err


def test_remove_command(git_repo: Path, capsys: pytest.CaptureFixture) -> None:
    cli.main(["init"])
    cli.main(["add", "John", "Doe", "john@x.com"])

    cli.main(["remove", "john@x.com"])

    assert "Removed co-author: John Doe <john@x.com>" in capsys.readouterr().out


def test_verbose_enables_debug_logging(mocker: MagicMock) -> None:
    mock_setup = mocker.patch("git_pair.cli.setup_logging")

    cli.main(["--verbose", "help"])

    mock_setup.assert_called_once_with(True)


def test_add_comment_like_name_is_refused(
    git_repo: Path, capsys: pytest.CaptureFixture
) -> None:
    """Verifies a name the config file would treat as a comment is not stored."""
    cli.main(["init"])
    capsys.readouterr()

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["add", "#1 Fan", "fan@x.com"])

    assert exc_info.value.code == 1
    assert "must not start with '#'" in capsys.readouterr().err
    cli.main(["status"])
    assert "No co-authors configured" in capsys.readouterr().out


def test_status_global_shows_roster(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    monkeypatch.chdir(tmp_path)
    cli.main(["add", "--global", "alice", "Alice Johnson", "alice@x.com"])
    capsys.readouterr()

    cli.main(["status", "--global"])

    out = capsys.readouterr().out
    assert "Global roster" in out
    assert "alice" in out
