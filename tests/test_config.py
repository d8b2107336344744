"""Tests for the configuration management subsystem."""

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from git_pair.config import Config, parse_sources


def test_config_defaults() -> None:
    """Verifies that the configuration initializes with sensible defaults."""
    conf = Config()
    assert conf.roster.file is None
    assert conf.hook.commit_sources == ["message"]
    assert conf.hook.skip_if_present is True


def test_config_load_merges_layers(tmp_path: Path, mocker: MagicMock) -> None:
    """Verifies the cascading merge logic (Defaults -> Global -> Local)."""
    global_config_path = tmp_path / "global_config.toml"
    global_config_path.write_text(
        '[roster]\nfile = "~/team/roster"\n'
        '[hook]\ncommit_sources = ["message", "template"]\n'
    )
    local_toml = tmp_path / ".git-pair.toml"
    local_toml.write_text("[hook]\nskip_if_present = false\n")

    mocker.patch("git_pair.constants.CONFIG_FILE", global_config_path)

    conf = Config.load(repo_path=tmp_path)

    assert conf.roster.file == "~/team/roster"  # From Global
    assert conf.hook.commit_sources == ["message", "template"]  # From Global
    assert conf.hook.skip_if_present is False  # From Local


def test_config_load_from_pyproject(tmp_path: Path) -> None:
    """Verifies that configuration can be loaded from pyproject.toml."""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[tool.git-pair.hook]\ncommit_sources = ["template"]\n')

    conf = Config.load(repo_path=tmp_path)

    assert conf.hook.commit_sources == ["template"]


def test_local_file_wins_over_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.git-pair.roster]\nfile = "from-pyproject"\n'
    )
    (tmp_path / ".git-pair.toml").write_text('[roster]\nfile = "from-local"\n')

    assert Config.load(repo_path=tmp_path).roster.file == "from-local"


def test_parse_sources_drops_unknown(caplog: pytest.LogCaptureFixture) -> None:
    assert parse_sources(["Message", "rebase", "message", "squash"]) == [
        "message",
        "squash",
    ]
    assert parse_sources("template") == ["template"]
    assert "Unknown commit source 'rebase'" in caplog.text


def test_config_invalid_keys_and_values(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Verifies that unknown keys are ignored and invalid values use defaults."""
    caplog.set_level(logging.WARNING)

    local_toml = tmp_path / ".git-pair.toml"
    local_toml.write_text(
        "[hook]\n"
        'skip_if_present = "sometimes"\n'
        "commit_sources = 5\n"
        'fake_setting = "ignored"\n'
        "[roster]\n"
        "file = 42\n"
    )

    conf = Config.load(repo_path=tmp_path)

    assert conf.hook.skip_if_present is True
    assert conf.hook.commit_sources == ["message"]
    assert conf.roster.file is None

    assert "Unknown config keys in [hook]: fake_setting" in caplog.text
    assert "Config error in [hook].skip_if_present" in caplog.text
    assert "Config error in [hook].commit_sources" in caplog.text
    assert "Config error in [roster].file" in caplog.text


def test_config_syntax_error_keeps_defaults(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / ".git-pair.toml").write_text("[hook\nbroken")

    conf = Config.load(repo_path=tmp_path)

    assert conf == Config()
    assert "Config syntax error" in caplog.text
