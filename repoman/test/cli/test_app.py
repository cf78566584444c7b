"""Tests for the top-level typer app: global options and wiring."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from repoman import __version__
from repoman.cli.app import app

from ..git._fakes import FakeGit, fail, repo_responses
from ._support import install_git, isolate, make_workspace

runner = CliRunner()


@pytest.fixture
def ws(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    isolate(tmp_path, monkeypatch)
    install_git(monkeypatch)
    return make_workspace(tmp_path)


def test_version(ws: Path) -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_no_command_shows_help(ws: Path) -> None:
    result = runner.invoke(app, [])

    assert "status" in result.output


def test_commands_registered(ws: Path) -> None:
    result = runner.invoke(app, ["--help"])

    for name in ("status", "list", "fetch", "pull"):
        assert name in result.output


def test_status_json_through_app(ws: Path) -> None:
    result = runner.invoke(app, ["status", "--json", str(ws)])

    assert result.exit_code == 0
    names = sorted(i["name"] for i in json.loads(result.output))
    assert names == ["a", "b"]


def test_explicit_config(ws: Path, tmp_path: Path) -> None:
    config = tmp_path / "custom.toml"
    config.write_text(f'roots = ["{ws.as_posix()}"]\n')

    result = runner.invoke(app, ["--config", str(config), "list"])

    assert result.exit_code == 0
    assert sorted(line.split("\t")[0] for line in result.output.splitlines()) == ["a", "b"]


def test_missing_config_is_user_error(ws: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["--config", str(tmp_path / "nope.toml"), "status"])

    assert result.exit_code == 1
    assert "config file not found" in result.output


def test_config_from_environment(
    ws: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config = tmp_path / "env.toml"
    config.write_text("roots = [\n")
    monkeypatch.setenv("REPOMAN_CONFIG", str(config))

    result = runner.invoke(app, ["status", str(ws)])

    assert result.exit_code == 2
    assert "Invalid TOML" in result.output


def test_invalid_mode_rejected(ws: Path) -> None:
    result = runner.invoke(app, ["status", "--mode", "nested", str(ws)])

    assert result.exit_code == 2


def test_fetch_failure_exit_code(ws: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    b = repo_responses()
    b[("fetch",)] = fail("network unreachable", "fetch", 128)
    install_git(monkeypatch, FakeGit({"a": repo_responses(), "b": b}))

    result = runner.invoke(app, ["fetch", "--no-status", str(ws)])

    assert result.exit_code == 3
    assert "network unreachable" in result.output
