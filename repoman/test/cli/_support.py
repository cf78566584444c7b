"""Shared setup for command tests: an isolated environment and a scripted git."""

from __future__ import annotations

from pathlib import Path

import pytest

import repoman.cli.context as context_mod
from repoman.cli.context import VERBOSE_ENV_VAR
from repoman.core.config import CONFIG_ENV_VAR
from repoman.platform.paths import clear_caches

from ..git._fakes import FakeGit, make_repo_dir, repo_responses


def isolate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and cwd at tmp_path so no real config is picked up."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv(CONFIG_ENV_VAR, "")
    monkeypatch.setenv(VERBOSE_ENV_VAR, "")
    monkeypatch.chdir(tmp_path)
    clear_caches()
    return home


def make_workspace(tmp_path: Path) -> Path:
    """ws/a and ws/b are repositories, ws/c is a plain directory."""
    ws = tmp_path / "ws"
    make_repo_dir(ws, "a")
    make_repo_dir(ws, "b")
    (ws / "c").mkdir()
    return ws


def install_git(monkeypatch: pytest.MonkeyPatch, git: FakeGit | None = None) -> FakeGit:
    if git is None:
        git = FakeGit(
            {
                "a": repo_responses(branch="main"),
                "b": repo_responses(branch="feature", porcelain=" M app.py", counts="2\t0"),
            }
        )
    monkeypatch.setattr(context_mod, "run_git", git)
    return git
