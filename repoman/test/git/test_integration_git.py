"""End-to-end discovery and fetch against real git repositories.

Skipped when git is not installed.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

from repoman.core.models import DiscoveryRoot, RepositoryStatus, SyncOperation
from repoman.git.registry import RepositoryRegistry
from repoman.git.sync import BatchSynchronizer

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")

_IDENTITY = [
    "-c",
    "user.name=Repoman Test",
    "-c",
    "user.email=test@example.com",
    "-c",
    "commit.gpgsign=false",
    "-c",
    "init.defaultBranch=main",
]


def _git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *_IDENTITY, *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def isolated_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_TERMINAL_PROMPT", "0")
    return tmp_path


@pytest.fixture
def workspace(isolated_git: Path) -> Path:
    """ws/a tracks origin/main, ws/b is two commits ahead on feature and dirty."""
    base = isolated_git

    origin = base / "origin.git"
    _git(base, "init", "--bare", str(origin))
    _git(origin, "symbolic-ref", "HEAD", "refs/heads/main")

    seed = base / "seed"
    _git(base, "init", str(seed))
    _git(seed, "commit", "--allow-empty", "-m", "initial")
    _git(seed, "remote", "add", "origin", str(origin))
    _git(seed, "push", "origin", "main")

    ws = base / "ws"
    ws.mkdir()
    _git(ws, "clone", "-b", "main", str(origin), "a")
    _git(ws, "clone", "-b", "main", str(origin), "b")

    b = ws / "b"
    _git(b, "checkout", "-b", "feature", "origin/main")
    _git(b, "commit", "--allow-empty", "-m", "one")
    _git(b, "commit", "--allow-empty", "-m", "two")
    (b / "notes.txt").write_text("untracked\n")

    (ws / "c").mkdir()
    return ws


class TestRealGit:
    def test_discovery_and_status(self, workspace: Path) -> None:
        registry = RepositoryRegistry(lambda: [DiscoveryRoot(workspace)])

        by_name = {r.display_name: r.status for r in registry.get_children()}

        assert sorted(by_name) == ["a", "b"]
        assert by_name["a"] == RepositoryStatus(branch="main", dirty=False, ahead=0, behind=0)
        assert by_name["b"] == RepositoryStatus(branch="feature", dirty=True, ahead=2, behind=0)

    def test_repository_without_remote(self, workspace: Path) -> None:
        _git(workspace, "init", "d")

        registry = RepositoryRegistry(lambda: [DiscoveryRoot(workspace)])
        by_name = {r.display_name: r.status for r in registry.get_children()}

        status = by_name["d"]
        assert status is not None
        assert not status.is_unknown
        assert (status.ahead, status.behind) == (0, 0)

    @pytest.mark.skipif(sys.platform != "linux", reason="needs byte-string file names")
    def test_undecodable_file_name_still_resolves(self, workspace: Path) -> None:
        a = workspace / "a"
        _git(a, "config", "core.quotePath", "false")
        # Latin-1 name, not valid UTF-8
        with open(os.path.join(os.fsencode(a), b"caf\xe9.txt"), "wb") as f:
            f.write(b"x\n")

        registry = RepositoryRegistry(lambda: [DiscoveryRoot(workspace)])
        by_name = {r.display_name: r.status for r in registry.get_children()}

        assert by_name["a"] == RepositoryStatus(branch="main", dirty=True, ahead=0, behind=0)
        assert by_name["b"] is not None and by_name["b"].branch == "feature"

    def test_fetch_with_one_broken_remote(self, workspace: Path) -> None:
        _git(workspace / "b", "remote", "set-url", "origin", str(workspace / "gone.git"))
        registry = RepositoryRegistry(lambda: [DiscoveryRoot(workspace)])
        refreshed: list[int] = []
        registry.subscribe(lambda: refreshed.append(1))
        records = sorted(registry.get_children(), key=lambda r: r.display_name)

        outcomes = BatchSynchronizer(registry).run_batch(records, SyncOperation.FETCH)

        assert [(o.repository_name, o.succeeded) for o in outcomes] == [
            ("a", True),
            ("b", False),
        ]
        assert outcomes[1].error_detail
        assert refreshed == [1]
