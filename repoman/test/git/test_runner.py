"""Tests for git/runner.py."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from repoman.core.result import Err, Ok
from repoman.git.runner import CommandError, run_git

from ._fakes import make_completed_process


class TestRunGit:
    """Tests for run_git."""

    @patch("subprocess.run")
    def test_success_returns_trimmed_stdout(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(stdout="  main\n\n")

        result = run_git(tmp_path, ["branch", "--show-current"])

        assert result == Ok("main")

    @patch("subprocess.run")
    def test_invokes_git_in_working_directory(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process()

        run_git(tmp_path, ["status", "--porcelain"], timeout=12.5)

        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "status", "--porcelain"]
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["timeout"] == 12.5
        assert kwargs["encoding"] == "utf-8"
        assert kwargs["errors"] == "replace"

    @patch("subprocess.run")
    def test_failure_carries_stderr(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.return_value = make_completed_process(
            returncode=128,
            stderr="fatal: unable to access remote\n",
        )

        result = run_git(tmp_path, ["fetch"])

        assert isinstance(result, Err)
        assert result.error == CommandError(
            command="fetch",
            message="fatal: unable to access remote",
            returncode=128,
        )

    @patch("subprocess.run")
    def test_empty_stderr_falls_back_to_generic_message(
        self, mock_run: MagicMock, tmp_path: Path
    ) -> None:
        mock_run.return_value = make_completed_process(returncode=1, stderr="   ")

        result = run_git(tmp_path, ["pull"])

        assert isinstance(result, Err)
        assert result.error.message == "git pull failed"

    @patch("subprocess.run")
    def test_spawn_failure_is_an_error_value(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory", "git")

        result = run_git(tmp_path, ["fetch"])

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert "No such file or directory" in result.error.message

    @patch("subprocess.run")
    def test_timeout_is_handled_like_a_failure(self, mock_run: MagicMock, tmp_path: Path) -> None:
        mock_run.side_effect = subprocess.TimeoutExpired(cmd=["git", "fetch"], timeout=5)

        result = run_git(tmp_path, ["fetch"], timeout=5)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert "timed out" in result.error.message

    def test_missing_working_directory(self, tmp_path: Path) -> None:
        """A directory that does not exist cannot be used as cwd."""
        result = run_git(tmp_path / "does-not-exist", ["status"])

        assert isinstance(result, Err)
        assert result.error.message

    def test_command_error_str_is_message(self) -> None:
        error = CommandError(command="fetch", message="network unreachable")
        assert str(error) == "network unreachable"
