"""Single git invocation against a working directory.

Usage:
    match run_git(repo_path, ["branch", "--show-current"]):
        case Ok(branch):
            print(branch)
        case Err(e):
            print(f"{e.command}: {e.message}")
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from repoman.core.result import Err, Ok, Result
from repoman.platform.process import run as run_process

__all__ = ["CommandError", "GitRunner", "run_git"]

GIT_EXECUTABLE = "git"


@dataclass(frozen=True, slots=True)
class CommandError:
    """A git invocation exited non-zero, timed out or could not be spawned.

    Attributes:
        command: The git subcommand that failed (e.g. "fetch")
        message: Captured stderr, or a generic failure message if stderr was empty
        returncode: Process return code (-1 if not spawned or timed out)
    """

    command: str
    message: str
    returncode: int = 1

    def __str__(self) -> str:
        return self.message


class GitRunner(Protocol):
    """Callable shape of run_git, so collaborators can be given a fake."""

    def __call__(
        self,
        working_directory: Path,
        args: Sequence[str],
        *,
        timeout: float | None = None,
    ) -> Result[str, CommandError]: ...


def run_git(
    working_directory: Path,
    args: Sequence[str],
    *,
    timeout: float | None = None,
) -> Result[str, CommandError]:
    """Run ``git <args>`` with ``working_directory`` as the process cwd.

    Args:
        working_directory: Directory the command runs in
        args: git arguments, without the leading "git"
        timeout: Seconds before the process is killed (None for no limit)

    Returns:
        Ok(stdout) with surrounding whitespace removed, or Err(CommandError)
    """
    command = " ".join(args[:1]) or GIT_EXECUTABLE
    result = run_process([GIT_EXECUTABLE, *args], cwd=working_directory, timeout=timeout)
    match result:
        case Err(e):
            return Err(
                CommandError(
                    command=command,
                    message=e.stderr.strip() or f"git {command} failed",
                    returncode=e.returncode,
                )
            )
        case Ok(stdout):
            return Ok(stdout.strip())
