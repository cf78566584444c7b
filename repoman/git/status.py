"""Status resolution for a single repository.

resolve_status() never raises and never returns an error. Failure of the
core queries (branch, dirtiness) collapses to RepositoryStatus.unknown();
failure of the upstream query (usually: no upstream configured) leaves the
ahead/behind counts at zero.
"""

from __future__ import annotations

import re
from pathlib import Path

from repoman.core.config import QUERY_TIMEOUT_SECONDS
from repoman.core.models import DETACHED_BRANCH, RepositoryStatus
from repoman.core.result import Err, Ok

from .runner import GitRunner, run_git

__all__ = [
    "AHEAD_BEHIND_ARGS",
    "BRANCH_ARGS",
    "DIRTY_ARGS",
    "parse_ahead_behind",
    "resolve_status",
]

BRANCH_ARGS = ("branch", "--show-current")
DIRTY_ARGS = ("status", "--porcelain")
AHEAD_BEHIND_ARGS = ("rev-list", "--left-right", "--count", "HEAD...@{upstream}")

_COUNTS_RE = re.compile(r"^(\d+)\s+(\d+)$")


def parse_ahead_behind(output: str) -> tuple[int, int]:
    """Parse ``rev-list --left-right --count`` output into (ahead, behind).

    The left side of ``HEAD...@{upstream}`` is local-only commits, so the
    first number is ``ahead``. Anything other than two non-negative integers
    gives (0, 0).
    """
    match = _COUNTS_RE.match(output.strip())
    if not match:
        return (0, 0)
    return (int(match.group(1)), int(match.group(2)))


def resolve_status(
    path: Path,
    *,
    runner: GitRunner = run_git,
    timeout: float | None = QUERY_TIMEOUT_SECONDS,
) -> RepositoryStatus:
    """Compute branch, dirtiness and ahead/behind for the repository at ``path``."""
    match runner(path, BRANCH_ARGS, timeout=timeout):
        case Err(_):
            return RepositoryStatus.unknown()
        case Ok(branch_output):
            branch = branch_output.strip() or DETACHED_BRANCH

    match runner(path, DIRTY_ARGS, timeout=timeout):
        case Err(_):
            return RepositoryStatus.unknown()
        case Ok(porcelain):
            dirty = porcelain.strip() != ""

    ahead, behind = 0, 0
    counts = runner(path, AHEAD_BEHIND_ARGS, timeout=timeout)
    if isinstance(counts, Ok):
        ahead, behind = parse_ahead_behind(counts.value)

    return RepositoryStatus(branch=branch, dirty=dirty, ahead=ahead, behind=behind)
