"""Domain types shared by discovery, status resolution and batch sync.

All types are frozen: a discovery pass builds fresh records every time and
hands them out as read-only snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

__all__ = [
    "DETACHED_BRANCH",
    "UNKNOWN_BRANCH",
    "DiscoveryMode",
    "DiscoveryRoot",
    "RepositoryRecord",
    "RepositoryStatus",
    "SyncOperation",
    "SyncOutcome",
]

DETACHED_BRANCH = "detached"
UNKNOWN_BRANCH = "unknown"


class DiscoveryMode(StrEnum):
    """How a configured root is searched for repositories."""

    SUBFOLDERS = "subfolders"  # each immediate child directory that is a repo
    WORKSPACE = "workspace"  # the root itself, if it is a repo

    @classmethod
    def parse(cls, value: str | None) -> DiscoveryMode:
        """Map a raw setting to a mode.

        Only the exact value ``"workspace"`` selects WORKSPACE; any other value
        (including other spellings such as ``"Workspace"``), or no value, selects
        SUBFOLDERS.
        """
        if value == cls.WORKSPACE.value:
            return cls.WORKSPACE
        return cls.SUBFOLDERS


@dataclass(frozen=True, slots=True)
class DiscoveryRoot:
    """One configured root directory plus its discovery mode."""

    path: Path
    mode: DiscoveryMode = DiscoveryMode.SUBFOLDERS


@dataclass(frozen=True, slots=True)
class RepositoryStatus:
    """Concise status of one repository.

    Attributes:
        branch: Current branch, "detached" for a detached HEAD, or "unknown"
            when the status could not be determined
        dirty: True if the working tree has any uncommitted change
        ahead: Commits present locally but not upstream
        behind: Commits present upstream but not locally
    """

    branch: str
    dirty: bool = False
    ahead: int = 0
    behind: int = 0

    def __post_init__(self) -> None:
        if not self.branch:
            raise ValueError("branch must not be empty")
        if self.ahead < 0 or self.behind < 0:
            raise ValueError(f"ahead/behind must be >= 0 (got {self.ahead}/{self.behind})")

    @classmethod
    def unknown(cls) -> RepositoryStatus:
        """Sentinel used when the repository cannot be queried at all."""
        return cls(branch=UNKNOWN_BRANCH)

    @property
    def is_unknown(self) -> bool:
        return self.branch == UNKNOWN_BRANCH

    @property
    def is_detached(self) -> bool:
        return self.branch == DETACHED_BRANCH

    @property
    def has_divergence(self) -> bool:
        """True if the branch is ahead of or behind its upstream."""
        return bool(self.ahead or self.behind)

    def describe(self) -> str:
        """One-line summary, e.g. ``main · dirty · ↑2 ↓0``."""
        state = "dirty" if self.dirty else "clean"
        return f"{self.branch} · {state} · ↑{self.ahead} ↓{self.behind}"


@dataclass(frozen=True, slots=True)
class RepositoryRecord:
    """A repository found by one discovery pass.

    Attributes:
        path: Absolute repository location; unique within a pass
        display_name: Human label, the last path segment by default
        status: Resolved status, None until resolved
    """

    path: Path
    display_name: str
    status: RepositoryStatus | None = None

    def with_status(self, status: RepositoryStatus) -> RepositoryRecord:
        return RepositoryRecord(path=self.path, display_name=self.display_name, status=status)


class SyncOperation(StrEnum):
    """Remote synchronization run by a batch."""

    FETCH = "fetch"
    PULL = "pull"

    @property
    def git_args(self) -> list[str]:
        return [self.value]

    @property
    def past_tense(self) -> str:
        return "Fetched" if self is SyncOperation.FETCH else "Pulled"


@dataclass(frozen=True, slots=True)
class SyncOutcome:
    """Result of a batch operation for one repository.

    Attributes:
        repository_name: Display name of the repository
        succeeded: True if the git invocation exited successfully
        error_detail: Captured diagnostic text; set iff the operation failed
        path: Repository path
        output: Tool output on success (may be empty)
    """

    repository_name: str
    succeeded: bool
    error_detail: str | None = None
    path: Path | None = None
    output: str = ""

    def __post_init__(self) -> None:
        if self.succeeded and self.error_detail is not None:
            raise ValueError("a successful outcome carries no error detail")
        if not self.succeeded and self.error_detail is None:
            raise ValueError("a failed outcome requires an error detail")
