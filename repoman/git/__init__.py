"""Git operations across many repositories.

- runner: one git invocation, returned as a Result
- status: branch / dirty / ahead-behind for one repository, never failing
- discovery: find repositories under configured roots
- registry: current record set plus refresh notifications
- sync: batch fetch/pull with per-repository outcomes

Usage:
    from repoman.git import BatchSynchronizer, RepositoryRegistry

    registry = RepositoryRegistry(lambda: [DiscoveryRoot(Path.home() / "code")])
    records = registry.get_children()
    outcomes = BatchSynchronizer(registry).run_batch(records, SyncOperation.PULL)
"""

from repoman.git.discovery import discover, find_repositories, is_repository, resolve_all
from repoman.git.registry import RepositoryRegistry
from repoman.git.runner import CommandError, GitRunner, run_git
from repoman.git.status import parse_ahead_behind, resolve_status
from repoman.git.sync import BatchSynchronizer, summarize

__all__ = [
    # runner
    "CommandError",
    "GitRunner",
    "run_git",
    # status
    "parse_ahead_behind",
    "resolve_status",
    # discovery
    "discover",
    "find_repositories",
    "is_repository",
    "resolve_all",
    # registry
    "RepositoryRegistry",
    # sync
    "BatchSynchronizer",
    "summarize",
]
