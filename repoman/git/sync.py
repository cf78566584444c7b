"""Batch fetch/pull across many repositories.

Usage:
    synchronizer = BatchSynchronizer(registry)
    outcomes = synchronizer.run_batch(registry.get_children(), SyncOperation.FETCH)
    for outcome in outcomes:
        print(outcome.repository_name, outcome.succeeded, outcome.error_detail)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

from repoman.core.config import NETWORK_TIMEOUT_SECONDS
from repoman.core.models import RepositoryRecord, SyncOperation, SyncOutcome
from repoman.core.result import Err, Ok
from repoman.output.console import ConsoleProtocol

from .runner import GitRunner, run_git

__all__ = ["BatchSynchronizer", "OutcomeCallback", "Refreshable", "summarize"]

OutcomeCallback = Callable[[int, int, SyncOutcome], None]


class Refreshable(Protocol):
    """Anything that can be told its view is stale (the registry)."""

    def refresh(self) -> None: ...


class BatchSynchronizer:
    """Run one remote operation over a list of repositories.

    Every repository is processed independently: a failure becomes a failed
    SyncOutcome and the batch continues. The registry is refreshed exactly once,
    after all operations have finished.
    """

    def __init__(
        self,
        registry: Refreshable,
        *,
        runner: GitRunner = run_git,
        jobs: int = 1,
        timeout: float | None = NETWORK_TIMEOUT_SECONDS,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self._registry = registry
        self._runner = runner
        self._jobs = jobs
        self._timeout = timeout
        self._console = console

    def _sync_one(self, record: RepositoryRecord, operation: SyncOperation) -> SyncOutcome:
        match self._runner(record.path, operation.git_args, timeout=self._timeout):
            case Ok(output):
                return SyncOutcome(
                    repository_name=record.display_name,
                    succeeded=True,
                    path=record.path,
                    output=output,
                )
            case Err(e):
                if self._console is not None:
                    self._console.debug(f"{operation} {record.path}: exit {e.returncode}")
                return SyncOutcome(
                    repository_name=record.display_name,
                    succeeded=False,
                    error_detail=e.message,
                    path=record.path,
                )

    def run_batch(
        self,
        records: Sequence[RepositoryRecord],
        operation: SyncOperation,
        *,
        on_outcome: OutcomeCallback | None = None,
    ) -> list[SyncOutcome]:
        """Run ``operation`` on every record.

        Args:
            records: Repositories to synchronize, in the order outcomes are wanted
            operation: FETCH or PULL
            on_outcome: Called with (done, total, outcome) as each outcome is
                known; in parallel mode the calls follow input order

        Returns:
            One SyncOutcome per record, in input order
        """
        total = len(records)
        outcomes: list[SyncOutcome] = []

        try:
            if self._jobs <= 1 or total <= 1:
                for record in records:
                    outcomes.append(self._sync_one(record, operation))
                    if on_outcome is not None:
                        on_outcome(len(outcomes), total, outcomes[-1])
            else:
                with ThreadPoolExecutor(max_workers=self._jobs) as executor:
                    futures = [executor.submit(self._sync_one, r, operation) for r in records]
                    # Collect in submission order; waits for each in turn
                    for future in futures:
                        outcomes.append(future.result())
                        if on_outcome is not None:
                            on_outcome(len(outcomes), total, outcomes[-1])
        finally:
            self._registry.refresh()

        return outcomes


def summarize(outcomes: Sequence[SyncOutcome]) -> dict[str, int]:
    """Count outcomes: total, succeeded, failed."""
    succeeded = sum(1 for o in outcomes if o.succeeded)
    return {
        "total": len(outcomes),
        "succeeded": succeeded,
        "failed": len(outcomes) - succeeded,
    }
