"""Repository registry: the current record set plus change notifications.

get_children() recomputes everything from scratch; refresh() only tells
subscribers that they should call get_children() again. Keeping the two apart
lets the batch synchronizer ask for a refresh without doing discovery itself.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from repoman.core.models import DiscoveryRoot, RepositoryRecord
from repoman.output.console import ConsoleProtocol

from .discovery import StatusResolver, discover, resolve_all
from .status import resolve_status

__all__ = ["Listener", "RepositoryRegistry", "RootsProvider"]

Listener = Callable[[], None]
RootsProvider = Callable[[], Iterable[DiscoveryRoot]]


class RepositoryRegistry:
    """Holds the most recent discovery pass and notifies subscribers on refresh.

    Attributes:
        jobs: Parallel status resolutions per pass
    """

    def __init__(
        self,
        roots_provider: RootsProvider,
        *,
        extra: Callable[[], Iterable[RepositoryRecord]] | None = None,
        resolve: StatusResolver = resolve_status,
        jobs: int = 1,
        console: ConsoleProtocol | None = None,
    ) -> None:
        """Initialize registry.

        Args:
            roots_provider: Called once at the start of every pass for the roots
            extra: Explicitly configured repositories appended after discovery
            resolve: Status resolver for each record
            jobs: Parallel status resolutions per pass
            console: Optional console for diagnostics
        """
        self._roots_provider = roots_provider
        self._extra = extra
        self._resolve = resolve
        self.jobs = jobs
        self._console = console
        self._records: tuple[RepositoryRecord, ...] = ()
        self._listeners: list[Listener] = []
        self._notifying = False
        self._pending = False

    @property
    def records(self) -> tuple[RepositoryRecord, ...]:
        """Snapshot of the last pass (empty before the first get_children())."""
        return self._records

    def get_children(self) -> list[RepositoryRecord]:
        """Run a full discovery pass, replace the snapshot and return it."""
        roots = list(self._roots_provider())
        records = discover(roots, resolve=self._resolve, jobs=self.jobs, console=self._console)

        if self._extra is not None:
            seen = {r.path for r in records}
            explicit = [r for r in self._extra() if r.path not in seen]
            records.extend(resolve_all(explicit, resolve=self._resolve, jobs=self.jobs))

        self._records = tuple(records)
        if self._console is not None:
            self._console.debug(f"discovered {len(records)} repositories under {len(roots)} roots")
        return list(records)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def refresh(self) -> None:
        """Notify subscribers that the record set is stale.

        A refresh requested while listeners are running is coalesced into a
        single extra round once the current round finishes.
        """
        if self._notifying:
            self._pending = True
            return

        self._notifying = True
        try:
            while True:
                self._pending = False
                for listener in list(self._listeners):
                    listener()
                if not self._pending:
                    break
        finally:
            self._notifying = False
            self._pending = False
