"""Repository discovery under configured roots.

Usage:
    from repoman.git.discovery import discover

    roots = [DiscoveryRoot(Path("~/code").expanduser())]
    for record in discover(roots):
        print(f"{record.display_name}: {record.status.describe()}")
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from repoman.core.models import (
    DiscoveryMode,
    DiscoveryRoot,
    RepositoryRecord,
    RepositoryStatus,
)
from repoman.output.console import ConsoleProtocol

from .status import resolve_status

__all__ = [
    "GIT_MARKER",
    "StatusResolver",
    "discover",
    "find_repositories",
    "is_repository",
    "resolve_all",
]

GIT_MARKER = ".git"

StatusResolver = Callable[[Path], RepositoryStatus]


def is_repository(path: Path) -> bool:
    """True if ``path`` holds a ``.git`` marker (directory, or file for worktrees)."""
    try:
        return (path / GIT_MARKER).exists()
    except OSError:
        return False


def _subfolder_repositories(root: Path) -> list[RepositoryRecord]:
    records: list[RepositoryRecord] = []
    # Filesystem enumeration order is kept; no sorting
    for child in root.iterdir():
        try:
            if not child.is_dir():
                continue
        except OSError:
            continue
        if is_repository(child):
            records.append(RepositoryRecord(path=child, display_name=child.name))
    return records


def find_repositories(
    roots: Iterable[DiscoveryRoot],
    console: ConsoleProtocol | None = None,
) -> list[RepositoryRecord]:
    """Enumerate repositories without resolving their status.

    Roots are processed in order. A root that is missing or unreadable yields
    no records and a warning; it never stops the other roots.
    """
    records: list[RepositoryRecord] = []

    for root in roots:
        if root.mode is DiscoveryMode.WORKSPACE:
            try:
                is_dir = root.path.is_dir()
            except OSError as e:
                if console is not None:
                    console.warning(f"skipping root {root.path}: {e.strerror or e}")
                continue
            if not is_dir:
                if console is not None:
                    console.warning(f"skipping root {root.path}: not a directory")
                continue
            if is_repository(root.path):
                records.append(RepositoryRecord(path=root.path, display_name=root.path.name))
            continue

        try:
            records.extend(_subfolder_repositories(root.path))
        except OSError as e:
            if console is not None:
                console.warning(f"skipping root {root.path}: {e.strerror or e}")

    return records


def resolve_all(
    records: list[RepositoryRecord],
    *,
    resolve: StatusResolver = resolve_status,
    jobs: int = 1,
) -> list[RepositoryRecord]:
    """Attach a resolved status to every record, keeping the input order.

    With ``jobs > 1`` the queries run on a thread pool; executor.map keeps
    results aligned with the input.
    """
    if jobs <= 1 or len(records) <= 1:
        return [r.with_status(resolve(r.path)) for r in records]

    with ThreadPoolExecutor(max_workers=jobs) as executor:
        statuses = list(executor.map(resolve, [r.path for r in records]))
    return [r.with_status(s) for r, s in zip(records, statuses, strict=True)]


def discover(
    roots: Iterable[DiscoveryRoot],
    *,
    resolve: StatusResolver = resolve_status,
    jobs: int = 1,
    console: ConsoleProtocol | None = None,
) -> list[RepositoryRecord]:
    """Run one discovery pass: enumerate repositories and resolve their status.

    Args:
        roots: Roots to search, each with its own discovery mode
        resolve: Status resolver applied to each discovered path
        jobs: Number of parallel status resolutions
        console: Optional console for warnings about skipped roots

    Returns:
        Fresh records, in enumeration order, root by root
    """
    found = find_repositories(roots, console)
    return resolve_all(found, resolve=resolve, jobs=jobs)
