"""Fetch and pull commands - batch remote synchronization."""

from __future__ import annotations

from pathlib import Path

import typer

from repoman.cli.commands._helpers import JOBS_OPTION, MODE_OPTION, ROOTS_ARGUMENT
from repoman.cli.commands.status import render_records
from repoman.cli.context import CLIContext, build_context
from repoman.core.errors import ErrorCode
from repoman.core.models import DiscoveryMode, RepositoryRecord, SyncOperation, SyncOutcome
from repoman.git.sync import summarize


def run_sync(ctx: CLIContext, operation: SyncOperation, *, show_status: bool) -> int:
    """Run a batch operation and report it. Returns the exit code."""
    records = ctx.registry.get_children()
    if not records:
        ctx.console.warning("no repositories found")
        return int(ErrorCode.OK)

    refreshed: list[RepositoryRecord] = []

    def on_refresh() -> None:
        # The registry only signals; re-requesting the records is our job
        refreshed[:] = ctx.registry.get_children()

    unsubscribe = ctx.registry.subscribe(on_refresh) if show_status else None

    def on_outcome(done: int, total: int, outcome: SyncOutcome) -> None:
        prefix = f"[{done}/{total}]"
        if outcome.succeeded:
            ctx.console.success(f"{prefix} {operation.past_tense} {outcome.repository_name}")
        else:
            ctx.console.error(f"{prefix} {outcome.repository_name}: {outcome.error_detail}")

    ctx.console.header(f"{operation.value.capitalize()} {len(records)} repositories")
    try:
        outcomes = ctx.synchronizer.run_batch(records, operation, on_outcome=on_outcome)
    finally:
        if unsubscribe is not None:
            unsubscribe()

    counts = summarize(outcomes)
    ctx.console.newline()
    if counts["failed"]:
        ctx.console.warning(
            f"{counts['succeeded']} of {counts['total']} succeeded, {counts['failed']} failed"
        )
    else:
        ctx.console.success(f"{operation.past_tense} {counts['total']} repositories")

    if show_status:
        ctx.console.newline()
        render_records(refreshed)

    return int(ErrorCode.SYNC_ERROR) if counts["failed"] else int(ErrorCode.OK)


def fetch(
    roots: list[Path] | None = ROOTS_ARGUMENT,
    mode: DiscoveryMode | None = MODE_OPTION,
    jobs: int | None = JOBS_OPTION,
    no_status: bool = typer.Option(False, "--no-status", help="Don't show status afterwards"),
) -> None:
    """Fetch every repository from its default remote."""
    ctx = build_context(roots, mode, jobs)
    code = run_sync(ctx, SyncOperation.FETCH, show_status=not no_status)
    if code:
        raise typer.Exit(code=code)


def pull(
    roots: list[Path] | None = ROOTS_ARGUMENT,
    mode: DiscoveryMode | None = MODE_OPTION,
    jobs: int | None = JOBS_OPTION,
    no_status: bool = typer.Option(False, "--no-status", help="Don't show status afterwards"),
) -> None:
    """Pull every repository (git's default fast-forward/merge policy)."""
    ctx = build_context(roots, mode, jobs)
    code = run_sync(ctx, SyncOperation.PULL, show_status=not no_status)
    if code:
        raise typer.Exit(code=code)
