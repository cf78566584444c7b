"""Status and list commands - show discovered repositories."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from repoman.cli.commands._helpers import JOBS_OPTION, MODE_OPTION, ROOTS_ARGUMENT
from repoman.cli.context import build_context
from repoman.core.models import DiscoveryMode, RepositoryRecord, RepositoryStatus
from repoman.git.discovery import find_repositories

_console = Console(legacy_windows=False)


def _render_divergence(st: RepositoryStatus) -> Text:
    text = Text()
    text.append(f"↑{st.ahead}", style="green" if st.ahead else "dim")
    text.append(" ")
    text.append(f"↓{st.behind}", style="red" if st.behind else "dim")
    return text


def _render_state(st: RepositoryStatus) -> Text:
    if st.is_unknown:
        return Text("?", style="red dim")
    if st.dirty:
        return Text("dirty", style="yellow")
    return Text("clean", style="green")


def build_table(records: Sequence[RepositoryRecord]) -> Table:
    """Build the status table shown by `status` and after a batch sync."""
    table = Table(title_justify="left", header_style="bold", pad_edge=False)
    table.add_column("Repository", style="bold", no_wrap=True)
    table.add_column("Branch", style="blue")
    table.add_column("State")
    table.add_column("Ahead/Behind", no_wrap=True)
    table.add_column("Path", style="dim", overflow="fold")

    for r in records:
        st = r.status or RepositoryStatus.unknown()
        branch = Text(st.branch, style="red" if st.is_unknown else "blue")
        table.add_row(r.display_name, branch, _render_state(st), _render_divergence(st), str(r.path))

    return table


def render_records(records: Sequence[RepositoryRecord]) -> None:
    if not records:
        _console.print("[dim]No repositories found[/dim]")
        return
    _console.print(build_table(records))


def records_to_json(records: Sequence[RepositoryRecord]) -> str:
    items: list[dict[str, object]] = []
    for r in records:
        st = r.status
        items.append(
            {
                "name": r.display_name,
                "path": str(r.path),
                "status": None
                if st is None
                else {
                    "branch": st.branch,
                    "dirty": st.dirty,
                    "ahead": st.ahead,
                    "behind": st.behind,
                },
            }
        )
    return json.dumps(items, indent=2)


def status(
    roots: list[Path] | None = ROOTS_ARGUMENT,
    mode: DiscoveryMode | None = MODE_OPTION,
    jobs: int | None = JOBS_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Print records as JSON"),
) -> None:
    """Show branch, dirty/clean and ahead/behind for every repository."""
    ctx = build_context(roots, mode, jobs)
    records = ctx.registry.get_children()

    if as_json:
        typer.echo(records_to_json(records))
        return

    render_records(records)


def list_repos(
    roots: list[Path] | None = ROOTS_ARGUMENT,
    mode: DiscoveryMode | None = MODE_OPTION,
) -> None:
    """List discovered repositories without querying git."""
    ctx = build_context(roots, mode)
    records = find_repositories(ctx.config.discovery_roots(roots, mode), ctx.console)
    if not roots:
        seen = {r.path for r in records}
        records.extend(
            RepositoryRecord(path=e.path, display_name=e.name)
            for e in ctx.config.repositories
            if e.path not in seen
        )

    if not records:
        ctx.console.print("No repositories found")
        return
    for r in records:
        typer.echo(f"{r.display_name}\t{r.path}")
