"""Shared options for CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer

from repoman.core.models import DiscoveryMode

ROOTS_ARGUMENT: list[Path] | None = typer.Argument(
    None,
    help="Root directories to search (default: config roots, else current dir)",
    show_default=False,
)

MODE_OPTION: DiscoveryMode | None = typer.Option(
    None,
    "--mode",
    "-m",
    case_sensitive=False,
    help="subfolders: repos one level below each root; workspace: each root itself",
)

JOBS_OPTION: int | None = typer.Option(
    None,
    "--jobs",
    "-j",
    min=1,
    help="Repositories processed in parallel (default: config, else 1)",
)
