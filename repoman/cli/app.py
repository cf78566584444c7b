from __future__ import annotations

import os
from pathlib import Path

import typer

from repoman import __version__
from repoman.cli.commands.status import list_repos, status
from repoman.cli.commands.sync import fetch, pull
from repoman.cli.context import VERBOSE_ENV_VAR
from repoman.core.config import CONFIG_ENV_VAR
from repoman.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(status)
app.command("list")(list_repos)
app.command()(fetch)
app.command()(pull)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (overrides $REPOMAN_CONFIG and default locations)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show diagnostics."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if config is not None:
        try:
            path = config.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --config: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not path.is_file():
            typer.echo(f"error: config file not found: {path}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        os.environ[CONFIG_ENV_VAR] = str(path)

    if verbose:
        os.environ[VERBOSE_ENV_VAR] = "1"

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


def main() -> None:
    app()
