from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from repoman.core.config import Config, find_config_path, load_config
from repoman.core.errors import ErrorCode
from repoman.core.models import DiscoveryMode, DiscoveryRoot, RepositoryRecord, RepositoryStatus
from repoman.core.result import Err
from repoman.git.registry import RepositoryRegistry
from repoman.git.runner import run_git
from repoman.git.status import resolve_status
from repoman.git.sync import BatchSynchronizer
from repoman.output.console import ConsoleProtocol, RichConsole

VERBOSE_ENV_VAR = "REPOMAN_VERBOSE"


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    config_path: Path | None
    console: ConsoleProtocol
    registry: RepositoryRegistry
    synchronizer: BatchSynchronizer


def _load_config(console: ConsoleProtocol) -> tuple[Config, Path | None]:
    # Explicit paths (--config, $REPOMAN_CONFIG) must exist; implicit ones
    # are only returned when present.
    path = find_config_path()
    if path is None:
        return Config(), None

    result = load_config(path)
    if isinstance(result, Err):
        console.error(result.error.message)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    return result.value, path


def build_context(
    roots: list[Path] | None = None,
    mode: DiscoveryMode | None = None,
    jobs: int | None = None,
) -> CLIContext:
    console = RichConsole(verbose=os.environ.get(VERBOSE_ENV_VAR) == "1")
    config, config_path = _load_config(console)

    parallel = jobs or config.jobs

    def roots_provider() -> list[DiscoveryRoot]:
        # Read at the start of every pass, never cached
        return config.discovery_roots(roots, mode)

    def explicit_repositories() -> list[RepositoryRecord]:
        # Explicit entries only apply when roots come from config
        if roots:
            return []
        return [RepositoryRecord(path=e.path, display_name=e.name) for e in config.repositories]

    def resolve(path: Path) -> RepositoryStatus:
        return resolve_status(path, runner=run_git, timeout=config.timeouts.query)

    registry = RepositoryRegistry(
        roots_provider,
        extra=explicit_repositories,
        resolve=resolve,
        jobs=parallel,
        console=console,
    )
    synchronizer = BatchSynchronizer(
        registry,
        runner=run_git,
        jobs=parallel,
        timeout=config.timeouts.network,
        console=console,
    )

    if config_path is not None:
        console.debug(f"config: {config_path}")

    return CLIContext(
        config=config,
        config_path=config_path,
        console=console,
        registry=registry,
        synchronizer=synchronizer,
    )
