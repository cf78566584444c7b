"""Typed configuration loading and access.

The config file is TOML:

    roots = ["~/code"]
    repository_root = "subfolders"   # or "workspace"
    jobs = 1

    [timeouts]
    query = 30
    network = 180

    [[repositories]]
    name = "dotfiles"
    path = "~/.dotfiles"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from repoman.platform.paths import expand_path, user_config_dir

from .models import DiscoveryMode, DiscoveryRoot
from .result import Err, Ok, Result
from .structured import (
    StrDict,
    as_obj_list,
    as_str_dict,
    get_int,
    get_number,
    get_str,
    get_str_list,
    get_table,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "Config",
    "ConfigError",
    "RepositoryEntry",
    "TimeoutsConfig",
    "find_config_path",
    "load_config",
    "load_config_or_default",
]

CONFIG_ENV_VAR = "REPOMAN_CONFIG"
LOCAL_CONFIG_NAME = "repoman.toml"

# Per-invocation git timeouts, in seconds
QUERY_TIMEOUT_SECONDS = 30.0
NETWORK_TIMEOUT_SECONDS = 3 * 60.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class TimeoutsConfig:
    """Timeouts for local queries and for network operations (fetch/pull)."""

    query: float = QUERY_TIMEOUT_SECONDS
    network: float = NETWORK_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class RepositoryEntry:
    """An explicitly listed repository, outside of root discovery."""

    name: str
    path: Path


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    roots: tuple[Path, ...] = ()
    mode: DiscoveryMode = DiscoveryMode.SUBFOLDERS
    jobs: int = 1
    timeouts: TimeoutsConfig = field(default_factory=TimeoutsConfig)
    repositories: tuple[RepositoryEntry, ...] = ()

    def discovery_roots(
        self,
        roots: list[Path] | None = None,
        mode: DiscoveryMode | None = None,
    ) -> list[DiscoveryRoot]:
        """Build discovery roots, letting explicit arguments override config.

        Falls back to the current directory when neither arguments nor
        config name a root.
        """
        paths = list(roots) if roots else list(self.roots)
        if not paths:
            paths = [Path.cwd()]
        chosen = mode or self.mode
        return [DiscoveryRoot(path=expand_path(p), mode=chosen) for p in paths]

    @classmethod
    def from_dict(cls, data: Mapping[str, object], base_dir: Path | None = None) -> Config:
        """Create Config from a mapping (parsed TOML).

        Relative paths are anchored at ``base_dir`` (the config file's directory).
        """
        timeouts: StrDict = get_table(data, "timeouts") or {}
        # Matched exactly, without the stripping get_str applies
        raw_mode = data.get("repository_root")

        repositories: list[RepositoryEntry] = []
        for item in as_obj_list(data.get("repositories")) or []:
            table = as_str_dict(item)
            if table is None:
                raise ValueError("each [[repositories]] entry must be a table")
            raw_path = get_str(table, "path")
            if raw_path is None:
                raise ValueError("[[repositories]] entry is missing 'path'")
            path = expand_path(raw_path, base_dir)
            repositories.append(RepositoryEntry(name=get_str(table, "name") or path.name, path=path))

        return cls(
            roots=tuple(expand_path(r, base_dir) for r in get_str_list(data, "roots")),
            mode=DiscoveryMode.parse(raw_mode if isinstance(raw_mode, str) else None),
            jobs=get_int(data, "jobs") or 1,
            timeouts=TimeoutsConfig(
                query=get_number(timeouts, "query") or QUERY_TIMEOUT_SECONDS,
                network=get_number(timeouts, "network") or NETWORK_TIMEOUT_SECONDS,
            ),
            repositories=tuple(repositories),
        )


def find_config_path(explicit: Path | None = None) -> Path | None:
    """Locate the config file.

    Order: explicit path, $REPOMAN_CONFIG, ./repoman.toml, user config dir.
    An explicit or environment path is returned even if it does not exist, so
    that loading reports it; the implicit locations are only returned if present.
    """
    if explicit is not None:
        return expand_path(explicit)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return expand_path(env_path)

    for candidate in (Path.cwd() / LOCAL_CONFIG_NAME, user_config_dir() / "config.toml"):
        if candidate.is_file():
            return candidate
    return None


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data = as_str_dict(tomllib.loads(content.decode("utf-8")))
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except IsADirectoryError:
        return Err(ConfigError(f"Config path is a directory: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value, base_dir=path.parent))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path | None) -> Config:
    """Load config from file, or return the default config on any failure."""
    if path is None:
        return Config()
    return load_config(path).unwrap_or(Config())
