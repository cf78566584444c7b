"""Platform-aware user paths.

Locates the home and per-user configuration directories used to find the
default config file.
"""

from __future__ import annotations

import os
import sys
from functools import lru_cache
from pathlib import Path

__all__ = [
    "APP_NAME",
    "clear_caches",
    "expand_path",
    "home",
    "user_config_dir",
]

APP_NAME = "repoman"


def is_windows() -> bool:
    return sys.platform == "win32"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get user's home directory.

    Uses USERPROFILE on Windows, HOME on Unix, then Path.home().
    """
    if is_windows():
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile)
    else:
        home_env = os.environ.get("HOME")
        if home_env:
            return Path(home_env)

    return Path.home()


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """Get the per-user configuration directory.

    Location: $XDG_CONFIG_HOME/repoman or ~/.config/repoman (Linux/macOS),
    %APPDATA%/repoman (Windows).
    """
    if is_windows():
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME
        return home() / "AppData" / "Roaming" / APP_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


def expand_path(raw: str | Path, base: Path | None = None) -> Path:
    """Expand ``~`` and environment variables; anchor relative paths at ``base``.

    The result is absolute but symlinks are not resolved.
    """
    text = os.path.expandvars(str(raw))
    if text == "~" or text.startswith(("~/", "~\\")):
        text = str(home()) + text[1:]
    path = Path(text)
    if not path.is_absolute():
        path = (base or Path.cwd()) / path
    return Path(os.path.abspath(path))


def clear_caches() -> None:
    """Clear cached paths (for tests that change environment variables)."""
    home.cache_clear()
    user_config_dir.cache_clear()
