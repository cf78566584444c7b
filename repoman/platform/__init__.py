"""Platform abstraction layer."""

from .paths import (
    expand_path,
    home,
    user_config_dir,
)
from .process import (
    ProcessError,
    run,
)

__all__ = [
    # paths
    "expand_path",
    "home",
    "user_config_dir",
    # process
    "ProcessError",
    "run",
]
