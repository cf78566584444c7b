"""Core domain types and logic."""

from .config import Config, ConfigError, find_config_path, load_config, load_config_or_default
from .errors import ErrorCode
from .models import (
    DiscoveryMode,
    DiscoveryRoot,
    RepositoryRecord,
    RepositoryStatus,
    SyncOperation,
    SyncOutcome,
)
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigError",
    "find_config_path",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorCode",
    # models
    "DiscoveryMode",
    "DiscoveryRoot",
    "RepositoryRecord",
    "RepositoryStatus",
    "SyncOperation",
    "SyncOutcome",
    # result
    "Err",
    "Ok",
    "Result",
]
