"""Exit codes for CLI commands.

Values are used as process exit codes and should remain stable:
- 0: Success
- 1: User error (bad arguments, unknown discovery mode)
- 2: Environment error (invalid config file, git missing)
- 3: Sync error (at least one repository failed to fetch or pull)
- 5: I/O error (root not readable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    SYNC_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
