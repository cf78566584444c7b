"""repoman: status and batch fetch/pull for many git repositories."""

__version__ = "0.1.0"
