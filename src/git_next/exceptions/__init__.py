"""Exception hierarchy for git-next."""

from .base import GitNextError
from .collection import (
    CollectionError,
    ExecutionError,
    GitCommandError,
    GitNotFoundError,
    NotAGitRepositoryError,
)
from .config import (
    CatalogError,
    ConfigFileError,
    ConfigurationError,
    InvalidConfigError,
)

__all__ = [
    "GitNextError",
    "ConfigurationError",
    "ConfigFileError",
    "InvalidConfigError",
    "CatalogError",
    "CollectionError",
    "NotAGitRepositoryError",
    "GitNotFoundError",
    "GitCommandError",
    "ExecutionError",
]
