"""Configuration exceptions: config files, rule parameters, catalog wiring."""

from pathlib import Path
from typing import Any, Optional

from .base import GitNextError


class ConfigurationError(GitNextError):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(ConfigurationError):
    """Raised when a config file is missing or cannot be parsed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid config file: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class CatalogError(GitNextError):
    """Raised when the rule catalog is wired inconsistently."""

    def __init__(self, reason: str, rule_id: Optional[str] = None):
        super().__init__(
            f"Invalid rule catalog: {reason}",
            details={"reason": reason, "rule_id": rule_id or ""},
        )
        self.reason = reason
        self.rule_id = rule_id
