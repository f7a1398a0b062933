"""Configuration loading and management for git-next.

Configuration sources are merged in priority order:
    1. Defaults (defined in GitNextConfig)
    2. Global config (~/.config/git-next/config.toml)
    3. Project config (./.git-next.toml)
    4. Explicit config file (--config)
    5. Environment variables (GIT_NEXT_* prefix)
    6. CLI / keyword overrides

Example:
    >>> config = load_config(disabled_rules=["R057"])
    >>> config.is_rule_disabled("R057")
    True
    >>> config.rule_parameters.get_int("R020", "max_commits", 3)
    3
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from .exceptions import ConfigFileError, InvalidConfigError
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_PROTECTED_BRANCHES: tuple[str, ...] = ("main", "master", "develop", "production")

# Parameters shipped in the default configuration. Rules reading other
# parameters fall back to the default passed at the call site.
DEFAULT_RULE_PARAMETERS: dict[str, dict[str, Any]] = {
    "R020": {"max_commits": 3},
    "R022": {"min_commits": 4},
}

GLOBAL_CONFIG_PATH = Path("~/.config/git-next/config.toml")
PROJECT_CONFIG_NAME = ".git-next.toml"


class RuleParameters:
    """Read-only per-rule parameter store.

    Lookups never fail: a missing value, or one of the wrong shape, yields
    the caller's default.
    """

    def __init__(self, values: Optional[Mapping[str, Mapping[str, Any]]] = None):
        frozen = {
            rule_id: MappingProxyType(dict(params)) for rule_id, params in (values or {}).items()
        }
        self._values: Mapping[str, Mapping[str, Any]] = MappingProxyType(frozen)

    def get(self, rule_id: str, name: str) -> Any:
        params = self._values.get(rule_id)
        if params is None:
            return None
        return params.get(name)

    def get_int(self, rule_id: str, name: str, default: int) -> int:
        """Integer parameter; finite floats are truncated, anything else uses ``default``."""
        value = self.get(rule_id, name)
        # bool is an int subclass but never a meaningful count
        if isinstance(value, bool):
            return default
        if isinstance(value, int):
            return value
        if isinstance(value, float) and math.isfinite(value):
            return int(value)
        return default

    def get_str(self, rule_id: str, name: str, default: str) -> str:
        value = self.get(rule_id, name)
        if isinstance(value, str):
            return value
        return default

    def merged(self, other: Mapping[str, Mapping[str, Any]]) -> "RuleParameters":
        """Return a new store with ``other`` layered over this one, per rule."""
        combined: dict[str, dict[str, Any]] = {k: dict(v) for k, v in self._values.items()}
        for rule_id, params in other.items():
            combined.setdefault(rule_id, {}).update(params)
        return RuleParameters(combined)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {rule_id: dict(params) for rule_id, params in self._values.items()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleParameters):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"RuleParameters({self.to_dict()!r})"


@dataclass(frozen=True)
class GitNextConfig:
    """Resolved configuration for one invocation.

    Attributes:
        protected_branches:  Shared / production-like branch names.
        disabled_rules:      Rule identifiers excluded from evaluation.
        rule_parameters:     Per-rule parameter store.
        custom_suppressions: Extra suppression entries, command key ->
                             command keys it suppresses.
    """

    protected_branches: tuple[str, ...] = DEFAULT_PROTECTED_BRANCHES
    disabled_rules: frozenset[str] = frozenset()
    rule_parameters: RuleParameters = field(
        default_factory=lambda: RuleParameters(DEFAULT_RULE_PARAMETERS)
    )
    custom_suppressions: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        """Normalise collections and validate shapes."""
        if isinstance(self.protected_branches, str):
            raise InvalidConfigError(
                "protected_branches", self.protected_branches, "expected a list of branch names"
            )
        branches = tuple(self.protected_branches)
        for branch in branches:
            if not isinstance(branch, str) or not branch:
                raise InvalidConfigError("protected_branches", branch, "branch names must be non-empty strings")
        object.__setattr__(self, "protected_branches", branches)

        if isinstance(self.disabled_rules, str):
            raise InvalidConfigError("disabled_rules", self.disabled_rules, "expected a list of rule ids")
        disabled = frozenset(self.disabled_rules)
        for rule_id in disabled:
            if not isinstance(rule_id, str):
                raise InvalidConfigError("disabled_rules", rule_id, "rule ids must be strings")
        object.__setattr__(self, "disabled_rules", disabled)

        params = self.rule_parameters
        if not isinstance(params, RuleParameters):
            if not isinstance(params, Mapping):
                raise InvalidConfigError("rule_parameters", params, "expected a table of rule tables")
            for rule_id, values in params.items():
                if not isinstance(values, Mapping):
                    raise InvalidConfigError(
                        f"rule_parameters.{rule_id}", values, "expected a table of parameters"
                    )
            params = RuleParameters(DEFAULT_RULE_PARAMETERS).merged(params)
        object.__setattr__(self, "rule_parameters", params)

        custom: dict[str, tuple[str, ...]] = {}
        if not isinstance(self.custom_suppressions, Mapping):
            raise InvalidConfigError(
                "custom_suppressions", self.custom_suppressions, "expected a table of command keys"
            )
        for key, targets in self.custom_suppressions.items():
            if isinstance(targets, str) or not isinstance(targets, Iterable):
                raise InvalidConfigError(
                    f"custom_suppressions.{key}", targets, "expected a list of command keys"
                )
            custom[str(key)] = tuple(str(t) for t in targets)
        object.__setattr__(self, "custom_suppressions", MappingProxyType(custom))

    def is_rule_disabled(self, rule_id: str) -> bool:
        return rule_id in self.disabled_rules

    def is_protected(self, branch: str) -> bool:
        return branch in self.protected_branches


def load_config(
    config_file: Optional[Path] = None,
    cwd: Optional[Path] = None,
    **overrides: Any,
) -> GitNextConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        cwd: Directory searched for a project config (default: current directory)
        **overrides: Direct overrides (typically from CLI flags), using
            GitNextConfig field names

    Returns:
        Validated GitNextConfig instance

    Raises:
        ConfigFileError: If the explicit config file is missing or invalid
        InvalidConfigError: If a merged value has the wrong shape
    """
    merged: dict[str, Any] = {}

    # 1. Global and project config; unreadable files are skipped
    project_dir = cwd if cwd is not None else Path.cwd()
    for candidate in (GLOBAL_CONFIG_PATH.expanduser(), project_dir / PROJECT_CONFIG_NAME):
        if not candidate.is_file():
            continue
        try:
            _merge_file_values(merged, _flatten_toml(_load_toml_file(candidate)))
        except Exception as e:
            logger.warning("Ignoring config file %s: %s", candidate, e)

    # 2. Explicit config file (errors are fatal)
    if config_file is not None:
        if not config_file.is_file():
            raise ConfigFileError(config_file, "file not found")
        try:
            values = _flatten_toml(_load_toml_file(config_file))
        except Exception as e:
            raise ConfigFileError(config_file, str(e))
        _merge_file_values(merged, values)

    # 3. Environment variables
    merged.update(_load_env_vars())

    # 4. Direct overrides
    for key, value in overrides.items():
        if key == "rule_parameters" and isinstance(value, Mapping):
            _merge_file_values(merged, {"rule_parameters": value})
        elif value is not None:
            merged[key] = value

    try:
        return GitNextConfig(**merged)
    except TypeError as e:
        # Unknown field
        raise InvalidConfigError("config", sorted(merged), str(e))


def _merge_file_values(merged: dict[str, Any], values: dict[str, Any]) -> None:
    """Layer one source over ``merged``; parameter tables merge per rule."""
    for key, value in values.items():
        if key in ("rule_parameters", "custom_suppressions") and isinstance(value, Mapping):
            base = dict(merged.get(key) or {})
            for sub_key, sub_value in value.items():
                if key == "rule_parameters" and isinstance(sub_value, Mapping):
                    layered = dict(base.get(sub_key) or {})
                    layered.update(sub_value)
                    base[sub_key] = layered
                else:
                    base[sub_key] = sub_value
            merged[key] = base
        else:
            merged[key] = value


def _flatten_toml(data: Mapping[str, Any]) -> dict[str, Any]:
    """Map the TOML document layout onto GitNextConfig field names."""
    result: dict[str, Any] = {}
    unknown = set(data) - {"protected_branches", "rules", "suppression"}
    if unknown:
        raise ValueError(f"unknown top-level keys: {', '.join(sorted(unknown))}")

    if "protected_branches" in data:
        result["protected_branches"] = data["protected_branches"]

    rules = data.get("rules")
    if rules is not None:
        if not isinstance(rules, Mapping):
            raise ValueError("[rules] must be a table")
        if "disabled" in rules:
            result["disabled_rules"] = rules["disabled"]
        if "parameters" in rules:
            result["rule_parameters"] = rules["parameters"]

    suppression = data.get("suppression")
    if suppression is not None:
        if not isinstance(suppression, Mapping):
            raise ValueError("[suppression] must be a table")
        if "custom" in suppression:
            result["custom_suppressions"] = suppression["custom"]

    return result


def _load_env_vars() -> dict[str, Any]:
    """Load list-valued settings from GIT_NEXT_* environment variables.

    Supported environment variables:
        GIT_NEXT_PROTECTED_BRANCHES: comma-separated branch names
        GIT_NEXT_DISABLED_RULES: comma-separated rule ids
    """
    result: dict[str, Any] = {}
    for field_name in ("protected_branches", "disabled_rules"):
        env_value = os.environ.get(f"GIT_NEXT_{field_name.upper()}")
        if env_value is None:
            continue
        result[field_name] = [part.strip() for part in env_value.split(",") if part.strip()]
    return result


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigFileError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigFileError(
                path,
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli",
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
