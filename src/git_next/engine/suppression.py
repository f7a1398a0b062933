"""Suppression: hide advice made moot or unsafe by higher-priority advice.

Suppression relationships are keyed by command (see ``commands.command_key``)
rather than by rule: if an active, higher-priority item recommends a command
whose outcome supersedes another command, lower items recommending that
other command are marked suppressed.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Iterator, Mapping, Optional

from ..logging_config import get_logger
from .commands import command_key
from .models import Advice

if TYPE_CHECKING:
    from ..config import GitNextConfig

logger = get_logger(__name__)

# Nothing else is safe while one of these operations is unresolved.
_ORDINARY_COMMANDS = frozenset({"merge", "rebase", "reset", "commit", "pull", "push", "checkout"})

DEFAULT_SUPPRESSIONS: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        # Active operations suppress almost everything
        "merge --continue": _ORDINARY_COMMANDS,
        "merge --abort": _ORDINARY_COMMANDS,
        "rebase --continue": _ORDINARY_COMMANDS,
        "rebase --abort": _ORDINARY_COMMANDS,
        "cherry-pick --continue": _ORDINARY_COMMANDS,
        "cherry-pick --abort": _ORDINARY_COMMANDS,
        # Causal relationships between ordinary commands
        "revert": frozenset({"reset"}),  # reverting makes a reset redundant
        "merge": frozenset({"rebase"}),
        "rebase": frozenset({"pull"}),
        "reset": frozenset({"commit"}),  # committing state about to be discarded
    }
)


class SuppressionTable:
    """Immutable lookup from a command key to the keys it suppresses."""

    def __init__(self, entries: Optional[Mapping[str, Iterable[str]]] = None):
        source = DEFAULT_SUPPRESSIONS if entries is None else entries
        self._entries: Mapping[str, frozenset[str]] = MappingProxyType(
            {key: frozenset(targets) for key, targets in source.items()}
        )

    @classmethod
    def from_config(cls, config: "GitNextConfig") -> "SuppressionTable":
        return cls().with_overrides(config.custom_suppressions)

    def with_overrides(self, custom: Mapping[str, Iterable[str]]) -> "SuppressionTable":
        """New table where each custom key's targets extend the existing ones."""
        merged = {key: set(targets) for key, targets in self._entries.items()}
        for key, targets in custom.items():
            merged.setdefault(key, set()).update(targets)
        return SuppressionTable(merged)

    def targets(self, key: str) -> frozenset[str]:
        return self._entries.get(key, frozenset())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def to_dict(self) -> dict[str, list[str]]:
        return {key: sorted(targets) for key, targets in self._entries.items()}


class SuppressionResolver:
    """Applies a SuppressionTable to an ordered advice list."""

    def __init__(self, table: Optional[SuppressionTable] = None):
        self.table = table if table is not None else SuppressionTable()

    def resolve(self, advice: list[Advice]) -> list[Advice]:
        """Mark superseded advice as suppressed, in place.

        ``advice`` must already be ordered by priority (as the Evaluator
        returns it). Each active entry may only suppress entries after it;
        entries that are already suppressed never suppress anything and are
        never revisited, so the first applicable suppressor wins and a second
        pass over the result changes nothing.
        """
        keys = [command_key(a.command) for a in advice]

        for i, item in enumerate(advice):
            if item.suppressed:
                continue

            # warnings and shell steps have no key and never take part
            if not keys[i]:
                continue
            targets = self.table.targets(keys[i])
            if not targets:
                continue

            for j in range(i + 1, len(advice)):
                later = advice[j]
                if later.suppressed or not keys[j] or keys[j] not in targets:
                    continue
                later.suppress(f"Suppressed by {keys[i]} (priority {item.priority})")
                logger.debug("%s suppressed by %s (%s)", later.rule_id, item.rule_id, keys[i])

        return advice
