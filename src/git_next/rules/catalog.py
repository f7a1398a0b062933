"""Rule catalog: the ordered, immutable set of candidate rules.

The catalog is built once from a resolved configuration. Tiers are
enumerated from Dangerous to Informational and declaration order is kept
inside each tier; that order is the tie-break for equal priorities.
"""

from __future__ import annotations

from typing import Callable, Iterator, Optional

from ..config import GitNextConfig, RuleParameters
from ..exceptions import CatalogError
from ..logging_config import get_logger
from .dangerous import dangerous_rules
from .informational import informational_rules
from .integrity import integrity_rules
from .models import RuleDefinition, Tier
from .suggestions import suggestion_rules
from .workflow import workflow_rules

logger = get_logger(__name__)

TierBuilder = Callable[[RuleParameters], "list[RuleDefinition]"]

TIER_BUILDERS: tuple[tuple[Tier, TierBuilder], ...] = (
    (Tier.DANGEROUS, dangerous_rules),
    (Tier.INTEGRITY, integrity_rules),
    (Tier.WORKFLOW, workflow_rules),
    (Tier.SUGGESTION, suggestion_rules),
    (Tier.INFORMATIONAL, informational_rules),
)


class RuleCatalog:
    """Ordered rule definitions plus the disabled-rule lookup.

    Example:
        >>> catalog = RuleCatalog()
        >>> catalog.rules()[0].id
        'R037'
    """

    def __init__(self, config: Optional[GitNextConfig] = None):
        self.config = config or GitNextConfig()
        self._rules: tuple[RuleDefinition, ...] = self._build(self.config.rule_parameters)
        self._by_id = {rule.id: rule for rule in self._rules}
        self._disabled = frozenset(self.config.disabled_rules)

        unknown = sorted(self._disabled - set(self._by_id))
        if unknown:
            logger.debug("Ignoring unknown disabled rules: %s", ", ".join(unknown))

        self._enabled = tuple(rule for rule in self._rules if rule.id not in self._disabled)

    @staticmethod
    def _build(params: RuleParameters) -> tuple[RuleDefinition, ...]:
        rules: list[RuleDefinition] = []
        seen: set[str] = set()
        for tier, builder in TIER_BUILDERS:
            for rule in builder(params):
                if rule.id in seen:
                    raise CatalogError("duplicate rule identifier", rule_id=rule.id)
                if rule.tier is not tier:
                    raise CatalogError(
                        f"priority {rule.priority} is outside the {tier.value} tier",
                        rule_id=rule.id,
                    )
                seen.add(rule.id)
                rules.append(rule)
        return tuple(rules)

    def rules(self) -> tuple[RuleDefinition, ...]:
        """All rules in catalog order, disabled ones included."""
        return self._rules

    def enabled_rules(self) -> tuple[RuleDefinition, ...]:
        return self._enabled

    def is_disabled(self, rule_id: str) -> bool:
        return rule_id in self._disabled

    def get(self, rule_id: str) -> Optional[RuleDefinition]:
        return self._by_id.get(rule_id)

    def by_tier(self) -> dict[Tier, list[RuleDefinition]]:
        grouped: dict[Tier, list[RuleDefinition]] = {tier: [] for tier, _ in TIER_BUILDERS}
        for rule in self._rules:
            grouped[rule.tier].append(rule)
        return grouped

    def __iter__(self) -> Iterator[RuleDefinition]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._by_id
