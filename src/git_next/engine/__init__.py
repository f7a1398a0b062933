"""Advice-resolution engine: evaluate rules, then resolve suppression."""

from __future__ import annotations

from typing import Iterable, Optional

from ..config import GitNextConfig
from ..rules.catalog import RuleCatalog
from ..snapshot.models import Snapshot
from .commands import command_key
from .evaluator import Evaluator
from .models import Advice
from .suppression import DEFAULT_SUPPRESSIONS, SuppressionResolver, SuppressionTable


class AdviceEngine:
    """Catalog, evaluator and resolver wired from one configuration.

    A constructed engine is reusable: ``advise`` has no side effects beyond
    creating the returned Advice objects.
    """

    def __init__(
        self,
        config: Optional[GitNextConfig] = None,
        suppression_table: Optional[SuppressionTable] = None,
    ):
        self.config = config or GitNextConfig()
        self.catalog = RuleCatalog(self.config)
        self.evaluator = Evaluator(self.catalog)
        if suppression_table is None:
            suppression_table = SuppressionTable.from_config(self.config)
        self.resolver = SuppressionResolver(suppression_table)

    def advise(self, snapshot: Snapshot) -> list[Advice]:
        return self.resolver.resolve(self.evaluator.evaluate(snapshot))


def has_active_advice(advice: Iterable[Advice]) -> bool:
    """True when at least one item is not suppressed (a non-clean signal)."""
    return any(a.active for a in advice)


__all__ = [
    "Advice",
    "AdviceEngine",
    "DEFAULT_SUPPRESSIONS",
    "Evaluator",
    "SuppressionResolver",
    "SuppressionTable",
    "command_key",
    "has_active_advice",
]
