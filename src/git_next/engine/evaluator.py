"""Evaluator: snapshot in, priority-ordered advice out."""

from __future__ import annotations

from ..logging_config import get_logger
from ..rules.catalog import RuleCatalog
from ..snapshot.models import Snapshot
from .models import Advice

logger = get_logger(__name__)


class Evaluator:
    """Runs every enabled rule of a catalog against a snapshot."""

    def __init__(self, catalog: RuleCatalog):
        self.catalog = catalog

    def evaluate(self, snapshot: Snapshot) -> list[Advice]:
        """Return advice for every triggered rule, highest priority first.

        Equal priorities keep catalog declaration order: the sort key pairs
        the negated priority with the rule's catalog index.
        """
        matched: list[tuple[int, Advice]] = []
        for index, rule in enumerate(self.catalog.enabled_rules()):
            if not rule.matches(snapshot):
                continue
            matched.append(
                (
                    index,
                    Advice(
                        rule_id=rule.id,
                        command=rule.command,
                        description=rule.description,
                        priority=rule.priority,
                        evidence=dict(rule.evidence_fn(snapshot)),
                    ),
                )
            )

        matched.sort(key=lambda item: (-item[1].priority, item[0]))
        advice = [a for _, a in matched]

        logger.debug(
            "Evaluated %d rules, %d triggered: %s",
            len(self.catalog.enabled_rules()),
            len(advice),
            ", ".join(a.rule_id for a in advice) or "-",
        )
        return advice
