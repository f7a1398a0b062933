"""Advice records produced by the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..rules.models import Tier, tier_for_priority


@dataclass
class Advice:
    """One triggered, enabled rule.

    ``rule_id``, ``command``, ``description``, ``priority`` and ``evidence``
    are fixed when the evaluator creates the record. Only the suppression
    resolver touches ``suppressed`` and ``reason``, through ``suppress``.
    """

    rule_id: str
    command: str
    description: str
    priority: int
    suppressed: bool = False
    reason: str = ""
    evidence: dict[str, Any] = field(default_factory=dict)

    @property
    def active(self) -> bool:
        return not self.suppressed

    @property
    def tier(self) -> Tier:
        return tier_for_priority(self.priority)

    def suppress(self, reason: str) -> None:
        self.suppressed = True
        self.reason = reason

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "rule_id": self.rule_id,
            "command": self.command,
            "description": self.description,
            "priority": self.priority,
            "tier": self.tier.value,
            "suppressed": self.suppressed,
            "reason": self.reason,
        }
        if self.evidence:
            d["evidence"] = dict(self.evidence)
        return d
