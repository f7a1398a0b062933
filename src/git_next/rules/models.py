"""Rule definition model and severity tiers.

A rule pairs a pure predicate over a Snapshot with the command it recommends.
Rules are static: all configuration they need is resolved when the catalog
is built and baked into the predicate or the command text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from ..snapshot.models import Snapshot


class Tier(Enum):
    """Priority band a rule belongs to, declared from most to least severe."""

    DANGEROUS = "dangerous"
    INTEGRITY = "integrity"
    WORKFLOW = "workflow"
    SUGGESTION = "suggestion"
    INFORMATIONAL = "informational"


def tier_for_priority(priority: int) -> Tier:
    """Tier membership is a pure function of priority."""
    if priority >= 90:
        return Tier.DANGEROUS
    if priority >= 60:
        return Tier.INTEGRITY
    if priority >= 30:
        return Tier.WORKFLOW
    if priority >= 10:
        return Tier.SUGGESTION
    return Tier.INFORMATIONAL


def no_evidence(snapshot: Snapshot) -> dict[str, Any]:
    return {}


@dataclass(frozen=True)
class RuleDefinition:
    """A declarative advice rule.

    Attributes:
        id:          Stable identifier, unique across the catalog (e.g. "R037").
        name:        snake_case slug for humans and logs.
        predicate:   Callable (snapshot) -> bool. Pure and total.
        command:     Command template; may hold placeholders, `` OR ``
                     alternatives, or a leading ``#`` for a non-executable
                     warning.
        description: Human-readable explanation.
        priority:    Higher fires first; determines the tier.
        condition:   Human-readable rendering of the predicate.
        evidence_fn: Callable (snapshot) -> dict of supporting facts.
    """

    id: str
    name: str
    predicate: Callable[[Snapshot], bool]
    command: str
    description: str
    priority: int
    condition: str = ""
    evidence_fn: Callable[[Snapshot], dict[str, Any]] = no_evidence

    @property
    def tier(self) -> Tier:
        return tier_for_priority(self.priority)

    def matches(self, snapshot: Snapshot) -> bool:
        return bool(self.predicate(snapshot))
