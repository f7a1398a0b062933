"""Rule definitions grouped into five severity tiers.

Tiers:
- dangerous.py: priority 100-90, destructive or blocking states
- integrity.py: 89-60, repository integrity and branch sync
- workflow.py: 59-30, everyday hygiene (configurable thresholds)
- suggestions.py: 29-10, mild nudges
- informational.py: below 10, trivia
"""

from .catalog import RuleCatalog
from .models import RuleDefinition, Tier, tier_for_priority

__all__ = [
    "RuleCatalog",
    "RuleDefinition",
    "Tier",
    "tier_for_priority",
]
