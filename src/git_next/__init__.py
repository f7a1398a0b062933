"""
git-next - Git advice that doesn't lie

Inspects a repository, evaluates a fixed catalog of rules against what it
finds and reports the next command to run. When several rules fire, advice
made irrelevant by a more urgent action is suppressed, so the top of the
list is always the least harmful next move.
"""

__version__ = "0.1.0"

from .config import GitNextConfig, load_config
from .engine import Advice, AdviceEngine, has_active_advice
from .rules import RuleCatalog, RuleDefinition, Tier
from .snapshot import Snapshot, SnapshotCollector

__all__ = [
    "AdviceEngine",  # Main entry point
    "Advice",
    "GitNextConfig",
    "load_config",
    "has_active_advice",
    "RuleCatalog",
    "RuleDefinition",
    "Tier",
    "Snapshot",
    "SnapshotCollector",
]
