"""Repository snapshots: the facts rules are evaluated against."""

from .collector import SnapshotCollector
from .git import GitRunner
from .models import Snapshot

__all__ = ["GitRunner", "Snapshot", "SnapshotCollector"]
