"""Informational rules (priority below 10): trivia, nothing is wrong."""

from __future__ import annotations

from typing import Any

from ..config import RuleParameters
from ..snapshot.models import Snapshot
from .models import RuleDefinition


def _repo_size_growing(s: Snapshot) -> bool:
    return s.repo_size_growing_fast


def _repo_size_evidence(s: Snapshot) -> dict[str, Any]:
    return {"size_mb": s.repo_size_mb}


def _inactive_branches(s: Snapshot) -> bool:
    return len(s.inactive_branches) > 0


def _inactive_branches_evidence(s: Snapshot) -> dict[str, Any]:
    return {"branches": list(s.inactive_branches)}


def _detached_head_clean(s: Snapshot) -> bool:
    return s.on_detached_head_clean


REPO_SIZE_GROWING = RuleDefinition(
    id="R056",
    name="repo_size_growing",
    predicate=_repo_size_growing,
    command="git gc --aggressive",
    description="Repo size growing unusually fast - just so you're aware",
    priority=9,
    condition="repo_size_growing_fast",
    evidence_fn=_repo_size_evidence,
)

INACTIVE_BRANCHES = RuleDefinition(
    id="R057",
    name="inactive_branches",
    predicate=_inactive_branches,
    command="git branch -d <branch>",
    description="Inactive branches detected - archaeology opportunity",
    priority=8,
    condition="len(inactive_branches) > 0",
    evidence_fn=_inactive_branches_evidence,
)

DETACHED_HEAD_CLEAN = RuleDefinition(
    id="R058",
    name="detached_head_clean",
    predicate=_detached_head_clean,
    command="git checkout <branch>",
    description="Detached HEAD but clean - nothing wrong, just vibes",
    priority=5,
    condition="on_detached_head_clean",
)


def informational_rules(params: RuleParameters) -> list[RuleDefinition]:
    return [
        REPO_SIZE_GROWING,
        INACTIVE_BRANCHES,
        DETACHED_HEAD_CLEAN,
    ]
