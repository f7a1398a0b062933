"""Suggestion rules (priority 29-10): mild nudges."""

from __future__ import annotations

from typing import Any

from ..config import RuleParameters
from ..snapshot.models import Snapshot
from .models import RuleDefinition


def _poor_commit_message(s: Snapshot) -> bool:
    return s.poor_commit_message


def _commit_message_evidence(s: Snapshot) -> dict[str, Any]:
    return {"message": s.last_commit_message}


def _amend_suggested(s: Snapshot) -> bool:
    return s.amend_last_commit_suggested


def _unpushed_tags(s: Snapshot) -> bool:
    return s.unpushed_local_tags


def _unpushed_tags_evidence(s: Snapshot) -> dict[str, Any]:
    return {"tags": list(s.unpushed_tags)}


def _untracked_files(s: Snapshot) -> bool:
    return s.untracked_files > 0


def _untracked_evidence(s: Snapshot) -> dict[str, Any]:
    return {"untracked": s.untracked_files}


def _stash_stack_growing(s: Snapshot) -> bool:
    return s.stash_stack_growing


def _stash_stack_evidence(s: Snapshot) -> dict[str, Any]:
    return {"stash_count": s.stash_count, "oldest_age_days": s.oldest_stash_age_days}


def _has_stash(s: Snapshot) -> bool:
    return s.has_stash


POOR_COMMIT_MESSAGE = RuleDefinition(
    id="R052",
    name="poor_commit_message",
    predicate=_poor_commit_message,
    command="git commit --amend",
    description="Commit message quality warning - Git logs are for humans, allegedly",
    priority=25,
    condition="poor_commit_message",
    evidence_fn=_commit_message_evidence,
)

AMEND_LAST_COMMIT = RuleDefinition(
    id="R053",
    name="amend_last_commit",
    predicate=_amend_suggested,
    command="git commit --amend",
    description="Amend last commit suggested - you knew this already",
    priority=23,
    condition="amend_last_commit_suggested",
)

UNPUSHED_LOCAL_TAGS = RuleDefinition(
    id="R054",
    name="unpushed_local_tags",
    predicate=_unpushed_tags,
    command="git push --tags",
    description="Unpushed local tags - Schrödinger's release",
    priority=21,
    condition="unpushed_local_tags",
    evidence_fn=_unpushed_tags_evidence,
)

UNTRACKED_FILES = RuleDefinition(
    id="R007",
    name="untracked_files",
    predicate=_untracked_files,
    command="git add <files>",
    description="Untracked files present",
    priority=20,
    condition="untracked_files > 0",
    evidence_fn=_untracked_evidence,
)

STASH_STACK_GROWING = RuleDefinition(
    id="R055",
    name="stash_stack_growing",
    predicate=_stash_stack_growing,
    command="git stash pop OR git stash clear",
    description="Stash stack growing - you're hoarding unfinished thoughts",
    priority=18,
    condition="stash_stack_growing",
    evidence_fn=_stash_stack_evidence,
)

STASH_EXISTS = RuleDefinition(
    id="R008",
    name="stash_exists",
    predicate=_has_stash,
    command="git stash pop",
    description="Stash exists - consider applying",
    priority=15,
    condition="has_stash",
)


def suggestion_rules(params: RuleParameters) -> list[RuleDefinition]:
    return [
        POOR_COMMIT_MESSAGE,
        AMEND_LAST_COMMIT,
        UNPUSHED_LOCAL_TAGS,
        UNTRACKED_FILES,
        STASH_STACK_GROWING,
        STASH_EXISTS,
    ]
