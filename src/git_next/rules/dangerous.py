"""Dangerous rules (priority 100-90): put the keyboard down.

Operations that destroy shared history, and states in which any other git
command is unsafe until resolved.
"""

from __future__ import annotations

from typing import Any

from ..config import RuleParameters
from ..snapshot.models import Snapshot
from .models import RuleDefinition

# ==============================================================================
# Predicates
# ==============================================================================


def _force_push_to_shared(s: Snapshot) -> bool:
    return s.force_push_to_shared


def _rewritten_published_tags(s: Snapshot) -> bool:
    return s.rewritten_published_tags


def _reset_on_protected_branch(s: Snapshot) -> bool:
    return s.reset_on_protected_branch


def _submodule_rewrite_no_update(s: Snapshot) -> bool:
    return s.submodule_rewrite_no_update


def _accidental_history_rewrite(s: Snapshot) -> bool:
    return s.accidental_history_rewrite


def _last_commit_pushed(s: Snapshot) -> bool:
    return s.last_commit_pushed


def _merge_in_progress(s: Snapshot) -> bool:
    return s.merge_in_progress


def _rebase_in_progress(s: Snapshot) -> bool:
    return s.rebase_in_progress


def _cherry_pick_in_progress(s: Snapshot) -> bool:
    return s.cherry_pick_in_progress


def _detached_head(s: Snapshot) -> bool:
    return s.on_detached_head


def _diverged_on_protected(s: Snapshot) -> bool:
    return s.ahead > 0 and s.behind > 0 and s.on_protected_branch


def _divergence_evidence(s: Snapshot) -> dict[str, Any]:
    return {"ahead": s.ahead, "behind": s.behind}


# ==============================================================================
# Definitions
# ==============================================================================

FORCE_PUSH_TO_SHARED = RuleDefinition(
    id="R037",
    name="force_push_to_shared",
    predicate=_force_push_to_shared,
    command="# DO NOT git push --force on shared branches!",
    description="Force-push to shared branch - this is how trust dies",
    priority=100,
    condition="force_push_to_shared",
)

REWRITTEN_PUBLISHED_TAGS = RuleDefinition(
    id="R038",
    name="rewritten_published_tags",
    predicate=_rewritten_published_tags,
    command="# DO NOT rewrite published tags!",
    description="Rewrite published tags - releases are now folklore",
    priority=100,
    condition="rewritten_published_tags",
)

RESET_ON_PROTECTED_BRANCH = RuleDefinition(
    id="R039",
    name="reset_on_protected_branch",
    predicate=_reset_on_protected_branch,
    command="# DO NOT reset on protected branches!",
    description="Reset on protected branch - muscle memory is not a justification",
    priority=100,
    condition="reset_on_protected_branch",
)

SUBMODULE_REWRITE_NO_UPDATE = RuleDefinition(
    id="R040",
    name="submodule_rewrite_no_update",
    predicate=_submodule_rewrite_no_update,
    command="git submodule update --remote",
    description="Submodule pointer rewrite without update - builds will fail creatively",
    priority=100,
    condition="submodule_rewrite_no_update",
)

ACCIDENTAL_HISTORY_REWRITE = RuleDefinition(
    id="R041",
    name="accidental_history_rewrite",
    predicate=_accidental_history_rewrite,
    command="# Accidental history rewrite detected - you don't get to pretend this was fine",
    description="Rebase or filter-branch after commits pulled by others",
    priority=100,
    condition="accidental_history_rewrite",
)

REVERT_PUBLIC_COMMIT = RuleDefinition(
    id="R021",
    name="revert_public_commit",
    predicate=_last_commit_pushed,
    command="git revert HEAD",
    description="Last commit was pushed - use revert instead of reset",
    priority=100,
    condition="last_commit_pushed",
)

MERGE_IN_PROGRESS = RuleDefinition(
    id="R009",
    name="merge_in_progress",
    predicate=_merge_in_progress,
    command="git merge --continue OR git merge --abort",
    description="Merge in progress - complete or abort",
    priority=98,
    condition="merge_in_progress",
)

REBASE_IN_PROGRESS = RuleDefinition(
    id="R010",
    name="rebase_in_progress",
    predicate=_rebase_in_progress,
    command="git rebase --continue OR git rebase --abort",
    description="Rebase in progress - complete or abort",
    priority=97,
    condition="rebase_in_progress",
)

CHERRY_PICK_IN_PROGRESS = RuleDefinition(
    id="R011",
    name="cherry_pick_in_progress",
    predicate=_cherry_pick_in_progress,
    command="git cherry-pick --continue OR git cherry-pick --abort",
    description="Cherry-pick in progress - complete or abort",
    priority=96,
    condition="cherry_pick_in_progress",
)

DETACHED_HEAD = RuleDefinition(
    id="R001",
    name="detached_head",
    predicate=_detached_head,
    command="git checkout <branch>",
    description="Detached HEAD detected - checkout a branch",
    priority=95,
    condition="on_detached_head",
)

MERGE_ON_PROTECTED_BRANCH = RuleDefinition(
    id="R032",
    name="merge_on_protected_branch",
    predicate=_diverged_on_protected,
    command="git merge origin/<branch>",
    description="Diverged on protected branch - merge instead of rebase",
    priority=90,
    condition="ahead > 0 AND behind > 0 AND on_protected_branch",
    evidence_fn=_divergence_evidence,
)


def dangerous_rules(params: RuleParameters) -> list[RuleDefinition]:
    """Dangerous tier in declaration order. No rule here is parameterised."""
    return [
        FORCE_PUSH_TO_SHARED,
        REWRITTEN_PUBLISHED_TAGS,
        RESET_ON_PROTECTED_BRANCH,
        SUBMODULE_REWRITE_NO_UPDATE,
        ACCIDENTAL_HISTORY_REWRITE,
        REVERT_PUBLIC_COMMIT,
        MERGE_IN_PROGRESS,
        REBASE_IN_PROGRESS,
        CHERRY_PICK_IN_PROGRESS,
        DETACHED_HEAD,
        MERGE_ON_PROTECTED_BRANCH,
    ]
