"""Workflow rules (priority 59-30): day-to-day hygiene.

Several rules here read configuration (soft-reset window, interactive
rebase threshold, feature branch prefix). Values are resolved once in
``workflow_rules`` and bound into the predicates with ``functools.partial``,
so evaluation never consults configuration.
"""

from __future__ import annotations

from functools import partial
from typing import Any

from ..config import RuleParameters
from ..snapshot.models import Snapshot
from .models import RuleDefinition

DEFAULT_SOFT_RESET_MAX_COMMITS = 3
DEFAULT_INTERACTIVE_REBASE_MIN_COMMITS = 4
DEFAULT_FEATURE_BRANCH_PREFIX = "feature/"


# ==============================================================================
# Predicates
# ==============================================================================


def _work_on_main(s: Snapshot) -> bool:
    return s.work_on_main_not_feature


def _long_lived_feature_branch(s: Snapshot) -> bool:
    return s.long_lived_feature_branch


def _branch_age_evidence(s: Snapshot) -> dict[str, Any]:
    return {"age_days": s.feature_branch_age_days}


def _behind_and_clean(s: Snapshot) -> bool:
    return s.behind > 0 and not s.dirty


def _squash_recommended(s: Snapshot) -> bool:
    return s.squash_recommended


def _noisy_commits_evidence(s: Snapshot) -> dict[str, Any]:
    return {"noisy_commits": s.noisy_commit_count}


def _wip_commit_on_shared(s: Snapshot) -> bool:
    return s.wip_commit_on_shared


def _wip_message_evidence(s: Snapshot) -> dict[str, Any]:
    return {"message": s.wip_commit_message}


def _rebase_instead_of_merge(s: Snapshot) -> bool:
    return s.rebase_instead_of_merge


def _ready_to_push(s: Snapshot) -> bool:
    return s.ahead > 0 and s.behind == 0 and not s.dirty


def _can_fast_forward(s: Snapshot) -> bool:
    return s.behind > 0 and s.ahead == 0 and not s.dirty


def _soft_reset_allowed(s: Snapshot, max_commits: int) -> bool:
    return (
        not s.last_commit_pushed
        and s.commit_count_since_push > 0
        and s.commit_count_since_push <= max_commits
    )


def _too_many_to_reset(s: Snapshot, min_commits: int) -> bool:
    return not s.last_commit_pushed and s.commit_count_since_push >= min_commits


def _unpushed_count_evidence(s: Snapshot) -> dict[str, Any]:
    return {"commits": s.commit_count_since_push}


def _staged_not_committed(s: Snapshot) -> bool:
    return s.staged_files > 0


def _modified_not_staged(s: Snapshot) -> bool:
    return s.modified_files > 0 and s.staged_files == 0


# ==============================================================================
# Definitions
# ==============================================================================

LONG_LIVED_FEATURE_BRANCH = RuleDefinition(
    id="R048",
    name="long_lived_feature_branch",
    predicate=_long_lived_feature_branch,
    command="git merge main (or rebase)",
    description="Long-lived feature branch - merge debt accumulating interest",
    priority=56,
    condition="long_lived_feature_branch",
    evidence_fn=_branch_age_evidence,
)

PULL_WHEN_BEHIND = RuleDefinition(
    id="R005",
    name="pull_when_behind",
    predicate=_behind_and_clean,
    command="git pull",
    description="Behind remote and clean - pull updates",
    priority=55,
    condition="behind > 0 AND NOT dirty",
)

SQUASH_RECOMMENDED = RuleDefinition(
    id="R049",
    name="squash_recommended",
    predicate=_squash_recommended,
    command="git rebase -i HEAD~N",
    description="Squash recommended before merge - many noisy commits",
    priority=52,
    condition="squash_recommended",
    evidence_fn=_noisy_commits_evidence,
)

WIP_COMMIT_ON_SHARED = RuleDefinition(
    id="R050",
    name="wip_commit_on_shared",
    predicate=_wip_commit_on_shared,
    command="git commit --amend",
    description="WIP commit on shared branch - this is not your personal notebook",
    priority=51,
    condition="wip_commit_on_shared",
    evidence_fn=_wip_message_evidence,
)

REBASE_INSTEAD_OF_MERGE = RuleDefinition(
    id="R051",
    name="rebase_instead_of_merge",
    predicate=_rebase_instead_of_merge,
    command="git rebase main",
    description="Rebase recommended instead of merge - keep linear history",
    priority=50,
    condition="rebase_instead_of_merge",
)

PUSH_LOCAL_COMMITS = RuleDefinition(
    id="R004",
    name="push_local_commits",
    predicate=_ready_to_push,
    command="git push",
    description="Local commits ready to push",
    priority=50,
    condition="ahead > 0 AND behind == 0 AND NOT dirty",
)

FAST_FORWARD_PULL = RuleDefinition(
    id="R030",
    name="fast_forward_pull",
    predicate=_can_fast_forward,
    command="git pull --ff-only",
    description="Can fast-forward - safe to pull",
    priority=48,
    condition="behind > 0 AND ahead == 0 AND NOT dirty",
)

STAGED_NOT_COMMITTED = RuleDefinition(
    id="R003",
    name="staged_not_committed",
    predicate=_staged_not_committed,
    command="git commit",
    description="Staged files waiting for commit",
    priority=38,
    condition="staged_files > 0",
)

MODIFIED_NOT_STAGED = RuleDefinition(
    id="R002",
    name="modified_not_staged",
    predicate=_modified_not_staged,
    command="git add <files> && git commit",
    description="Modified files not staged",
    priority=35,
    condition="modified_files > 0 AND staged_files == 0",
)


def _work_on_main_rule(branch_prefix: str) -> RuleDefinition:
    return RuleDefinition(
        id="R047",
        name="work_on_main",
        predicate=_work_on_main,
        command=f"git checkout -b {branch_prefix}<name>",
        description="Work on main instead of feature branch - you skipped the whole process part",
        priority=58,
        condition="work_on_main_not_feature",
    )


def _soft_reset_rule(max_commits: int) -> RuleDefinition:
    return RuleDefinition(
        id="R020",
        name="soft_reset_local_commits",
        predicate=partial(_soft_reset_allowed, max_commits=max_commits),
        command="git reset --soft HEAD~N",
        description=f"Local commits (≤{max_commits}) can be soft reset",
        priority=45,
        condition=(
            "NOT last_commit_pushed AND 0 < commit_count_since_push "
            f"<= {max_commits}"
        ),
        evidence_fn=_unpushed_count_evidence,
    )


def _interactive_rebase_rule(min_commits: int) -> RuleDefinition:
    return RuleDefinition(
        id="R022",
        name="too_many_commits_to_reset",
        predicate=partial(_too_many_to_reset, min_commits=min_commits),
        command="git rebase -i HEAD~N",
        description="Too many local commits - use interactive rebase",
        priority=42,
        condition=f"NOT last_commit_pushed AND commit_count_since_push >= {min_commits}",
        evidence_fn=_unpushed_count_evidence,
    )


def workflow_rules(params: RuleParameters) -> list[RuleDefinition]:
    """Workflow tier in declaration order, with parameters bound."""
    branch_prefix = params.get_str("R047", "branch_prefix", DEFAULT_FEATURE_BRANCH_PREFIX)
    max_commits = params.get_int("R020", "max_commits", DEFAULT_SOFT_RESET_MAX_COMMITS)
    min_commits = params.get_int("R022", "min_commits", DEFAULT_INTERACTIVE_REBASE_MIN_COMMITS)

    return [
        _work_on_main_rule(branch_prefix),
        LONG_LIVED_FEATURE_BRANCH,
        PULL_WHEN_BEHIND,
        SQUASH_RECOMMENDED,
        WIP_COMMIT_ON_SHARED,
        REBASE_INSTEAD_OF_MERGE,
        PUSH_LOCAL_COMMITS,
        FAST_FORWARD_PULL,
        _soft_reset_rule(max_commits),
        _interactive_rebase_rule(min_commits),
        STAGED_NOT_COMMITTED,
        MODIFIED_NOT_STAGED,
    ]
