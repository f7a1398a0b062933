"""Integrity rules (priority 89-60): the repository itself is at risk."""

from __future__ import annotations

from typing import Any

from ..config import RuleParameters
from ..snapshot.models import Snapshot
from .models import RuleDefinition


def _conflicted_files_staged(s: Snapshot) -> bool:
    return s.conflicted_files_staged


def _conflicted_files_evidence(s: Snapshot) -> dict[str, Any]:
    return {"files": list(s.conflicted_files)}


def _large_binaries_without_lfs(s: Snapshot) -> bool:
    return s.large_binaries_without_lfs


def _large_binaries_evidence(s: Snapshot) -> dict[str, Any]:
    return {"files": list(s.large_binary_files)}


def _line_ending_conflict(s: Snapshot) -> bool:
    return s.line_ending_conflict


def _submodule_detached_head(s: Snapshot) -> bool:
    return s.submodule_detached_head


def _submodule_evidence(s: Snapshot) -> dict[str, Any]:
    return {"submodule": s.submodule_name} if s.submodule_name else {}


def _shallow_clone_history_ops(s: Snapshot) -> bool:
    return s.shallow_clone_history_ops


def _diverged(s: Snapshot) -> bool:
    return s.ahead > 0 and s.behind > 0


def _divergence_evidence(s: Snapshot) -> dict[str, Any]:
    return {"ahead": s.ahead, "behind": s.behind}


def _no_upstream(s: Snapshot) -> bool:
    return s.no_upstream and not s.on_detached_head


def _diverged_feature_branch(s: Snapshot) -> bool:
    return s.ahead > 0 and s.behind > 0 and not s.on_protected_branch


def _merged_branches(s: Snapshot) -> bool:
    return len(s.merged_branches) > 0


def _merged_branches_evidence(s: Snapshot) -> dict[str, Any]:
    return {"branches": list(s.merged_branches)}


def _gone_branches(s: Snapshot) -> bool:
    return len(s.gone_branches) > 0


def _gone_branches_evidence(s: Snapshot) -> dict[str, Any]:
    return {"branches": list(s.gone_branches)}


def _existing_merge_history(s: Snapshot) -> bool:
    return s.has_merge_commits and s.behind > 0


CONFLICTED_FILES_STAGED = RuleDefinition(
    id="R042",
    name="conflicted_files_staged",
    predicate=_conflicted_files_staged,
    command="# Remove conflict markers from files before committing",
    description="Conflicted files staged - if <<<<<<< is in the diff, stop pretending",
    priority=89,
    condition="conflicted_files_staged",
    evidence_fn=_conflicted_files_evidence,
)

LARGE_BINARIES_WITHOUT_LFS = RuleDefinition(
    id="R043",
    name="large_binaries_without_lfs",
    predicate=_large_binaries_without_lfs,
    command="git lfs track <pattern> && git add .gitattributes",
    description="Binary files changed without LFS - Git is not a landfill",
    priority=85,
    condition="large_binaries_without_lfs",
    evidence_fn=_large_binaries_evidence,
)

LINE_ENDING_CONFLICT = RuleDefinition(
    id="R044",
    name="line_ending_conflict",
    predicate=_line_ending_conflict,
    command="git config core.autocrlf true (or false)",
    description="Line ending normalization conflict - someone's editor declared war",
    priority=82,
    condition="line_ending_conflict",
)

SUBMODULE_DETACHED_HEAD = RuleDefinition(
    id="R045",
    name="submodule_detached_head",
    predicate=_submodule_detached_head,
    command="cd <submodule> && git checkout <branch>",
    description="Submodule detached HEAD - time capsule mode engaged",
    priority=81,
    condition="submodule_detached_head",
    evidence_fn=_submodule_evidence,
)

SHALLOW_CLONE_HISTORY_OPS = RuleDefinition(
    id="R046",
    name="shallow_clone_history_ops",
    predicate=_shallow_clone_history_ops,
    command="git fetch --unshallow",
    description="Shallow clone doing history ops - Git will lie to you politely",
    priority=80,
    condition="shallow_clone_history_ops",
)

DIVERGED_BRANCH = RuleDefinition(
    id="R006",
    name="diverged_branch",
    predicate=_diverged,
    command="git rebase origin/<branch> OR git merge origin/<branch>",
    description="Branch has diverged - need to sync",
    priority=80,
    condition="ahead > 0 AND behind > 0",
    evidence_fn=_divergence_evidence,
)

NO_UPSTREAM = RuleDefinition(
    id="R034",
    name="no_upstream",
    predicate=_no_upstream,
    command="git branch --set-upstream-to=origin/<branch>",
    description="No upstream configured for current branch",
    priority=75,
    condition="no_upstream AND NOT on_detached_head",
)

REBASE_FEATURE_BRANCH = RuleDefinition(
    id="R031",
    name="rebase_feature_branch",
    predicate=_diverged_feature_branch,
    command="git rebase origin/<branch>",
    description="Feature branch diverged - rebase to keep linear history",
    priority=70,
    condition="ahead > 0 AND behind > 0 AND NOT on_protected_branch",
    evidence_fn=_divergence_evidence,
)

MERGED_BRANCHES = RuleDefinition(
    id="R035",
    name="merged_branches",
    predicate=_merged_branches,
    command="git branch -d <branch>",
    description="Merged branches ready for cleanup",
    priority=65,
    condition="len(merged_branches) > 0",
    evidence_fn=_merged_branches_evidence,
)

GONE_BRANCHES = RuleDefinition(
    id="R036",
    name="gone_branches",
    predicate=_gone_branches,
    command="git branch -d <branch>",
    description="Gone remote branches - local cleanup needed",
    priority=62,
    condition="len(gone_branches) > 0",
    evidence_fn=_gone_branches_evidence,
)

EXISTING_MERGE_HISTORY = RuleDefinition(
    id="R033",
    name="existing_merge_history",
    predicate=_existing_merge_history,
    command="git merge origin/<branch>",
    description="Existing merge commits detected - continue with merge",
    priority=60,
    condition="has_merge_commits AND behind > 0",
)


def integrity_rules(params: RuleParameters) -> list[RuleDefinition]:
    """Integrity tier in declaration order."""
    return [
        CONFLICTED_FILES_STAGED,
        LARGE_BINARIES_WITHOUT_LFS,
        LINE_ENDING_CONFLICT,
        SUBMODULE_DETACHED_HEAD,
        SHALLOW_CLONE_HISTORY_OPS,
        DIVERGED_BRANCH,
        NO_UPSTREAM,
        REBASE_FEATURE_BRANCH,
        MERGED_BRANCHES,
        GONE_BRANCHES,
        EXISTING_MERGE_HISTORY,
    ]
