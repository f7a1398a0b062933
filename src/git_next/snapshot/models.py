"""Snapshot of observable repository facts at one instant.

A Snapshot is populated once per invocation (by the collector, or by hand in
tests and library usage) and never changes afterwards. Every attribute is an
independent fact; any reasoning that combines facts belongs to rule
predicates, not here.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

# Fields holding sequences of names, normalised to tuples on construction.
_SEQUENCE_FIELDS = (
    "merged_branches",
    "gone_branches",
    "inactive_branches",
    "conflicted_files",
    "large_binary_files",
    "unpushed_tags",
)


@dataclass(frozen=True)
class Snapshot:
    """Immutable record of repository state.

    Defaults describe a clean repository with no remote divergence, so
    ``Snapshot()`` triggers no rule at all.
    """

    # Working tree
    dirty: bool = False
    staged_files: int = 0
    modified_files: int = 0
    untracked_files: int = 0

    # Remote relationship
    ahead: int = 0
    behind: int = 0
    no_upstream: bool = False
    last_commit_pushed: bool = False
    commit_count_since_push: int = 0

    # Branch classification
    on_protected_branch: bool = False
    on_detached_head: bool = False
    on_detached_head_clean: bool = False

    # Stash
    has_stash: bool = False

    # In-progress operations
    merge_in_progress: bool = False
    rebase_in_progress: bool = False
    cherry_pick_in_progress: bool = False

    # History shape
    has_merge_commits: bool = False

    # Branch hygiene (discovery order)
    merged_branches: tuple[str, ...] = ()
    gone_branches: tuple[str, ...] = ()
    inactive_branches: tuple[str, ...] = ()

    # Dangerous operations
    force_push_to_shared: bool = False
    rewritten_published_tags: bool = False
    reset_on_protected_branch: bool = False
    submodule_rewrite_no_update: bool = False
    accidental_history_rewrite: bool = False

    # Repository integrity
    conflicted_files_staged: bool = False
    conflicted_files: tuple[str, ...] = ()
    large_binaries_without_lfs: bool = False
    large_binary_files: tuple[str, ...] = ()
    line_ending_conflict: bool = False
    submodule_detached_head: bool = False
    submodule_name: str = ""
    shallow_clone_history_ops: bool = False

    # Workflow hygiene
    work_on_main_not_feature: bool = False
    long_lived_feature_branch: bool = False
    feature_branch_age_days: int = 0
    squash_recommended: bool = False
    noisy_commit_count: int = 0
    wip_commit_on_shared: bool = False
    wip_commit_message: str = ""
    rebase_instead_of_merge: bool = False

    # Mild suggestions
    poor_commit_message: bool = False
    last_commit_message: str = ""
    amend_last_commit_suggested: bool = False
    unpushed_local_tags: bool = False
    unpushed_tags: tuple[str, ...] = ()
    stash_stack_growing: bool = False
    stash_count: int = 0
    oldest_stash_age_days: int = 0

    # Informational
    repo_size_growing_fast: bool = False
    repo_size_mb: int = 0

    def __post_init__(self) -> None:
        for name in _SEQUENCE_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value or ()))

    def to_dict(self) -> dict[str, Any]:
        """Return every field as JSON-safe data (tuples become lists)."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = list(value) if isinstance(value, tuple) else value
        return result
