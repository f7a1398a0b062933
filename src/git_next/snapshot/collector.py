"""Collect a Snapshot from a live repository.

Each fact group is gathered by its own method, mostly one or two git calls
each. A probe that fails (missing upstream, offline remote, unreadable
file) leaves its facts at their clean defaults: the engine only ever
advises on what was actually observed.
"""

from __future__ import annotations

import os
import re
import time
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from ..config import GitNextConfig
from ..exceptions import NotAGitRepositoryError
from ..logging_config import get_logger
from .git import GitRunner
from .models import Snapshot

logger = get_logger(__name__)

SECONDS_PER_DAY = 86400

NOISY_COMMIT_PATTERNS = (
    "fix", "oops", "wip", "temp", "debug", "test", "typo", ".", "update", "change",
)
WIP_RE = re.compile(r"\b(wip|temp|debug|todo|fixme)\b", re.IGNORECASE)
COMMIT_VERBS = (
    "add", "fix", "update", "remove", "delete", "create", "implement",
    "refactor", "improve", "enhance", "optimize", "clean", "bump",
    "merge", "revert", "upgrade", "downgrade", "move", "rename",
)
CONFLICT_MARKER_RE = re.compile(r"^(<{7}|>{7})(\s|$)", re.MULTILINE)
HISTORY_REWRITE_OPS = ("rebase", "amend", "filter-branch")
SHALLOW_HISTORY_OPS = ("rebase", "blame", "bisect", "log --all")

# Collector thresholds, overridable through rule parameters.
DEFAULT_LONG_LIVED_DAYS = 14
DEFAULT_LARGE_BINARY_KB = 1024
DEFAULT_MAX_STASHES = 3
DEFAULT_MAX_STASH_AGE_DAYS = 7
DEFAULT_MAX_REPO_SIZE_MB = 100
DEFAULT_INACTIVE_DAYS = 90

# Bytes inspected when sniffing for binary content
_BINARY_SNIFF_BYTES = 8000


# ==============================================================================
# Parsing helpers
# ==============================================================================


def parse_porcelain_status(output: str) -> tuple[int, int, int]:
    """Count (staged, modified, untracked) entries in ``status --porcelain``.

    Branch header lines (``## ...``) are ignored.
    """
    staged = modified = untracked = 0
    for line in output.splitlines():
        if len(line) < 2 or line.startswith("##"):
            continue
        index_status, worktree_status = line[0], line[1]
        if index_status == "?" and worktree_status == "?":
            untracked += 1
            continue
        if index_status not in (" ", "!"):
            staged += 1
        if worktree_status == "M":
            modified += 1
    return staged, modified, untracked


_TRACKING_RE = re.compile(r"\[([^\]]*)\]\s*$")
_AHEAD_RE = re.compile(r"ahead (\d+)")
_BEHIND_RE = re.compile(r"behind (\d+)")


def parse_tracking(branch_line: str) -> tuple[int, int]:
    """Extract (ahead, behind) from a ``## branch...upstream [..]`` line."""
    if not branch_line.startswith("## "):
        return 0, 0
    match = _TRACKING_RE.search(branch_line)
    if not match:
        return 0, 0
    tracking = match.group(1)
    ahead = _AHEAD_RE.search(tracking)
    behind = _BEHIND_RE.search(tracking)
    return (int(ahead.group(1)) if ahead else 0, int(behind.group(1)) if behind else 0)


def _branch_name(line: str) -> str:
    """Strip the current (``*``) and worktree (``+``) markers of ``git branch``."""
    return line.strip().lstrip("*+").strip()


def parse_merged_branches(output: str, current: str, protected: Iterable[str]) -> list[str]:
    """Branches from ``git branch --merged`` that are safe to delete."""
    protected_set = set(protected)
    branches = []
    for line in output.splitlines():
        name = _branch_name(line)
        # "(HEAD detached at ...)" is not a branch
        if not name or name.startswith("(") or name == current or name in protected_set:
            continue
        branches.append(name)
    return branches


def parse_gone_branches(output: str) -> list[str]:
    """Branches from ``git branch -vv`` whose upstream no longer exists."""
    branches = []
    for line in output.splitlines():
        if ": gone]" not in line:
            continue
        name = _branch_name(line).split(maxsplit=1)
        if name:
            branches.append(name[0])
    return branches


def count_noisy_commits(subjects: Iterable[str]) -> int:
    noisy = 0
    for subject in subjects:
        lowered = subject.strip().lower()
        if any(lowered == p or lowered.startswith(p + " ") for p in NOISY_COMMIT_PATTERNS):
            noisy += 1
    return noisy


def is_wip_message(message: str) -> bool:
    return bool(WIP_RE.search(message))


def starts_with_verb(message: str) -> bool:
    lowered = message.lower()
    return any(lowered == verb or lowered.startswith(verb + " ") for verb in COMMIT_VERBS)


def is_poor_commit_message(message: str) -> bool:
    """Too short, punctuation-only, or not led by an imperative verb."""
    message = message.strip()
    return len(message) < 5 or message in (".", "..") or not starts_with_verb(message)


def has_line_ending_conflict(ls_files_eol: str) -> bool:
    """True when the index mixes LF and CRLF text (``git ls-files --eol``)."""
    index_eols = set()
    for line in ls_files_eol.splitlines():
        parts = line.split()
        if parts and parts[0].startswith("i/"):
            index_eols.add(parts[0])
    return "i/mixed" in index_eols or {"i/lf", "i/crlf"} <= index_eols


def parse_ls_remote_tags(output: str) -> dict[str, str]:
    """Map tag name -> commit id from ``git ls-remote --tags``.

    Peeled entries (``^{}``) win over the tag object id so annotated tags
    compare by the commit they point at.
    """
    tags: dict[str, str] = {}
    peeled: dict[str, str] = {}
    for line in output.splitlines():
        parts = line.split("\t")
        if len(parts) != 2 or not parts[1].startswith("refs/tags/"):
            continue
        sha, ref = parts[0].strip(), parts[1].strip()[len("refs/tags/"):]
        if ref.endswith("^{}"):
            peeled[ref[:-3]] = sha
        else:
            tags[ref] = sha
    tags.update(peeled)
    return tags


def parse_local_tags(output: str) -> dict[str, str]:
    """Map tag name -> commit id from ``for-each-ref`` with peeled objects."""
    tags: dict[str, str] = {}
    for line in output.splitlines():
        parts = line.split()
        if len(parts) >= 3:
            tags[parts[0]] = parts[2]
        elif len(parts) == 2:
            tags[parts[0]] = parts[1]
    return tags


def _lines(output: Optional[str]) -> list[str]:
    if not output:
        return []
    return [line for line in output.splitlines() if line.strip()]


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


# ==============================================================================
# Collector
# ==============================================================================


class SnapshotCollector:
    """Build a Snapshot by interrogating git.

    Example:
        >>> snapshot = SnapshotCollector(".", load_config()).collect()
    """

    def __init__(
        self,
        repo_path: Union[str, Path] = ".",
        config: Optional[GitNextConfig] = None,
        runner: Optional[GitRunner] = None,
        now: Optional[float] = None,
    ):
        self.repo_path = Path(repo_path)
        self.config = config or GitNextConfig()
        self.runner = runner or GitRunner(self.repo_path)
        self.now = now if now is not None else time.time()
        self.params = self.config.rule_parameters

    def collect(self) -> Snapshot:
        """Collect every fact group.

        Raises:
            NotAGitRepositoryError: If ``repo_path`` is not inside a repository
            GitNotFoundError: If git is not installed
        """
        if self.runner.try_run("rev-parse", "--git-dir") is None:
            raise NotAGitRepositoryError(str(self.repo_path))

        git_dir_out = self.runner.try_run("rev-parse", "--absolute-git-dir")
        self.git_dir = Path(git_dir_out.strip()) if git_dir_out else self.repo_path / ".git"
        toplevel = self.runner.try_run("rev-parse", "--show-toplevel")
        self.work_tree = Path(toplevel.strip()) if toplevel else self.repo_path

        facts: dict[str, Any] = {}
        self._collect_working_tree(facts)
        self._collect_stash(facts)
        self._collect_head(facts)
        self._collect_push_status(facts)
        self._collect_history_shape(facts)
        self._collect_active_operations(facts)
        self._collect_branch_health(facts)
        self._collect_dangerous(facts)
        self._collect_integrity(facts)
        self._collect_workflow(facts)
        self._collect_suggestions(facts)
        self._collect_informational(facts)

        logger.debug("Collected snapshot for %s", self.work_tree)
        return Snapshot(**facts)

    # -- basic state ---------------------------------------------------------

    def _collect_working_tree(self, facts: dict[str, Any]) -> None:
        output = self.runner.try_run("status", "--porcelain", "--branch") or ""
        self._status_lines = output.splitlines()

        staged, modified, untracked = parse_porcelain_status(output)
        facts["staged_files"] = staged
        facts["modified_files"] = modified
        facts["untracked_files"] = untracked
        facts["dirty"] = staged > 0 or modified > 0 or untracked > 0

        header = self._status_lines[0] if self._status_lines else ""
        facts["ahead"], facts["behind"] = parse_tracking(header)

    def _collect_stash(self, facts: dict[str, Any]) -> None:
        self._stash_timestamps = [
            ts for ts in (_to_int(line) for line in _lines(self.runner.try_run("stash", "list", "--format=%ct")))
            if ts is not None
        ]
        facts["has_stash"] = bool(self._stash_timestamps)

    def _collect_head(self, facts: dict[str, Any]) -> None:
        detached = not self.runner.succeeds("symbolic-ref", "-q", "HEAD")
        facts["on_detached_head"] = detached

        self.current_branch = ""
        if not detached:
            self.current_branch = (self.runner.try_run("branch", "--show-current") or "").strip()
        facts["on_protected_branch"] = bool(self.current_branch) and self.config.is_protected(
            self.current_branch
        )

    def _collect_push_status(self, facts: dict[str, Any]) -> None:
        self.has_upstream = self.runner.succeeds("rev-parse", "--abbrev-ref", "@{u}")
        self.head_on_remote = bool(
            (self.runner.try_run("branch", "-r", "--contains", "HEAD") or "").strip()
        )
        if not self.has_upstream:
            facts["last_commit_pushed"] = False
            facts["commit_count_since_push"] = 0
            return

        count = _to_int(self.runner.try_run("rev-list", "--count", "@{u}..HEAD"))
        facts["commit_count_since_push"] = count or 0
        facts["last_commit_pushed"] = self.head_on_remote

    def _collect_history_shape(self, facts: dict[str, Any]) -> None:
        merges = self.runner.try_run("log", "--merges", "--oneline", "-n", "10")
        facts["has_merge_commits"] = bool(merges and merges.strip())

    def _collect_active_operations(self, facts: dict[str, Any]) -> None:
        facts["merge_in_progress"] = (self.git_dir / "MERGE_HEAD").is_file()
        facts["rebase_in_progress"] = (self.git_dir / "rebase-merge").is_dir() or (
            self.git_dir / "rebase-apply"
        ).is_dir()
        facts["cherry_pick_in_progress"] = (self.git_dir / "CHERRY_PICK_HEAD").is_file()

    def _collect_branch_health(self, facts: dict[str, Any]) -> None:
        if facts["on_detached_head"]:
            return

        facts["no_upstream"] = not self.has_upstream

        merged = self.runner.try_run("branch", "--merged")
        if merged is not None:
            facts["merged_branches"] = parse_merged_branches(
                merged, self.current_branch, self.config.protected_branches
            )

        verbose = self.runner.try_run("branch", "-vv")
        if verbose is not None:
            facts["gone_branches"] = parse_gone_branches(verbose)

    # -- dangerous operations ------------------------------------------------

    def _reflog_subjects(self, count: int) -> list[str]:
        return _lines(self.runner.try_run("reflog", f"-{count}", "--format=%gs"))

    def _collect_dangerous(self, facts: dict[str, Any]) -> None:
        protected = facts["on_protected_branch"]

        if protected:
            last = self._reflog_subjects(1)
            rewrote = bool(last) and any(op in last[0] for op in HISTORY_REWRITE_OPS)
            facts["force_push_to_shared"] = rewrote and not self.head_on_remote

            facts["reset_on_protected_branch"] = any(
                "reset:" in line for line in self._reflog_subjects(5)
            )

        self._collect_tags(facts)
        facts["submodule_rewrite_no_update"] = self._submodule_pointer_changed()

        found_push = False
        for line in self._reflog_subjects(10):
            if "push" in line:
                found_push = True
            if found_push and ("rebase" in line or "filter-branch" in line):
                facts["accidental_history_rewrite"] = True
                break

    def _collect_tags(self, facts: dict[str, Any]) -> None:
        local = parse_local_tags(
            self.runner.try_run(
                "for-each-ref", "--format=%(refname:short) %(objectname) %(*objectname)", "refs/tags"
            )
            or ""
        )
        if not local:
            return

        listing = self.runner.try_run("ls-remote", "--tags", "origin")
        if listing is None:
            logger.debug("Remote tags unavailable; skipping tag checks")
            return
        remote = parse_ls_remote_tags(listing)

        rewritten = [name for name, sha in local.items() if name in remote and remote[name] != sha]
        unpushed = [name for name in local if name not in remote]
        facts["rewritten_published_tags"] = bool(rewritten)
        facts["unpushed_local_tags"] = bool(unpushed)
        facts["unpushed_tags"] = unpushed

    def _submodule_paths(self) -> list[str]:
        gitmodules = self.work_tree / ".gitmodules"
        if not gitmodules.is_file():
            return []
        output = self.runner.try_run("config", "--file", str(gitmodules), "--get-regexp", "path")
        return [line.split(maxsplit=1)[1] for line in _lines(output) if len(line.split()) >= 2]

    def _submodule_pointer_changed(self) -> bool:
        paths = set(self._submodule_paths())
        if not paths:
            return False
        for line in self._status_lines:
            if line.startswith("M ") and line[3:].strip() in paths:
                return True
        return False

    # -- integrity -----------------------------------------------------------

    def _collect_integrity(self, facts: dict[str, Any]) -> None:
        staged = _lines(self.runner.try_run("diff", "--cached", "--name-only"))
        conflicted = [name for name in staged if self._has_conflict_markers(name)]
        facts["conflicted_files_staged"] = bool(conflicted)
        facts["conflicted_files"] = conflicted

        large = self._large_binaries_without_lfs()
        facts["large_binaries_without_lfs"] = bool(large)
        facts["large_binary_files"] = large

        eol = self.runner.try_run("ls-files", "--eol")
        facts["line_ending_conflict"] = bool(eol) and has_line_ending_conflict(eol)

        for line in _lines(self.runner.try_run("submodule", "status")):
            # " " = checked out at the recorded commit, "-" = not initialised
            if line.startswith((" ", "-")):
                parts = line.split()
                if len(parts) >= 2:
                    facts["submodule_detached_head"] = True
                    facts["submodule_name"] = parts[1]
                    break

        if (self.git_dir / "shallow").is_file():
            facts["shallow_clone_history_ops"] = any(
                op in line for line in self._reflog_subjects(5) for op in SHALLOW_HISTORY_OPS
            )

    def _has_conflict_markers(self, name: str) -> bool:
        try:
            content = (self.work_tree / name).read_text(encoding="utf-8", errors="ignore")
        except OSError:
            return False
        return bool(CONFLICT_MARKER_RE.search(content))

    def _large_binaries_without_lfs(self) -> list[str]:
        min_bytes = self.params.get_int("R043", "min_size_kb", DEFAULT_LARGE_BINARY_KB) * 1024
        candidates = _lines(
            self.runner.try_run("diff", "--cached", "--name-only", "--diff-filter=AM")
        )
        if not candidates:
            return []

        lfs_files = self.runner.try_run("lfs", "ls-files", "--name-only")
        lfs_tracked = set(_lines(lfs_files))

        found = []
        for name in candidates:
            path = self.work_tree / name
            try:
                if path.stat().st_size <= min_bytes:
                    continue
                with open(path, "rb") as f:
                    head = f.read(_BINARY_SNIFF_BYTES)
            except OSError:
                continue
            if b"\0" in head and name not in lfs_tracked:
                found.append(name)
        return found

    # -- workflow ------------------------------------------------------------

    def _last_subject(self) -> str:
        return (self.runner.try_run("log", "-1", "--format=%s") or "").strip()

    def _collect_workflow(self, facts: dict[str, Any]) -> None:
        protected = facts["on_protected_branch"]
        detached = facts["on_detached_head"]

        if protected:
            subject = self._last_subject()
            if facts["ahead"] > 0 and not subject.lower().startswith("merge"):
                facts["work_on_main_not_feature"] = True
            if is_wip_message(subject):
                facts["wip_commit_on_shared"] = True
                facts["wip_commit_message"] = subject
        else:
            parents = (self.runner.try_run("log", "-1", "--format=%p") or "").split()
            facts["rebase_instead_of_merge"] = len(parents) > 1

        if not protected and not detached and self.current_branch:
            age = self._branch_age_days()
            max_days = self.params.get_int("R048", "max_days", DEFAULT_LONG_LIVED_DAYS)
            if age is not None and age > max_days and facts["behind"] > 0:
                facts["long_lived_feature_branch"] = True
                facts["feature_branch_age_days"] = age

        if facts["ahead"] > 0:
            subjects = _lines(self.runner.try_run("log", "--format=%s", "@{u}..HEAD"))
            noisy = count_noisy_commits(subjects)
            if len(subjects) > 3 and noisy / len(subjects) > 0.3:
                facts["squash_recommended"] = True
                facts["noisy_commit_count"] = noisy

    def _branch_age_days(self) -> Optional[int]:
        for base in ("origin/main", "origin/master"):
            merge_base = self.runner.try_run("merge-base", "HEAD", base)
            if merge_base and merge_base.strip():
                break
        else:
            return None

        timestamp = _to_int(self.runner.try_run("log", "-1", "--format=%ct", merge_base.strip()))
        if timestamp is None:
            return None
        return self._age_days(timestamp)

    def _age_days(self, timestamp: int) -> int:
        return int((self.now - timestamp) // SECONDS_PER_DAY)

    # -- suggestions ---------------------------------------------------------

    def _collect_suggestions(self, facts: dict[str, Any]) -> None:
        if facts["staged_files"] > 0 or facts["ahead"] > 0:
            message = self._last_subject()
            facts["last_commit_message"] = message
            facts["poor_commit_message"] = is_poor_commit_message(message)

        if facts["ahead"] >= 2 and facts["staged_files"] > 0:
            times = [_to_int(line) for line in _lines(self.runner.try_run("log", "-2", "--format=%ct"))]
            if len(times) == 2 and None not in times:
                gap = times[0] - times[1]
                facts["amend_last_commit_suggested"] = 0 < gap < 300

        stashes = self._stash_timestamps
        facts["stash_count"] = len(stashes)
        max_stashes = self.params.get_int("R055", "max_stashes", DEFAULT_MAX_STASHES)
        if len(stashes) > max_stashes:
            # stash list is newest first
            oldest_age = self._age_days(stashes[-1])
            facts["oldest_stash_age_days"] = oldest_age
            max_age = self.params.get_int("R055", "max_age_days", DEFAULT_MAX_STASH_AGE_DAYS)
            facts["stash_stack_growing"] = oldest_age > max_age

    # -- informational -------------------------------------------------------

    def _collect_informational(self, facts: dict[str, Any]) -> None:
        size_mb = self._git_dir_size() // (1024 * 1024)
        facts["repo_size_mb"] = size_mb
        max_size = self.params.get_int("R056", "max_size_mb", DEFAULT_MAX_REPO_SIZE_MB)
        facts["repo_size_growing_fast"] = size_mb > max_size

        inactive_days = self.params.get_int("R057", "inactive_days", DEFAULT_INACTIVE_DAYS)
        refs = self.runner.try_run(
            "for-each-ref", "--format=%(refname:short) %(committerdate:unix)", "refs/heads"
        )
        inactive = []
        for line in _lines(refs):
            parts = line.rsplit(maxsplit=1)
            if len(parts) != 2 or parts[0] == self.current_branch:
                continue
            timestamp = _to_int(parts[1])
            if timestamp is not None and self._age_days(timestamp) > inactive_days:
                inactive.append(parts[0])
        facts["inactive_branches"] = inactive

        facts["on_detached_head_clean"] = facts["on_detached_head"] and not facts["dirty"]

    def _git_dir_size(self) -> int:
        total = 0
        for root, _dirs, files in os.walk(self.git_dir):
            for name in files:
                try:
                    total += os.path.getsize(os.path.join(root, name))
                except OSError:
                    continue
        return total
