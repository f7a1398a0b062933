#!/usr/bin/env python3
"""
Example: Basic usage of git-next as a Python library
"""

from git_next import AdviceEngine, Snapshot, SnapshotCollector, load_config

# Advise on a live repository
config = load_config()
snapshot = SnapshotCollector("/path/to/repo", config).collect()
advice = AdviceEngine(config).advise(snapshot)

for item in advice:
    if item.active:
        print(f"[{item.rule_id}] {item.description}")
        print(f"  -> {item.command}")
    else:
        print(f"[{item.rule_id}] suppressed: {item.reason}")

# Or evaluate a hand-built state: a merge is in progress with commits to push
advice = AdviceEngine().advise(Snapshot(merge_in_progress=True, ahead=2))
print([(a.rule_id, a.suppressed) for a in advice])
