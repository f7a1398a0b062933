"""Command templates: canonical keys, alternatives and placeholders."""

from __future__ import annotations

import re

ALTERNATIVE_SEPARATOR = " OR "
CHAIN_SEPARATOR = "&&"
CONTINUATION_FLAGS = frozenset({"--continue", "--abort"})

PLACEHOLDER_RE = re.compile(r"<[a-z]+>|HEAD~N\b")


def command_key(command: str) -> str:
    """Return the canonical verb used for suppression lookups.

    Chained templates (``a && b``) are represented by their last command,
    templates offering alternatives (``a OR b``) by their first. Only git
    commands have a key; warnings and shell steps yield ``""``.

    Examples:
        >>> command_key("git reset --soft HEAD~N")
        'reset'
        >>> command_key("git merge --continue OR git merge --abort")
        'merge --continue'
        >>> command_key("git add <files> && git commit")
        'commit'
        >>> command_key("# DO NOT rewrite published tags!")
        ''
    """
    if CHAIN_SEPARATOR in command:
        command = command.split(CHAIN_SEPARATOR)[-1].strip()

    if ALTERNATIVE_SEPARATOR in command:
        command = command.split(ALTERNATIVE_SEPARATOR)[0].strip()

    parts = command.split()
    if len(parts) < 2 or parts[0] != "git":
        return ""

    verb = parts[1]
    if len(parts) >= 3 and parts[2] in CONTINUATION_FLAGS:
        return f"{verb} {parts[2]}"
    return verb


def alternatives(command: str) -> list[str]:
    """Split a template into the commands a user may choose between."""
    return [part.strip() for part in command.split(ALTERNATIVE_SEPARATOR) if part.strip()]


def is_executable(command: str) -> bool:
    """Warnings are rendered as shell comments and cannot be run."""
    return not command.lstrip().startswith("#")


def placeholders(command: str) -> list[str]:
    """Placeholders in order of first appearance, without duplicates."""
    seen: list[str] = []
    for match in PLACEHOLDER_RE.findall(command):
        if match not in seen:
            seen.append(match)
    return seen
