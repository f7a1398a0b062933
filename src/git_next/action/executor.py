"""Interactive execution of suggested commands.

The executor lists active advice, lets the user pick one, fills in the
template placeholders and runs the result. Nothing is run through a shell:
chained templates are split on ``&&`` and each segment is tokenised with
``shlex``. A ``cd`` segment changes the working directory for the segments
after it.
"""

from __future__ import annotations

import re
import shlex
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from ..engine.commands import (
    ALTERNATIVE_SEPARATOR,
    CHAIN_SEPARATOR,
    alternatives,
    is_executable,
    placeholders,
)
from ..engine.models import Advice
from ..exceptions import ExecutionError, GitCommandError
from ..logging_config import get_logger
from ..snapshot.git import GitRunner

logger = get_logger(__name__)

# "(or rebase)" style remarks are for the reader, not the shell
_REMARK_RE = re.compile(r"\s*\([^)]*\)")

CommandRunner = Callable[[Sequence[str], Path], int]


class RichPrompter:
    """Ask questions on the terminal with rich prompts."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def ask(self, question: str, default: Optional[str] = None) -> str:
        if default is None:
            return Prompt.ask(question, console=self.console)
        return Prompt.ask(question, console=self.console, default=default)

    def confirm(self, question: str) -> bool:
        return Confirm.ask(question, console=self.console, default=False)


def _run_subprocess(argv: Sequence[str], cwd: Path) -> int:
    return subprocess.run(list(argv), cwd=str(cwd)).returncode


class CommandResolver:
    """Turn a command template into a concrete command line.

    Alternatives are chosen first, so only the placeholders of the chosen
    command are asked for. ``evidence`` from the advice supplies defaults
    (branches to delete, commit counts, submodule name).
    """

    def __init__(self, prompter, git: Optional[GitRunner] = None, console: Optional[Console] = None):
        self.prompter = prompter
        self.git = git or GitRunner()
        self.console = console or Console()

    def resolve(self, command: str, evidence: Optional[dict] = None) -> str:
        evidence = evidence or {}
        command = self._choose_alternative(command)
        command = _REMARK_RE.sub("", command).strip()

        for placeholder in placeholders(command):
            command = command.replace(placeholder, self._fill(placeholder, command, evidence))
        return command

    def _fill(self, placeholder: str, command: str, evidence: dict) -> str:
        if placeholder == "<branch>":
            return self._branch(command, evidence)
        if placeholder in ("<files>", "<pattern>"):
            answer = self.prompter.ask("File pattern ('.' for all)", default=".")
            return answer.strip() or "."
        if placeholder == "<name>":
            return self._required("Branch name")
        if placeholder == "<submodule>":
            return self._required("Submodule path", evidence.get("submodule") or None)
        if placeholder == "HEAD~N":
            return f"HEAD~{self._commit_count(evidence)}"
        raise ExecutionError(f"Unknown placeholder: {placeholder}", command)

    def _choose_alternative(self, command: str) -> str:
        if ALTERNATIVE_SEPARATOR not in command:
            return command
        options = alternatives(command)
        self.console.print("\nMultiple options available:")
        for i, option in enumerate(options, 1):
            self.console.print(f"  {i}. {escape(option)}", highlight=False)
        choice = self.prompter.ask(f"Select option (1-{len(options)})").strip()
        if not choice.isdigit() or not 1 <= int(choice) <= len(options):
            raise ExecutionError(f"Invalid choice: {choice!r}", command)
        return options[int(choice) - 1]

    def _branch(self, command: str, evidence: dict) -> str:
        if "git branch -d" in command:
            candidates = evidence.get("branches") or []
            default = " ".join(candidates) if candidates else None
            return self._required("Branch name(s) to delete (space-separated)", default)
        if command.startswith("cd "):
            # the branch belongs to another repository
            return self._required("Branch name")

        current = self._current_branch()
        if current and current != "HEAD":
            return current
        return self._required("Branch name")

    def _current_branch(self) -> str:
        try:
            return self.git.run("rev-parse", "--abbrev-ref", "HEAD").strip()
        except GitCommandError as e:
            raise ExecutionError("Failed to get current branch", e.command) from e

    def _commit_count(self, evidence: dict) -> int:
        suggested = evidence.get("commits") or evidence.get("noisy_commits") or 1
        answer = self.prompter.ask("Number of commits", default=str(suggested)).strip()
        if not answer.isdigit() or int(answer) < 1:
            raise ExecutionError(f"Invalid commit count: {answer!r}")
        return int(answer)

    def _required(self, question: str, default: Optional[str] = None) -> str:
        answer = self.prompter.ask(question, default=default).strip()
        if not answer:
            raise ExecutionError(f"No value given for: {question}")
        return answer


class ActionExecutor:
    """Pick one active advice item and run its command."""

    def __init__(
        self,
        console: Optional[Console] = None,
        prompter=None,
        runner: Optional[CommandRunner] = None,
        repo_path: Union[str, Path] = ".",
        git: Optional[GitRunner] = None,
    ):
        self.console = console or Console()
        self.prompter = prompter or RichPrompter(self.console)
        self.runner = runner or _run_subprocess
        self.repo_path = Path(repo_path).resolve()
        self.resolver = CommandResolver(self.prompter, git or GitRunner(self.repo_path), self.console)

    def execute(self, advice: List[Advice]) -> bool:
        """Run the interaction. Returns True when a command was executed.

        Raises:
            ExecutionError: On invalid input, a warning-only selection or a
                failing command
        """
        active = [a for a in advice if a.active]
        if not active:
            self.console.print("[green]✓[/green] Repository is clean. No actions to execute.")
            return False

        self.console.print("[bold]Git Next - Interactive Action Mode[/bold]")
        self.console.print("═" * 35)
        for i, item in enumerate(active, 1):
            self.console.print(f"\n{i}. \\[{item.rule_id}] {escape(item.description)}", highlight=False)
            self.console.print(f"   Command: {escape(item.command)}", highlight=False)
            self.console.print(f"   Priority: {item.priority}", highlight=False)
        self.console.print()

        selection = self.prompter.ask(f"Select action to execute (1-{len(active)}, or 'q' to quit)").strip()
        if selection.lower() == "q":
            self.console.print("Cancelled.")
            return False
        if not selection.isdigit() or not 1 <= int(selection) <= len(active):
            raise ExecutionError(f"Invalid selection: {selection!r}")

        chosen = active[int(selection) - 1]
        if not is_executable(chosen.command):
            raise ExecutionError("This advice is a warning, not a runnable command", chosen.command)

        command = self.resolver.resolve(chosen.command, chosen.evidence)
        self.console.print(f"\nAbout to execute: [bold]{escape(command)}[/bold]")
        if not self.prompter.confirm("Proceed?"):
            self.console.print("Cancelled.")
            return False

        self.run(command)
        return True

    def run(self, command: str) -> None:
        """Run each ``&&`` segment in order, stopping at the first failure."""
        cwd = self.repo_path
        self.console.print("─" * 31)
        for segment in (s.strip() for s in command.split(CHAIN_SEPARATOR)):
            if not segment:
                continue
            try:
                argv = shlex.split(segment)
            except ValueError as e:
                raise ExecutionError(f"Cannot parse command: {e}", segment) from e
            if argv[0] == "cd":
                if len(argv) != 2:
                    raise ExecutionError("cd expects exactly one directory", segment)
                cwd = (cwd / argv[1]).resolve()
                if not cwd.is_dir():
                    raise ExecutionError(f"No such directory: {cwd}", segment)
                continue

            logger.debug("Running %s in %s", argv, cwd)
            try:
                returncode = self.runner(argv, cwd)
            except FileNotFoundError as e:
                raise ExecutionError(f"Command not found: {argv[0]}", segment) from e
            if returncode != 0:
                raise ExecutionError(f"Command failed with exit code {returncode}", segment)

        self.console.print("[green]✓[/green] Command completed successfully")
