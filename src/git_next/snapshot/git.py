"""Run git subcommands via subprocess."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional, Union

from ..exceptions import GitCommandError, GitNotFoundError
from ..logging_config import get_logger

logger = get_logger(__name__)


class GitRunner:
    """Thin wrapper around ``git -C <repo> ...``.

    ``run`` raises on failure; ``try_run`` returns None instead, for probes
    where a failing command simply means "not detected".
    """

    def __init__(self, repo_path: Union[str, Path] = ".", timeout: float = 10):
        self.repo_path = str(Path(repo_path).resolve())
        self.timeout = timeout

    def run(self, *args: str) -> str:
        cmd = ["git", "-C", self.repo_path, *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise GitNotFoundError()
        except subprocess.TimeoutExpired:
            raise GitCommandError(args, None, f"timed out after {self.timeout}s")

        if result.returncode != 0:
            raise GitCommandError(args, result.returncode, result.stderr)
        return result.stdout

    def try_run(self, *args: str) -> Optional[str]:
        try:
            return self.run(*args)
        except GitCommandError as e:
            logger.debug("%s", e)
            return None

    def succeeds(self, *args: str) -> bool:
        return self.try_run(*args) is not None
