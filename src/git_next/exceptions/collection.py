"""Repository inspection and action execution exceptions."""

from typing import Optional, Sequence

from .base import GitNextError


class CollectionError(GitNextError):
    """Base class for errors while reading repository state."""

    pass


class NotAGitRepositoryError(CollectionError):
    """Raised when the inspected path is not inside a git work tree."""

    def __init__(self, path: str):
        super().__init__("Not a git repository", details={"path": path})
        self.path = path


class GitNotFoundError(CollectionError):
    """Raised when the git executable cannot be found."""

    def __init__(self):
        super().__init__("git executable not found on PATH")


class GitCommandError(CollectionError):
    """Raised when a git subprocess exits non-zero or times out."""

    def __init__(self, args: Sequence[str], returncode: Optional[int], stderr: str = ""):
        command = "git " + " ".join(args)
        details = {
            "command": command,
            "returncode": "" if returncode is None else str(returncode),
            "stderr": stderr.strip(),
        }
        super().__init__("git command failed", details=details)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class ExecutionError(GitNextError):
    """Raised when an interactive action cannot be resolved or fails."""

    def __init__(self, message: str, command: Optional[str] = None):
        super().__init__(message, details={"command": command or ""})
        self.command = command
