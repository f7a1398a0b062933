"""Base exception for git-next."""

from typing import Mapping, Optional

# What an error is about: the git command, config path or rule involved.
ErrorDetails = Mapping[str, str]


class GitNextError(Exception):
    """Base exception for all git-next errors.

    ``details`` is shown after the message so the user can see which
    command, file or rule failed. Empty values are left out.
    """

    def __init__(self, message: str, details: Optional[ErrorDetails] = None):
        super().__init__(message)
        self.message = message
        self.details = {key: value for key, value in (details or {}).items() if value}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"
