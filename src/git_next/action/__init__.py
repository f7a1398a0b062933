"""Interactive execution of suggested actions."""

from .executor import ActionExecutor, CommandResolver, RichPrompter

__all__ = ["ActionExecutor", "CommandResolver", "RichPrompter"]
