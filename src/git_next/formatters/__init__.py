"""Output formatters for git-next."""

from .base import BaseFormatter, ReportContext
from .compact_formatter import CompactFormatter
from .human_formatter import HumanFormatter
from .json_formatter import JsonFormatter


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "human", "json", "compact"

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    formatters = {
        "human": HumanFormatter,
        "json": JsonFormatter,
        "compact": CompactFormatter,
    }
    cls = formatters.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(formatters))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "CompactFormatter",
    "HumanFormatter",
    "JsonFormatter",
    "ReportContext",
    "get_formatter",
]
