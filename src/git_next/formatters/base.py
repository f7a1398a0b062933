"""Base formatter interface for git-next output rendering."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ..engine.models import Advice
from ..snapshot.models import Snapshot


@dataclass
class ReportContext:
    """What a formatter may need besides the advice list."""

    snapshot: Optional[Snapshot] = None
    show_suppressed: bool = False


def advice_stats(advice: List[Advice]) -> dict:
    active = sum(1 for a in advice if a.active)
    return {"total": len(advice), "active": active, "suppressed": len(advice) - active}


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, advice: List[Advice], context: ReportContext) -> None:
        """Write the formatted advice to the terminal."""

    @abstractmethod
    def format(self, advice: List[Advice], context: ReportContext) -> str:
        """Return formatted string representation of the advice."""
