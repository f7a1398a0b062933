"""Compact formatter: one line, suited to shell prompts."""

from typing import List

from ..engine.models import Advice
from .base import BaseFormatter, ReportContext

CLEAN_MARKER = "✓ clean"


class CompactFormatter(BaseFormatter):
    """Render active rule ids only, e.g. ``→ R009, R004``."""

    def render(self, advice: List[Advice], context: ReportContext) -> None:
        print(self.format(advice, context))

    def format(self, advice: List[Advice], context: ReportContext) -> str:
        active = [a.rule_id for a in advice if a.active]
        if not active:
            return CLEAN_MARKER
        return "→ " + ", ".join(active)
