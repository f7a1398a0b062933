"""Rich terminal formatter for git-next."""

import io
from typing import Any, List, Optional

from rich.console import Console
from rich.markup import escape

from ..engine.models import Advice
from ..rules.models import Tier
from .base import BaseFormatter, ReportContext, advice_stats

TITLE = "Git Next - Suggested Actions"
CLEAN_MESSAGE = "Repository is clean. No actions needed."

_TIER_STYLE = {
    Tier.DANGEROUS: "red bold",
    Tier.INTEGRITY: "red",
    Tier.WORKFLOW: "yellow",
    Tier.SUGGESTION: "cyan",
    Tier.INFORMATIONAL: "dim",
}

# Evidence keys rendered under their own label, in this order.
_EVIDENCE_LABELS = {
    "branches": "Branches",
    "files": "Files",
    "tags": "Tags",
    "submodule": "Submodule",
    "message": "Message",
}


def _evidence_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def _evidence_lines(evidence: dict) -> List[str]:
    lines = []
    for key, label in _EVIDENCE_LABELS.items():
        if evidence.get(key):
            lines.append(f"  {label}: {escape(_evidence_value(evidence[key]))}")
    for key, value in evidence.items():
        if key in _EVIDENCE_LABELS:
            continue
        label = key.replace("_", " ").capitalize()
        lines.append(f"  [dim]{label}: {escape(_evidence_value(value))}[/dim]")
    return lines


class HumanFormatter(BaseFormatter):
    """Readable, colored list of suggested actions."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, advice: List[Advice], context: ReportContext) -> None:
        for line in self._lines(advice, context):
            self.console.print(line, highlight=False)

    def format(self, advice: List[Advice], context: ReportContext) -> str:
        buffer = io.StringIO()
        plain = Console(file=buffer, force_terminal=False, color_system=None, width=200)
        for line in self._lines(advice, context):
            plain.print(line, highlight=False)
        return buffer.getvalue()

    def _lines(self, advice: List[Advice], context: ReportContext) -> List[str]:
        if not advice:
            return [f"[green]✓[/green] {CLEAN_MESSAGE}"]

        lines = [f"[bold]{TITLE}[/bold]", "═" * 31, ""]
        for item in advice:
            if item.suppressed:
                if context.show_suppressed:
                    lines.extend(self._suppressed_lines(item))
            else:
                lines.extend(self._active_lines(item))

        stats = advice_stats(advice)
        lines.append("─" * 31)
        if stats["suppressed"]:
            lines.append(f"Active: {stats['active']}  Suppressed: {stats['suppressed']}")
            if not context.show_suppressed:
                lines.append("[dim](Use --all to show suppressed advice)[/dim]")
        else:
            lines.append(f"Total: {stats['active']} action(s)")
        return lines

    def _active_lines(self, item: Advice) -> List[str]:
        style = _TIER_STYLE[item.tier]
        lines = [
            f"[{style}]→ \\[{item.rule_id}][/{style}] {escape(item.description)}",
        ]
        lines.extend(_evidence_lines(item.evidence))
        lines.append(f"  Command: [bold]{escape(item.command)}[/bold]")
        lines.append("")
        return lines

    def _suppressed_lines(self, item: Advice) -> List[str]:
        return [
            f"  [dim]\\[{item.rule_id}] (suppressed)[/dim]",
            f"  [dim]{escape(item.description)}[/dim]",
            f"  [dim]Reason: {escape(item.reason)}[/dim]",
            "",
        ]
