"""Rules CLI command -- list the rule catalog."""

import json
from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from ..exceptions import GitNextError
from ..rules import RuleCatalog
from . import app
from ._common import console, err_console, resolve_config

_TIER_COLOR = {
    "dangerous": "red bold",
    "integrity": "red",
    "workflow": "yellow",
    "suggestion": "cyan",
    "informational": "dim",
}


@app.command()
def rules(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    List every rule, most severe first, marking the ones disabled by config.

    [bold cyan]Examples:[/bold cyan]

      git-next rules

      git-next rules --json
    """
    target = ctx.obj.get("path", Path.cwd())
    try:
        catalog = RuleCatalog(resolve_config(target, ctx.obj.get("config")))
    except GitNextError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(2)

    if json_output:
        data = [
            {
                "id": rule.id,
                "name": rule.name,
                "tier": rule.tier.value,
                "priority": rule.priority,
                "command": rule.command,
                "description": rule.description,
                "condition": rule.condition,
                "enabled": not catalog.is_disabled(rule.id),
            }
            for rule in catalog
        ]
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return

    table = Table(title="git-next rules", show_header=True, header_style="bold")
    table.add_column("ID", style="bold", no_wrap=True)
    table.add_column("Tier", no_wrap=True)
    table.add_column("Priority", justify="right", no_wrap=True)
    table.add_column("Command")
    table.add_column("Description")

    for rule in catalog:
        tier = rule.tier.value
        color = _TIER_COLOR[tier]
        disabled = catalog.is_disabled(rule.id)
        table.add_row(
            f"[dim]{rule.id}[/dim]" if disabled else rule.id,
            f"[{color}]{tier}[/{color}]",
            str(rule.priority),
            escape(rule.command),
            escape(rule.description) + (" [dim](disabled)[/dim]" if disabled else ""),
        )

    console.print(table)
    disabled_count = sum(1 for rule in catalog if catalog.is_disabled(rule.id))
    console.print(f"\n{len(catalog)} rules, {disabled_count} disabled")
