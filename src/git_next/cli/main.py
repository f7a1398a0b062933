"""Main advice command."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..action import ActionExecutor
from ..engine import AdviceEngine, has_active_advice
from ..exceptions import GitNextError
from ..formatters import HumanFormatter, ReportContext, get_formatter
from ..logging_config import setup_logging
from ..snapshot import SnapshotCollector
from . import app
from ._common import console, err_console, print_snapshot_state, resolve_config


@app.callback(invoke_without_command=True, no_args_is_help=False)
def main(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(
        None,
        "-C",
        "--path",
        help="Repository to inspect (default: current directory)",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    show_all: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Show suppressed advice and why it was suppressed",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    compact: bool = typer.Option(
        False,
        "--compact",
        help="One-line summary of active rule ids",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Show the collected repository state",
    ),
    action: bool = typer.Option(
        False,
        "--action",
        help="Interactively pick and execute a suggested action",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Tell you the next git command to run, and why.

    Inspects the repository, evaluates every rule against what it finds and
    hides advice made irrelevant by a more urgent action. Exits with status 1
    while any advice is active, so the command can gate scripts and hooks.

    [bold cyan]Examples:[/bold cyan]

      git-next

      git-next --all

      git-next --compact

      git-next --action

      git-next -C /path/to/repo --json
    """
    target = Path(path) if path else Path.cwd()
    ctx.ensure_object(dict)
    ctx.obj["path"] = target
    ctx.obj["config"] = config

    if ctx.invoked_subcommand is not None:
        return

    from .. import __version__

    if version:
        console.print(f"[bold cyan]git-next[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    logger = setup_logging(verbose=verbose)

    try:
        settings = resolve_config(target, config)
        snapshot = SnapshotCollector(target, settings).collect()

        if debug:
            print_snapshot_state(snapshot)

        advice = AdviceEngine(settings).advise(snapshot)

        if action:
            ActionExecutor(console, repo_path=target).execute(advice)
            raise typer.Exit(0)

        if json_output:
            formatter = get_formatter("json")
        elif compact:
            formatter = get_formatter("compact")
        else:
            formatter = HumanFormatter(console)
        formatter.render(advice, ReportContext(snapshot=snapshot, show_suppressed=show_all))

    except GitNextError as e:
        logger.debug("%s: %s", e.__class__.__name__, e)
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(2)

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)

    if has_active_advice(advice):
        raise typer.Exit(1)
