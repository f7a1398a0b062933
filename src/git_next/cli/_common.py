"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from ..config import GitNextConfig, load_config
from ..snapshot.models import Snapshot

console = Console()
err_console = Console(stderr=True)


def resolve_config(path: Path, config: Optional[Path] = None) -> GitNextConfig:
    """Build configuration for the repository at ``path``."""
    return load_config(config_file=config, cwd=path)


def print_snapshot_state(snapshot: Snapshot) -> None:
    """Dump every snapshot field (``--debug``)."""
    table = Table(title="Repository State", show_header=True, header_style="bold")
    table.add_column("Field")
    table.add_column("Value")
    for name, value in snapshot.to_dict().items():
        if isinstance(value, list):
            value = ", ".join(value) if value else "-"
        table.add_row(name, str(value))
    console.print(table)
    console.print()
