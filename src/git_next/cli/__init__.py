"""CLI entry point -- registers all subcommands."""

import typer

app = typer.Typer(
    name="git-next",
    help="git-next - Git advice that doesn't lie",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .main import main as _main_callback  # noqa: F401, E402
from .rules import rules as _rules  # noqa: F401, E402
