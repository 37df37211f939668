"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="debtscope",
    help="debtscope - static code quality analysis for JavaScript/TypeScript projects",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .analyze import main as _main_callback  # noqa: F401, E402
from .metrics import complexity as _complexity, debt as _debt  # noqa: F401, E402
