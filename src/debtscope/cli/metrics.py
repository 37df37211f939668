"""Single-metric commands: complexity and debt rankings."""

import json
from pathlib import Path

import typer

from ..formatters import RichFormatter
from . import app
from ._common import cli_errors, console, run_analysis


def _ranked(ctx: typer.Context, attr: str, json_output: bool) -> None:
    obj = ctx.obj or {}
    verbose = obj.get("verbose", False)

    with cli_errors(verbose):
        report = run_analysis(
            obj.get("path", Path.cwd()),
            config=obj.get("config"),
            workers=obj.get("workers"),
            verbose=verbose,
        )
        ranked = getattr(report.rankings, attr)
        if json_output:
            typer.echo(json.dumps([r.to_dict() for r in ranked], indent=2))
        elif attr == "most_complex":
            RichFormatter(console).print_complexity(console, report)
        else:
            RichFormatter(console).print_debt(console, report)


@app.command()
def complexity(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the most complex files.

    [bold cyan]Examples:[/bold cyan]

      debtscope complexity

      debtscope -C ./web complexity --json
    """
    _ranked(ctx, "most_complex", json_output)


@app.command()
def debt(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the files with the highest technical debt score.

    [bold cyan]Examples:[/bold cyan]

      debtscope debt

      debtscope debt --json
    """
    _ranked(ctx, "highest_debt", json_output)
