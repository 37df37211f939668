"""Main analysis command."""

from pathlib import Path
from typing import Optional

import click
import typer
from rich.markup import escape

from ..analysis import Report
from ..baseline import compare_reports, load_previous_report, save_report
from ..formatters import JsonFormatter, MarkdownFormatter, get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import cli_errors, console, err_console, run_analysis

JSON_REPORT_NAME = "code-quality-report.json"
MARKDOWN_REPORT_NAME = "CODE_QUALITY_REPORT.md"


@app.callback(invoke_without_command=True, no_args_is_help=False)
def main(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(
        None,
        "-C",
        "--path",
        help="Project root to analyze (default: current directory)",
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich | json | markdown | github",
        click_type=click.Choice(["rich", "json", "markdown", "github"], case_sensitive=False),
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help=f"Write {JSON_REPORT_NAME} and {MARKDOWN_REPORT_NAME} to this directory",
        file_okay=False,
        dir_okay=True,
    ),
    baseline: Optional[Path] = typer.Option(
        None,
        "--baseline",
        help="Compare with the report saved in this file, then overwrite it",
        dir_okay=False,
    ),
    fail_on_critical: bool = typer.Option(
        False,
        "--fail-on-critical",
        help="Exit 1 if any critical finding is reported",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers (default: auto-detect)",
        min=1,
        max=32,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
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
    Analyze a JavaScript/TypeScript tree for technical debt, complexity,
    duplicated blocks and effect-hook render loops.

    [bold cyan]Examples:[/bold cyan]

      debtscope

      debtscope -C ./web --format json

      debtscope --output-dir reports --fail-on-critical

      debtscope complexity
    """
    target = Path(path) if path else Path.cwd()
    ctx.ensure_object(dict)
    ctx.obj.update(path=target, config=config, workers=workers, verbose=verbose)

    setup_logging(verbose=verbose)

    if ctx.invoked_subcommand is not None:
        return

    from .. import __version__

    if version:
        console.print(f"[bold cyan]debtscope[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    with cli_errors(verbose):
        report = run_analysis(target, config=config, workers=workers, verbose=verbose)

        formatter = get_formatter(output_format.lower())
        formatter.render(report)

        if output_dir is not None:
            _write_reports(report, output_dir)

        if baseline is not None:
            _compare_with_baseline(report, baseline)

        if fail_on_critical and report.has_critical:
            err_console.print(
                f"[red]--fail-on-critical:[/red] "
                f"{report.summary.critical_issues} critical finding(s) detected"
            )
            raise typer.Exit(1)


def _write_reports(report: Report, output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / JSON_REPORT_NAME
    md_path = output_dir / MARKDOWN_REPORT_NAME
    json_path.write_text(JsonFormatter().format(report), encoding="utf-8")
    md_path.write_text(MarkdownFormatter().format(report), encoding="utf-8")
    written = f"{json_path}, {md_path}"
    err_console.print(f"[dim]Reports written: {escape(written)}[/dim]")


def _compare_with_baseline(report: Report, baseline: Path) -> None:
    previous = load_previous_report(baseline)
    if previous is not None:
        comparison = compare_reports(previous, report)
        style = "red" if comparison.regressed else "green"
        err_console.print(
            f"Since {comparison.previous_timestamp}: quality "
            f"[{style}]{comparison.quality_delta:+d}[/{style}], "
            f"debt {comparison.debt_delta:+d}, "
            f"{len(comparison.new_findings)} new / "
            f"{len(comparison.resolved_findings)} resolved findings"
        )
    save_report(report, baseline)
