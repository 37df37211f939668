"""Rich terminal formatter: summary panel plus ranked tables."""

from io import StringIO
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..analysis.models import Report, Severity
from .base import BaseFormatter

_SEVERITY_STYLES = {
    Severity.CRITICAL: "red bold",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "dim",
}


def _score_style(score: int) -> str:
    if score >= 80:
        return "green"
    elif score >= 50:
        return "yellow"
    return "red bold"


class RichFormatter(BaseFormatter):
    """Rich terminal output with summary panel, rankings and critical issues."""

    def __init__(self, console: Optional[Console] = None, max_findings: int = 20):
        self.console = console or Console()
        self.max_findings = max_findings

    def render(self, report: Report) -> None:
        self._print(self.console, report)

    def format(self, report: Report) -> str:
        buffer = Console(file=StringIO(), width=120, record=True)
        self._print(buffer, report)
        return buffer.export_text()

    def _print(self, console: Console, report: Report) -> None:
        self.print_summary(console, report)
        self.print_complexity(console, report)
        self.print_debt(console, report)
        self._print_findings(console, report)
        self._print_recommendations(console, report)

    def print_summary(self, console: Console, report: Report) -> None:
        s = report.summary
        style = _score_style(s.quality_score)
        body = (
            f"Quality score: [{style}]{s.quality_score}/100[/{style}]\n"
            f"Files analyzed: {s.total_files}   Total lines: {s.total_lines:,}\n"
            f"Avg complexity: {s.avg_complexity}   p50/p90: {s.complexity_p50}/{s.complexity_p90}\n"
            f"Tech debt score: {s.technical_debt_score}   "
            f"Duplicate blocks: {s.duplicate_code_blocks}\n"
            f"Issues: {s.total_issues} "
            f"([red bold]{s.critical_issues} critical[/red bold], "
            f"[red]{s.high_issues} high[/red], "
            f"[yellow]{s.medium_issues} medium[/yellow], {s.low_issues} low)"
        )
        if s.failed_files or s.failed_detectors:
            body += (
                f"\n[yellow]Not analyzed: {s.failed_files} unreadable files, "
                f"{s.failed_detectors} failed detector runs[/yellow]"
            )
        console.print(Panel(body, title="[bold cyan]Code Quality Summary[/bold cyan]", expand=False))

    def print_complexity(self, console: Console, report: Report) -> None:
        lines = {m.path: m.lines for m in report.files}
        table = Table(title="Most Complex Files", show_lines=False)
        table.add_column("File", style="cyan")
        table.add_column("Complexity", justify="right")
        table.add_column("Lines", justify="right")
        for ranked in report.rankings.most_complex:
            table.add_row(escape(ranked.path), str(ranked.value), str(lines[ranked.path]))
        console.print(table)

    def print_debt(self, console: Console, report: Report) -> None:
        table = Table(title="Highest Technical Debt")
        table.add_column("File", style="cyan")
        table.add_column("Debt score", justify="right")
        for ranked in report.rankings.highest_debt:
            table.add_row(escape(ranked.path), str(ranked.value))
        console.print(table)

    def _print_findings(self, console: Console, report: Report) -> None:
        if not report.findings:
            console.print("[green]No issues found.[/green]")
            return

        ordered = sorted(report.findings, key=lambda f: -f.severity.rank)
        table = Table(title=f"Issues ({len(report.findings)})")
        table.add_column("Severity")
        table.add_column("Category")
        table.add_column("Location", style="cyan")
        table.add_column("Message")
        for finding in ordered[: self.max_findings]:
            style = _SEVERITY_STYLES[finding.severity]
            location = finding.file
            if finding.line_range:
                location += f":{finding.line_range[0]}"
            table.add_row(
                f"[{style}]{finding.severity.value}[/{style}]",
                finding.category.value,
                escape(location),
                escape(finding.message),
            )
        console.print(table)
        if len(ordered) > self.max_findings:
            console.print(f"[dim]... and {len(ordered) - self.max_findings} more[/dim]")

    def _print_recommendations(self, console: Console, report: Report) -> None:
        console.print("\n[bold]Top recommendations:[/bold]")
        for i, rec in enumerate(report.recommendations[:3], 1):
            console.print(f"{i}. {rec}", markup=False)
