"""GitHub Actions formatter: one workflow annotation per finding."""

from ..analysis.models import Finding, Report, Severity
from .base import BaseFormatter

_LEVELS = {
    Severity.CRITICAL: "error",
    Severity.HIGH: "error",
    Severity.MEDIUM: "warning",
    Severity.LOW: "notice",
}


def _escape(text: str) -> str:
    # Workflow commands treat %, CR and LF as control characters
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GithubFormatter(BaseFormatter):
    """Output ``::error`` / ``::warning`` / ``::notice`` annotations."""

    def render(self, report: Report) -> None:
        print(self.format(report))

    def format(self, report: Report) -> str:
        lines = [self._annotation(f) for f in report.findings]
        s = report.summary
        lines.append(
            f"::notice::Quality score {s.quality_score}/100, {s.total_issues} issues "
            f"({s.critical_issues} critical)"
        )
        return "\n".join(lines)

    def _annotation(self, finding: Finding) -> str:
        location = f"file={finding.file}"
        if finding.line_range:
            start, end = finding.line_range
            location += f",line={start},endLine={end}"
        title = finding.category.value
        return f"::{_LEVELS[finding.severity]} {location},title={title}::{_escape(finding.message)}"
