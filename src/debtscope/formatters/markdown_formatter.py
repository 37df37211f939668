"""Markdown formatter producing the CODE_QUALITY_REPORT.md document.

Only reads Report fields; nothing is recomputed here except the
timestamp's display form.
"""

from datetime import datetime
from typing import List

from ..analysis.models import Report, Severity
from .base import BaseFormatter

TOP_ISSUE_TYPES = 5


def _display_time(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp).strftime("%Y-%m-%d %H:%M:%S %Z").strip()
    except ValueError:
        return timestamp


class MarkdownFormatter(BaseFormatter):
    """Render a report as a Markdown document."""

    def render(self, report: Report) -> None:
        print(self.format(report))

    def format(self, report: Report) -> str:
        s = report.summary
        lines: List[str] = [
            "# Code Quality Analysis Report",
            "",
            f"*Generated on {_display_time(report.timestamp)}*",
            "",
            "## Quality Overview",
            "",
            f"- **Quality Score**: {s.quality_score}/100",
            f"- **Files Analyzed**: {s.total_files}",
            f"- **Total Lines**: {s.total_lines:,}",
            f"- **Average Complexity**: {s.avg_complexity}",
            f"- **Complexity (p50 / p90)**: {s.complexity_p50} / {s.complexity_p90}",
            f"- **Technical Debt Score**: {s.technical_debt_score}",
            f"- **Duplicate Code Blocks**: {s.duplicate_code_blocks}",
        ]
        if s.failed_files or s.failed_detectors:
            lines.append(
                f"- **Not Analyzed**: {s.failed_files} unreadable files, "
                f"{s.failed_detectors} failed detector runs"
            )

        lines += [
            "",
            "## Issues Summary",
            "",
            "| Severity | Count |",
            "|----------|-------|",
            f"| Critical | {s.critical_issues} |",
            f"| High | {s.high_issues} |",
            f"| Medium | {s.medium_issues} |",
            f"| Low | {s.low_issues} |",
            f"| **Total** | **{s.total_issues}** |",
            "",
            "## Top Issues by Type",
            "",
        ]
        for category, count in report.rankings.category_frequency[:TOP_ISSUE_TYPES]:
            lines.append(f"- **{category.replace('-', ' ')}**: {count} issues")

        lines += ["", "## Recommendations", ""]
        lines += [f"{i}. {rec}" for i, rec in enumerate(report.recommendations, 1)]

        metrics = {m.path: m for m in report.files}
        lines += ["", "## File Analysis", "", "### Most Complex Files", ""]
        for ranked in report.rankings.most_complex:
            lines.append(
                f"- **{ranked.path}**: Complexity {ranked.value}, "
                f"{metrics[ranked.path].lines} lines"
            )

        lines += ["", "### Highest Technical Debt", ""]
        for ranked in report.rankings.highest_debt:
            lines.append(f"- **{ranked.path}**: Debt Score {ranked.value}")

        lines += ["", "## Critical Issues Requiring Immediate Attention", ""]
        for finding in report.findings:
            if finding.severity is not Severity.CRITICAL:
                continue
            where = finding.file
            if finding.line_range:
                where += f":{finding.line_range[0]}"
            lines += [
                f"### {where}",
                f"**Issue**: {finding.message}",
                f"**Fix**: {finding.remediation}",
                "",
            ]

        lines += ["---", "", "*Run `debtscope --output-dir .` to regenerate this report*", ""]
        return "\n".join(lines)
