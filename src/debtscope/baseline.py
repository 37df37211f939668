"""Previous-report persistence and run-to-run comparison.

The previous report is an explicit value: callers load it and pass it in.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .analysis.models import Report
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class ReportComparison:
    """Change between a previous report and the current one."""

    previous_timestamp: Optional[str]
    quality_delta: int
    debt_delta: int
    issues_delta: int
    new_findings: List[str] = field(default_factory=list)
    resolved_findings: List[str] = field(default_factory=list)

    @property
    def regressed(self) -> bool:
        return self.quality_delta < 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "previous_timestamp": self.previous_timestamp,
            "quality_delta": self.quality_delta,
            "debt_delta": self.debt_delta,
            "issues_delta": self.issues_delta,
            "new_findings": list(self.new_findings),
            "resolved_findings": list(self.resolved_findings),
        }


def save_report(report: Report, path: Union[str, Path]) -> None:
    """Write ``report`` as JSON so a later run can compare against it."""
    with open(path, "w") as f:
        json.dump(report.to_dict(), f, indent=2)

    logger.info(f"Saved report with {len(report.findings)} findings to {path}")


def load_previous_report(path: Union[str, Path]) -> Optional[Dict[str, Any]]:
    """Load a previously saved report.

    Returns:
        The report dict, or None if the file does not exist or is not a
        readable report.
    """
    p = Path(path)
    if not p.exists():
        logger.info(f"No previous report at {path}")
        return None

    try:
        with open(p) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable previous report {path}: {e}")
        return None

    if not isinstance(data, dict) or "summary" not in data:
        logger.warning(f"Ignoring {path}: not a debtscope report")
        return None

    return data


def _finding_key(entry: Dict[str, Any]) -> str:
    line_range = entry.get("line_range") or [0]
    return f"{entry.get('category')}:{entry.get('file')}:{line_range[0]}"


def compare_reports(previous: Dict[str, Any], current: Report) -> ReportComparison:
    """Compare ``current`` with a previous report dict.

    Findings are matched on category, file and first line.
    """
    prev_summary = previous.get("summary", {})
    prev_keys = {_finding_key(f) for f in previous.get("findings", [])}
    curr_keys = {f.identity_key for f in current.findings}

    comparison = ReportComparison(
        previous_timestamp=previous.get("timestamp"),
        quality_delta=current.summary.quality_score - prev_summary.get("quality_score", 100),
        debt_delta=(
            current.summary.technical_debt_score - prev_summary.get("technical_debt_score", 0)
        ),
        issues_delta=current.summary.total_issues - prev_summary.get("total_issues", 0),
        new_findings=sorted(curr_keys - prev_keys),
        resolved_findings=sorted(prev_keys - curr_keys),
    )

    logger.debug(
        f"Compared with {comparison.previous_timestamp}: quality {comparison.quality_delta:+d}, "
        f"{len(comparison.new_findings)} new, {len(comparison.resolved_findings)} resolved"
    )
    return comparison
