"""Report aggregation: the single-threaded reduce after all files finish.

Pure merge: nothing here reads files or runs detectors.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np

from .models import (
    DEBT_CATEGORIES,
    INFINITE_LOOP_CATEGORIES,
    Category,
    FileMetrics,
    Finding,
    RankedFile,
    Rankings,
    Report,
    ReportSummary,
    Severity,
)

MAX_QUALITY_SCORE = 100

GENERIC_RECOMMENDATIONS = (
    "Set up automated code quality checks in CI/CD",
    "Consider implementing code review guidelines",
    "Regular code quality monitoring schedule",
)


@dataclass
class FileResult:
    """Everything the per-file step produced for one SourceFile."""

    metrics: FileMetrics
    findings: list[Finding] = field(default_factory=list)
    failed_detectors: int = 0


def compute_quality_score(findings: Iterable[Finding]) -> int:
    """100 minus 20/10/5 per critical/high/medium finding, floored at 0."""
    penalty = sum(f.severity.penalty for f in findings)
    return max(0, MAX_QUALITY_SCORE - penalty)


def category_frequency(findings: Iterable[Finding]) -> list[tuple[str, int]]:
    """Categories by count, most frequent first; ties keep first-seen order."""
    counts: Counter = Counter()
    for finding in findings:
        counts[finding.category.value] += 1
    # Counter preserves insertion order and sorted() is stable
    return sorted(counts.items(), key=lambda item: -item[1])


def top_files(files: list[FileMetrics], attr: str, n: int) -> list[RankedFile]:
    ranked = sorted(files, key=lambda m: -getattr(m, attr))
    return [RankedFile(path=m.path, value=getattr(m, attr)) for m in ranked[:n]]


def generate_recommendations(findings: list[Finding]) -> list[str]:
    by_category = Counter(f.category for f in findings)
    recommendations: list[str] = []

    if any(by_category[c] for c in INFINITE_LOOP_CATEGORIES):
        recommendations.append(
            "CRITICAL: Fix infinite loop risks immediately to prevent blank screens"
        )
    if by_category[Category.COMPLEXITY] > 3:
        recommendations.append("Reduce code complexity by breaking down large functions")
    if sum(by_category[c] for c in DEBT_CATEGORIES) > 5:
        recommendations.append("Address technical debt to improve maintainability")
    if by_category[Category.DUPLICATION] > 2:
        recommendations.append("Extract duplicate code into reusable components/functions")
    if by_category[Category.UNSTABLE_FUNCTION_DEPENDENCY] or by_category[
        Category.UNMEMOIZED_CALLBACK
    ]:
        recommendations.append(
            "Stabilize effect dependencies with useCallback/useMemo to avoid extra re-runs"
        )
    if by_category[Category.TYPESCRIPT_COMPLIANCE]:
        recommendations.append("Improve TypeScript strict mode compliance")
    if by_category[Category.REACT_PATTERNS]:
        recommendations.append("Follow React best practices for better performance")

    recommendations.extend(GENERIC_RECOMMENDATIONS)
    return recommendations


def _complexity_percentiles(values: list[int]) -> tuple[float, float]:
    if not values:
        return 0.0, 0.0
    p50, p90 = np.percentile(np.asarray(values, dtype=float), [50, 90])
    return round(float(p50), 2), round(float(p90), 2)


def aggregate(
    results: list[FileResult],
    duplicate_findings: list[Finding],
    timestamp: str,
    failed_files: int = 0,
    top_n: int = 5,
) -> Report:
    """Merge per-file results and duplicate findings into a Report.

    Raises:
        ValueError: If two results share a path.
    """
    files = [r.metrics for r in results]
    paths = [m.path for m in files]
    if len(set(paths)) != len(paths):
        raise ValueError("FileMetrics paths must be unique within a report")

    findings: list[Finding] = [f for r in results for f in r.findings]
    findings.extend(duplicate_findings)

    complexities = [m.complexity for m in files]
    p50, p90 = _complexity_percentiles(complexities)
    severity_counts = Counter(f.severity for f in findings)

    summary = ReportSummary(
        total_files=len(files),
        total_lines=sum(m.lines for m in files),
        avg_complexity=round(sum(complexities) / len(files), 2) if files else 0.0,
        complexity_p50=p50,
        complexity_p90=p90,
        technical_debt_score=sum(m.debt_score for m in files),
        duplicate_code_blocks=len(duplicate_findings),
        quality_score=compute_quality_score(findings),
        total_issues=len(findings),
        critical_issues=severity_counts[Severity.CRITICAL],
        high_issues=severity_counts[Severity.HIGH],
        medium_issues=severity_counts[Severity.MEDIUM],
        low_issues=severity_counts[Severity.LOW],
        failed_files=failed_files,
        failed_detectors=sum(r.failed_detectors for r in results),
    )

    rankings = Rankings(
        most_complex=top_files(files, "complexity", top_n),
        highest_debt=top_files(files, "debt_score", top_n),
        category_frequency=category_frequency(findings),
    )

    return Report(
        timestamp=timestamp,
        summary=summary,
        files=files,
        findings=findings,
        rankings=rankings,
        recommendations=generate_recommendations(findings),
    )
