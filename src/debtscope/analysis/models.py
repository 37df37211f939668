"""Data models for findings, metrics and the aggregated report."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

LineRange = tuple[int, int]
Location = tuple[str, int]


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def weight(self) -> int:
        """Debt weight of one occurrence."""
        return _SEVERITY_WEIGHTS[self]

    @property
    def penalty(self) -> int:
        """Quality-score points subtracted per finding."""
        return _SEVERITY_PENALTIES[self]

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)


_SEVERITY_ORDER = [Severity.LOW, Severity.MEDIUM, Severity.HIGH, Severity.CRITICAL]
_SEVERITY_WEIGHTS = {Severity.LOW: 1, Severity.MEDIUM: 3, Severity.HIGH: 5, Severity.CRITICAL: 10}
_SEVERITY_PENALTIES = {Severity.LOW: 0, Severity.MEDIUM: 5, Severity.HIGH: 10, Severity.CRITICAL: 20}


class Category(str, Enum):
    # Pattern detector set (technical debt)
    COMMENT_DEBT = "comment-debt"
    TYPESCRIPT_ANY = "typescript-any"
    DEBUG_CODE = "debug-code"
    DEBUGGER_STATEMENT = "debugger-statement"
    REACT_ANTIPATTERN = "react-antipattern"
    DEPRECATED_LIFECYCLE = "deprecated-lifecycle"
    SECURITY_RISK = "security-risk"

    # Metrics
    COMPLEXITY = "complexity"
    DUPLICATION = "duplication"

    # Effect dependencies
    MISSING_DEPENDENCY_LIST = "missing-dependency-list"
    SELF_REFERENTIAL_DEPENDENCY = "self-referential-dependency"
    UNSTABLE_FUNCTION_DEPENDENCY = "unstable-function-dependency"
    CONDITIONAL_STATE_UPDATE = "conditional-state-update"

    # Hook usage
    HOOK_OUTSIDE_COMPONENT = "hook-outside-component"
    UNMEMOIZED_CALLBACK = "unmemoized-callback"

    # Language / framework conventions
    TYPESCRIPT_COMPLIANCE = "typescript-compliance"
    REACT_PATTERNS = "react-patterns"

    DETECTOR_FAILURE = "detector-failure"


DEBT_CATEGORIES = frozenset(
    {
        Category.COMMENT_DEBT,
        Category.TYPESCRIPT_ANY,
        Category.DEBUG_CODE,
        Category.DEBUGGER_STATEMENT,
        Category.REACT_ANTIPATTERN,
        Category.DEPRECATED_LIFECYCLE,
        Category.SECURITY_RISK,
    }
)

INFINITE_LOOP_CATEGORIES = frozenset(
    {Category.MISSING_DEPENDENCY_LIST, Category.SELF_REFERENTIAL_DEPENDENCY}
)


@dataclass(frozen=True)
class Detection:
    """A finding that is not yet attached to a file."""

    category: Category
    severity: Severity
    message: str
    remediation: str
    count: int = 1
    line_range: Optional[LineRange] = None
    locations: tuple[Location, ...] = ()

    def at(self, path: str) -> Finding:
        return Finding(
            category=self.category,
            severity=self.severity,
            file=path,
            message=self.message,
            remediation=self.remediation,
            count=self.count,
            line_range=self.line_range,
            locations=self.locations,
        )


@dataclass(frozen=True)
class Finding:
    category: Category
    severity: Severity
    file: str
    message: str
    remediation: str
    count: int = 1
    line_range: Optional[LineRange] = None  # 1-based, inclusive
    locations: tuple[Location, ...] = ()  # every occurrence, first seen first

    @property
    def identity_key(self) -> str:
        """Stable key for matching the same finding across runs."""
        start = self.line_range[0] if self.line_range else 0
        return f"{self.category.value}:{self.file}:{start}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "file": self.file,
            "line_range": list(self.line_range) if self.line_range else None,
            "message": self.message,
            "remediation": self.remediation,
            "count": self.count,
            "locations": [{"file": f, "line": line} for f, line in self.locations],
        }


@dataclass(frozen=True)
class FileMetrics:
    path: str
    lines: int
    complexity: int
    debt_score: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "lines": self.lines,
            "complexity": self.complexity,
            "debt_score": self.debt_score,
        }


@dataclass
class DuplicateBlock:
    """A normalized window seen at two or more places in the corpus.

    ``occurrences[0]`` is always the first-seen location.
    """

    normalized_text: str
    occurrences: list[Location]
    line_span: int

    def extend(self) -> None:
        """Lengthen the shared span by one line.

        ``normalized_text`` stays the first window's text; only ``line_span``
        tracks the merged length.
        """
        self.line_span += 1


@dataclass(frozen=True)
class EffectBlock:
    """One extracted effect call.

    ``dependency_list`` is None when no trailing list exists; ``[]`` is an
    explicit empty list.
    """

    file: str
    start_line: int
    end_line: int
    body_text: str
    dependency_list: Optional[list[str]]


@dataclass(frozen=True)
class RankedFile:
    path: str
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "value": self.value}


@dataclass(frozen=True)
class Rankings:
    most_complex: list[RankedFile] = field(default_factory=list)
    highest_debt: list[RankedFile] = field(default_factory=list)
    category_frequency: list[tuple[str, int]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "most_complex": [r.to_dict() for r in self.most_complex],
            "highest_debt": [r.to_dict() for r in self.highest_debt],
            "category_frequency": [
                {"category": cat, "count": count} for cat, count in self.category_frequency
            ],
        }


@dataclass(frozen=True)
class ReportSummary:
    total_files: int = 0
    total_lines: int = 0
    avg_complexity: float = 0.0
    complexity_p50: float = 0.0
    complexity_p90: float = 0.0
    technical_debt_score: int = 0
    duplicate_code_blocks: int = 0
    quality_score: int = 100
    total_issues: int = 0
    critical_issues: int = 0
    high_issues: int = 0
    medium_issues: int = 0
    low_issues: int = 0
    failed_files: int = 0
    failed_detectors: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_files": self.total_files,
            "total_lines": self.total_lines,
            "avg_complexity": self.avg_complexity,
            "complexity_p50": self.complexity_p50,
            "complexity_p90": self.complexity_p90,
            "technical_debt_score": self.technical_debt_score,
            "duplicate_code_blocks": self.duplicate_code_blocks,
            "quality_score": self.quality_score,
            "total_issues": self.total_issues,
            "critical_issues": self.critical_issues,
            "high_issues": self.high_issues,
            "medium_issues": self.medium_issues,
            "low_issues": self.low_issues,
            "failed_files": self.failed_files,
            "failed_detectors": self.failed_detectors,
        }


@dataclass(frozen=True)
class Report:
    timestamp: str
    summary: ReportSummary
    files: list[FileMetrics]
    findings: list[Finding]
    rankings: Rankings
    recommendations: list[str]

    @property
    def has_critical(self) -> bool:
        return self.summary.critical_issues > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "summary": self.summary.to_dict(),
            "files": [f.to_dict() for f in self.files],
            "findings": [f.to_dict() for f in self.findings],
            "rankings": self.rankings.to_dict(),
            "recommendations": list(self.recommendations),
        }
