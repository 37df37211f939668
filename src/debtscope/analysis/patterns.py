"""Regex detectors for named low-quality patterns.

Each detector is independent: it counts matches of its pattern in one
file's text and reports a single detection carrying that count. New
detectors are added by registering another ``PatternDetector``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .base import Detector
from .models import Category, Detection, Severity


@dataclass(frozen=True)
class PatternDetector:
    name: str
    category: Category
    pattern: str
    severity: Severity
    remediation: str
    flags: int = 0
    label: Optional[str] = None  # human name used in messages
    _regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_regex", re.compile(self.pattern, self.flags))

    @property
    def weight(self) -> int:
        return self.severity.weight

    def count(self, text: str) -> int:
        return sum(1 for _ in self._regex.finditer(text))

    def detect(self, text: str) -> list[Detection]:
        count = self.count(text)
        if not count:
            return []
        label = self.label or self.category.value.replace("-", " ")
        return [
            Detection(
                category=self.category,
                severity=self.severity,
                message=f"{label}: {count} instance{'s' if count != 1 else ''}",
                remediation=self.remediation,
                count=count,
            )
        ]


DEFAULT_DETECTORS: tuple[PatternDetector, ...] = (
    PatternDetector(
        name="marker_comments",
        category=Category.COMMENT_DEBT,
        pattern=r"TODO|FIXME|HACK|XXX",
        flags=re.IGNORECASE,
        severity=Severity.MEDIUM,
        label="comment debt",
        remediation="Address TODO/FIXME comments or remove if no longer relevant",
    ),
    PatternDetector(
        name="any_type",
        category=Category.TYPESCRIPT_ANY,
        pattern=r"\bany\b",
        severity=Severity.HIGH,
        label="typescript any",
        remediation="Replace any types with specific type definitions",
    ),
    PatternDetector(
        name="console_log",
        category=Category.DEBUG_CODE,
        pattern=r"console\.log",
        severity=Severity.LOW,
        label="debug code",
        remediation="Remove debug statements before production",
    ),
    PatternDetector(
        name="debugger",
        category=Category.DEBUGGER_STATEMENT,
        pattern=r"\bdebugger\b",
        severity=Severity.MEDIUM,
        label="debugger statement",
        remediation="Remove debugger statements before production",
    ),
    PatternDetector(
        name="bind_this",
        category=Category.REACT_ANTIPATTERN,
        pattern=r"\.bind\(this\)",
        severity=Severity.MEDIUM,
        label="react antipattern",
        remediation="Use arrow functions or hooks instead of bind",
    ),
    PatternDetector(
        name="deprecated_lifecycle",
        category=Category.DEPRECATED_LIFECYCLE,
        pattern=r"\b(?:componentWillMount|componentWillReceiveProps|componentWillUpdate)\b",
        severity=Severity.HIGH,
        label="deprecated lifecycle",
        remediation="Replace with modern lifecycle methods or hooks",
    ),
    PatternDetector(
        name="unsafe_html_or_eval",
        category=Category.SECURITY_RISK,
        pattern=r"dangerouslySetInnerHTML|\.innerHTML\s*=(?!=)|\beval\s*\(|\bnew\s+Function\s*\(",
        severity=Severity.CRITICAL,
        label="security risk",
        remediation="Review for security implications and use safer alternatives",
    ),
)


class DetectorRegistry:
    """Ordered, name-unique collection of detectors."""

    def __init__(self, detectors: Optional[list[Detector]] = None):
        self._detectors: list[Detector] = []
        for detector in detectors if detectors is not None else DEFAULT_DETECTORS:
            self.register(detector)

    def register(self, detector: Detector) -> None:
        if any(d.name == detector.name for d in self._detectors):
            raise ValueError(f"Detector already registered: {detector.name!r}")
        self._detectors.append(detector)

    def __iter__(self) -> Iterator[Detector]:
        return iter(self._detectors)

    def __len__(self) -> int:
        return len(self._detectors)

    @property
    def names(self) -> list[str]:
        return [d.name for d in self._detectors]


def detect_patterns(text: str, registry: Optional[DetectorRegistry] = None) -> list[Detection]:
    """Run every detector over ``text`` and collect their detections."""
    detections: list[Detection] = []
    for detector in registry if registry is not None else DetectorRegistry():
        detections.extend(detector.detect(text))
    return detections
