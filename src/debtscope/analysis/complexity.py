"""Approximate cyclomatic complexity from keyword and operator counts.

Textual, not a control-flow graph: ``else if`` counts twice, ``?.`` and
``??`` count as ternaries, and chained boolean operators each add one.
"""

from __future__ import annotations

import re
from typing import Optional

from ..config import AnalysisConfig, default_config
from ..scanning.models import SourceFile
from .base import AnalyzerResult, TextAnalyzer
from .models import Category, Detection, Severity

BASE_COMPLEXITY = 1

COMPLEXITY_PATTERNS: tuple[re.Pattern, ...] = tuple(
    re.compile(p)
    for p in (
        r"if\s*\(",
        r"else\s+if\s*\(",
        r"while\s*\(",
        r"for\s*\(",
        r"switch\s*\(",
        r"case\s+",
        r"catch\s*\(",
        r"&&",
        r"\|\|",
        r"\?",
        r"\.map\s*\(",
        r"\.filter\s*\(",
        r"\.reduce\s*\(",
    )
)


def calculate_complexity(content: str) -> int:
    """Base 1 plus one per branching keyword or operator occurrence."""
    complexity = BASE_COMPLEXITY
    for pattern in COMPLEXITY_PATTERNS:
        complexity += len(pattern.findall(content))
    return complexity


class ComplexityScorer(TextAnalyzer):
    name = "complexity"

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or default_config

    def score(self, text: str) -> int:
        return calculate_complexity(text)

    def analyze(self, source: SourceFile) -> AnalyzerResult:
        complexity = self.score(source.content)
        result = AnalyzerResult(metrics={"complexity": complexity})

        if complexity > self.config.complexity_medium:
            severity = (
                Severity.HIGH if complexity > self.config.complexity_high else Severity.MEDIUM
            )
            result.detections.append(
                Detection(
                    category=Category.COMPLEXITY,
                    severity=severity,
                    message=f"High cyclomatic complexity: {complexity}",
                    remediation="Consider breaking down into smaller functions",
                )
            )
        return result
