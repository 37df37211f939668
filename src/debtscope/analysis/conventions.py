"""Language and framework convention checks.

TypeScript compliance runs on ``.ts``/``.tsx`` files only. React pattern
checks run on ``.tsx``/``.jsx`` files and on any file that mentions React.
Each check reports at most one detection per file.
"""

from __future__ import annotations

import re
from typing import Callable, NamedTuple

from ..scanning.models import SourceFile
from .base import AnalyzerResult, TextAnalyzer
from .models import Category, Detection, Severity


class ConventionCheck(NamedTuple):
    severity: Severity
    message: str
    remediation: str
    count: Callable[[str], int]


def _matches(pattern: str) -> Callable[[str], int]:
    regex = re.compile(pattern)
    return lambda text: len(regex.findall(text))


def _missing_list_keys(text: str) -> int:
    return 1 if ".map(" in text and "key=" not in text else 0


TYPESCRIPT_CHECKS: tuple[ConventionCheck, ...] = (
    ConventionCheck(
        Severity.HIGH,
        "Uses any type - reduces type safety",
        "Define specific types instead of any",
        _matches(r":\s*any[\s,)\];]"),
    ),
    ConventionCheck(
        Severity.MEDIUM,
        "Uses @ts-ignore - suppresses type checking",
        "Fix type issues instead of suppressing them",
        _matches(r"@ts-ignore"),
    ),
    ConventionCheck(
        Severity.LOW,
        "Functions missing return type annotations",
        "Add explicit return types to functions",
        _matches(r"function\s+\w+\s*\([^)]*\)\s*\{"),
    ),
)

REACT_CHECKS: tuple[ConventionCheck, ...] = (
    ConventionCheck(
        Severity.MEDIUM,
        "Missing key prop in list rendering",
        "Add unique key prop to list items",
        _missing_list_keys,
    ),
    ConventionCheck(
        Severity.LOW,
        "Inline arrow functions in JSX can cause re-renders",
        "Extract to useCallback or define outside render",
        _matches(r"onClick=\{\([^}]*\) => [^}]*\}"),
    ),
    ConventionCheck(
        Severity.HIGH,
        "useEffect without dependency array runs on every render",
        "Add dependency array to useEffect",
        _matches(r"useEffect\([^,]*\);"),
    ),
)


class _ConventionAnalyzer(TextAnalyzer):
    category: Category
    checks: tuple[ConventionCheck, ...] = ()

    def analyze(self, source: SourceFile) -> AnalyzerResult:
        result = AnalyzerResult()
        for check in self.checks:
            count = check.count(source.content)
            if count:
                result.detections.append(
                    Detection(
                        category=self.category,
                        severity=check.severity,
                        message=check.message,
                        remediation=check.remediation,
                        count=count,
                    )
                )
        return result


class TypeScriptComplianceAnalyzer(_ConventionAnalyzer):
    name = "typescript"
    category = Category.TYPESCRIPT_COMPLIANCE
    checks = TYPESCRIPT_CHECKS

    def applies_to(self, source: SourceFile) -> bool:
        return source.extension in (".ts", ".tsx")


class ReactPatternAnalyzer(_ConventionAnalyzer):
    name = "react"
    category = Category.REACT_PATTERNS
    checks = REACT_CHECKS

    def applies_to(self, source: SourceFile) -> bool:
        return source.extension in (".tsx", ".jsx") or "react" in source.content.lower()
