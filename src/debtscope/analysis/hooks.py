"""Hook usage checks outside of effect bodies.

- ``useState`` called where the nearest enclosing declaration above it is a
  plain lowercase function (not a component, not a custom ``use*`` hook).
- Arrow functions listed in a dependency list while the file never uses
  ``useCallback``.
"""

from __future__ import annotations

import re

from ..scanning.models import SourceFile
from .base import AnalyzerResult, TextAnalyzer
from .models import Category, Detection, Severity

USE_STATE_CALL = re.compile(r"\buseState\s*[<(]")
COMPONENT_DECL = re.compile(r"^(?:export\s+)?(?:default\s+)?(?:const|function)\s+[A-Z]")
HOOK_DECL = re.compile(r"^(?:export\s+)?(?:default\s+)?(?:const|function)\s+use[A-Z]")
PLAIN_DECL = re.compile(r"^(?:export\s+)?(?:default\s+)?(?:const|function)\s+[a-z]")
ARROW_DECL = re.compile(r"const\s+(\w+)\s*=\s*\([^)]*\)\s*=>")


def is_in_component(lines: list[str], index: int) -> bool:
    """Walk upwards to the nearest top-level declaration.

    Unclear cases count as inside a component.
    """
    for i in range(index, -1, -1):
        line = lines[i]
        if COMPONENT_DECL.match(line) or HOOK_DECL.match(line):
            return True
        if PLAIN_DECL.match(line):
            return False
    return True


class HookUsageAnalyzer(TextAnalyzer):
    name = "hooks"

    def analyze(self, source: SourceFile) -> AnalyzerResult:
        result = AnalyzerResult()
        lines = source.lines

        for index, line in enumerate(lines):
            if USE_STATE_CALL.search(line) and not is_in_component(lines, index):
                result.detections.append(
                    Detection(
                        category=Category.HOOK_OUTSIDE_COMPONENT,
                        severity=Severity.LOW,
                        message="useState outside component function",
                        remediation="Ensure useState is only called inside React components",
                        line_range=(index + 1, index + 1),
                    )
                )

        if "useCallback" in source.content:
            return result

        for index, line in enumerate(lines):
            match = ARROW_DECL.search(line)
            if match is None:
                continue
            name = match.group(1)
            in_deps = re.search(
                rf"\[\s*{name}\s*[,\]]|,\s*{name}\s*\]", source.content
            )
            if in_deps:
                result.detections.append(
                    Detection(
                        category=Category.UNMEMOIZED_CALLBACK,
                        severity=Severity.LOW,
                        message=f'Function "{name}" used in effect dependencies without useCallback',
                        remediation=(
                            "Consider wrapping in useCallback to prevent unnecessary re-renders"
                        ),
                        line_range=(index + 1, index + 1),
                    )
                )

        return result
