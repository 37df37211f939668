"""Effect-dependency analysis: re-execution loops caused by effect hooks.

Block extraction is a small state machine over the file's lines:

    SEARCHING --signature--> IN_BLOCK --call closed, braces at 0--> DONE
        ^                                                             |
        +------------ resume at the column after the block -----------+

Braces are counted textually from the call's opening parenthesis, so braces
inside string or comment literals are miscounted. A call whose argument list
closes before any brace opens is an expression-bodied block ending there.

Each block is checked for:

    A. no dependency list while the body calls a state setter   (critical)
    B. a setter whose state name is itself a dependency          (critical)
    C. lowerCamelCase dependency entries, likely unstable funcs  (warning)

plus conditional setter calls in an effect without a dependency list.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from ..config import AnalysisConfig, default_config
from ..exceptions import BlockExtractionError
from ..scanning.models import SourceFile
from .base import AnalyzerResult, TextAnalyzer
from .models import Category, Detection, EffectBlock, Severity

# Trailing ", [ ... ])" at the very end of a block, optional ";" and line comment.
DEPENDENCY_TAIL = re.compile(r",\s*\[([^\[\]]*)\]\s*\)\s*;?\s*(?://[^\n]*)?$")
LOWER_IDENTIFIER = re.compile(r"^[a-z][A-Za-z0-9_$]*$")


class _State(Enum):
    SEARCHING = "searching"
    IN_BLOCK = "in_block"
    DONE = "done"


def signature_pattern(hooks: list[str]) -> re.Pattern:
    names = "|".join(re.escape(h) for h in hooks)
    return re.compile(rf"\b(?:{names})\s*\(")


def setter_pattern(prefix: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(prefix)}[A-Z]\w*(?=\s*\()")


def parse_dependency_list(block_text: str) -> Optional[list[str]]:
    """Entries of the trailing dependency list, [] when empty, None when absent."""
    match = DEPENDENCY_TAIL.search(block_text.rstrip())
    if match is None:
        return None
    inner = match.group(1).strip()
    if not inner:
        return []
    return [entry.strip() for entry in inner.split(",") if entry.strip()]


def _find_block_end(lines: list[str], start: int, col: int, path: str) -> tuple[int, int]:
    """Line index and column just past the end of the block opened at ``lines[start][col]``.

    ``col`` points at the call's opening parenthesis. The block ends where
    the call's parentheses close with every brace balanced. When the braces
    balance but the call stays open, the block ends with that line.
    """
    depth = 0
    parens = 0
    opened = False

    for index in range(start, len(lines)):
        line = lines[index]
        for pos in range(col if index == start else 0, len(line)):
            char = line[pos]
            if char == "(":
                parens += 1
            elif char == ")":
                parens -= 1
                if parens == 0 and depth == 0:
                    return index, pos + 1
            elif char == "{":
                depth += 1
                opened = True
            elif char == "}":
                depth -= 1
                if depth < 0:
                    raise BlockExtractionError(path, start + 1, "closing brace before opening")
        if opened and depth == 0:
            return index, len(line)

    raise BlockExtractionError(path, start + 1, "unbalanced braces")


def extract_effect_blocks(
    path: str, content: str, hooks: Optional[list[str]] = None
) -> list[EffectBlock]:
    """Extract every effect block in ``content``.

    Raises:
        BlockExtractionError: If a block never balances.
    """
    signature = signature_pattern(hooks or default_config.effect_hooks)
    lines = content.split("\n")
    blocks: list[EffectBlock] = []
    state = _State.SEARCHING
    match: Optional[re.Match] = None
    index = 0
    pos = 0

    while index < len(lines):
        if state is _State.SEARCHING:
            match = signature.search(lines[index], pos)
            if match is not None:
                state = _State.IN_BLOCK
            else:
                index += 1
                pos = 0
        elif state is _State.IN_BLOCK:
            end, stop = _find_block_end(lines, index, match.end() - 1, path)
            if end == index:
                body = lines[index][match.start() : stop]
            else:
                body = "\n".join(
                    [lines[index][match.start() :]] + lines[index + 1 : end] + [lines[end][:stop]]
                )
            blocks.append(
                EffectBlock(
                    file=path,
                    start_line=index + 1,
                    end_line=end + 1,
                    body_text=body,
                    dependency_list=parse_dependency_list(body),
                )
            )
            index, pos = end, stop
            state = _State.DONE
        else:
            # Resume searching right after the block, on the same line
            state = _State.SEARCHING

    return blocks


class EffectDependencyAnalyzer(TextAnalyzer):
    name = "effects"

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or default_config
        self._setter = setter_pattern(self.config.setter_prefix)
        self._conditional_update = re.compile(
            rf"if\s*\([^)]*\)\s*\{{[^}}]*\b{re.escape(self.config.setter_prefix)}[A-Z]"
        )

    def analyze(self, source: SourceFile) -> AnalyzerResult:
        result = AnalyzerResult()
        blocks = extract_effect_blocks(source.path, source.content, self.config.effect_hooks)
        for block in blocks:
            result.detections.extend(self.check_block(block))
        return result

    def check_block(self, block: EffectBlock) -> list[Detection]:
        detections: list[Detection] = []
        span = (block.start_line, block.end_line)
        deps = block.dependency_list
        setters = list(dict.fromkeys(self._setter.findall(block.body_text)))

        if deps is None:
            if setters:
                detections.append(
                    Detection(
                        category=Category.MISSING_DEPENDENCY_LIST,
                        severity=Severity.CRITICAL,
                        message="Effect with state mutation missing dependency list",
                        remediation=(
                            "Add empty dependency array [] if this should run only once, "
                            "or include proper dependencies"
                        ),
                        line_range=span,
                    )
                )
            if self._conditional_update.search(block.body_text):
                detections.append(
                    Detection(
                        category=Category.CONDITIONAL_STATE_UPDATE,
                        severity=Severity.LOW,
                        message="Conditional state updates without dependency list",
                        remediation=(
                            "Ensure this effect should run on every render "
                            "or add proper dependencies"
                        ),
                        line_range=span,
                    )
                )
            return detections

        lowered = {dep.lower() for dep in deps}
        prefix_len = len(self.config.setter_prefix)
        for setter in setters:
            state_name = setter[prefix_len:].lower()
            if state_name in lowered:
                detections.append(
                    Detection(
                        category=Category.SELF_REFERENTIAL_DEPENDENCY,
                        severity=Severity.CRITICAL,
                        message=(
                            f"Potential infinite loop: {setter} modifies state "
                            f"'{state_name}' that is in the dependency list"
                        ),
                        remediation=(
                            "Remove the state from dependencies or use empty array [] "
                            "for one-time effects"
                        ),
                        line_range=span,
                    )
                )

        for dep in deps:
            if LOWER_IDENTIFIER.match(dep):
                detections.append(
                    Detection(
                        category=Category.UNSTABLE_FUNCTION_DEPENDENCY,
                        severity=Severity.LOW,
                        message=f'Function dependency "{dep}" might cause re-renders',
                        remediation=(
                            "Consider wrapping in useCallback or removing from "
                            "dependencies if not needed"
                        ),
                        line_range=span,
                    )
                )

        return detections
