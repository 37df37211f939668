"""Plugin interfaces for per-file analysis.

A ``Detector`` is a pure text matcher. A ``TextAnalyzer`` is anything the
engine can run over one ``SourceFile``; a parser-backed analyzer could
implement the same interface without touching the aggregation pipeline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Protocol

from ..scanning.models import SourceFile
from .models import Detection


class Detector(Protocol):
    """Detectors read one file's text and never hold state between calls."""

    name: str

    def detect(self, text: str) -> list[Detection]: ...


@dataclass
class AnalyzerResult:
    detections: list[Detection] = field(default_factory=list)
    metrics: dict[str, int] = field(default_factory=dict)
    failures: int = 0  # detectors that failed inside this analyzer


class TextAnalyzer(ABC):
    """Per-file analysis step run by the engine."""

    name: str = "analyzer"

    def applies_to(self, source: SourceFile) -> bool:
        """Whether this analyzer should run on ``source`` at all."""
        return True

    @abstractmethod
    def analyze(self, source: SourceFile) -> AnalyzerResult:
        """Analyze one file.

        Raises:
            BlockExtractionError: If the file holds a block this analyzer
                cannot delimit; the engine skips the file for this analyzer.
        """
