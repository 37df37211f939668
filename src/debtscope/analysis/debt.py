"""Debt scorer: weighted sum of pattern matches per file.

Shares the pattern detector set: each detector runs once per file, its
detections are reported as findings and its match count is multiplied by
the severity weight (low 1, medium 3, high 5, critical 10).
"""

from __future__ import annotations

from typing import Optional

from ..exceptions import DetectorError
from ..logging_config import get_logger
from ..scanning.models import SourceFile
from .base import AnalyzerResult, TextAnalyzer
from .models import Category, Detection, Severity
from .patterns import DetectorRegistry

logger = get_logger(__name__)


def detector_failure(detector: str, path: str, error: Exception) -> Detection:
    """Warning detection standing in for a detector that raised."""
    failure = DetectorError(detector, path, str(error))
    return Detection(
        category=Category.DETECTOR_FAILURE,
        severity=Severity.LOW,
        message=f"{failure.message}: {failure.reason}",
        remediation="Report the failing input; other detectors still ran on this file",
    )


class DebtScorer(TextAnalyzer):
    name = "debt"

    def __init__(self, registry: Optional[DetectorRegistry] = None):
        self.registry = registry if registry is not None else DetectorRegistry()

    def analyze(self, source: SourceFile) -> AnalyzerResult:
        result = AnalyzerResult()
        score = 0

        for detector in self.registry:
            try:
                detections = detector.detect(source.content)
            except Exception as e:
                logger.warning(f"Detector {detector.name} failed on {source.path}: {e}")
                result.detections.append(detector_failure(detector.name, source.path, e))
                result.failures += 1
                continue

            for detection in detections:
                score += detection.count * detection.severity.weight
            result.detections.extend(detections)

        result.metrics["debt_score"] = score
        return result

    def score(self, text: str) -> int:
        """Debt score of raw text, ignoring detector failures."""
        return self.analyze(SourceFile.from_text("<text>", text)).metrics["debt_score"]
