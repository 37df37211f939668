"""Per-file analyzers, duplicate detection and report aggregation."""

from .aggregator import aggregate, compute_quality_score
from .base import AnalyzerResult, Detector, TextAnalyzer
from .complexity import ComplexityScorer, calculate_complexity
from .conventions import ReactPatternAnalyzer, TypeScriptComplianceAnalyzer
from .debt import DebtScorer
from .duplicates import DuplicateDetector, DuplicateIndex
from .effects import EffectDependencyAnalyzer, extract_effect_blocks
from .engine import AnalysisEngine
from .hooks import HookUsageAnalyzer
from .models import (
    Category,
    Detection,
    DuplicateBlock,
    EffectBlock,
    FileMetrics,
    Finding,
    Rankings,
    Report,
    ReportSummary,
    Severity,
)
from .patterns import DEFAULT_DETECTORS, DetectorRegistry, PatternDetector, detect_patterns

__all__ = [
    "AnalysisEngine",
    "aggregate",
    "compute_quality_score",
    "AnalyzerResult",
    "Detector",
    "TextAnalyzer",
    "ComplexityScorer",
    "calculate_complexity",
    "DebtScorer",
    "DuplicateDetector",
    "DuplicateIndex",
    "EffectDependencyAnalyzer",
    "extract_effect_blocks",
    "HookUsageAnalyzer",
    "TypeScriptComplianceAnalyzer",
    "ReactPatternAnalyzer",
    "DEFAULT_DETECTORS",
    "DetectorRegistry",
    "PatternDetector",
    "detect_patterns",
    "Category",
    "Detection",
    "DuplicateBlock",
    "EffectBlock",
    "FileMetrics",
    "Finding",
    "Rankings",
    "Report",
    "ReportSummary",
    "Severity",
]
