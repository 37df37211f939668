"""
debtscope - static code quality analysis for JavaScript/TypeScript trees

Scans a source tree for technical-debt patterns, approximate complexity,
duplicated blocks and effect-hook dependency mistakes that cause render
loops, and aggregates them into a scored report.
"""

__version__ = "0.1.0"

from .analysis import Finding, Report, Severity
from .api import analyze

__all__ = [
    "analyze",
    "Report",
    "Finding",
    "Severity",
]
