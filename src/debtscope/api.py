"""Public API for debtscope.

Example:
    >>> from debtscope import analyze
    >>> report = analyze("/path/to/project")
    >>> report.summary.quality_score
    85
    >>> report = analyze("/path/to/project", workers=4, top_n=10)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .analysis import AnalysisEngine, Report
from .config import load_config
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def analyze(
    path: str = ".",
    config_file: Optional[Path] = None,
    timestamp: Optional[str] = None,
    **overrides,
) -> Report:
    """Analyze a source tree and return its quality report.

    Args:
        path: Root of the tree to analyze (default: current directory)
        config_file: Optional explicit TOML config file
        timestamp: Report timestamp; defaults to the current UTC time
        **overrides: Configuration overrides (e.g. workers=4, verbose=True)

    Returns:
        The aggregated Report.

    Raises:
        InvalidPathError: If ``path`` is missing or not a directory.
        ConfigurationError: If the merged configuration is invalid.
    """
    setup_logging(verbose=bool(overrides.get("verbose")), quiet=bool(overrides.get("quiet")))

    config = load_config(config_file=config_file, **overrides)
    logger.info(f"Starting analysis of {path}")

    report = AnalysisEngine(config).run(path, timestamp=timestamp)
    logger.info(
        f"Analysis complete: {report.summary.total_files} files, "
        f"{report.summary.total_issues} issues, score {report.summary.quality_score}"
    )
    return report
