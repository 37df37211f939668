"""Exception hierarchy for debtscope."""

from .analysis import (
    AnalysisError,
    BlockExtractionError,
    DetectorError,
    FileAccessError,
)
from .base import DebtscopeError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "DebtscopeError",
    "AnalysisError",
    "FileAccessError",
    "BlockExtractionError",
    "DetectorError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
