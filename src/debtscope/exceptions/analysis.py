"""Analysis-related exceptions: file access, block extraction, detector faults."""

from pathlib import Path

from .base import DebtscopeError


class AnalysisError(DebtscopeError):
    """Base class for analysis-related errors."""

    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class BlockExtractionError(AnalysisError):
    """Raised when a brace-delimited block never balances."""

    def __init__(self, filepath: str, start_line: int, reason: str):
        super().__init__(
            f"Malformed block in {filepath} starting at line {start_line}",
            details={"filepath": filepath, "line": str(start_line), "reason": reason},
        )
        self.filepath = filepath
        self.start_line = start_line
        self.reason = reason


class DetectorError(AnalysisError):
    """Raised when a single detector fails on a single file."""

    def __init__(self, detector: str, filepath: str, reason: str):
        super().__init__(
            f"detector {detector} failed on file {filepath}",
            details={"detector": detector, "filepath": filepath, "reason": reason},
        )
        self.detector = detector
        self.filepath = filepath
        self.reason = reason
