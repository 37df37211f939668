"""Tests for the debtscope exception hierarchy."""

from pathlib import Path

import pytest

from debtscope.exceptions import (
    AnalysisError,
    BlockExtractionError,
    ConfigurationError,
    DebtscopeError,
    DetectorError,
    FileAccessError,
    InvalidConfigError,
    InvalidPathError,
)


class TestDebtscopeError:
    def test_message_only(self):
        err = DebtscopeError("something broke")
        assert str(err) == "something broke"
        assert err.details == {}

    def test_details_appended(self):
        err = DebtscopeError("bad", details={"a": "1", "b": "2"})
        assert str(err) == "bad (a=1, b=2)"


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc, parent",
        [
            (FileAccessError(Path("x.js"), "denied"), AnalysisError),
            (BlockExtractionError("x.js", 3, "unbalanced"), AnalysisError),
            (DetectorError("any-type", "x.ts", "boom"), AnalysisError),
            (InvalidPathError(Path("/nope"), "missing"), ConfigurationError),
            (InvalidConfigError("workers", 0, "must be positive"), ConfigurationError),
        ],
    )
    def test_subclasses(self, exc, parent):
        assert isinstance(exc, parent)
        assert isinstance(exc, DebtscopeError)


class TestAttributes:
    def test_block_extraction(self):
        err = BlockExtractionError("src/App.jsx", 12, "never balanced")
        assert err.start_line == 12
        assert err.message == "Malformed block in src/App.jsx starting at line 12"
        assert err.details["line"] == "12"

    def test_detector_error_message(self):
        err = DetectorError("console-log", "src/a.js", "bad pattern")
        assert err.message == "detector console-log failed on file src/a.js"
        assert err.reason == "bad pattern"

    def test_invalid_config_stringifies_value(self):
        err = InvalidConfigError("min_duplicate_lines", 1, "must be at least 2")
        assert err.value == 1
        assert err.details["value"] == "1"

    def test_invalid_path(self):
        err = InvalidPathError(Path("/missing"), "does not exist")
        assert "Invalid path: /missing" in str(err)
        assert err.reason == "does not exist"
