"""Tests for the regex pattern detector set."""

import re

import pytest

from debtscope.analysis.models import Category, Severity
from debtscope.analysis.patterns import (
    DEFAULT_DETECTORS,
    DetectorRegistry,
    PatternDetector,
    detect_patterns,
)


def _by_category(detections):
    return {d.category: d for d in detections}


class TestDefaultDetectors:
    def test_console_log_counted(self):
        found = _by_category(detect_patterns("console.log(a);\nconsole.log(b);\n"))
        detection = found[Category.DEBUG_CODE]
        assert detection.count == 2
        assert detection.severity is Severity.LOW
        assert detection.message == "debug code: 2 instances"

    def test_marker_comments_case_insensitive(self):
        found = _by_category(detect_patterns("// fixme: later\n/* Todo */\n"))
        assert found[Category.COMMENT_DEBT].count == 2
        assert found[Category.COMMENT_DEBT].severity is Severity.MEDIUM

    def test_any_is_whole_word(self):
        assert detect_patterns("const company = 'acme';") == []
        found = _by_category(detect_patterns("let value: any = 1;"))
        assert found[Category.TYPESCRIPT_ANY].severity is Severity.HIGH

    def test_debugger_statement(self):
        found = _by_category(detect_patterns("function f() {\n  debugger;\n}"))
        assert found[Category.DEBUGGER_STATEMENT].count == 1

    def test_bind_this(self):
        found = _by_category(detect_patterns("this.onClick = this.onClick.bind(this);"))
        assert found[Category.REACT_ANTIPATTERN].count == 1

    def test_deprecated_lifecycle(self):
        text = "componentWillMount() {}\ncomponentWillReceiveProps(next) {}\n"
        found = _by_category(detect_patterns(text))
        assert found[Category.DEPRECATED_LIFECYCLE].count == 2
        assert found[Category.DEPRECATED_LIFECYCLE].severity is Severity.HIGH

    def test_security_risks_share_one_category(self):
        text = (
            "<div dangerouslySetInnerHTML={{ __html: html }} />\n"
            "el.innerHTML = html;\n"
            "eval(code);\n"
            "const fn = new Function('a', 'return a');\n"
        )
        detection = _by_category(detect_patterns(text))[Category.SECURITY_RISK]
        assert detection.count == 4
        assert detection.severity is Severity.CRITICAL

    def test_inner_html_comparison_is_not_assignment(self):
        assert detect_patterns("if (el.innerHTML == prev) { render(); }") == []

    def test_clean_text_has_no_detections(self):
        assert detect_patterns("export const sum = (a, b) => a + b;\n") == []

    def test_one_detection_per_detector(self):
        detections = detect_patterns("console.log(1); console.log(2); console.log(3);")
        assert len(detections) == 1
        assert detections[0].message == "debug code: 3 instances"

    def test_singular_message(self):
        detections = detect_patterns("debugger;")
        assert detections[0].message == "debugger statement: 1 instance"


class TestDetectorRegistry:
    def test_default_registry_holds_all_detectors(self):
        registry = DetectorRegistry()
        assert len(registry) == len(DEFAULT_DETECTORS)
        assert "console_log" in registry.names

    def test_duplicate_name_rejected(self):
        registry = DetectorRegistry()
        with pytest.raises(ValueError):
            registry.register(DEFAULT_DETECTORS[0])

    def test_empty_registry_detects_nothing(self):
        assert detect_patterns("console.log(1); debugger;", DetectorRegistry([])) == []

    def test_custom_detector(self):
        alert = PatternDetector(
            name="alert_call",
            category=Category.DEBUG_CODE,
            pattern=r"\balert\s*\(",
            severity=Severity.MEDIUM,
            remediation="Use a notification component",
            label="alert call",
        )
        registry = DetectorRegistry([alert])
        detections = detect_patterns("alert('hi'); ALERT('no');", registry)
        assert [d.count for d in detections] == [1]

    def test_flags_respected(self):
        shout = PatternDetector(
            name="shout",
            category=Category.DEBUG_CODE,
            pattern=r"alert",
            severity=Severity.LOW,
            remediation="",
            flags=re.IGNORECASE,
        )
        assert shout.count("alert ALERT Alert") == 3
        assert shout.weight == Severity.LOW.weight
