"""Tests for report aggregation: score, rankings, recommendations."""

import pytest

from debtscope.analysis.aggregator import (
    GENERIC_RECOMMENDATIONS,
    FileResult,
    aggregate,
    category_frequency,
    compute_quality_score,
    generate_recommendations,
    top_files,
)
from debtscope.analysis.models import Category, FileMetrics, Finding, Severity

TIMESTAMP = "2024-01-01T00:00:00+00:00"


def _finding(category=Category.DEBUG_CODE, severity=Severity.LOW, file="a.js", line=None):
    return Finding(
        category=category,
        severity=severity,
        file=file,
        message="msg",
        remediation="fix",
        line_range=(line, line) if line else None,
    )


def _result(path, complexity=1, debt=0, lines=10, findings=(), failed=0):
    return FileResult(FileMetrics(path, lines, complexity, debt), list(findings), failed)


class TestQualityScore:
    def test_no_findings(self):
        assert compute_quality_score([]) == 100

    @pytest.mark.parametrize(
        "severity,expected",
        [
            (Severity.CRITICAL, 80),
            (Severity.HIGH, 90),
            (Severity.MEDIUM, 95),
            (Severity.LOW, 100),
        ],
    )
    def test_penalties(self, severity, expected):
        assert compute_quality_score([_finding(severity=severity)]) == expected

    def test_floored_at_zero(self):
        assert compute_quality_score([_finding(severity=Severity.CRITICAL)] * 6) == 0

    def test_monotone(self):
        findings = []
        previous = compute_quality_score(findings)
        for severity in [Severity.MEDIUM, Severity.LOW, Severity.CRITICAL, Severity.HIGH] * 4:
            findings.append(_finding(severity=severity))
            score = compute_quality_score(findings)
            assert 0 <= score <= previous
            previous = score


class TestRankings:
    def test_category_frequency_ties_keep_first_seen(self):
        findings = [
            _finding(Category.DEBUG_CODE),
            _finding(Category.COMPLEXITY),
            _finding(Category.COMPLEXITY),
            _finding(Category.DEBUG_CODE),
            _finding(Category.DUPLICATION),
        ]
        assert category_frequency(findings) == [
            ("debug-code", 2),
            ("complexity", 2),
            ("duplication", 1),
        ]

    def test_top_files_ties_keep_corpus_order(self):
        files = [
            FileMetrics("a.js", 1, 5, 0),
            FileMetrics("b.js", 1, 7, 0),
            FileMetrics("c.js", 1, 5, 0),
        ]
        ranked = top_files(files, "complexity", 5)
        assert [r.path for r in ranked] == ["b.js", "a.js", "c.js"]
        assert [r.value for r in ranked] == [7, 5, 5]

    def test_top_files_limited(self):
        files = [FileMetrics(f"{i}.js", 1, i, 0) for i in range(10)]
        assert len(top_files(files, "complexity", 3)) == 3


class TestRecommendations:
    def test_default_only_without_findings(self):
        assert generate_recommendations([]) == list(GENERIC_RECOMMENDATIONS)

    def test_infinite_loop_first(self):
        findings = [_finding(Category.COMPLEXITY)] * 4 + [
            _finding(Category.SELF_REFERENTIAL_DEPENDENCY, Severity.CRITICAL)
        ]
        recommendations = generate_recommendations(findings)
        assert recommendations[0].startswith("CRITICAL")
        assert recommendations[1] == "Reduce code complexity by breaking down large functions"
        assert recommendations[-3:] == list(GENERIC_RECOMMENDATIONS)

    @pytest.mark.parametrize(
        "category,count,fires",
        [
            (Category.COMPLEXITY, 3, False),
            (Category.COMPLEXITY, 4, True),
            (Category.DEBUG_CODE, 5, False),
            (Category.DEBUG_CODE, 6, True),
            (Category.DUPLICATION, 2, False),
            (Category.DUPLICATION, 3, True),
            (Category.UNSTABLE_FUNCTION_DEPENDENCY, 1, True),
            (Category.TYPESCRIPT_COMPLIANCE, 1, True),
            (Category.REACT_PATTERNS, 1, True),
        ],
    )
    def test_thresholds(self, category, count, fires):
        recommendations = generate_recommendations([_finding(category)] * count)
        assert (len(recommendations) > len(GENERIC_RECOMMENDATIONS)) is fires

    def test_debt_categories_pooled(self):
        findings = [_finding(Category.DEBUG_CODE)] * 3 + [_finding(Category.COMMENT_DEBT)] * 3
        assert "Address technical debt to improve maintainability" in generate_recommendations(
            findings
        )


class TestAggregate:
    def test_summary(self):
        results = [
            _result("a.js", complexity=2, debt=4, lines=10, findings=[_finding()], failed=1),
            _result(
                "b.js",
                complexity=4,
                debt=6,
                lines=20,
                findings=[_finding(Category.SECURITY_RISK, Severity.CRITICAL, "b.js")],
            ),
        ]
        duplicate = _finding(Category.DUPLICATION, Severity.MEDIUM, "b.js", line=3)
        report = aggregate(results, [duplicate], TIMESTAMP, failed_files=2)
        s = report.summary

        assert s.total_files == 2
        assert s.total_lines == 30
        assert s.avg_complexity == 3.0
        assert s.complexity_p50 == 3.0
        assert s.complexity_p90 == pytest.approx(3.8)
        assert s.technical_debt_score == 10
        assert s.duplicate_code_blocks == 1
        assert s.total_issues == 3
        assert (s.critical_issues, s.high_issues, s.medium_issues, s.low_issues) == (1, 0, 1, 1)
        assert s.quality_score == 75
        assert s.failed_files == 2
        assert s.failed_detectors == 1
        assert report.has_critical
        assert report.findings[-1] is duplicate

    def test_empty_corpus(self):
        report = aggregate([], [], TIMESTAMP)
        assert report.summary.quality_score == 100
        assert report.summary.avg_complexity == 0.0
        assert report.recommendations == list(GENERIC_RECOMMENDATIONS)
        assert not report.has_critical

    def test_duplicate_paths_rejected(self):
        with pytest.raises(ValueError):
            aggregate([_result("a.js"), _result("a.js")], [], TIMESTAMP)

    def test_to_dict_shape(self):
        report = aggregate([_result("a.js", findings=[_finding(line=4)])], [], TIMESTAMP)
        data = report.to_dict()
        assert data["timestamp"] == TIMESTAMP
        assert data["files"] == [{"path": "a.js", "lines": 10, "complexity": 1, "debt_score": 0}]
        assert data["findings"][0]["line_range"] == [4, 4]
        assert data["rankings"]["category_frequency"] == [{"category": "debug-code", "count": 1}]
