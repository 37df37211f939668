"""Tests for window hashing and cross-file duplicate detection."""

from concurrent.futures import ThreadPoolExecutor

from conftest import SHARED_BLOCK, make_source

from debtscope.analysis.duplicates import (
    DuplicateDetector,
    DuplicateIndex,
    hash_windows,
    normalize_window,
)
from debtscope.analysis.models import Category, Severity

EXTRA_LINE = "const ratio = spread / first;"


def _text(lines):
    return "\n".join(lines)


class TestHashWindows:
    def test_one_window_per_start_line(self):
        windows = hash_windows(make_source("a.js", _text(SHARED_BLOCK + [EXTRA_LINE])))
        assert [w.line for w in windows] == [1, 2]

    def test_short_file_has_no_windows(self):
        assert hash_windows(make_source("a.js", _text(SHARED_BLOCK[:3]))) == []

    def test_short_lines_dropped(self):
        assert normalize_window(["  }  ", "  return value + other;", ""], 10) == (
            "return value + other;"
        )

    def test_low_information_windows_skipped(self):
        assert hash_windows(make_source("a.js", _text(["}"] * 8))) == []

    def test_indentation_ignored(self):
        plain = hash_windows(make_source("a.js", _text(SHARED_BLOCK)))
        indented = hash_windows(make_source("b.js", _text("    " + l for l in SHARED_BLOCK)))
        assert plain[0].digest == indented[0].digest


class TestDuplicateIndex:
    def test_first_seen_wins(self):
        index = DuplicateIndex()
        assert index.check_and_insert("h", ("a.js", 1)) is None
        assert index.check_and_insert("h", ("b.js", 4)) == ("a.js", 1)
        assert index.check_and_insert("h", ("c.js", 9)) == ("a.js", 1)
        assert len(index) == 1

    def test_concurrent_inserts_have_one_winner(self):
        index = DuplicateIndex()
        locations = [(f"f{i}.js", 1) for i in range(32)]
        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda loc: index.check_and_insert("h", loc), locations))
        assert results.count(None) == 1
        winner = locations[results.index(None)]
        assert all(r == winner for r in results if r is not None)


class TestDuplicateDetector:
    def test_pair_reports_first_seen_first(self):
        files = [make_source("a.js", _text(SHARED_BLOCK)), make_source("b.js", _text(SHARED_BLOCK))]
        detector = DuplicateDetector()
        [finding] = detector.scan(files)

        assert finding.category is Category.DUPLICATION
        assert finding.severity is Severity.MEDIUM
        assert finding.file == "b.js"
        assert finding.locations == (("a.js", 1), ("b.js", 1))
        assert finding.line_range == (1, 5)
        assert finding.message == "Duplicate code block (5 lines): a.js:1 and b.js:1"

    def test_third_occurrence_pairs_with_first(self):
        files = [make_source(p, _text(SHARED_BLOCK)) for p in ("a.js", "b.js", "c.js")]
        detector = DuplicateDetector()
        findings = detector.scan(files)

        assert len(findings) == 2
        assert [f.locations for f in findings] == [
            (("a.js", 1), ("b.js", 1)),
            (("a.js", 1), ("c.js", 1)),
        ]

    def test_longer_shared_span_reported_once(self):
        lines = SHARED_BLOCK + [EXTRA_LINE]
        files = [make_source("a.js", _text(lines)), make_source("b.js", _text(lines))]
        [finding] = DuplicateDetector().scan(files)
        assert finding.line_range == (1, 6)
        assert finding.message.startswith("Duplicate code block (6 lines)")

    def test_offset_occurrence(self):
        prefix = ["import { helper } from './helper';", "const unrelatedValue = compute();"]
        files = [
            make_source("a.js", _text(SHARED_BLOCK)),
            make_source("b.js", _text(prefix + SHARED_BLOCK)),
        ]
        [finding] = DuplicateDetector().scan(files)
        assert finding.locations == (("a.js", 1), ("b.js", 3))
        assert finding.line_range == (3, 7)

    def test_distinct_files_have_no_duplicates(self):
        files = [
            make_source("a.js", _text(SHARED_BLOCK)),
            make_source("b.js", _text(line.replace("const", "let") for line in SHARED_BLOCK)),
        ]
        assert DuplicateDetector().scan(files) == []

    def test_register_returns_promoted_blocks(self):
        detector = DuplicateDetector()
        a = make_source("a.js", _text(SHARED_BLOCK))
        b = make_source("b.js", _text(SHARED_BLOCK))
        assert detector.register(a.path, detector.hash_file(a)) == []
        promoted = detector.register(b.path, detector.hash_file(b))
        assert len(promoted) == 1
        assert detector.blocks == promoted
