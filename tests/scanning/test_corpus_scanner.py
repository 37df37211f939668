"""Tests for CorpusScanner: filtering, pruning, ordering and failures."""

import os

import pytest

from debtscope.config import AnalysisConfig
from debtscope.exceptions import InvalidPathError
from debtscope.scanning import CorpusScanner, SourceFile


class TestEnumeration:
    def test_filters_by_extension(self, project):
        root = project(
            {
                "b.ts": "const b = 1;",
                "a/c.tsx": "const c = 1;",
                "README.md": "# readme",
                "tool.py": "x = 1",
            }
        )
        result = CorpusScanner(root).scan()
        assert result.paths == ["a/c.tsx", "b.ts"]

    def test_extension_match_is_case_insensitive(self, project):
        root = project({"Legacy.JS": "var x = 1;"})
        assert CorpusScanner(root).scan().paths == ["Legacy.JS"]

    def test_excluded_dirs_pruned_at_any_depth(self, project):
        root = project(
            {
                "node_modules/lib/index.js": "module.exports = 1;",
                "src/dist/bundle.js": "var bundled = 1;",
                "src/__tests__/a.test.js": "test('x', () => {});",
                "src/ok.js": "export const ok = true;",
            }
        )
        assert CorpusScanner(root).scan().paths == ["src/ok.js"]

    def test_custom_exclusions(self, project):
        root = project({"vendor/x.js": "1", "src/y.js": "2"})
        config = AnalysisConfig(exclude_dirs=["vendor"])
        assert CorpusScanner(root, config).scan().paths == ["src/y.js"]

    def test_order_is_stable_across_runs(self, project):
        root = project({f"dir{i % 3}/file{i}.js": f"const v{i} = {i};" for i in range(12)})
        first = CorpusScanner(root).scan().paths
        second = CorpusScanner(root).scan().paths
        assert first == second == sorted(first)

    def test_reads_content(self, project):
        root = project({"a.js": "line one\nline two"})
        source = CorpusScanner(root).scan().files[0]
        assert source.content == "line one\nline two"
        assert source.line_count == 2
        assert source.extension == ".js"


class TestLimits:
    def test_oversize_file_skipped(self, project):
        root = project({"big.js": "x" * 500, "small.js": "y"})
        config = AnalysisConfig(max_file_size_mb=0.0001)
        result = CorpusScanner(root, config).scan()
        assert result.paths == ["small.js"]
        assert result.skipped == 1

    def test_max_files(self, project):
        root = project({"a.js": "1", "b.js": "2", "c.js": "3"})
        result = CorpusScanner(root, AnalysisConfig(max_files=2)).scan()
        assert result.paths == ["a.js", "b.js"]


class TestFailures:
    def test_missing_root(self, tmp_path):
        with pytest.raises(InvalidPathError):
            CorpusScanner(tmp_path / "nope").scan()

    def test_root_is_file(self, tmp_path):
        target = tmp_path / "file.js"
        target.write_text("1")
        with pytest.raises(InvalidPathError):
            CorpusScanner(target).scan()

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_broken_symlink_recorded_as_failed(self, project):
        root = project({"good.js": "const good = 1;"})
        os.symlink(root / "missing.js", root / "broken.js")
        result = CorpusScanner(root).scan()
        assert result.paths == ["good.js"]
        assert result.failed == ["broken.js"]

    def test_unlistable_directory_recorded_as_failed(self, project, monkeypatch):
        root = project({"good.js": "const good = 1;", "locked/hidden.js": "const h = 1;"})
        real_walk = os.walk

        def walk_with_locked_dir(top, onerror=None, **kwargs):
            for dirpath, dirnames, filenames in real_walk(top, onerror=onerror, **kwargs):
                if os.path.basename(dirpath) == "locked":
                    onerror(PermissionError(13, "Permission denied", dirpath))
                    continue
                yield dirpath, dirnames, filenames

        monkeypatch.setattr("debtscope.scanning.scanner.os.walk", walk_with_locked_dir)
        result = CorpusScanner(root).scan()
        assert result.paths == ["good.js"]
        assert result.failed == ["locked"]

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission bits are not enforced for root",
    )
    def test_unreadable_directory_on_disk(self, project):
        root = project({"good.js": "const good = 1;", "locked/hidden.js": "const h = 1;"})
        locked = root / "locked"
        locked.chmod(0)
        try:
            result = CorpusScanner(root).scan()
        finally:
            locked.chmod(0o755)
        assert result.paths == ["good.js"]
        assert result.failed == ["locked"]


class TestSourceFile:
    def test_from_text(self):
        source = SourceFile.from_text("src/App.TSX", "a\nb\nc")
        assert source.extension == ".tsx"
        assert source.line_count == 3
        assert source.lines == ["a", "b", "c"]

    def test_no_extension(self):
        assert SourceFile.from_text("Makefile", "").extension == ""
