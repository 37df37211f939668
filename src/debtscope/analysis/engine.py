"""AnalysisEngine: scan, analyze every file, detect duplicates, aggregate.

Per-file analysis is embarrassingly parallel and runs on a thread pool.
Each file yields its own metrics, findings and duplicate-window hashes;
windows are registered into the shared index in corpus order once all
workers finish, so repeated runs over the same tree produce the same
report apart from the timestamp.

Usage:
    engine = AnalysisEngine(config)
    report = engine.run("/path/to/project")
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from ..config import AnalysisConfig, default_config
from ..exceptions import BlockExtractionError
from ..logging_config import get_logger
from ..scanning import CorpusScanner, SourceFile
from .aggregator import FileResult, aggregate
from .base import TextAnalyzer
from .complexity import BASE_COMPLEXITY, ComplexityScorer
from .conventions import ReactPatternAnalyzer, TypeScriptComplianceAnalyzer
from .debt import DebtScorer, detector_failure
from .duplicates import DuplicateDetector, Window, hash_windows
from .effects import EffectDependencyAnalyzer
from .hooks import HookUsageAnalyzer
from .models import FileMetrics, Finding, Report

logger = get_logger(__name__)

# Below this many files the pool overhead outweighs the speedup
PARALLEL_THRESHOLD = 10


def default_analyzers(config: AnalysisConfig) -> list[TextAnalyzer]:
    return [
        ComplexityScorer(config),
        DebtScorer(),
        EffectDependencyAnalyzer(config),
        HookUsageAnalyzer(),
        TypeScriptComplianceAnalyzer(),
        ReactPatternAnalyzer(),
    ]


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class AnalysisEngine:
    """Runs the full pipeline over a source tree."""

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        analyzers: Optional[list[TextAnalyzer]] = None,
    ) -> None:
        self.config = config or default_config
        self.analyzers = analyzers if analyzers is not None else default_analyzers(self.config)

    def run(self, root: Union[str, Path], timestamp: Optional[str] = None) -> Report:
        """Analyze every eligible file under ``root``.

        Raises:
            InvalidPathError: If ``root`` is missing or not a directory.
        """
        scan = CorpusScanner(root, self.config).scan()
        logger.info(
            f"Scanned {len(scan.files)} files ({len(scan.failed)} unreadable, "
            f"{scan.skipped} skipped)"
        )
        return self.run_files(scan.files, timestamp=timestamp, failed_files=len(scan.failed))

    def run_files(
        self,
        files: list[SourceFile],
        timestamp: Optional[str] = None,
        failed_files: int = 0,
    ) -> Report:
        """Analyze an already-loaded corpus, in the given order."""
        outcomes = self._analyze_all(files)

        duplicates = DuplicateDetector(self.config)
        for source, (_, windows) in zip(files, outcomes):
            duplicates.register(source.path, windows)

        return aggregate(
            [result for result, _ in outcomes],
            duplicates.findings(),
            timestamp=timestamp or utc_timestamp(),
            failed_files=failed_files,
            top_n=self.config.top_n,
        )

    def _analyze_all(self, files: list[SourceFile]) -> list[tuple[FileResult, list[Window]]]:
        if len(files) < PARALLEL_THRESHOLD:
            return [self.analyze_file(source) for source in files]

        outcomes: list[Optional[tuple[FileResult, list[Window]]]] = [None] * len(files)
        with ThreadPoolExecutor(max_workers=self.config.worker_count) as executor:
            futures = {
                executor.submit(self.analyze_file, source): i for i, source in enumerate(files)
            }
            for future in as_completed(futures):
                i = futures[future]
                try:
                    outcomes[i] = future.result()
                except Exception as e:
                    logger.warning(f"Analysis of {files[i].path} failed: {e}")
                    outcomes[i] = self._failed_file(files[i], e)
        return outcomes  # type: ignore[return-value]

    def analyze_file(self, source: SourceFile) -> tuple[FileResult, list[Window]]:
        """Run every applicable analyzer on one file.

        A failing analyzer never stops the others. Unbalanced effect blocks
        skip that analyzer for the file; anything else becomes a
        detector-failure finding.
        """
        findings: list[Finding] = []
        metrics: dict[str, int] = {}
        failed = 0

        for analyzer in self.analyzers:
            if not analyzer.applies_to(source):
                continue
            try:
                result = analyzer.analyze(source)
            except BlockExtractionError as e:
                logger.warning(f"Skipping {analyzer.name} for {source.path}: {e}")
                failed += 1
                continue
            except Exception as e:
                logger.warning(f"Analyzer {analyzer.name} failed on {source.path}: {e}")
                findings.append(detector_failure(analyzer.name, source.path, e).at(source.path))
                failed += 1
                continue

            findings.extend(d.at(source.path) for d in result.detections)
            metrics.update(result.metrics)
            failed += result.failures

        try:
            windows = hash_windows(source, self.config)
        except Exception as e:
            logger.warning(f"Duplicate hashing failed on {source.path}: {e}")
            findings.append(detector_failure("duplicates", source.path, e).at(source.path))
            failed += 1
            windows = []

        file_metrics = FileMetrics(
            path=source.path,
            lines=source.line_count,
            complexity=metrics.get("complexity", BASE_COMPLEXITY),
            debt_score=metrics.get("debt_score", 0),
        )
        return FileResult(file_metrics, findings, failed), windows

    def _failed_file(
        self, source: SourceFile, error: Exception
    ) -> tuple[FileResult, list[Window]]:
        metrics = FileMetrics(source.path, source.line_count, BASE_COMPLEXITY, 0)
        finding = detector_failure("engine", source.path, error).at(source.path)
        return FileResult(metrics, [finding], 1), []
