"""Duplicate block detection over fixed-size line windows.

Every file contributes one window per starting line. A window is the next
``duplicate_window`` lines, trimmed, with short lines dropped; windows whose
joined text is too short are ignored. Windows are hashed and looked up in a
shared index of first-seen locations:

    first occurrence  -> recorded as a candidate
    second occurrence -> promoted to a DuplicateBlock (first seen, current)
    later occurrences -> another block, still paired with the first location

Hash collisions are taken at face value. Windows that keep colliding in
lock-step with the same earlier run are merged into one block, so a shared
span longer than the window is reported once.

Hashing is pure and runs per file on worker threads; ``register`` must be
fed files in corpus order for "first seen" to be reproducible.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from threading import Lock
from typing import Optional

from ..config import AnalysisConfig, default_config
from ..logging_config import get_logger
from ..scanning.models import SourceFile
from .models import Category, DuplicateBlock, Finding, Location, Severity

logger = get_logger(__name__)


@dataclass(frozen=True)
class Window:
    line: int  # 1-based first line of the window
    digest: str
    text: str


def normalize_window(lines: list[str], min_line_chars: int) -> str:
    """Trim each line, drop lines of ``min_line_chars`` or fewer, join."""
    kept = [line.strip() for line in lines]
    return "\n".join(line for line in kept if len(line) > min_line_chars)


def hash_block(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


def hash_windows(source: SourceFile, config: Optional[AnalysisConfig] = None) -> list[Window]:
    """Hash every distinctive window of ``source``, in line order."""
    config = config or default_config
    size = config.duplicate_window
    lines = source.lines
    windows: list[Window] = []

    for i in range(len(lines) - size + 1):
        block = normalize_window(lines[i : i + size], config.duplicate_min_line_chars)
        if len(block) <= config.duplicate_min_block_chars:
            continue
        windows.append(Window(line=i + 1, digest=hash_block(block), text=block))

    return windows


class DuplicateIndex:
    """Map of window hash -> first-seen location with atomic check-then-insert."""

    def __init__(self) -> None:
        self._first_seen: dict[str, Location] = {}
        self._lock = Lock()

    def check_and_insert(self, digest: str, location: Location) -> Optional[Location]:
        """Record ``location`` if ``digest`` is new.

        Returns:
            The first-seen location when ``digest`` was already present,
            otherwise None.
        """
        with self._lock:
            existing = self._first_seen.get(digest)
            if existing is None:
                self._first_seen[digest] = location
            return existing

    def __len__(self) -> int:
        with self._lock:
            return len(self._first_seen)


@dataclass
class _Run:
    line: int
    first: Location
    block: DuplicateBlock


class DuplicateDetector:
    """Accumulates duplicate blocks across the files registered with it."""

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        index: Optional[DuplicateIndex] = None,
    ):
        self.config = config or default_config
        self.index = index if index is not None else DuplicateIndex()
        self._blocks: list[DuplicateBlock] = []
        self._block_files: list[str] = []

    def hash_file(self, source: SourceFile) -> list[Window]:
        return hash_windows(source, self.config)

    def register(self, path: str, windows: list[Window]) -> list[DuplicateBlock]:
        """Insert one file's windows into the index.

        Returns:
            Blocks promoted while registering this file.
        """
        promoted: list[DuplicateBlock] = []
        run: Optional[_Run] = None

        for window in windows:
            first = self.index.check_and_insert(window.digest, (path, window.line))
            if first is None:
                run = None
                continue

            if (
                run is not None
                and window.line == run.line + 1
                and first[0] == run.first[0]
                and first[1] == run.first[1] + 1
            ):
                run.block.extend()
                run = _Run(window.line, first, run.block)
                continue

            block = DuplicateBlock(
                normalized_text=window.text,
                occurrences=[first, (path, window.line)],
                line_span=self.config.duplicate_window,
            )
            self._blocks.append(block)
            self._block_files.append(path)
            promoted.append(block)
            run = _Run(window.line, first, block)

        if promoted:
            logger.debug(f"{path}: {len(promoted)} duplicate block(s)")
        return promoted

    def scan(self, files: list[SourceFile]) -> list[Finding]:
        """Sequential convenience: hash and register ``files`` in order."""
        for source in files:
            self.register(source.path, self.hash_file(source))
        return self.findings()

    @property
    def blocks(self) -> list[DuplicateBlock]:
        return list(self._blocks)

    def findings(self) -> list[Finding]:
        findings = []
        for block, path in zip(self._blocks, self._block_files):
            (first_file, first_line), (_, line) = block.occurrences[0], block.occurrences[-1]
            findings.append(
                Finding(
                    category=Category.DUPLICATION,
                    severity=Severity.MEDIUM,
                    file=path,
                    line_range=(line, line + block.line_span - 1),
                    message=(
                        f"Duplicate code block ({block.line_span} lines): "
                        f"{first_file}:{first_line} and {path}:{line}"
                    ),
                    remediation="Extract common code into a shared function or component",
                    locations=tuple(block.occurrences),
                )
            )
        return findings
