"""Corpus scanner: walks a source tree and reads the files worth analyzing.

Excluded directories are pruned during the walk (never descended into).
Output order is lexicographic by relative path so reports are reproducible.
"""

import os
from pathlib import Path
from typing import Optional

from ..config import AnalysisConfig, default_config
from ..exceptions import FileAccessError, InvalidPathError
from ..logging_config import get_logger
from .models import ScanResult, SourceFile

logger = get_logger(__name__)


class CorpusScanner:
    """Enumerate and read source-text files under a root directory."""

    def __init__(self, root_dir: str, config: Optional[AnalysisConfig] = None):
        self.root_dir = Path(root_dir)
        self.config = config or default_config
        self._extensions = {ext.lower() for ext in self.config.extensions}
        self._exclude_dirs = set(self.config.exclude_dirs)
        logger.debug(f"Initialized {self.__class__.__name__} for {self.root_dir}")

    def scan(self) -> ScanResult:
        """
        Walk the tree and read every matching file.

        Returns:
            ScanResult with files in path order plus failed/skipped bookkeeping

        Raises:
            InvalidPathError: If the root does not exist or is not a directory
        """
        if not self.root_dir.exists():
            raise InvalidPathError(self.root_dir, "does not exist")
        if not self.root_dir.is_dir():
            raise InvalidPathError(self.root_dir, "not a directory")

        result = ScanResult()
        candidates = self._enumerate(result.failed)

        for rel_path, filepath in candidates:
            if len(result.files) >= self.config.max_files:
                logger.warning(f"Reached max files limit ({self.config.max_files})")
                break

            try:
                size = os.stat(filepath).st_size
            except OSError as e:
                result.failed.append(rel_path)
                logger.warning(f"Cannot stat {rel_path}: {e}")
                continue
            if size > self.config.max_file_size_bytes:
                result.skipped += 1
                logger.debug(f"Skipped (size): {rel_path} ({size} bytes)")
                continue

            try:
                content = self._read_file(filepath)
            except FileAccessError as e:
                result.failed.append(rel_path)
                logger.warning(f"Access error for {rel_path}: {e.reason}")
                continue

            result.files.append(SourceFile.from_text(rel_path, content))
            logger.debug(f"Read: {rel_path}")

        logger.info(
            f"Scan complete: {len(result.files)} read, {result.skipped} skipped, "
            f"{len(result.failed)} errors"
        )
        return result

    def _enumerate(self, failed: list[str]) -> list[tuple[str, Path]]:
        """Collect (relative path, absolute path) pairs, sorted by relative path.

        Directories that cannot be listed are appended to ``failed``.
        """
        found: list[tuple[str, Path]] = []

        def unreadable(error: OSError) -> None:
            rel_dir = self._relative(error.filename) if error.filename else str(self.root_dir)
            failed.append(rel_dir)
            logger.warning(f"Cannot list directory {rel_dir}: {error.strerror or error}")

        for dirpath, dirnames, filenames in os.walk(self.root_dir, onerror=unreadable):
            # Prune in place so os.walk never descends into excluded dirs
            dirnames[:] = sorted(d for d in dirnames if d not in self._exclude_dirs)
            for name in filenames:
                if os.path.splitext(name)[1].lower() not in self._extensions:
                    continue
                filepath = Path(dirpath) / name
                rel_path = filepath.relative_to(self.root_dir).as_posix()
                found.append((rel_path, filepath))

        found.sort(key=lambda pair: pair[0])
        return found

    def _relative(self, path: str) -> str:
        try:
            return Path(path).relative_to(self.root_dir).as_posix()
        except ValueError:
            return str(path)

    def _read_file(self, filepath: Path) -> str:
        try:
            with open(filepath, encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            raise FileAccessError(filepath, f"Cannot read file: {e}")
