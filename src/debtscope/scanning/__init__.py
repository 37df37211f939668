"""Corpus scanning: directory walk, filtering, and reading source files."""

from .models import ScanResult, SourceFile
from .scanner import CorpusScanner

__all__ = ["CorpusScanner", "ScanResult", "SourceFile"]
