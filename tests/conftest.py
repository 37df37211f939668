"""Shared test fixtures for debtscope."""

import os
from pathlib import Path

import pytest

from debtscope.scanning.models import SourceFile

FIXED_TIMESTAMP = "2024-01-01T00:00:00+00:00"

# Five distinctive lines, each longer than the short-line cutoff.
SHARED_BLOCK = [
    "const total = items.length;",
    "const first = items[0].value;",
    "const last = items[total - 1].value;",
    "const spread = last - first;",
    "return spread / total;",
]

MISSING_DEPS_COMPONENT = """function Counter() {
  const [count, setCount] = useState(0);
  useEffect(() => {
    setCount(count + 1);
  });
  return count;
}
"""

SELF_REFERENTIAL_COMPONENT = """function Counter() {
  const [count, setCount] = useState(0);
  useEffect(() => {
    setCount(count + 1);
  }, [count]);
  return count;
}
"""

CLEAN_MODULE = "export const greeting = 'hello';\n"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user/project config files and DEBTSCOPE_* variables out of tests."""
    home = tmp_path / "_home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(home)
    for key in list(os.environ):
        if key.startswith("DEBTSCOPE_"):
            monkeypatch.delenv(key)


@pytest.fixture
def project(tmp_path):
    """Return a writer that lays out ``{relative path: content}`` under a fresh root."""
    root = tmp_path / "project"
    root.mkdir()

    def _write(files: dict) -> Path:
        for rel, content in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return root

    return _write


def make_source(path: str, content: str) -> SourceFile:
    return SourceFile.from_text(path, content)
