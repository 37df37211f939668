"""Data models for the corpus scanner."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SourceFile:
    """A readable text file from the scanned corpus.

    ``path`` is relative to the scan root with POSIX separators.
    """

    path: str
    content: str
    line_count: int
    extension: str

    @classmethod
    def from_text(cls, path: str, content: str) -> "SourceFile":
        suffix = path.rsplit("/", 1)[-1]
        extension = "." + suffix.rsplit(".", 1)[-1] if "." in suffix else ""
        return cls(
            path=path,
            content=content,
            line_count=len(content.split("\n")),
            extension=extension.lower(),
        )

    @property
    def lines(self) -> list[str]:
        return self.content.split("\n")


@dataclass
class ScanResult:
    """Files read by a scan plus the bookkeeping for what was left out."""

    files: list[SourceFile] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)  # unreadable paths
    skipped: int = 0  # size / limit exclusions

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]
