"""Data models for documentation extraction and search."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True, order=True)
class SourcePosition:
    """Location of a lambda-introduction token in the original file.

    Line and column are 1-based and refer to the un-dedented file content.
    """

    file_path: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class CommentBlock:
    """A run of line comments, or one block comment, directly above a binding."""

    position: SourcePosition
    lines: tuple[str, ...]  # raw text, comment markers included
    style: str  # "line" | "block"
    end_line: int


@dataclass(frozen=True)
class Binding:
    """A `name = <lambda>` assignment found by the extractor."""

    name: str
    signature_snippet: str
    position: SourcePosition
    doc: CommentBlock | None = None


@dataclass(frozen=True)
class DocEntry:
    """Searchable, renderable unit: a documented function binding."""

    binding_name: str
    dedented_text: str
    signature_snippet: str
    position: SourcePosition


@dataclass(frozen=True)
class ScanWarning:
    """A recoverable per-file or per-directory problem."""

    kind: str  # exception class name, e.g. "EncodingError"
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.kind}: {self.path}: {self.message}"


@dataclass
class SearchResult:
    """Ordered documentation matches plus the warnings collected on the way.

    Ordering is file discovery order, then ascending line within a file.
    """

    entries: list[DocEntry] = field(default_factory=list)
    warnings: list[ScanWarning] = field(default_factory=list)
    files_scanned: int = 0
    walk_stats: dict[str, int] = field(default_factory=dict)

    def __iter__(self) -> Iterator[DocEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index):
        return self.entries[index]

    @property
    def files_matched(self) -> int:
        """Number of distinct files contributing at least one entry."""
        return len({entry.position.file_path for entry in self.entries})
