"""Position lookup for documented functions.

Embedding glue (an evaluator plugin, an editor integration) knows where a
function value was parsed, not what it is called. PositionLookup maps that
position back to the DocEntry a tree search would have produced, so both
access paths show identical text. Mapping an evaluator's own value identity to
a position is the glue's job; this index only speaks positions.
"""

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from nixdoc.indexer.core import display_path
from nixdoc.models import DocEntry, SearchResult, SourcePosition
from nixdoc.search import collect_entries, scan_file

PositionKey = tuple[str, int, int]


def _file_key(file_path: str | Path) -> str:
    """Canonical form of a file path, so `./lib/x.nix` and `/abs/lib/x.nix` agree."""
    return os.path.normcase(os.path.realpath(file_path))


class PositionLookup:
    """Index of DocEntry records keyed by the position of their lambda head."""

    def __init__(self, entries: Iterable[DocEntry] = ()):
        self._by_position: dict[PositionKey, DocEntry] = {}
        self._by_line: dict[tuple[str, int], list[DocEntry]] = {}
        for entry in entries:
            self.add(entry)

    @classmethod
    def from_result(cls, result: SearchResult) -> "PositionLookup":
        return cls(result.entries)

    @classmethod
    def for_file(cls, path: str | Path) -> "PositionLookup":
        """Build a lookup from a single file.

        Raises:
            FileReadError: if the file cannot be read or decoded
        """
        return cls(scan_file(path, display_path(path)))

    @classmethod
    def from_tree(cls, root: str | Path = ".", config: dict[str, Any] | None = None) -> "PositionLookup":
        """Build a lookup over every documented function under root."""
        return cls.from_result(collect_entries(root, config=config))

    def add(self, entry: DocEntry) -> None:
        position = entry.position
        file_key = _file_key(position.file_path)
        self._by_position[(file_key, position.line, position.column)] = entry
        self._by_line.setdefault((file_key, position.line), []).append(entry)

    def lookup(self, position: SourcePosition | tuple) -> DocEntry | None:
        """Return the entry whose lambda head is at position.

        Args:
            position: A SourcePosition, or a (file, line, column) tuple. A
                (file, line) tuple matches the first entry on that line.

        Returns:
            The DocEntry, or None when nothing documented starts there
        """
        if isinstance(position, SourcePosition):
            file_path, line, column = position.file_path, position.line, position.column
        elif len(position) == 3:
            file_path, line, column = position
        elif len(position) == 2:
            file_path, line = position
            return self.lookup_line(file_path, line)
        else:
            raise ValueError(f"expected (file, line[, column]), got {position!r}")

        return self._by_position.get((_file_key(file_path), int(line), int(column)))

    def lookup_line(self, file_path: str | Path, line: int) -> DocEntry | None:
        """Return the first documented function whose lambda head is on line."""
        entries = self._by_line.get((_file_key(file_path), int(line)))
        return entries[0] if entries else None

    def __len__(self) -> int:
        return len(self._by_position)

    def __contains__(self, position: object) -> bool:
        if not isinstance(position, (SourcePosition, tuple)):
            return False
        return self.lookup(position) is not None
