"""Nix binding extractor.

Finds `name = <lambda head>...` bindings in the scanner's event stream and
attaches the comment block written directly above each one.

A comment counts as documentation only when it is adjacent to the binding:
- it is the event immediately before the binding name,
- it starts its own line (a trailing comment after code never qualifies),
- it ends on the line above the name, or on the name's own line.
Consecutive own-line `#` comments on consecutive lines merge into one block;
a `/* */` comment is always used alone.
"""

from typing import Any

from nixdoc.models import Binding, CommentBlock, SourcePosition

from . import BaseExtractor
from ..config import NIX_EXTENSIONS
from ..scanner import EventKind, NixScanner, ScanEvent


def _signature_snippet(content: str, start: int, end: int) -> str:
    """Source text from the binding name through its last lambda head, on one line."""
    return " ".join(content[start:end].split()) + " ..."


def find_doc_comment(events: list[ScanEvent], index: int, file_path: str) -> CommentBlock | None:
    """Return the comment block documenting the binding whose name is events[index]."""
    if index == 0:
        return None

    name = events[index]
    nearest = events[index - 1]
    if nearest.kind is not EventKind.COMMENT or not nearest.own_line:
        return None
    if nearest.end_line not in (name.line - 1, name.line):
        return None

    if nearest.is_block_comment:
        return CommentBlock(
            position=SourcePosition(file_path, nearest.line, nearest.column),
            lines=tuple(nearest.text.split("\n")),
            style="block",
            end_line=nearest.end_line,
        )

    group = [nearest]
    cursor = index - 2
    while cursor >= 0:
        event = events[cursor]
        if (
            event.kind is not EventKind.COMMENT
            or event.is_block_comment
            or not event.own_line
            or event.line != group[-1].line - 1
        ):
            break
        group.append(event)
        cursor -= 1

    group.reverse()
    first = group[0]
    return CommentBlock(
        position=SourcePosition(file_path, first.line, first.column),
        lines=tuple(event.text for event in group),
        style="line",
        end_line=nearest.end_line,
    )


def extract_bindings(events: list[ScanEvent], content: str, file_path: str) -> list[Binding]:
    """Build Binding records from one file's scan events.

    Args:
        events: Scanner output for the file
        content: The scanned text (for signature snippets)
        file_path: Path recorded in every SourcePosition

    Returns:
        Bindings in source order. Undocumented bindings are included with
        doc=None; bindings whose right-hand side is not a lambda are not.
    """
    bindings = []
    index = 0
    total = len(events)

    while index + 2 < total:
        name = events[index]
        if (
            name.kind is not EventKind.IDENTIFIER
            or events[index + 1].kind is not EventKind.ASSIGN
            or events[index + 2].kind is not EventKind.LAMBDA
        ):
            index += 1
            continue

        last = index + 2
        while last + 1 < total and events[last + 1].kind is EventKind.LAMBDA:
            last += 1

        first_head = events[index + 2]
        bindings.append(
            Binding(
                name=name.text,
                signature_snippet=_signature_snippet(content, name.offset, events[last].end),
                position=SourcePosition(file_path, first_head.line, first_head.column),
                doc=find_doc_comment(events, index, file_path),
            )
        )
        index = last + 1

    return bindings


class NixExtractor(BaseExtractor):
    """Extractor for Nix expression files."""

    def supported_extensions(self) -> list[str]:
        """Return list of file suffixes this extractor supports."""
        return list(NIX_EXTENSIONS)

    def extract(self, file_info: dict[str, Any], content: str) -> dict[str, Any]:
        """Extract function bindings from a Nix file.

        Args:
            file_info: File metadata dictionary ('path' is recorded in positions)
            content: File content

        Returns:
            Dictionary with a 'bindings' list
        """
        events = list(NixScanner(content).scan())
        return {"bindings": extract_bindings(events, content, file_info["path"])}
