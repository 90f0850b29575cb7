"""Plain-text rendering of documentation entries.

Block format for one entry:

       <documentation, each line indented by three spaces>
    <signature snippet>
    # <file>:<line>

Entries in a report are separated by a line of box-drawing characters. The
formatter never filters or reorders.
"""

from collections.abc import Iterable

from nixdoc.models import DocEntry

DOC_INDENT = 3
SEPARATOR_CHAR = "─"
SEPARATOR_WIDTH = 45


def indented(text: str, indent: int = DOC_INDENT) -> str:
    """Indent every line of text by `indent` spaces, blank lines included."""
    prefix = " " * indent
    return "\n".join(prefix + line for line in text.split("\n"))


def location_line(entry: DocEntry) -> str:
    return f"# {entry.position.file_path}:{entry.position.line}"


def separator(width: int = SEPARATOR_WIDTH) -> str:
    return SEPARATOR_CHAR * width


def render(entry: DocEntry, indent: int = DOC_INDENT) -> str:
    """Render one entry as a documentation block (no trailing newline)."""
    return "\n".join([
        indented(entry.dedented_text, indent),
        entry.signature_snippet,
        location_line(entry),
    ])


def render_report(entries: Iterable[DocEntry], indent: int = DOC_INDENT,
                  separator_width: int = SEPARATOR_WIDTH) -> str:
    """Render entries in order, separated by separator lines.

    Returns an empty string for no entries; otherwise the report without a
    trailing newline (and without a separator after the last entry).
    """
    rule = f"\n{separator(separator_width)}\n"
    return rule.join(render(entry, indent) for entry in entries)
