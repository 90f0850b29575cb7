"""nixdoc Indexer Package.

This package turns a directory of Nix files into documented bindings:
- FileWalker for deterministic, cycle-safe directory traversal
- NixScanner, a single-pass lexer over one file's text
- Pluggable extractors (NixExtractor builds Binding records)
- dedent, the comment normalizer

ARCHITECTURAL CONTRACT: File Path Responsibility
=================================================
The search layer PROVIDES the display path of each file and passes it to
extractor.extract() as file_info['path']. Extractors record that path in every
SourcePosition and never compute paths of their own.
"""

from .core import FileWalker
from .dedent import dedent, dedent_comment
from .extractors import ExtractorRegistry
from .scanner import EventKind, NixScanner, ScanEvent

__all__ = [
    "FileWalker",
    "ExtractorRegistry",
    "NixScanner",
    "ScanEvent",
    "EventKind",
    "dedent",
    "dedent_comment",
]
