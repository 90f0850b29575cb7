"""Pytest configuration and fixtures."""
import os
from pathlib import Path

import pytest

from nixdoc.models import CommentBlock, DocEntry, SourcePosition


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Keep NIXDOC_<SECTION>_<KEY> overrides from the outer shell out of tests."""
    for key in list(os.environ):
        if key.startswith("NIXDOC_") and not key.startswith("NIXDOC_LOG"):
            monkeypatch.delenv(key)


@pytest.fixture
def nix_tree(tmp_path):
    """
    Build a directory tree of source files under tmp_path.

    Usage:
        root = nix_tree({"lib/x.nix": "...", "y.nix": b"raw bytes"})

    str values are written as UTF-8, bytes values verbatim.
    """
    def _make(files: dict[str, str | bytes]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return tmp_path

    return _make


@pytest.fixture
def add_source():
    """Documented curried binding used across the suite."""
    return "# Adds two numbers.\nadd = a: b: a + b;\n"


@pytest.fixture
def make_entry():
    """Factory for DocEntry records that never touched the file system."""
    def _make(text="Adds two numbers.", name="add", signature="add = a: b: ...",
              file_path="lib/arith.nix", line=2, column=7) -> DocEntry:
        return DocEntry(
            binding_name=name,
            dedented_text=text,
            signature_snippet=signature,
            position=SourcePosition(file_path, line, column),
        )

    return _make


def line_block(*lines: str) -> CommentBlock:
    """CommentBlock of `#` comments starting at line 1."""
    return CommentBlock(
        position=SourcePosition("t.nix", 1, 1),
        lines=tuple(lines),
        style="line",
        end_line=len(lines),
    )


def block_comment(text: str) -> CommentBlock:
    """CommentBlock for one `/* */` comment starting at line 1."""
    lines = tuple(text.split("\n"))
    return CommentBlock(
        position=SourcePosition("t.nix", 1, 1),
        lines=lines,
        style="block",
        end_line=len(lines),
    )
