"""Indexer configuration - constants and patterns.

This module contains the configuration values for the indexer package.
It should contain ONLY constants, no scanning logic.
"""

import re

# =============================================================================
# FILE SYSTEM CONFIGURATION
# =============================================================================

# Directories skipped during the walk unless overridden by runtime config
SKIP_DIRS: frozenset[str] = frozenset({
    # Version control
    ".git",
    ".hg",
    ".svn",

    # Dependencies
    "node_modules",
})

# Suffix of the source language's files
NIX_EXTENSIONS: tuple[str, ...] = (".nix",)

# Files above this size are skipped (generated package sets can be huge)
DEFAULT_MAX_FILE_SIZE = 8 * 1024 * 1024

# Worker threads for per-file scanning
DEFAULT_WORKERS = 4


# =============================================================================
# LEXICAL PATTERNS
# =============================================================================

# Identifiers: letters, digits, underscore, apostrophe and dash after the first
IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_'\-]*")

# URI literal: scheme followed directly by ':' and at least one URI character
URI_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9+\-.]*:[A-Za-z0-9%/?:@&=+$,\-_.!~*']+")

# Path literal, e.g. ./foo/bar.nix, ~/x, /etc/nixos, lib/default.nix
PATH_PATTERN = re.compile(r"(?:~|[A-Za-z0-9._+\-]*)(?:/[A-Za-z0-9._+\-]+)+/?")

# Search path, e.g. <nixpkgs> or <nixpkgs/lib>
SEARCH_PATH_PATTERN = re.compile(r"<[A-Za-z0-9._+\-]+(?:/[A-Za-z0-9._+\-]+)*>")

NUMBER_PATTERN = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Multi-character operators that must never be read as an assignment '='
OPERATORS: tuple[str, ...] = ("...", "==", "!=", "<=", ">=", "&&", "||", "->", "++", "//")
