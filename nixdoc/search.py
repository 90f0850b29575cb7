"""Documentation search over a tree of Nix files.

Pipeline: FileWalker -> (per file, on a worker pool) read -> scan -> extract
-> dedent -> DocEntry batch -> one ordered table -> Matcher.

Each file's entries are published as a single batch once the file is fully
processed, so an aborted search never exposes a half-scanned file. Batches
arrive in completion order and are put back into discovery order by a final
stable sort.
"""

import os
import re
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from nixdoc.config_runtime import get_config_value, load_runtime_config
from nixdoc.indexer.core import FileWalker, display_path
from nixdoc.indexer.dedent import dedent_comment
from nixdoc.indexer.exceptions import EncodingError, FileReadError, NixdocError, PatternCompileError
from nixdoc.indexer.extractors import ExtractorRegistry
from nixdoc.models import Binding, DocEntry, ScanWarning, SearchResult
from nixdoc.utils.logging import logger


# =============================================================================
# MATCHER
# =============================================================================

def compile_pattern(pattern: str, flags: int = 0) -> re.Pattern:
    """Compile a user-supplied search pattern.

    Raises:
        PatternCompileError: if the pattern is not a valid regular expression
    """
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise PatternCompileError(pattern, str(e)) from e


def entry_matches(entry: DocEntry, pattern: re.Pattern, names_only: bool = False) -> bool:
    """True if the pattern occurs in the binding name or, unless names_only, the documentation."""
    if pattern.search(entry.binding_name):
        return True
    return not names_only and pattern.search(entry.dedented_text) is not None


def filter_entries(pattern: re.Pattern, entries: list[DocEntry],
                   names_only: bool = False) -> list[DocEntry]:
    """Return the matching entries, preserving their order."""
    return [entry for entry in entries if entry_matches(entry, pattern, names_only)]


# =============================================================================
# PER-FILE SCANNING
# =============================================================================

def read_source(path: str | Path, max_file_size: int | None = None) -> str | None:
    """Read and decode one source file.

    Returns:
        The text, or None when the file exceeds max_file_size

    Raises:
        FileReadError: if the file cannot be read
        EncodingError: if the file is not valid UTF-8
    """
    shown = display_path(path)
    try:
        if max_file_size is not None and os.path.getsize(path) > max_file_size:
            logger.debug(f"Skipping {shown}: larger than {max_file_size} bytes")
            return None
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise FileReadError(f"cannot read file: {e.strerror or e}", shown) from e

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(f"not valid UTF-8 at byte {e.start}", shown) from e


def scan_bindings(path: str | Path, shown: str | None = None,
                  registry: ExtractorRegistry | None = None,
                  max_file_size: int | None = None) -> list[Binding]:
    """Extract every function binding from one file, documented or not."""
    shown = shown or display_path(path)
    registry = registry or ExtractorRegistry()
    extractor = registry.get_extractor(path)
    if extractor is None:
        logger.debug(f"No extractor for {shown}")
        return []

    content = read_source(path, max_file_size)
    if content is None:
        return []

    return extractor.extract({"path": shown}, content)["bindings"]


def entries_from_bindings(bindings: list[Binding]) -> list[DocEntry]:
    """Turn documented bindings into DocEntry records.

    Bindings without a comment, or whose comment is empty once normalized,
    produce nothing.
    """
    entries = []
    for binding in bindings:
        if binding.doc is None:
            continue
        text = dedent_comment(binding.doc)
        if not text:
            continue
        entries.append(
            DocEntry(
                binding_name=binding.name,
                dedented_text=text,
                signature_snippet=binding.signature_snippet,
                position=binding.position,
            )
        )
    return entries


def scan_file(path: str | Path, shown: str | None = None,
              registry: ExtractorRegistry | None = None,
              max_file_size: int | None = None) -> list[DocEntry]:
    """Return the DocEntry records of one file, in source order."""
    return entries_from_bindings(scan_bindings(path, shown, registry, max_file_size))


# =============================================================================
# TREE SEARCH
# =============================================================================

def _resolve_settings(root: str | Path, config: dict[str, Any] | None,
                      workers: int | None) -> tuple[dict[str, Any], int]:
    config = config if config is not None else load_runtime_config(root)
    if workers is None:
        workers = get_config_value(config, "search", "workers")
    return config, max(1, int(workers))


def collect_entries(root: str | Path = ".", *, config: dict[str, Any] | None = None,
                    workers: int | None = None) -> SearchResult:
    """Scan every source file under root and return all documented entries.

    Args:
        root: Directory to search
        config: Runtime configuration (loaded from root when omitted)
        workers: Worker threads (config 'search.workers' when omitted)

    Returns:
        SearchResult holding every DocEntry in discovery order plus warnings

    Raises:
        RootAccessError: if root is missing or unreadable
    """
    config, workers = _resolve_settings(root, config, workers)
    registry = ExtractorRegistry()
    walker = FileWalker(
        root,
        extensions=get_config_value(config, "search", "extensions"),
        follow_symlinks=get_config_value(config, "search", "follow_symlinks"),
        skip_dirs=get_config_value(config, "search", "skip_dirs"),
    )
    walker.check_root()
    max_file_size = get_config_value(config, "limits", "max_file_size")

    result = SearchResult()
    batches: list[tuple[int, list[DocEntry]]] = []
    file_warnings: list[tuple[int, ScanWarning]] = []

    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="nixdoc-scan")
    futures: dict[Future, tuple[int, str]] = {}
    try:
        for index, path in enumerate(walker):
            shown = display_path(path)
            future = executor.submit(scan_file, path, shown, registry, max_file_size)
            futures[future] = (index, shown)

        for future in as_completed(futures):
            index, shown = futures[future]
            try:
                batches.append((index, future.result()))
            except NixdocError as e:
                warning = ScanWarning(kind=type(e).__name__, path=e.path or shown, message=str(e))
                logger.debug(f"Skipping file: {warning}")
                file_warnings.append((index, warning))
            except Exception as e:
                # Any other per-file failure costs that file only
                warning = ScanWarning(kind=type(e).__name__, path=shown, message=str(e) or repr(e))
                logger.opt(exception=e).debug(f"Worker error: {warning}")
                file_warnings.append((index, warning))
    except BaseException:
        # Abandon in-flight files; their batches are never published
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown(wait=True)

    batches.sort(key=lambda batch: batch[0])
    result.entries = [entry for _, batch in batches for entry in batch]
    result.warnings = list(walker.warnings) + [w for _, w in sorted(file_warnings, key=lambda w: w[0])]
    result.files_scanned = len(futures)
    result.walk_stats = dict(walker.stats)
    logger.debug(f"Walk finished: {result.walk_stats}")
    return result


def search_text(pattern: str | re.Pattern, root: str | Path = ".", *,
                config: dict[str, Any] | None = None, workers: int | None = None,
                names_only: bool = False, flags: int = 0) -> SearchResult:
    """Search documented function bindings under root.

    The pattern is compiled before anything is scanned, so an invalid pattern
    fails without touching the file system.

    Args:
        pattern: Regular expression (string or compiled), searched anywhere in
            the binding name or its documentation
        root: Directory to search
        config: Runtime configuration (loaded from root when omitted)
        workers: Worker threads
        names_only: Match binding names only
        flags: re flags used when compiling a string pattern

    Returns:
        SearchResult ordered by file discovery order, then line

    Raises:
        PatternCompileError: if the pattern is invalid
        RootAccessError: if root is missing or unreadable
    """
    compiled = pattern if isinstance(pattern, re.Pattern) else compile_pattern(pattern, flags)
    result = collect_entries(root, config=config, workers=workers)
    result.entries = filter_entries(compiled, result.entries, names_only)
    return result
