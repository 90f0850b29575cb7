"""Core functionality for file system operations.

This module contains the FileWalker class for deterministic, cycle-safe
directory traversal.
"""

import os
import stat
from collections.abc import Iterable, Iterator
from pathlib import Path

from nixdoc.models import ScanWarning
from nixdoc.utils.logging import logger

from .config import NIX_EXTENSIONS, SKIP_DIRS
from .exceptions import DirectoryAccessError, NixdocError, RootAccessError


def display_path(path: str | Path) -> str:
    """Path as shown in reports: the walk path with `.`/`..` segments folded."""
    return os.path.normpath(str(path))


class FileWalker:
    """Handles directory walking with suffix filtering and cycle detection.

    Iterating a walker starts a fresh traversal, so the same instance can be
    walked again. Within one directory, entries are visited in lexicographic
    name order and subdirectories are descended into where they sort, which
    makes the overall order lexicographic by path component.
    """

    def __init__(self, root_path: str | Path, extensions: Iterable[str] = NIX_EXTENSIONS,
                 follow_symlinks: bool = True, skip_dirs: Iterable[str] | None = None):
        """Initialize the file walker.

        Args:
            root_path: Root directory to walk
            extensions: File name suffixes to yield
            follow_symlinks: Whether to follow symbolic links to directories and files
            skip_dirs: Directory names never descended into
        """
        self.root_path = Path(root_path)
        self.extensions = tuple(extensions)
        self.follow_symlinks = follow_symlinks
        self.skip_dirs = frozenset(SKIP_DIRS if skip_dirs is None else skip_dirs)

        self.warnings: list[ScanWarning] = []
        self.stats = {
            "directories": 0,
            "files": 0,
            "skipped_dirs": 0,
            "revisited_dirs": 0,
            "unreadable_dirs": 0,
        }

    def check_root(self) -> None:
        """Fail fast when the root cannot be walked at all.

        Raises:
            RootAccessError: if the root is missing, not a directory, or unreadable
        """
        root = str(self.root_path)
        try:
            mode = os.stat(root).st_mode
        except OSError as e:
            raise RootAccessError(f"cannot access root directory: {e.strerror or e}", root) from e
        if not stat.S_ISDIR(mode):
            raise RootAccessError("root is not a directory", root)
        if not os.access(root, os.R_OK | os.X_OK):
            raise RootAccessError("root directory is not readable", root)

    def _warn(self, error: NixdocError) -> None:
        warning = ScanWarning(kind=type(error).__name__, path=error.path or "", message=str(error))
        logger.debug(f"Skipping directory: {warning}")
        self.warnings.append(warning)

    def _list_directory(self, directory: Path, visited: set[tuple[int, int]],
                        is_root: bool = False) -> list[os.DirEntry] | None:
        """Return sorted entries of a directory not yet visited, or None to skip it."""
        try:
            info = os.stat(directory)
        except OSError as e:
            if is_root:
                raise RootAccessError(f"cannot access root directory: {e.strerror or e}",
                                      str(directory)) from e
            self.stats["unreadable_dirs"] += 1
            self._warn(DirectoryAccessError(f"cannot access directory: {e.strerror or e}",
                                            display_path(directory)))
            return None

        identity = (info.st_dev, info.st_ino)
        if identity in visited:
            self.stats["revisited_dirs"] += 1
            logger.debug(f"Already visited {directory}, not descending again")
            return None
        visited.add(identity)

        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError as e:
            if is_root:
                raise RootAccessError(f"cannot read root directory: {e.strerror or e}",
                                      str(directory)) from e
            self.stats["unreadable_dirs"] += 1
            self._warn(DirectoryAccessError(f"cannot read directory: {e.strerror or e}",
                                            display_path(directory)))
            return None

        self.stats["directories"] += 1
        return entries

    def _classify(self, entry: os.DirEntry) -> str | None:
        """Return 'dir', 'file', or None for entries that are not walked."""
        try:
            if entry.is_dir(follow_symlinks=self.follow_symlinks):
                if entry.name in self.skip_dirs:
                    self.stats["skipped_dirs"] += 1
                    return None
                return "dir"
            if entry.name.endswith(self.extensions) and entry.is_file(follow_symlinks=self.follow_symlinks):
                return "file"
        except OSError:
            # Dangling symlinks and entries removed mid-walk
            return None
        return None

    def walk(self) -> Iterator[Path]:
        """Yield matching file paths, depth-first in lexicographic order.

        Raises:
            RootAccessError: if the root directory itself cannot be listed
        """
        self.warnings = []
        for key in self.stats:
            self.stats[key] = 0

        visited: set[tuple[int, int]] = set()
        root_entries = self._list_directory(self.root_path, visited, is_root=True)
        if root_entries is None:
            return

        stack = [iter(root_entries)]
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            kind = self._classify(entry)
            if kind == "dir":
                children = self._list_directory(Path(entry.path), visited)
                if children:
                    stack.append(iter(children))
            elif kind == "file":
                self.stats["files"] += 1
                yield Path(entry.path)

    def __iter__(self) -> Iterator[Path]:
        return self.walk()
