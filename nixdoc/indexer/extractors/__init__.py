"""Extractor framework for the indexer.

This module defines the BaseExtractor abstract class and the ExtractorRegistry
for dynamic discovery and registration of language-specific extractors.

Design:
- One extractor class per file (nix.py -> NixExtractor)
- Extractors register themselves via supported_extensions()
- No hardcoded mapping - pure discovery pattern
"""

import importlib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from nixdoc.utils.logging import logger


class BaseExtractor(ABC):
    """Abstract base class for all language extractors."""

    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """Return list of file suffixes this extractor supports.

        Returns:
            List of suffixes (e.g., ['.nix'])
        """
        pass

    @abstractmethod
    def extract(self, file_info: dict[str, Any], content: str) -> dict[str, Any]:
        """Extract all relevant information from a file.

        Args:
            file_info: File metadata dictionary; must carry 'path'
            content: Decoded file content

        Returns:
            Dictionary containing all extracted data
        """
        pass


class ExtractorRegistry:
    """Registry for dynamic discovery and management of extractors.

    Automatically discovers all extractor modules in the extractors/ directory
    and registers them by their supported file suffixes.
    """

    def __init__(self):
        """Initialize the registry and discover extractors."""
        self.extractors: dict[str, BaseExtractor] = {}
        self._discover()

    def _discover(self):
        """Auto-discover and register all extractor modules.

        Scans the extractors/ directory for Python files, imports them,
        and registers any BaseExtractor subclasses found.
        """
        extractor_dir = Path(__file__).parent

        for file_path in sorted(extractor_dir.glob("*.py")):
            if file_path.name.startswith("_"):
                continue

            module_name = file_path.stem

            try:
                module = importlib.import_module(
                    f".{module_name}", package="nixdoc.indexer.extractors"
                )
            except ImportError as e:
                logger.debug(f"Failed to load extractor {module_name}: {e}")
                continue

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, BaseExtractor)
                    and attr is not BaseExtractor
                ):
                    extractor = attr()

                    for ext in extractor.supported_extensions():
                        self.extractors[ext] = extractor

                    break

    def get_extractor(self, file_path: str | Path) -> BaseExtractor | None:
        """Get the appropriate extractor for a file.

        Suffixes are matched against the end of the file name, so multi-part
        suffixes like '.nix.in' work too. The longest matching suffix wins.

        Args:
            file_path: File path

        Returns:
            Extractor instance or None if not supported
        """
        name = Path(file_path).name
        for ext in sorted(self.extractors, key=len, reverse=True):
            if name.endswith(ext):
                return self.extractors[ext]
        return None

    def supported_extensions(self) -> list[str]:
        """Get list of all supported file suffixes.

        Returns:
            List of supported suffixes
        """
        return list(self.extractors.keys())
