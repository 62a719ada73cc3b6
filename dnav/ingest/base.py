"""Base classes for page loading."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from dnav.extract.models import PageText


class PageLoader(ABC):
    """Base class for page loaders.

    A loader turns one file into per-page text records. Loaders are the only
    place where files are read; the extraction pipeline never performs I/O.
    """

    # File extensions this loader handles
    extensions: list[str] = []

    def can_load(self, path: Path) -> bool:
        """Check if this loader can handle the given file.

        Args:
            path: Path to check.

        Returns:
            True if this loader can handle the file.
        """
        return path.suffix.lower() in self.extensions

    @abstractmethod
    def load(self, path: Path) -> list[PageText]:
        """Load a file as a list of pages.

        Args:
            path: Path to the document.

        Returns:
            Pages in document order, numbered from 1.
        """
        pass
