"""Loader registry for document types."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dnav.extract.models import PageText
    from dnav.ingest.base import PageLoader

# Registry of loaders by extension
_loaders: dict[str, PageLoader] = {}


def register_loader(loader: PageLoader) -> None:
    """Register a loader for its extensions.

    Args:
        loader: Loader instance to register.
    """
    for ext in loader.extensions:
        _loaders[ext.lower()] = loader


def get_loader(path: Path) -> PageLoader | None:
    """Get a loader for the given file path.

    Args:
        path: Path to the file.

    Returns:
        Loader instance or None if no loader found.
    """
    loader = _loaders.get(path.suffix.lower())
    if loader is not None and loader.can_load(path):
        return loader
    for candidate in set(_loaders.values()):
        if candidate.can_load(path):
            return candidate
    return None


def load_pages(paths: Iterable[Path]) -> list[PageText]:
    """Load pages from several files, in path order.

    Raises:
        ValueError: If a file type has no registered loader.
    """
    pages: list[PageText] = []
    for path in paths:
        loader = get_loader(path)
        if loader is None:
            raise ValueError(f"Unsupported file type: {path}")
        pages.extend(loader.load(path))
    return pages


def init_loaders() -> None:
    """Initialize and register all built-in loaders."""
    from dnav.ingest.pdf import PdfPageLoader
    from dnav.ingest.text import TextPageLoader

    register_loader(PdfPageLoader())
    register_loader(TextPageLoader())


# Auto-initialize on import
init_loaders()
