"""Ingest module for loading document pages."""

from dnav.ingest.base import PageLoader
from dnav.ingest.registry import get_loader, load_pages, register_loader

__all__ = [
    "PageLoader",
    "get_loader",
    "load_pages",
    "register_loader",
]
