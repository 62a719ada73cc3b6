"""Sentence-level segmentation of cleaned page lines."""

from __future__ import annotations

import re
from collections.abc import Iterable

from dnav.config import MAX_SEGMENT_LENGTH
from dnav.extract.models import CleanedPage, Segment
from dnav.utils.text import normalize_whitespace

# Sentence and clause boundaries. A period between two digits ("1.5") is not
# a boundary.
BOUNDARY_PATTERN = re.compile(
    r"(?:(?<!\d)[.!?]|[.!?](?!\d)|[;:])+"
    r"|\s*[•·▪]\s*"
    r"|\s+[—–-]\s+"
    r"|—"
)

# Commas outside parentheses
COMMA_PATTERN = re.compile(r",(?![^()]*\))")

_EDGE_CHARS = " \t\"'“”‘’()[]-–—•*.,;:!?"


def split_sentences(line: str) -> list[str]:
    """Split a line into raw pieces, each keeping its trailing delimiter."""
    pieces: list[str] = []
    start = 0
    for match in BOUNDARY_PATTERN.finditer(line):
        piece = line[start : match.end()].strip()
        if piece:
            pieces.append(piece)
        start = match.end()
    tail = line[start:].strip()
    if tail:
        pieces.append(tail)
    return pieces


def split_long_piece(piece: str, max_length: int = MAX_SEGMENT_LENGTH) -> list[str]:
    """Split an over-long piece at commas that are not inside parentheses."""
    if len(piece) <= max_length:
        return [piece]
    parts = [part.strip() for part in COMMA_PATTERN.split(piece) if part.strip()]
    return parts if len(parts) > 1 else [piece]


def clean_segment_text(piece: str) -> str:
    """Normalize a raw piece into segment text without edge punctuation."""
    return normalize_whitespace(piece).strip(_EDGE_CHARS)


def segment_pages(
    cleaned_pages: Iterable[CleanedPage] | None,
    repeated_lines: set[str] | frozenset[str] | None = None,
    max_length: int = MAX_SEGMENT_LENGTH,
) -> list[Segment]:
    """Split cleaned lines into segments with provenance.

    Segments are not deduplicated here; duplicates are merged after scoring
    so every evidence anchor is still available.

    Args:
        cleaned_pages: Output of :func:`dnav.extract.cleaner.clean_pages`.
        repeated_lines: Repeated-line set of the same document.
        max_length: Pieces longer than this are split at commas.

    Returns:
        Segments in page and line order.
    """
    repeated = repeated_lines or frozenset()
    segments: list[Segment] = []

    for page in cleaned_pages or []:
        for line in page.lines:
            is_repeated = line.lower() in repeated
            for piece in split_sentences(line):
                for chunk in split_long_piece(piece, max_length):
                    text = clean_segment_text(chunk)
                    if not text:
                        continue
                    segments.append(
                        Segment(
                            text=text,
                            raw_excerpt=chunk,
                            page_number=page.page_number,
                            file_name=page.file_name,
                            is_repeated_line=is_repeated,
                        )
                    )

    return segments
