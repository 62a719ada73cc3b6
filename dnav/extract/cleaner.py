"""Page cleaning and repeated-line detection.

Removes the parts of extracted page text that never carry a commitment:
page numbers, copyright footers, running headers and footers repeated across
pages, disclaimer boilerplate, and table rows. A line that looks like noise
but carries both a commitment verb and a timeline cue is kept, since
financial tables sometimes hold the only copy of a real commitment.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from collections.abc import Iterable

from dnav.config import REPEATED_LINE_SHARE
from dnav.extract.models import CleanedPage, PageText
from dnav.extract.patterns import (
    COLUMN_SEPARATOR_PATTERN,
    COPYRIGHT_PATTERN,
    CURRENCY_PATTERN,
    NUMBER_TOKEN_PATTERN,
    PAGE_NUMBER_PATTERN,
    SEPARATOR_PATTERN,
    STOP_PATTERN,
    has_commitment_verb,
    has_timeline_cue,
    is_hedged,
)
from dnav.utils.text import normalize_whitespace

# Table heuristics
MAX_DIGIT_RATIO = 0.22
MAX_NUMBER_TOKENS = 5
MAX_CURRENCY_MARKS = 2
MAX_COLUMN_SEPARATORS = 3
MAX_SEPARATOR_HITS = 5
SHORT_TOKEN_MIN_COUNT = 10
SHORT_TOKEN_MAX_AVG_LENGTH = 3

_LINE_BREAK = re.compile(r"[\r\n]+")


def split_lines(text: str | None) -> list[str]:
    """Split raw page text into non-empty, stripped lines."""
    if not text:
        return []
    return [line.strip() for line in _LINE_BREAK.split(text) if line.strip()]


def digit_ratio(text: str) -> float:
    """Share of characters that are digits."""
    if not text:
        return 0.0
    digits = sum(1 for char in text if char.isdigit())
    return digits / len(text)


def is_table_like(text: str) -> bool:
    """Detect table rows and numeric column dumps.

    Pass the line before whitespace normalization so runs of spaces between
    columns still count as separators.
    """
    trimmed = text.strip() if text else ""
    if not trimmed:
        return True

    tokens = trimmed.split()
    avg_token_length = sum(len(token) for token in tokens) / (len(tokens) or 1)
    too_many_short_tokens = (
        len(tokens) >= SHORT_TOKEN_MIN_COUNT and avg_token_length <= SHORT_TOKEN_MAX_AVG_LENGTH
    )

    return (
        digit_ratio(trimmed) > MAX_DIGIT_RATIO
        or len(NUMBER_TOKEN_PATTERN.findall(trimmed)) >= MAX_NUMBER_TOKENS
        or len(CURRENCY_PATTERN.findall(trimmed)) >= MAX_CURRENCY_MARKS
        or len(COLUMN_SEPARATOR_PATTERN.findall(trimmed)) >= MAX_COLUMN_SEPARATORS
        or len(SEPARATOR_PATTERN.findall(trimmed)) >= MAX_SEPARATOR_HITS
        or too_many_short_tokens
    )


def is_rescued(text: str) -> bool:
    """A commitment verb plus a timeline cue outweighs noise signals."""
    return has_commitment_verb(text) and has_timeline_cue(text)


def is_page_number_line(text: str) -> bool:
    return bool(PAGE_NUMBER_PATTERN.match(text))


def is_header_footer(text: str) -> bool:
    """Page numbers and copyright footers."""
    return is_page_number_line(text) or bool(COPYRIGHT_PATTERN.search(text))


def is_boilerplate_line(text: str) -> bool:
    """Disclaimer or hedged language without a commitment verb.

    Hedged-but-committed language ("we will, subject to approval, ...") is
    kept.
    """
    if not (STOP_PATTERN.search(text) or is_hedged(text)):
        return False
    return not has_commitment_verb(text)


def detect_repeated_lines(
    pages: Iterable[PageText] | None,
    share: float = REPEATED_LINE_SHARE,
) -> set[str]:
    """Find lines that recur across a large share of a document's pages.

    Each line is counted once per page, so a line repeated within one page
    does not count as a header.

    Args:
        pages: Pages of a single source document.
        share: Fraction of pages a line must appear on.

    Returns:
        Normalized, lower-cased repeated lines.
    """
    pages = list(pages or [])
    if len(pages) < 2:
        return set()

    page_counts: Counter[str] = Counter()
    for page in pages:
        seen = {normalize_whitespace(line).lower() for line in split_lines(page.text)}
        page_counts.update(seen)

    threshold = max(2, math.ceil(share * len(pages)))
    return {line for line, count in page_counts.items() if count >= threshold}


def clean_line(raw_line: str, repeated_lines: set[str] | frozenset[str]) -> str | None:
    """Clean a single raw line.

    Returns:
        The normalized line, or None when it should be dropped.
    """
    line = normalize_whitespace(raw_line)
    if not line:
        return None
    if is_header_footer(line):
        return None
    if line.lower() in repeated_lines and not is_rescued(line):
        return None
    if is_boilerplate_line(line):
        return None
    if is_table_like(raw_line) and not is_rescued(line):
        return None
    return line


def clean_pages(
    pages: Iterable[PageText] | None,
    repeated_lines: set[str] | frozenset[str] | None = None,
) -> list[CleanedPage]:
    """Strip boilerplate and noise from each page.

    Args:
        pages: Raw pages, usually of one source document.
        repeated_lines: Output of :func:`detect_repeated_lines` for the same
            document. Repeated-line removal is skipped when omitted.

    Returns:
        One cleaned page per input page, in input order.
    """
    repeated = repeated_lines or frozenset()
    cleaned: list[CleanedPage] = []

    for page in pages or []:
        lines: list[str] = []
        for raw_line in split_lines(page.text):
            line = clean_line(raw_line, repeated)
            if line is not None:
                lines.append(line)
        cleaned.append(
            CleanedPage(
                page_number=page.page_number,
                lines=lines,
                file_name=page.file_name,
            )
        )

    return cleaned
