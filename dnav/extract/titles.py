"""Short decision titles derived from segment text."""

from __future__ import annotations

import re

from dnav.config import TITLE_MAX_CHARS, TITLE_MAX_WORDS
from dnav.utils.text import normalize_whitespace

ELLIPSIS = "…"

# Tried in order; the first match with a non-empty clause wins
CLAUSE_CUES = [
    re.compile(r"\bas\s+we\s+(?:are\s+|were\s+)?([^.,;]+)", re.IGNORECASE),
    re.compile(r"\bwill\s+([^.,;]+)", re.IGNORECASE),
    re.compile(r"\bscheduled\s+to\s+([^.,;]+)", re.IGNORECASE),
    re.compile(r"\b(?:plan|expect|aim|target)s?\s+to\s+([^.,;]+)", re.IGNORECASE),
]

LEADING_WE = re.compile(r"^we\s+", re.IGNORECASE)
CLAUSE_BOUNDARY = re.compile(r"[.;:–—]")
TRAILING_PUNCTUATION = re.compile(r"[\s.,;:!?\-–—]+$")


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def extract_clause(text: str) -> str:
    """Pick the highest-signal clause of a segment."""
    for pattern in CLAUSE_CUES:
        match = pattern.search(text)
        if match:
            clause = match.group(1).strip()
            if clause:
                return clause

    if LEADING_WE.match(text):
        stripped = LEADING_WE.sub("", text).strip()
        if stripped:
            return stripped

    for clause in CLAUSE_BOUNDARY.split(text):
        if clause.strip():
            return clause.strip()
    return text


def truncate_words(value: str, max_words: int, max_chars: int) -> str:
    """Cut at a word boundary, appending an ellipsis when anything was cut."""
    words = value.split()
    if len(words) <= max_words and len(value) <= max_chars:
        return value

    kept: list[str] = []
    length = 0
    for word in words[:max_words]:
        extra = len(word) + (1 if kept else 0)
        if length + extra > max_chars:
            break
        kept.append(word)
        length += extra

    if not kept:
        # A single word longer than the limit
        kept = [words[0][:max_chars]]

    shortened = TRAILING_PUNCTUATION.sub("", " ".join(kept))
    return f"{shortened}{ELLIPSIS}"


def rewrite_title(
    text: str | None,
    *,
    max_words: int = TITLE_MAX_WORDS,
    max_chars: int = TITLE_MAX_CHARS,
) -> str:
    """Derive a short, human-readable decision title.

    Examples:
        >>> rewrite_title("We will begin production in Q2 2025.")
        'Begin production in Q2 2025'
        >>> rewrite_title("As we are expanding capacity in Texas, costs rise")
        'Expanding capacity in Texas'
    """
    normalized = normalize_whitespace(text)
    if not normalized:
        return ""

    clause = extract_clause(normalized)
    title = TRAILING_PUNCTUATION.sub("", clause)
    title = truncate_words(title, max_words, max_chars)
    return _capitalize(title)
