"""Text utilities for D-NAV."""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w\s]")


def normalize_whitespace(value: str | None) -> str:
    """Collapse whitespace runs into single spaces and trim.

    Examples:
        >>> normalize_whitespace("  We  will\\tlaunch \\n ")
        'We will launch'
        >>> normalize_whitespace(None)
        ''
    """
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value).strip()


def normalize_for_dedup(value: str | None) -> str:
    """Lowercase, drop punctuation and collapse whitespace.

    Used to compare evidence text for near-duplicates.

    Examples:
        >>> normalize_for_dedup("We WILL launch, in Q2!")
        'we will launch in q2'
    """
    lowered = normalize_whitespace(value).lower()
    return normalize_whitespace(_NON_WORD.sub("", lowered))


def token_set(value: str | None) -> set[str]:
    """Distinct dedup-normalized tokens of a string."""
    normalized = normalize_for_dedup(value)
    return set(normalized.split()) if normalized else set()
