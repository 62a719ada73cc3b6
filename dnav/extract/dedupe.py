"""Near-duplicate merging of decision candidates.

Candidates are processed greedily in rank order. Each one is compared only
against the survivors accepted so far; a duplicate folds its evidence
anchors into the survivor and is discarded. Because survivors are visited
in rank order they always win their merges, so a second pass over the
output finds nothing left to merge.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace

from dnav.config import DUPLICATE_SIMILARITY_THRESHOLD
from dnav.extract.models import DecisionCandidate, DecisionSource
from dnav.utils.text import normalize_for_dedup, token_set


def rank_key(candidate: DecisionCandidate) -> tuple[int, int]:
    """Sort key: score descending, then shorter evidence first."""
    return (-candidate.score, len(candidate.evidence))


def rank_candidates(candidates: Iterable[DecisionCandidate]) -> list[DecisionCandidate]:
    """Stable sort by score descending, evidence length ascending."""
    return sorted(candidates, key=rank_key)


def jaccard_similarity(a: str, b: str) -> float:
    """Token-set Jaccard similarity of two strings after normalization."""
    tokens_a = token_set(a)
    tokens_b = token_set(b)
    union = tokens_a | tokens_b
    if not union:
        return 0.0
    return len(tokens_a & tokens_b) / len(union)


def is_duplicate(a: str, b: str, threshold: float = DUPLICATE_SIMILARITY_THRESHOLD) -> bool:
    """Check whether two evidence strings describe the same commitment.

    Duplicates either share enough tokens or one normalized text contains
    the other.
    """
    norm_a = normalize_for_dedup(a)
    norm_b = normalize_for_dedup(b)
    if not norm_a or not norm_b:
        return False
    if norm_a in norm_b or norm_b in norm_a:
        return True
    return jaccard_similarity(norm_a, norm_b) >= threshold


def merge_sources(
    existing: Sequence[DecisionSource],
    incoming: Iterable[DecisionSource],
) -> list[DecisionSource]:
    """Append incoming anchors not already present (file, page and excerpt)."""
    merged = list(existing)
    for source in incoming:
        if source not in merged:
            merged.append(source)
    return merged


def dedupe_candidates(
    candidates: Iterable[DecisionCandidate] | None,
    *,
    threshold: float = DUPLICATE_SIMILARITY_THRESHOLD,
) -> list[DecisionCandidate]:
    """Merge near-duplicate candidates, keeping the best representative.

    Args:
        candidates: Candidates in any order. They are not modified.
        threshold: Minimum token Jaccard similarity for a duplicate.

    Returns:
        Survivors ranked by score descending, evidence length ascending,
        each carrying the sources of every candidate merged into it.
    """
    survivors: list[DecisionCandidate] = []

    for candidate in rank_candidates(candidates or []):
        for index, existing in enumerate(survivors):
            if not is_duplicate(existing.evidence, candidate.evidence, threshold):
                continue
            winner = existing if existing.score >= candidate.score else candidate
            survivors[index] = replace(
                winner,
                sources=merge_sources(existing.sources, candidate.sources),
            )
            break
        else:
            survivors.append(replace(candidate, sources=list(candidate.sources)))

    return survivors
