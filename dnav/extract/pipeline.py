"""Decision-candidate extraction pipeline.

Runs cleaning, segmentation, filtering, scoring, titling and deduplication
independently for each source document, then ranks the combined result.
Repeated-line and personal-memo detection are scoped to one document so
documents never contaminate each other.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from dnav.config import ExtractionConfig, get_config
from dnav.extract.cleaner import clean_pages, detect_repeated_lines, split_lines
from dnav.extract.dedupe import dedupe_candidates, rank_candidates
from dnav.extract.models import (
    DecisionCandidate,
    DecisionSource,
    ExtractDebug,
    ExtractResult,
    PageText,
    Segment,
)
from dnav.extract.scoring import is_personal_memo, passes_filters, score_segment
from dnav.extract.segmenter import segment_pages
from dnav.extract.titles import rewrite_title
from dnav.utils.text import normalize_whitespace

logger = logging.getLogger(__name__)

UNKNOWN_SOURCE = "unknown"
PASTED_TEXT_SOURCE = "Pasted text"


@dataclass
class DocumentResult:
    """Per-document output before global ranking."""

    candidates: list[DecisionCandidate]
    raw_lines_count: int
    sentences_count: int
    candidates_before_dedupe: int


def candidate_id(evidence: str, source: DecisionSource) -> str:
    """Deterministic id from normalized evidence and its first anchor."""
    key = "|".join(
        [
            normalize_whitespace(evidence).lower(),
            source.file_name or "",
            str(source.page_number),
        ]
    )
    digest = hashlib.sha1(key.encode("utf-8")).hexdigest()[:12]
    return f"decision-{digest}"


def build_candidate(
    segment: Segment,
    score: int,
    settings: ExtractionConfig,
) -> DecisionCandidate:
    """Create a candidate with a single evidence anchor from a segment."""
    evidence = normalize_whitespace(segment.text)
    source = DecisionSource(
        page_number=segment.page_number,
        excerpt=segment.raw_excerpt,
        file_name=segment.file_name,
    )
    return DecisionCandidate(
        id=candidate_id(evidence, source),
        decision_title=rewrite_title(
            evidence,
            max_words=settings.title_max_words,
            max_chars=settings.title_max_chars,
        ),
        evidence=evidence,
        sources=[source],
        score=score,
        extract_confidence=min(1.0, max(0.0, score / 100)),
    )


def group_by_source(pages: Iterable[PageText | None]) -> dict[str, list[PageText]]:
    """Group pages by file name, keeping first-appearance order."""
    grouped: dict[str, list[PageText]] = {}
    for page in pages:
        if page is None:
            continue
        key = page.file_name or UNKNOWN_SOURCE
        grouped.setdefault(key, []).append(page)
    return grouped


def extract_from_document(
    pages: list[PageText],
    settings: ExtractionConfig,
) -> DocumentResult:
    """Run every stage up to deduplication for a single source document."""
    raw_lines_count = sum(len(split_lines(page.text)) for page in pages)
    memo = is_personal_memo(" ".join(page.text or "" for page in pages))
    repeated_lines = detect_repeated_lines(pages, share=settings.repeated_line_share)

    cleaned = clean_pages(pages, repeated_lines)
    segments = segment_pages(cleaned, repeated_lines, max_length=settings.max_segment_length)

    candidates: list[DecisionCandidate] = []
    for segment in segments:
        if not passes_filters(
            segment.text,
            is_personal_memo=memo,
            min_length=settings.min_segment_length,
            max_length=settings.max_segment_length,
        ):
            continue
        score = score_segment(
            segment.text,
            is_personal_memo=memo,
            is_repeated_line=segment.is_repeated_line,
        )
        candidates.append(build_candidate(segment, score, settings))

    deduped = dedupe_candidates(candidates, threshold=settings.duplicate_similarity)

    logger.debug(
        "Document %s: %d pages, %d repeated lines, %d segments, %d candidates (%d after dedupe)%s",
        pages[0].file_name if pages else UNKNOWN_SOURCE,
        len(pages),
        len(repeated_lines),
        len(segments),
        len(candidates),
        len(deduped),
        ", personal memo" if memo else "",
    )

    return DocumentResult(
        candidates=deduped,
        raw_lines_count=raw_lines_count,
        sentences_count=len(segments),
        candidates_before_dedupe=len(candidates),
    )


def select_candidates(
    candidates: list[DecisionCandidate],
    score_threshold: int,
    min_candidates: int,
) -> tuple[list[DecisionCandidate], int, bool]:
    """Apply the score threshold with a minimum-candidate floor.

    Returns:
        Ranked selection, count above threshold, and whether the floor
        fallback was used.
    """
    ranked = rank_candidates(candidates)
    confident = [candidate for candidate in ranked if candidate.score >= score_threshold]

    if len(confident) >= min_candidates:
        return confident, len(confident), False

    selection = ranked[: max(min_candidates, len(confident))]
    return selection, len(confident), len(selection) > len(confident)


def extract_candidates(
    pages: Iterable[PageText | None] | None,
    *,
    settings: ExtractionConfig | None = None,
) -> ExtractResult:
    """Extract ranked, deduplicated decision candidates from page text.

    Args:
        pages: Pages of one or more source documents, grouped by file name.
        settings: Thresholds; defaults to the loaded configuration.

    Returns:
        Candidates ranked by score descending then evidence length
        ascending, with debug counters. Empty input gives an empty result.
    """
    settings = settings or get_config().extraction
    pages = [page for page in (pages or []) if page is not None]
    if not any(page.text and page.text.strip() for page in pages):
        return ExtractResult()

    debug = ExtractDebug(pages_parsed=len(pages))
    collected: list[DecisionCandidate] = []

    for group in group_by_source(pages).values():
        result = extract_from_document(group, settings)
        debug.raw_lines_count += result.raw_lines_count
        debug.sentences_count += result.sentences_count
        debug.candidates_before_dedupe += result.candidates_before_dedupe
        collected.extend(result.candidates)

    debug.candidates_after_dedupe = len(collected)

    selected, confident_count, fallback_used = select_candidates(
        collected,
        score_threshold=settings.score_threshold,
        min_candidates=settings.min_candidates,
    )
    debug.candidates_after_filtering = confident_count
    debug.fallback_used = fallback_used

    if fallback_used:
        logger.info(
            "Only %d candidates scored >= %d; returning top %d instead",
            confident_count,
            settings.score_threshold,
            len(selected),
        )

    return ExtractResult(candidates=selected, debug=debug)


def extract_candidates_from_text(
    text: str | None,
    file_name: str = PASTED_TEXT_SOURCE,
    *,
    settings: ExtractionConfig | None = None,
) -> ExtractResult:
    """Extract candidates from a single pasted document treated as page 1."""
    if not text or not text.strip():
        return ExtractResult()
    page = PageText(page_number=1, text=text, file_name=file_name)
    return extract_candidates([page], settings=settings)
