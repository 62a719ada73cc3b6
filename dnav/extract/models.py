"""Records passed between extraction stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PageText:
    """Raw text of one page, as handed over by a page loader."""

    page_number: int
    text: str | None
    file_name: str | None = None


@dataclass
class CleanedPage:
    """A page after boilerplate, header/footer and table removal."""

    page_number: int
    lines: list[str]
    file_name: str | None = None


@dataclass(frozen=True)
class Segment:
    """A sentence-level unit of analysis with its provenance."""

    text: str
    raw_excerpt: str
    page_number: int
    file_name: str | None = None
    is_repeated_line: bool = False


@dataclass(frozen=True)
class DecisionSource:
    """Evidence anchor: where a candidate's text was found."""

    page_number: int
    excerpt: str
    file_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "fileName": self.file_name,
            "pageNumber": self.page_number,
            "excerpt": self.excerpt,
        }


@dataclass
class DecisionCandidate:
    """A forward-looking commitment statement proposed for human review."""

    id: str
    decision_title: str
    evidence: str
    sources: list[DecisionSource]
    score: int
    extract_confidence: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "decisionTitle": self.decision_title,
            "evidence": self.evidence,
            "sources": [source.to_dict() for source in self.sources],
            "score": self.score,
            "extractConfidence": self.extract_confidence,
        }


@dataclass
class ExtractDebug:
    """Diagnostic counters for one extraction run."""

    pages_parsed: int = 0
    raw_lines_count: int = 0
    sentences_count: int = 0
    candidates_before_dedupe: int = 0
    candidates_after_dedupe: int = 0
    candidates_after_filtering: int = 0
    # True when too few candidates reached the score threshold and the
    # top-scoring remainder was returned instead
    fallback_used: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "pagesParsed": self.pages_parsed,
            "rawLinesCount": self.raw_lines_count,
            "sentencesCount": self.sentences_count,
            "candidatesBeforeDedupe": self.candidates_before_dedupe,
            "candidatesAfterDedupe": self.candidates_after_dedupe,
            "candidatesAfterFiltering": self.candidates_after_filtering,
            "fallbackUsed": self.fallback_used,
        }


@dataclass
class ExtractResult:
    """Ranked candidates plus the counters that produced them."""

    candidates: list[DecisionCandidate] = field(default_factory=list)
    debug: ExtractDebug = field(default_factory=ExtractDebug)

    def to_dict(self) -> dict[str, Any]:
        return {
            "candidates": [candidate.to_dict() for candidate in self.candidates],
            "debug": self.debug.as_dict(),
        }
