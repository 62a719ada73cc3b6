"""Decision-candidate extraction from document page text."""

from dnav.extract.models import (
    CleanedPage,
    DecisionCandidate,
    DecisionSource,
    ExtractDebug,
    ExtractResult,
    PageText,
    Segment,
)
from dnav.extract.pipeline import extract_candidates, extract_candidates_from_text

__all__ = [
    "CleanedPage",
    "DecisionCandidate",
    "DecisionSource",
    "ExtractDebug",
    "ExtractResult",
    "PageText",
    "Segment",
    "extract_candidates",
    "extract_candidates_from_text",
]
