"""Candidate filtering and confidence scoring.

Both stages read the same cue profile (:class:`SegmentSignals`) so the
filter's hard rules and the scorer's weights never disagree about what a
segment contains. Scores are additive integers, typically between -60 and
+90; the assembler decides which scores are high enough to keep.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from dnav.config import MAX_SEGMENT_LENGTH, MIN_SEGMENT_LENGTH
from dnav.extract.cleaner import digit_ratio, is_table_like
from dnav.extract.patterns import (
    BOILERPLATE_PATTERN,
    CAPABILITY_PATTERN,
    CONSTRAINT_PATTERN,
    DESCRIPTIVE_PATTERN,
    DOMAIN_PATTERN,
    FIRST_PERSON_PATTERN,
    FLUFF_PATTERN,
    GENERIC_CAPITALIZED,
    PERIOD_TOKEN_PATTERN,
    PLAN_PATTERN,
    RISK_PATTERN,
    ROLLOUT_PATTERN,
    TRIVIAL_PATTERN,
    has_clear_object,
    has_commitment_verb,
    has_timeline_cue,
    is_hedged,
)
from dnav.utils.text import normalize_whitespace

MAX_SEGMENT_DIGIT_RATIO = 0.25

# Personal-memo detection
MEMO_MIN_FIRST_PERSON = 3
MEMO_FIRST_PERSON_RATIO = 0.03

# Score weights
COMMITMENT_WEIGHT = 30
TIMELINE_WEIGHT = 20
CONSTRAINT_WEIGHT = 15
CLEAR_OBJECT_WEIGHT = 10
DOMAIN_NOUN_WEIGHT = 10
PRODUCT_NAME_WEIGHT = 5
FULL_COMMITMENT_BONUS = 15
BOILERPLATE_PENALTY = 40
DIGIT_RATIO_PENALTY = 40
TABLE_PENALTY = 30
DESCRIPTIVE_PENALTY = 20
RISK_ENUMERATION_PENALTY = 15
INVESTOR_FLUFF_PENALTY = 15
REPEATED_LINE_PENALTY = 25
UNCONSTRAINED_MEMO_PENALTY = 10


@dataclass(frozen=True)
class SegmentSignals:
    """Lexical cues found in one segment."""

    length: int
    commitment_verb: bool
    plan_language: bool
    timeline: bool
    constraint: bool
    clear_object: bool
    domain_noun: bool
    product_name: bool
    boilerplate: bool
    digit_ratio: float
    table_like: bool
    descriptive_only: bool
    capability_only: bool
    hedged: bool
    trivial_action: bool
    risk_enumeration: bool
    investor_fluff: bool

    @property
    def rescued(self) -> bool:
        """Commitment and timeline together outweigh table noise."""
        return self.commitment_verb and self.timeline

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["rescued"] = self.rescued
        return data


def has_product_name(text: str) -> bool:
    """Look for a capitalized name after the first word.

    Sentence-initial words, pronouns, months and period tokens ("Q2",
    "FY25") do not count.
    """
    words = text.split()
    for word in words[1:]:
        token = word.strip("\"'“”‘’()[],.;:!?")
        if len(token) < 2 or not token[0].isupper():
            continue
        if token.lower() in GENERIC_CAPITALIZED or PERIOD_TOKEN_PATTERN.match(token):
            continue
        return True
    return False


def assess_segment(text: str | None) -> SegmentSignals:
    """Compute the cue profile of a segment.

    Args:
        text: Segment text; None is treated as empty.

    Returns:
        Signals for the filter and scorer.
    """
    normalized = normalize_whitespace(text)
    commitment = has_commitment_verb(normalized)

    return SegmentSignals(
        length=len(normalized),
        commitment_verb=commitment,
        plan_language=bool(PLAN_PATTERN.search(normalized)),
        timeline=has_timeline_cue(normalized),
        constraint=bool(CONSTRAINT_PATTERN.search(normalized)),
        clear_object=has_clear_object(normalized),
        domain_noun=bool(DOMAIN_PATTERN.search(normalized)),
        product_name=has_product_name(normalized),
        boilerplate=bool(BOILERPLATE_PATTERN.search(normalized)),
        digit_ratio=digit_ratio(normalized),
        table_like=bool(normalized) and is_table_like(normalized),
        descriptive_only=bool(DESCRIPTIVE_PATTERN.search(normalized)),
        capability_only=bool(CAPABILITY_PATTERN.search(normalized))
        and not ROLLOUT_PATTERN.search(normalized),
        hedged=is_hedged(normalized),
        trivial_action=bool(TRIVIAL_PATTERN.search(normalized)),
        risk_enumeration=bool(RISK_PATTERN.search(normalized)),
        investor_fluff=bool(FLUFF_PATTERN.search(normalized)),
    )


def passes_filters(
    text: str | None,
    *,
    is_personal_memo: bool = False,
    min_length: int = MIN_SEGMENT_LENGTH,
    max_length: int = MAX_SEGMENT_LENGTH,
) -> bool:
    """Apply the hard accept/reject rules to a segment.

    Args:
        text: Segment text.
        is_personal_memo: The source document reads as personal notes,
            which need a commitment verb and a constraint cue to qualify.
        min_length: Shortest acceptable segment.
        max_length: Longest acceptable segment.

    Returns:
        True when the segment can plausibly be a commitment statement.
    """
    signals = assess_segment(text)

    if signals.length < min_length or signals.length > max_length:
        return False
    if signals.digit_ratio > MAX_SEGMENT_DIGIT_RATIO or signals.table_like:
        return False
    if signals.boilerplate:
        return False
    if signals.descriptive_only or signals.capability_only:
        return False
    if signals.hedged and not signals.commitment_verb:
        return False
    if not signals.commitment_verb and not signals.plan_language:
        if not (signals.timeline and signals.clear_object):
            return False
    if not signals.clear_object:
        return False

    if is_personal_memo:
        if signals.trivial_action:
            return False
        if not (signals.commitment_verb and signals.constraint):
            return False

    return True


def score_signals(
    signals: SegmentSignals,
    *,
    is_personal_memo: bool = False,
    is_repeated_line: bool = False,
) -> int:
    """Turn a cue profile into an additive confidence score."""
    score = 0

    if signals.commitment_verb:
        score += COMMITMENT_WEIGHT
    if signals.timeline:
        score += TIMELINE_WEIGHT
    if signals.constraint:
        score += CONSTRAINT_WEIGHT
    if signals.clear_object:
        score += CLEAR_OBJECT_WEIGHT
    if signals.domain_noun:
        score += DOMAIN_NOUN_WEIGHT
    if signals.product_name:
        score += PRODUCT_NAME_WEIGHT
    if signals.commitment_verb and signals.timeline and signals.clear_object:
        score += FULL_COMMITMENT_BONUS

    if signals.boilerplate:
        score -= BOILERPLATE_PENALTY
    if signals.digit_ratio > MAX_SEGMENT_DIGIT_RATIO:
        score -= DIGIT_RATIO_PENALTY
    if signals.table_like and not signals.rescued:
        score -= TABLE_PENALTY
    if signals.descriptive_only:
        score -= DESCRIPTIVE_PENALTY
    if signals.risk_enumeration:
        score -= RISK_ENUMERATION_PENALTY
    if signals.investor_fluff:
        score -= INVESTOR_FLUFF_PENALTY
    if is_repeated_line:
        score -= REPEATED_LINE_PENALTY
    if is_personal_memo and not signals.constraint:
        score -= UNCONSTRAINED_MEMO_PENALTY

    return score


def score_segment(
    text: str | None,
    *,
    is_personal_memo: bool = False,
    is_repeated_line: bool = False,
) -> int:
    """Score a segment. Pure function of its arguments."""
    return score_signals(
        assess_segment(text),
        is_personal_memo=is_personal_memo,
        is_repeated_line=is_repeated_line,
    )


def is_personal_memo(text: str | None) -> bool:
    """Classify a whole document as personal notes by first-person density.

    A document counts as a memo with at least three standalone "I" tokens,
    or when "I" makes up more than 3% of its words.
    """
    if not text or not text.strip():
        return False
    matches = len(FIRST_PERSON_PATTERN.findall(text))
    words = len(text.split()) or 1
    return matches >= MEMO_MIN_FIRST_PERSON or matches / words > MEMO_FIRST_PERSON_RATIO
