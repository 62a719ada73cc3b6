"""Cue lists for decision-candidate extraction.

This module holds the lexical cues that identify forward-looking commitments
in document text, and the cues that identify noise (boilerplate, tables,
investor-relations filler). The lists are plain data; the matching logic
lives in :mod:`dnav.extract.cleaner` and :mod:`dnav.extract.scoring`.

Phrases are matched case-insensitively on word boundaries, so "will" does
not fire inside "willing" and "plan" does not fire inside "plant".
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Pattern

# Verbs and verb phrases signalling a forward intention
COMMITMENT_VERBS = [
    "will",
    "plan to",
    "plans to",
    "expect to",
    "expects to",
    "aim to",
    "aims to",
    "intend to",
    "intends to",
    "target",
    "prepare to",
    "commit to",
    "discontinue",
    "launch",
    "ramp",
    "begin",
    "start",
    "expand",
    "build",
    "deploy",
    "deliver",
    "commission",
    "schedule",
    "scheduled",
    "roll out",
    "rollout",
    "introduce",
    "scale",
    "invest",
    "allocate",
    "approve",
    "commence",
    "transition",
    "reduce",
    "increase",
    "continue",
    "on track to",
    "remain on track to",
]

# Weaker plan/target language accepted in place of a commitment verb
PLAN_LANGUAGE = [
    "plan",
    "plans",
    "planned",
    "planning",
    "target",
    "targets",
    "targeted",
    "targeting",
    "on track",
]

# Verbs that turn a capability statement into a rollout
ROLLOUT_CUES = [
    "launch",
    "rollout",
    "roll out",
    "deploy",
    "begin",
    "start",
    "ramp",
    "expand",
    "scale",
]

TIMELINE_PATTERNS = [
    r"\b20\d{2}\b",
    r"\bq[1-4]\b",
    r"\bh[12]\b",
    r"\bfy\s?\d{2,4}\b",
    r"\bby\s+(?:the\s+)?end\s+of\b",
    r"\b(?:this|next|later\s+this|early\s+next|the\s+coming)\s+(?:year|quarter|month)\b",
    r"\b(?:first|second)\s+half\b",
    r"\byear[-\s]end\b",
    r"\bnear[-\s]term\b",
    r"\bwithin\s+(?:the\s+next\s+)?\w+\s+(?:days|weeks|months|quarters|years)\b",
    r"\bover\s+the\s+(?:next|coming)\s+\w+",
    r"\b(?:by|in|from|starting|until)\s+(?:early\s+|mid[-\s]|late\s+)?"
    r"(?:january|february|march|april|may|june|july|august|september|october|november|december)\b",
]

# Dependencies and constraints that make a commitment trackable
CONSTRAINT_CUES = [
    "pending",
    "subject to",
    "dependent",
    "depending on",
    "contingent",
    "regulatory",
    "constraint",
    "constrained",
    "capacity",
    "cost",
    "costs",
    "budget",
    "risk",
    "approval",
    "permit",
]

# Nouns that name something an organisation builds, runs or sizes
DOMAIN_NOUNS = [
    "production",
    "ramp",
    "factory",
    "gigafactory",
    "megafactory",
    "plant",
    "production line",
    "production lines",
    "capacity",
    "construction",
    "deployment",
    "commissioning",
    "manufacturing",
    "facility",
    "infrastructure",
    "capex",
    "fleet",
    "supply chain",
    "headcount",
    "market",
    "markets",
]

# Line-level stop phrases dropped by the cleaner unless a commitment verb is present
STOP_PHRASES = [
    "forward-looking",
    "safe harbor",
    "gaap",
    "non-gaap",
    "management believes",
    "conference call",
    "webcast",
    "unaudited",
    "reconciliation",
    "risk factors",
]

# Segment-level boilerplate rejected outright by the filter
BOILERPLATE_PHRASES = [
    "forward-looking",
    "safe harbor",
    "webcast",
    "replay",
    "gaap",
    "non-gaap",
    "conference call",
    "will be available for replay",
    "believes that it is useful to supplement",
    "could cause actual results to differ",
    "in millions",
]

# Hedging modals. Case-sensitive so the month "May" is not read as a modal.
HEDGING_PATTERN = re.compile(r"\b(?:may|might|could|Might|Could|subject\s+to)\b")

DESCRIPTIVE_ONLY = [
    "includes",
    "consists of",
    "is useful to",
    "provides information",
    "provides an overview",
    "is designed to",
    "is intended to",
]

CAPABILITY_PHRASES = [
    "can now",
    "is able to",
    "are able to",
    "able to",
]

# Personal-memo noise
TRIVIAL_ACTIONS = [
    "coffee",
    "gym",
    "walk",
    "walked",
    "email",
    "emails",
    "meeting",
    "meetings",
    "call",
    "calls",
    "lunch",
    "dinner",
    "supplies",
    "travel",
    "trip",
    "groceries",
    "laundry",
]

RISK_ENUMERATION = [
    "risks include",
    "risks and uncertainties",
    "uncertainties include",
    "factors that could",
    "could cause",
    "risk factors",
    "including but not limited to",
    "among other things",
    "adversely affect",
]

INVESTOR_FLUFF = [
    "pleased to",
    "excited to",
    "proud to",
    "delighted",
    "grateful",
    "thank you",
    "record quarter",
    "investor relations",
    "shareholder letter",
    "incredible",
    "exceptional",
]

# Capitalised words that are not product or facility names
GENERIC_CAPITALIZED = {
    "a",
    "an",
    "and",
    "as",
    "at",
    "board",
    "ceo",
    "cfo",
    "company",
    "during",
    "for",
    "gaap",
    "i",
    "in",
    "it",
    "management",
    "our",
    "the",
    "this",
    "these",
    "those",
    "to",
    "us",
    "we",
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
}

PERIOD_TOKEN_PATTERN = re.compile(r"^(?:q[1-4]|h[12]|fy\d{0,4}|\d+)$", re.IGNORECASE)

PAGE_NUMBER_PATTERN = re.compile(
    r"^\s*(?:page\s*)?\d+(?:\s*(?:of|/)\s*\d+)?\s*$",
    re.IGNORECASE,
)
COPYRIGHT_PATTERN = re.compile(r"©|\bcopyright\b|\ball\s+rights\s+reserved\b", re.IGNORECASE)

NUMBER_TOKEN_PATTERN = re.compile(r"\d+(?:[.,]\d+)?")
CURRENCY_PATTERN = re.compile(r"[$€£¥]|\(\d[\d,.\s]*\)|%")
COLUMN_SEPARATOR_PATTERN = re.compile(r"\s{2,}|\t|\|")
SEPARATOR_PATTERN = re.compile(r"[|/—–]")

FIRST_PERSON_PATTERN = re.compile(r"\bI\b")


def phrase_pattern(phrases: Iterable[str]) -> Pattern[str]:
    """Compile phrases into one case-insensitive, word-bounded alternation.

    Longer phrases are tried first so "remain on track to" wins over
    "on track to". Spaces inside a phrase match any whitespace run.
    """
    ordered = sorted(set(phrases), key=len, reverse=True)
    alternation = "|".join(re.escape(phrase).replace(r"\ ", r"\s+") for phrase in ordered)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


COMMITMENT_PATTERN = phrase_pattern(COMMITMENT_VERBS)
PLAN_PATTERN = phrase_pattern(PLAN_LANGUAGE)
ROLLOUT_PATTERN = phrase_pattern(ROLLOUT_CUES)
TIMELINE_PATTERN = re.compile("|".join(TIMELINE_PATTERNS), re.IGNORECASE)
CONSTRAINT_PATTERN = phrase_pattern(CONSTRAINT_CUES)
DOMAIN_PATTERN = phrase_pattern(DOMAIN_NOUNS)
STOP_PATTERN = phrase_pattern(STOP_PHRASES)
BOILERPLATE_PATTERN = phrase_pattern(BOILERPLATE_PHRASES)
DESCRIPTIVE_PATTERN = phrase_pattern(DESCRIPTIVE_ONLY)
CAPABILITY_PATTERN = phrase_pattern(CAPABILITY_PHRASES)
TRIVIAL_PATTERN = phrase_pattern(TRIVIAL_ACTIONS)
RISK_PATTERN = phrase_pattern(RISK_ENUMERATION)
FLUFF_PATTERN = phrase_pattern(INVESTOR_FLUFF)

# A commitment verb followed by at least 8 characters before a clause boundary
CLEAR_OBJECT_PATTERN = re.compile(
    COMMITMENT_PATTERN.pattern + r"\s+([^.;:]{8,})",
    re.IGNORECASE,
)


def has_commitment_verb(text: str) -> bool:
    """Check for a commitment verb such as "will" or "plan to"."""
    return bool(COMMITMENT_PATTERN.search(text))


def has_timeline_cue(text: str) -> bool:
    """Check for a bounded time horizon such as "Q2 2025" or "by end of"."""
    return bool(TIMELINE_PATTERN.search(text))


def has_clear_object(text: str) -> bool:
    """Check that a commitment verb is followed by object text."""
    return bool(CLEAR_OBJECT_PATTERN.search(text))


def is_hedged(text: str) -> bool:
    """Check for hedging modals ("may", "could", "subject to")."""
    return bool(HEDGING_PATTERN.search(text))
