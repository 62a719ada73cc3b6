"""Tests for near-duplicate merging."""

from dnav.extract.dedupe import (
    dedupe_candidates,
    is_duplicate,
    jaccard_similarity,
    merge_sources,
    rank_candidates,
)
from dnav.extract.models import DecisionCandidate, DecisionSource


def make_candidate(evidence, score=50, page=1, file_name="deck.pdf"):
    return DecisionCandidate(
        id=f"decision-{page}-{len(evidence)}",
        decision_title=evidence[:20],
        evidence=evidence,
        sources=[DecisionSource(page_number=page, excerpt=evidence, file_name=file_name)],
        score=score,
        extract_confidence=score / 100,
    )


class TestSimilarity:
    """Tests for duplicate detection."""

    def test_jaccard(self):
        assert jaccard_similarity("a b c d", "a b c e") == 3 / 5

    def test_jaccard_empty(self):
        assert jaccard_similarity("", "") == 0.0

    def test_punctuation_and_case_ignored(self):
        assert is_duplicate("We will open the Austin plant.", "we WILL open the austin plant")

    def test_containment(self):
        assert is_duplicate(
            "We will open the Austin plant in 2025",
            "We will open the Austin plant in 2025 pending final permits from the county",
        )

    def test_distinct(self):
        assert not is_duplicate(
            "We will open the Austin plant in 2025",
            "We plan to expand Megafactory Shanghai output by end of 2025",
        )

    def test_empty_never_duplicate(self):
        assert not is_duplicate("", "We will open the Austin plant")
        assert not is_duplicate("...", "!!!")


class TestMergeSources:
    """Tests for source merging."""

    def test_appends_new_sources(self):
        first = DecisionSource(page_number=1, excerpt="A.")
        second = DecisionSource(page_number=2, excerpt="A!")
        assert merge_sources([first], [second]) == [first, second]

    def test_skips_identical_sources(self):
        first = DecisionSource(page_number=1, excerpt="A.")
        assert merge_sources([first], [DecisionSource(page_number=1, excerpt="A.")]) == [first]


class TestRankCandidates:
    """Tests for candidate ordering."""

    def test_score_then_shorter_evidence(self):
        long_high = make_candidate("x" * 80, score=90)
        short_high = make_candidate("x" * 60, score=90)
        low = make_candidate("x" * 50, score=40)

        assert rank_candidates([low, long_high, short_high]) == [short_high, long_high, low]

    def test_stable_for_ties(self):
        first = make_candidate("a" * 60, score=70, page=1)
        second = make_candidate("b" * 60, score=70, page=2)
        assert rank_candidates([first, second]) == [first, second]


class TestDedupeCandidates:
    """Tests for greedy deduplication."""

    def test_merges_near_duplicates(self):
        first = make_candidate(
            "We will begin production of the Semi truck in Nevada in 2026.", score=80, page=2
        )
        second = make_candidate(
            "We will begin volume production of the Semi truck in Nevada in 2026", score=80, page=5
        )
        result = dedupe_candidates([first, second])

        assert len(result) == 1
        assert result[0].sources == first.sources + second.sources

    def test_higher_score_survives(self):
        weak = make_candidate("We will open the Austin plant in 2025", score=40, page=1)
        strong = make_candidate(
            "We will open the Austin plant in 2025 pending final permits", score=80, page=3
        )
        result = dedupe_candidates([weak, strong])

        assert len(result) == 1
        assert result[0].evidence == strong.evidence
        assert result[0].score == 80
        assert [source.page_number for source in result[0].sources] == [3, 1]

    def test_distinct_candidates_kept_in_rank_order(self):
        austin = make_candidate("We will open the Austin plant in 2025", score=60)
        shanghai = make_candidate(
            "We plan to expand Megafactory Shanghai output by end of 2025", score=90
        )
        result = dedupe_candidates([austin, shanghai])
        assert [candidate.evidence for candidate in result] == [
            shanghai.evidence,
            austin.evidence,
        ]

    def test_idempotent(self):
        candidates = [
            make_candidate("We will open the Austin plant in 2025", score=60, page=1),
            make_candidate("We will open the Austin plant in 2025!", score=60, page=2),
            make_candidate("We plan to expand Megafactory Shanghai output by 2026", score=70),
        ]
        once = dedupe_candidates(candidates)
        assert dedupe_candidates(once) == once

    def test_sources_conserved(self):
        candidates = [
            make_candidate("We will open the Austin plant in 2025", page=1),
            make_candidate("We will open the Austin plant in 2025.", page=2),
            make_candidate("We will hire 300 technicians for the Reno site in 2026", page=3),
        ]
        result = dedupe_candidates(candidates)

        pages = sorted(source.page_number for candidate in result for source in candidate.sources)
        assert pages == [1, 2, 3]

    def test_input_not_mutated(self):
        first = make_candidate("We will open the Austin plant in 2025", page=1)
        second = make_candidate("We will open the Austin plant in 2025.", page=2)
        dedupe_candidates([first, second])

        assert len(first.sources) == 1
        assert len(second.sources) == 1

    def test_empty(self):
        assert dedupe_candidates([]) == []
        assert dedupe_candidates(None) == []
