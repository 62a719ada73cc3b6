"""Tests for candidate filtering and scoring."""

from dnav.extract.scoring import (
    REPEATED_LINE_PENALTY,
    UNCONSTRAINED_MEMO_PENALTY,
    assess_segment,
    has_product_name,
    is_personal_memo,
    passes_filters,
    score_segment,
)

COMMITMENT = "We will begin Cybertruck production ramp in Q2 2025 at Gigafactory Texas"


class TestAssessSegment:
    """Tests for cue profiles."""

    def test_full_commitment(self):
        signals = assess_segment(COMMITMENT)

        assert signals.commitment_verb
        assert signals.timeline
        assert signals.clear_object
        assert signals.domain_noun
        assert signals.product_name
        assert signals.rescued
        assert not signals.boilerplate
        assert not signals.table_like

    def test_none_is_empty(self):
        signals = assess_segment(None)
        assert signals.length == 0
        assert not signals.table_like

    def test_capability_without_rollout(self):
        signals = assess_segment("The new app can now track battery health across the fleet")
        assert signals.capability_only

    def test_capability_with_rollout(self):
        signals = assess_segment("We will launch the app that can now track battery health in Q3")
        assert not signals.capability_only

    def test_to_dict_includes_rescued(self):
        data = assess_segment(COMMITMENT).to_dict()
        assert data["rescued"] is True
        assert data["length"] == len(COMMITMENT)


class TestProductName:
    """Tests for product/facility name detection."""

    def test_capitalized_name(self):
        assert has_product_name("We will ship Model Y from Berlin")

    def test_sentence_start_ignored(self):
        assert not has_product_name("Production will grow")

    def test_periods_and_months_ignored(self):
        assert not has_product_name("We will expand in Q2 and again in May")


class TestPassesFilters:
    """Tests for the hard accept/reject rules."""

    def test_commitment_with_timeline_passes(self):
        assert passes_filters(COMMITMENT)

    def test_vague_commitment_rejected(self):
        assert not passes_filters("Tesla remains committed to reducing costs.")

    def test_too_short(self):
        assert not passes_filters("We will expand the Berlin plant")

    def test_too_long(self):
        assert not passes_filters(COMMITMENT + " and" * 60)

    def test_descriptive_rejected(self):
        assert not passes_filters("The new platform includes upgraded seating and a larger display")

    def test_capability_rejected(self):
        assert not passes_filters("The new app can now track battery health across the entire fleet")

    def test_boilerplate_rejected(self):
        assert not passes_filters("The webcast of this call will be available for replay on our website")

    def test_hedged_without_commitment_rejected(self):
        assert not passes_filters("Margins could improve further as the new lines come online next year")

    def test_table_like_rejected(self):
        assert not passes_filters("Deliveries 1,200 1,350 1,410 1,520 1,610 1,700 1,820 1,950 units")

    def test_custom_length_bounds(self):
        assert not passes_filters(COMMITMENT, min_length=100)
        assert not passes_filters(COMMITMENT, max_length=50)


class TestPersonalMemoFilters:
    """Personal notes need a commitment and a constraint."""

    def test_constrained_commitment_passes(self):
        text = "I will renew the office lease by end of 2025 pending budget approval"
        assert passes_filters(text, is_personal_memo=True)

    def test_trivial_action_rejected_only_in_memos(self):
        text = "I will schedule a lunch with the vendor team by next month to review"
        assert passes_filters(text)
        assert not passes_filters(text, is_personal_memo=True)

    def test_unconstrained_commitment_rejected_in_memos(self):
        text = "I will rewrite the onboarding guide for the new engineers by Q3"
        assert passes_filters(text)
        assert not passes_filters(text, is_personal_memo=True)


class TestScoreSegment:
    """Tests for additive scoring."""

    def test_full_commitment_score(self):
        assert score_segment(COMMITMENT) == 90

    def test_deterministic(self):
        assert score_segment(COMMITMENT) == score_segment(COMMITMENT)

    def test_commitment_outscores_vague_statement(self):
        assert score_segment(COMMITMENT) > score_segment("Tesla remains committed to reducing costs.")

    def test_empty(self):
        assert score_segment(None) == 0
        assert score_segment("") == 0

    def test_repeated_line_penalty(self):
        assert (
            score_segment(COMMITMENT, is_repeated_line=True)
            == score_segment(COMMITMENT) - REPEATED_LINE_PENALTY
        )

    def test_unconstrained_memo_penalty(self):
        assert (
            score_segment(COMMITMENT, is_personal_memo=True)
            == score_segment(COMMITMENT) - UNCONSTRAINED_MEMO_PENALTY
        )

    def test_constraint_adds_score(self):
        constrained = "We will begin production in Q2 2025 pending regulatory approval"
        unconstrained = "We will begin production in Q2 2025 at the new site"
        assert score_segment(constrained) > score_segment(unconstrained)

    def test_investor_fluff_penalized(self):
        plain = "We will open new stores in Q3 2025"
        fluffy = "We are excited to open new stores in Q3 2025"
        assert score_segment(fluffy) < score_segment(plain)


class TestIsPersonalMemo:
    """Tests for first-person density detection."""

    def test_three_first_person_tokens(self):
        text = (
            "I went to the bank this morning. I called the landlord about the lease. "
            "I will renew it next year if the budget allows, and the rest can wait."
        )
        assert is_personal_memo(text)

    def test_corporate_text(self):
        text = "We will begin production in Q2 2025. In Iowa, our team expands the plant."
        assert not is_personal_memo(text)

    def test_high_ratio(self):
        assert is_personal_memo("Tomorrow I review the budget")

    def test_empty(self):
        assert not is_personal_memo(None)
        assert not is_personal_memo("   ")
