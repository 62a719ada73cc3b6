"""Tests for decision title rewriting."""

from dnav.extract.titles import ELLIPSIS, extract_clause, rewrite_title, truncate_words


class TestExtractClause:
    """Tests for clause selection."""

    def test_will_clause(self):
        assert extract_clause("We will begin production in Q2 2025.") == "begin production in Q2 2025"

    def test_as_we_clause(self):
        assert extract_clause("As we are expanding capacity in Texas, costs rise") == (
            "expanding capacity in Texas"
        )

    def test_scheduled_to(self):
        assert extract_clause("Construction is scheduled to start in March 2026") == (
            "start in March 2026"
        )

    def test_plans_to(self):
        assert extract_clause("The company plans to hire 500 engineers") == "hire 500 engineers"

    def test_leading_we_stripped(self):
        assert extract_clause("We expanded the Berlin plant") == "expanded the Berlin plant"

    def test_first_clause_fallback(self):
        assert extract_clause("Capacity expansion: Berlin and Austin") == "Capacity expansion"


class TestTruncateWords:
    """Tests for word-boundary truncation."""

    def test_short_value_untouched(self):
        assert truncate_words("Open the plant", 10, 80) == "Open the plant"

    def test_word_limit(self):
        assert truncate_words("one two three four", 2, 80) == f"one two{ELLIPSIS}"

    def test_char_limit(self):
        assert truncate_words("alpha beta gamma", 10, 12) == f"alpha beta{ELLIPSIS}"

    def test_single_long_word(self):
        assert truncate_words("abcdefghij", 10, 4) == f"abcd{ELLIPSIS}"


class TestRewriteTitle:
    """Tests for full title rewriting."""

    def test_commitment(self):
        title = rewrite_title(
            "We will begin Cybertruck production ramp in Q2 2025 at Gigafactory Texas."
        )
        assert title == "Begin Cybertruck production ramp in Q2 2025 at Gigafactory Texas"

    def test_long_clause_truncated(self):
        title = rewrite_title(
            "We will open new service centers across Germany France Spain Italy "
            "and Poland next year"
        )
        assert title == f"Open new service centers across Germany France Spain Italy and{ELLIPSIS}"

    def test_char_limit(self):
        title = rewrite_title(
            "We will begin Cybertruck production ramp in Q2 2025 at Gigafactory Texas.",
            max_chars=20,
        )
        assert title.endswith(ELLIPSIS)
        assert len(title) <= 21

    def test_capitalized(self):
        assert rewrite_title("we expanded the Berlin plant")[0] == "E"

    def test_empty(self):
        assert rewrite_title("") == ""
        assert rewrite_title(None) == ""
        assert rewrite_title("   ") == ""
