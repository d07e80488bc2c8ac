"""Tests for text tokenization."""


class TestTokenize:
    """Test tokenize."""

    def test_tokenize_lowercases_and_drops_stopwords(self):
        """tokenize should lowercase and remove stopwords."""
        from skill_router.skills.tokens import tokenize

        assert tokenize("Build an iOS App, for the UX!") == ["build", "ios", "app", "ux"]

    def test_tokenize_splits_on_any_non_alphanumeric(self):
        """Punctuation, symbols and underscores are all word boundaries."""
        from skill_router.skills.tokens import tokenize

        assert tokenize("snake_case-name/v2 (beta)") == ["snake", "case", "name", "v2", "beta"]

    def test_tokenize_keeps_order_and_duplicates(self):
        """Repeated words stay in the sequence."""
        from skill_router.skills.tokens import tokenize

        assert tokenize("ios ux ios") == ["ios", "ux", "ios"]

    def test_tokenize_stopword_only_input_is_empty(self):
        """A query made only of stopwords yields no tokens."""
        from skill_router.skills.tokens import tokenize

        assert tokenize("the a of") == []
        assert tokenize("Use THIS when that is") == []

    def test_tokenize_empty_and_none(self):
        """Empty input never fails."""
        from skill_router.skills.tokens import tokenize

        assert tokenize("") == []
        assert tokenize(None) == []
        assert tokenize("  --- !!! ") == []

    def test_tokenize_keeps_unicode_letters(self):
        """Non-ASCII letters are alphanumeric."""
        from skill_router.skills.tokens import tokenize

        assert tokenize("Café crème") == ["café", "crème"]

    def test_stopwords_are_fixed(self):
        """The stopword set holds exactly the twenty filler words."""
        from skill_router.skills.tokens import STOPWORDS

        assert len(STOPWORDS) == 20
        assert {"the", "use", "into", "that"} <= STOPWORDS
        assert "design" not in STOPWORDS
