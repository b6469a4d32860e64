"""
Unit Tests for Keyword Signal Extractor

Tests phrase matching, severity weights and normalization.
"""

import pytest

from haven.domain.exceptions import AnalysisFailure
from haven.domain.models.crisis_assessment import KeywordLexicon
from haven.services.detection.keyword_extractor import (
    KeywordSignalExtractor,
    contains_phrase,
    keyword_weight,
    normalize_text,
)


class TestNormalizeText:
    """Tests for utterance normalization."""

    def test_lowercases_and_collapses_whitespace(self) -> None:
        """Test case folding and whitespace collapsing."""
        assert normalize_text("  I Can't   BREATHE \n") == "i can't breathe"

    def test_typographic_apostrophe_mapped(self) -> None:
        """Test curly apostrophes become ASCII."""
        assert normalize_text("I can’t breathe") == "i can't breathe"

    def test_non_string_raises(self) -> None:
        """Test non-string input is reported as an analysis failure."""
        with pytest.raises(AnalysisFailure) as exc_info:
            normalize_text(None)  # type: ignore[arg-type]

        assert exc_info.value.component == "keyword_extractor"


class TestContainsPhrase:
    """Tests for phrase matching rules."""

    def test_single_word_needs_word_boundary(self) -> None:
        """Test single words do not match inside longer words."""
        assert not contains_phrase("i am hopelessly tired", "hopeless")
        assert contains_phrase("i feel hopeless.", "hopeless")

    def test_multi_word_matches_substring(self) -> None:
        """Test multi-word phrases match by containment."""
        assert contains_phrase("i want to kill myself tonight", "kill myself")

    def test_hyphenated_phrase(self) -> None:
        """Test hyphenated single tokens still match."""
        assert contains_phrase("thinking about self-harm again", "self-harm")


class TestKeywordWeight:
    """Tests for severity tiers."""

    @pytest.mark.parametrize("phrase,expected", [
        ("kill myself", 1.0),
        ("chest pain", 1.0),
        ("hopeless", 0.6),
        ("pain", 0.6),
        ("numb", 0.3),
        ("ambulance", 0.3),
    ])
    def test_tiers(self, phrase: str, expected: float) -> None:
        """Test phrase weights by tier."""
        assert keyword_weight(phrase) == expected


class TestKeywordSignalExtractor:
    """Test suite for KeywordSignalExtractor."""

    @pytest.fixture
    def extractor(self) -> KeywordSignalExtractor:
        """Create extractor instance."""
        return KeywordSignalExtractor()

    @pytest.fixture
    def lexicon(self) -> KeywordLexicon:
        """Default lexicon."""
        return KeywordLexicon.default()

    def test_self_harm_phrase(
        self, extractor: KeywordSignalExtractor, lexicon: KeywordLexicon
    ) -> None:
        """Test a high-severity self-harm phrase."""
        scores = extractor.extract("i want to kill myself", lexicon)

        assert scores.self_harm_score == 1.0
        assert scores.medical_emergency_score == 0.0
        assert scores.matched_keywords == ["kill myself"]

    def test_past_tense_not_matched(
        self, extractor: KeywordSignalExtractor, lexicon: KeywordLexicon
    ) -> None:
        """Test that 'killed the spider' has no crisis signal."""
        scores = extractor.extract("i killed the spider", lexicon)

        assert scores.self_harm_score == 0.0
        assert scores.severe_distress_score == 0.0
        assert scores.matched_keywords == []

    def test_weights_accumulate(
        self, extractor: KeywordSignalExtractor, lexicon: KeywordLexicon
    ) -> None:
        """Test distress weights sum within a category."""
        scores = extractor.extract("i feel hopeless and worthless", lexicon)

        assert scores.severe_distress_score == pytest.approx(1.2)
        assert scores.matched_keywords == ["hopeless", "worthless"]

    def test_phrase_in_two_categories_counts_twice(
        self, extractor: KeywordSignalExtractor
    ) -> None:
        """Test a phrase listed in two categories is scored in both."""
        lexicon = KeywordLexicon(
            self_harm=("overdose",),
            medical_emergency=("overdose",),
        )
        scores = extractor.extract("i took an overdose", lexicon)

        assert scores.self_harm_score == 1.0
        assert scores.medical_emergency_score == 1.0
        assert scores.matched_keywords == ["overdose", "overdose"]

    def test_empty_text(
        self, extractor: KeywordSignalExtractor, lexicon: KeywordLexicon
    ) -> None:
        """Test empty text yields zero scores."""
        scores = extractor.extract("", lexicon)

        assert scores.self_harm_score == 0.0
        assert scores.matched_keywords == []
