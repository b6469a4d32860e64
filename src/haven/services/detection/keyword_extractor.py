"""
Keyword Signal Extractor

Scores normalized text against the three weighted phrase lexicons
(self-harm, medical emergency, severe distress).

CLINICAL_REVIEW_REQUIRED: Severity tiers and weights require
clinical validation before production use.
"""

import re
from functools import lru_cache

from haven.domain.exceptions import AnalysisFailure
from haven.domain.models.crisis_assessment import KeywordLexicon, SignalScores


# Severity tiers. Fixed lookup, not configurable per call.
HIGH_SEVERITY_PHRASES: frozenset[str] = frozenset({
    "kill myself", "end it all", "suicide", "self-harm", "hurt myself",
    "heart attack", "can't breathe", "chest pain", "overdose",
})

MEDIUM_SEVERITY_PHRASES: frozenset[str] = frozenset({
    "hopeless", "worthless", "give up", "no point", "emergency",
    "help me", "dying", "pain",
})

HIGH_WEIGHT = 1.0
MEDIUM_WEIGHT = 0.6
LOW_WEIGHT = 0.3

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    Normalize an utterance for matching.

    Lower-cases, trims, collapses whitespace and maps typographic
    apostrophes to ASCII so "can’t" matches "can't".

    Args:
        text: Raw utterance

    Returns:
        Normalized text

    Raises:
        AnalysisFailure: If text is not a string
    """
    if not isinstance(text, str):
        raise AnalysisFailure(
            f"Expected str, got {type(text).__name__}",
            component="keyword_extractor",
        )
    text = text.replace("’", "'").replace("‘", "'")
    return _WHITESPACE.sub(" ", text.strip()).lower()


@lru_cache(maxsize=1024)
def _word_pattern(word: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)


def contains_phrase(text: str, phrase: str) -> bool:
    """
    Check whether a lexicon phrase occurs in text.

    Multi-word phrases match by substring containment. Single words
    must match on word boundaries so "kill" does not match "killed".

    Args:
        text: Lower-cased text
        phrase: Lexicon phrase

    Returns:
        True if the phrase occurs
    """
    phrase = phrase.lower()
    if " " in phrase:
        return phrase in text
    return _word_pattern(phrase).search(text) is not None


def keyword_weight(phrase: str) -> float:
    """Severity weight for a lexicon phrase."""
    phrase = phrase.lower()
    if phrase in HIGH_SEVERITY_PHRASES:
        return HIGH_WEIGHT
    if phrase in MEDIUM_SEVERITY_PHRASES:
        return MEDIUM_WEIGHT
    return LOW_WEIGHT


class KeywordSignalExtractor:
    """
    Weighted phrase matching against a keyword lexicon.

    Stateless: the lexicon is passed on every call so a lexicon
    swap never affects a call already in progress.
    """

    def extract(self, text: str, lexicon: KeywordLexicon) -> SignalScores:
        """
        Score text against each lexicon category.

        Args:
            text: Normalized (lower-cased, trimmed) text
            lexicon: Lexicon snapshot to match against

        Returns:
            SignalScores with per-category scores and matched phrases
        """
        scores = SignalScores()
        if not text:
            return scores

        scores.self_harm_score = self._score_category(
            text, lexicon.self_harm, scores.matched_keywords
        )
        scores.medical_emergency_score = self._score_category(
            text, lexicon.medical_emergency, scores.matched_keywords
        )
        scores.severe_distress_score = self._score_category(
            text, lexicon.severe_distress, scores.matched_keywords
        )
        return scores

    def _score_category(
        self,
        text: str,
        phrases: tuple[str, ...],
        matched: list[str],
    ) -> float:
        score = 0.0
        for phrase in phrases:
            if contains_phrase(text, phrase):
                score += keyword_weight(phrase)
                matched.append(phrase)
        return score
