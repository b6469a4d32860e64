"""
Lexical Sentiment Scorer

Token-level negative sentiment scoring with intensifier and
negation handling.

Negation dampens rather than flips the sign: a negated negative
word counts at half weight.

CLINICAL_REVIEW_REQUIRED: Word lists need clinical review.
"""

from haven.domain.exceptions import AnalysisFailure
from haven.domain.models.crisis_assessment import SentimentResult


class LexicalSentimentScorer:
    """
    Rule-based negative sentiment scorer.

    Scans whitespace tokens left to right, keeping two transient
    modifiers: an intensity multiplier and a negation flag.
    """

    NEGATIVE_WORDS: frozenset[str] = frozenset({
        "hopeless", "worthless", "useless", "terrible", "awful", "horrible",
        "desperate", "overwhelmed", "exhausted", "broken", "empty", "numb",
        "trapped", "suffocating", "drowning", "lost", "alone", "isolated",
    })

    INTENSIFIERS: frozenset[str] = frozenset({
        "very", "extremely", "completely", "totally", "absolutely",
    })

    NEGATIONS: frozenset[str] = frozenset({
        "not", "never", "no", "don't", "can't", "won't",
    })

    INTENSIFIED_MULTIPLIER = 1.5
    NEGATED_WEIGHT = -0.5
    NEGATIVE_WEIGHT = -1.0
    MIN_SCORE = -5.0

    def score(self, text: str) -> SentimentResult:
        """
        Score lower-cased text for negative sentiment.

        Args:
            text: Normalized text

        Returns:
            SentimentResult with clamped score and intensity

        Raises:
            AnalysisFailure: If text is not a string
        """
        if not isinstance(text, str):
            raise AnalysisFailure(
                f"Expected str, got {type(text).__name__}",
                component="sentiment_scorer",
            )

        tokens = text.split()
        if not tokens:
            return SentimentResult()

        raw_score = 0.0
        intensity = 1.0
        negated = False
        negative_indicators: list[str] = []

        for token in tokens:
            if token in self.INTENSIFIERS:
                intensity = self.INTENSIFIED_MULTIPLIER
                continue
            if token in self.NEGATIONS:
                negated = True
                continue

            if token in self.NEGATIVE_WORDS:
                weight = self.NEGATED_WEIGHT if negated else self.NEGATIVE_WEIGHT
                raw_score += weight * intensity
                negative_indicators.append(token)

            intensity = 1.0
            negated = False

        sentiment_score = max(self.MIN_SCORE, min(0.0, raw_score))
        emotional_intensity = min(1.0, abs(sentiment_score) / len(tokens))

        return SentimentResult(
            sentiment_score=sentiment_score,
            emotional_intensity=emotional_intensity,
            negative_indicators=negative_indicators,
        )

    async def score_async(self, text: str) -> SentimentResult:
        """Async entry point. Same result as score()."""
        return self.score(text)
