"""
Crisis Classifier

Combines keyword, sentiment and conversation-pattern signals into
a single CrisisAssessment.

SAFETY-CRITICAL: This module decides whether crisis resources are
surfaced. Self-harm and medical-emergency language is evaluated
before severe distress and can never be masked by a higher
distress score.

CLINICAL_REVIEW_REQUIRED: Thresholds, confidence formulas and
urgency levels require clinical validation.
"""

import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Optional, Sequence, Union

from haven.config.settings import DetectionSettings
from haven.domain.enums.crisis_type import CrisisType, RecommendedAction
from haven.domain.models.crisis_assessment import (
    CrisisAssessment,
    KeywordLexicon,
    PatternResult,
    SentimentResult,
    SignalScores,
)
from haven.domain.models.distress_history import DistressOccurrence, UserDistressHistory
from haven.services.detection.keyword_extractor import KeywordSignalExtractor, normalize_text
from haven.services.detection.pattern_analyzer import PatternHistoryAnalyzer
from haven.services.detection.sentiment_scorer import LexicalSentimentScorer
from haven.services.safety.distress_history import DistressHistoryStore
from haven.config.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DetectorConfig:
    """
    Immutable classifier configuration snapshot.

    Swapped by a single attribute assignment, so a classification
    always runs against one complete config.

    Attributes:
        lexicon: Keyword lexicon
        sensitivity: Threshold scale (0.0-1.0)
    """

    lexicon: KeywordLexicon
    sensitivity: float = 0.7

    @property
    def threshold(self) -> float:
        """Keyword score threshold shared by all categories."""
        return 0.1 * self.sensitivity


def clamp_sensitivity(level: float) -> float:
    """Clamp a sensitivity level to [0.0, 1.0]."""
    return max(0.0, min(1.0, float(level)))


class CrisisClassifier:
    """
    Multi-signal crisis classifier.

    Decision order (first match wins):
    1. Self-harm keyword score above threshold -> SELF_HARM, urgency 9
    2. Medical keyword score above threshold -> MEDICAL_EMERGENCY, urgency 10
    3. Distress keywords, strongly negative sentiment or a distress
       pattern -> SEVERE_DISTRESS, urgency from confidence (max 8)
    4. Otherwise NONE

    Sensitivity scales thresholds only. Raw signal scores are never
    scaled so they stay comparable across settings.

    Usage:
        classifier = CrisisClassifier()
        assessment = await classifier.analyze_crisis(text, history, user_id="u1")
    """

    SELF_HARM_URGENCY = 9
    MEDICAL_EMERGENCY_URGENCY = 10
    MAX_DISTRESS_URGENCY = 8

    ACUTE_CONFIDENCE_CAP = 0.9
    DISTRESS_CONFIDENCE_CAP = 0.8
    SENTIMENT_DISTRESS_THRESHOLD = -2.0
    PATTERN_DISTRESS_THRESHOLD = 0.3

    def __init__(
        self,
        lexicon: Optional[KeywordLexicon] = None,
        settings: Optional[DetectionSettings] = None,
        history_store: Optional[DistressHistoryStore] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Initialize classifier.

        Args:
            lexicon: Keyword lexicon (default lexicon if omitted)
            settings: Detection settings
            history_store: Distress history store (created if omitted)
            clock: Time source for distress occurrences
        """
        settings = settings or DetectionSettings()
        self._clock = clock or datetime.utcnow
        self._excerpt_length = settings.excerpt_length
        self._config = DetectorConfig(
            lexicon=lexicon or KeywordLexicon.default(),
            sensitivity=clamp_sensitivity(settings.sensitivity),
        )
        self._keywords = KeywordSignalExtractor()
        self._sentiment = LexicalSentimentScorer()
        self._patterns = PatternHistoryAnalyzer(settings)
        self._history = history_store or DistressHistoryStore(
            retention_days=settings.history_retention_days,
            clock=self._clock,
        )

    @property
    def config(self) -> DetectorConfig:
        """Current configuration snapshot."""
        return self._config

    def update_keywords(self, lexicon: Union[KeywordLexicon, dict]) -> None:
        """
        Replace the keyword lexicon wholesale.

        Args:
            lexicon: New lexicon, or a dict with list values
        """
        if isinstance(lexicon, dict):
            lexicon = KeywordLexicon.from_dict(lexicon)
        self._config = replace(self._config, lexicon=lexicon)
        logger.info(
            "Crisis keywords updated",
            self_harm_count=len(lexicon.self_harm),
            medical_count=len(lexicon.medical_emergency),
            distress_count=len(lexicon.severe_distress),
        )

    def set_sensitivity(self, level: float) -> None:
        """
        Set detection sensitivity.

        Out-of-range values are clamped to [0.0, 1.0], never rejected.
        """
        clamped = clamp_sensitivity(level)
        if clamped != level:
            logger.warning("Sensitivity clamped", requested=level, applied=clamped)
        self._config = replace(self._config, sensitivity=clamped)

    async def analyze_crisis(
        self,
        text: str,
        prior_user_utterances: Optional[Sequence[str]] = None,
        user_id: Optional[str] = None,
    ) -> CrisisAssessment:
        """
        Classify an utterance for crisis risk.

        Args:
            text: Raw utterance
            prior_user_utterances: Earlier user turns, oldest first
            user_id: Owner of the distress history (not recorded if None)

        Returns:
            CrisisAssessment for the utterance
        """
        return self.assess(text, prior_user_utterances, user_id)

    def assess(
        self,
        text: str,
        prior_user_utterances: Optional[Sequence[str]] = None,
        user_id: Optional[str] = None,
    ) -> CrisisAssessment:
        """
        Synchronous classification.

        Raises:
            AnalysisFailure: If the text or history is not analyzable
        """
        config = self._config
        normalized = normalize_text(text)

        keyword_scores = self._keywords.extract(normalized, config.lexicon)
        sentiment = self._sentiment.score(normalized)
        pattern = self._patterns.analyze(normalized, prior_user_utterances)

        assessment = self.combine(keyword_scores, sentiment, pattern, config.sensitivity)

        if assessment.is_crisis:
            logger.warning(
                "Crisis indicators detected",
                crisis_type=assessment.crisis_type.value,
                confidence=round(assessment.confidence, 3),
                urgency=assessment.urgency,
                keyword_count=len(assessment.keywords),
                pattern_type=pattern.pattern_type.value,
            )
            if user_id is not None:
                self._record_occurrence(user_id, normalized, assessment)

        return assessment

    def combine(
        self,
        keywords: SignalScores,
        sentiment: SentimentResult,
        pattern: PatternResult,
        sensitivity: float,
    ) -> CrisisAssessment:
        """
        Combine signal outputs into an assessment.

        Pure function of its inputs.

        Args:
            keywords: Keyword signal scores
            sentiment: Sentiment result
            pattern: Pattern result
            sensitivity: Sensitivity level (0.0-1.0)

        Returns:
            CrisisAssessment with clamped confidence and urgency
        """
        threshold = 0.1 * clamp_sensitivity(sensitivity)

        if keywords.self_harm_score > threshold:
            crisis_type = CrisisType.SELF_HARM
            confidence = min(
                self.ACUTE_CONFIDENCE_CAP,
                keywords.self_harm_score
                + sentiment.emotional_intensity * 0.3
                + pattern.pattern_score * 0.2,
            )
            urgency = self.SELF_HARM_URGENCY

        elif keywords.medical_emergency_score > threshold:
            crisis_type = CrisisType.MEDICAL_EMERGENCY
            confidence = min(
                self.ACUTE_CONFIDENCE_CAP,
                keywords.medical_emergency_score + sentiment.emotional_intensity * 0.2,
            )
            urgency = self.MEDICAL_EMERGENCY_URGENCY

        elif (
            keywords.severe_distress_score > threshold
            or sentiment.sentiment_score < self.SENTIMENT_DISTRESS_THRESHOLD
            or pattern.pattern_score > self.PATTERN_DISTRESS_THRESHOLD
        ):
            crisis_type = CrisisType.SEVERE_DISTRESS
            confidence = min(
                self.DISTRESS_CONFIDENCE_CAP,
                keywords.severe_distress_score * 0.4
                + abs(sentiment.sentiment_score) * 0.1
                + pattern.pattern_score * 0.4
                + sentiment.emotional_intensity * 0.1,
            )
            urgency = min(self.MAX_DISTRESS_URGENCY, math.floor(confidence * 10))

        else:
            return CrisisAssessment(keywords=tuple(keywords.matched_keywords))

        confidence = max(0.0, min(1.0, confidence))
        return CrisisAssessment(
            crisis_type=crisis_type,
            confidence=confidence,
            urgency=int(urgency),
            keywords=tuple(keywords.matched_keywords),
            recommended_action=RecommendedAction.for_assessment(crisis_type, urgency),
        )

    def get_distress_history(self, user_id: str) -> UserDistressHistory:
        """Read-only snapshot of a user's distress history."""
        return self._history.get(user_id)

    def _record_occurrence(
        self,
        user_id: str,
        normalized_text: str,
        assessment: CrisisAssessment,
    ) -> None:
        occurrence = DistressOccurrence(
            timestamp=self._clock(),
            crisis_type=assessment.crisis_type,
            confidence=assessment.confidence,
            excerpt=normalized_text[:self._excerpt_length],
        )
        self._history.record(user_id, occurrence)
