"""
Crisis Assessment Domain Models

Contract between the signal extractors, the crisis classifier and
the conversation layer. Signal results are ephemeral and created
per classification call; CrisisAssessment is the output of record.

CLINICAL_REVIEW_REQUIRED: Default lexicon phrases require
review by mental health professionals before deployment.
"""

from dataclasses import dataclass, field
from typing import Any

from haven.domain.enums.crisis_type import CrisisType, PatternType, RecommendedAction


@dataclass(frozen=True)
class KeywordLexicon:
    """
    Weighted phrase lexicon for the three crisis categories.

    Immutable. Replace wholesale via CrisisClassifier.update_keywords.
    Phrases are stored lower-cased.
    """

    self_harm: tuple[str, ...] = ()
    medical_emergency: tuple[str, ...] = ()
    severe_distress: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in ("self_harm", "medical_emergency", "severe_distress"):
            phrases = getattr(self, name)
            normalized = tuple(p.strip().lower() for p in phrases if p and p.strip())
            object.__setattr__(self, name, normalized)

    @classmethod
    def default(cls) -> "KeywordLexicon":
        """Build the default lexicon."""
        return cls(
            self_harm=(
                "kill myself", "end it all", "ending it all", "suicide",
                "self-harm", "hurt myself", "cut myself", "end my life",
                "ending my life", "not worth living", "better off dead",
                "want to die", "take my own life", "harm myself", "end the pain",
            ),
            medical_emergency=(
                "heart attack", "can't breathe", "cannot breathe", "chest pain",
                "overdose", "poisoned", "bleeding heavily", "unconscious",
                "stroke", "seizure", "emergency", "ambulance", "hospital",
                "call 911",
            ),
            severe_distress=(
                "hopeless", "worthless", "useless", "give up", "no point",
                "overwhelmed", "can't cope", "breaking down", "falling apart",
                "desperate", "trapped", "suffocating", "drowning", "lost",
                "alone", "isolated", "abandoned", "empty", "numb", "broken",
            ),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "KeywordLexicon":
        """Create lexicon from a dictionary with list values."""
        return cls(
            self_harm=tuple(data.get("self_harm", ())),
            medical_emergency=tuple(data.get("medical_emergency", ())),
            severe_distress=tuple(data.get("severe_distress", ())),
        )

    def acute_phrases(self) -> tuple[str, ...]:
        """Self-harm and medical-emergency phrases, in that order."""
        return self.self_harm + self.medical_emergency


@dataclass
class SignalScores:
    """
    Keyword signal scores for one utterance.

    Attributes:
        self_harm_score: Sum of matched self-harm phrase weights
        medical_emergency_score: Sum of matched medical phrase weights
        severe_distress_score: Sum of matched distress phrase weights
        matched_keywords: Matched phrases in lexicon order
    """

    self_harm_score: float = 0.0
    medical_emergency_score: float = 0.0
    severe_distress_score: float = 0.0
    matched_keywords: list[str] = field(default_factory=list)


@dataclass
class SentimentResult:
    """
    Lexical sentiment for one utterance.

    Attributes:
        sentiment_score: Negative sentiment, clamped to [-5.0, 0.0]
        emotional_intensity: Sentiment magnitude per token, [0.0, 1.0]
        negative_indicators: Negative lexicon tokens found
    """

    sentiment_score: float = 0.0
    emotional_intensity: float = 0.0
    negative_indicators: list[str] = field(default_factory=list)


@dataclass
class PatternResult:
    """Cross-turn distress pattern for one utterance."""

    pattern_score: float = 0.0
    pattern_type: PatternType = PatternType.NONE


@dataclass(frozen=True)
class CrisisAssessment:
    """
    Crisis classification of a single utterance.

    ARCHITECTURE: This is the only classifier output consumed by
    the conversation and reply layers.

    Attributes:
        crisis_type: Mutually exclusive crisis category
        confidence: Classification confidence (0.0-1.0)
        urgency: Time sensitivity of a human response (0-10)
        keywords: Matched lexicon phrases
        recommended_action: Action for the reply layer
    """

    crisis_type: CrisisType = CrisisType.NONE
    confidence: float = 0.0
    urgency: int = 0
    keywords: tuple[str, ...] = ()
    recommended_action: RecommendedAction = RecommendedAction.CONTINUE_CONVERSATION

    def __post_init__(self) -> None:
        """Validate ranges."""
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be 0.0-1.0, got {self.confidence}")
        if not 0 <= self.urgency <= 10:
            raise ValueError(f"Urgency must be 0-10, got {self.urgency}")

    @property
    def is_crisis(self) -> bool:
        return self.crisis_type != CrisisType.NONE

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "crisis_type": self.crisis_type.value,
            "confidence": round(self.confidence, 3),
            "urgency": self.urgency,
            "keywords": list(self.keywords),
            "recommended_action": self.recommended_action.value,
        }
