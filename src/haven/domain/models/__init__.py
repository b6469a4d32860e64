"""Domain models package."""

from haven.domain.models.crisis_assessment import (
    KeywordLexicon,
    SignalScores,
    SentimentResult,
    PatternResult,
    CrisisAssessment,
)
from haven.domain.models.distress_history import DistressOccurrence, UserDistressHistory
from haven.domain.models.conversation import (
    ConversationTurn,
    SessionEmotionalState,
    SessionSnapshot,
)
from haven.domain.models.resources import CrisisResource, Contact

__all__ = [
    # Classifier contract
    "KeywordLexicon",
    "SignalScores",
    "SentimentResult",
    "PatternResult",
    "CrisisAssessment",
    # Distress history
    "DistressOccurrence",
    "UserDistressHistory",
    # Conversation
    "ConversationTurn",
    "SessionEmotionalState",
    "SessionSnapshot",
    # Resources
    "CrisisResource",
    "Contact",
]
