"""
HAVEN Domain Layer

Core entities and value objects shared by the detection,
safety and decision services.
"""

from haven.domain.enums import CrisisType, PatternType, RecommendedAction, ResponseType, Speaker
from haven.domain.exceptions import AnalysisFailure, HavenError, ResourceCatalogError
from haven.domain.models import (
    KeywordLexicon,
    CrisisAssessment,
    DistressOccurrence,
    UserDistressHistory,
    ConversationTurn,
    SessionEmotionalState,
    SessionSnapshot,
    CrisisResource,
    Contact,
)

__all__ = [
    # Enums
    "CrisisType",
    "PatternType",
    "RecommendedAction",
    "ResponseType",
    "Speaker",
    # Exceptions
    "HavenError",
    "AnalysisFailure",
    "ResourceCatalogError",
    # Models
    "KeywordLexicon",
    "CrisisAssessment",
    "DistressOccurrence",
    "UserDistressHistory",
    "ConversationTurn",
    "SessionEmotionalState",
    "SessionSnapshot",
    "CrisisResource",
    "Contact",
]
