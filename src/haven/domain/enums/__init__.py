"""Domain enums package."""

from haven.domain.enums.crisis_type import CrisisType, PatternType, RecommendedAction
from haven.domain.enums.conversation import ResponseType, Speaker

__all__ = [
    "CrisisType",
    "PatternType",
    "RecommendedAction",
    "ResponseType",
    "Speaker",
]
