"""
Distress History Domain Model

Per-user record of crisis-positive classifications.

PRIVACY: Occurrences keep a short text excerpt. The history is
process-lifetime state only and is never written to disk by the core.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from haven.domain.enums.crisis_type import CrisisType


@dataclass(frozen=True)
class DistressOccurrence:
    """
    A single crisis-positive classification.

    Attributes:
        timestamp: When the classification happened
        crisis_type: Classified crisis type (never NONE)
        confidence: Classification confidence
        excerpt: Leading characters of the normalized utterance
    """

    timestamp: datetime
    crisis_type: CrisisType
    confidence: float
    excerpt: str = ""


@dataclass(frozen=True)
class UserDistressHistory:
    """
    Ordered distress occurrences for one user.

    Immutable: appending and pruning return new instances, so a
    reader never observes a partially updated history.
    """

    user_id: str
    occurrences: tuple[DistressOccurrence, ...] = field(default_factory=tuple)

    def appended(self, occurrence: DistressOccurrence) -> "UserDistressHistory":
        """Return a history with the occurrence added at the end."""
        return UserDistressHistory(
            user_id=self.user_id,
            occurrences=self.occurrences + (occurrence,),
        )

    def pruned(self, now: datetime, retention: timedelta) -> "UserDistressHistory":
        """Return a history without occurrences older than the retention window."""
        cutoff = now - retention
        return UserDistressHistory(
            user_id=self.user_id,
            occurrences=tuple(o for o in self.occurrences if o.timestamp > cutoff),
        )

    def __len__(self) -> int:
        return len(self.occurrences)

    def count_by_type(self) -> dict[CrisisType, int]:
        """Count occurrences per crisis type."""
        counts: dict[CrisisType, int] = {}
        for occurrence in self.occurrences:
            counts[occurrence.crisis_type] = counts.get(occurrence.crisis_type, 0) + 1
        return counts
