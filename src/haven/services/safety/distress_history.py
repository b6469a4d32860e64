"""
Distress History Store

Process-lifetime store of crisis-positive classifications keyed
by the caller-supplied user ID.

CONCURRENCY: Different users may be written in parallel. Writes
for the same user must be serialized by the caller (one active
turn per session).
"""

from datetime import datetime, timedelta
from typing import Callable, Optional

from haven.domain.models.distress_history import DistressOccurrence, UserDistressHistory
from haven.config.logging_config import get_logger

logger = get_logger(__name__)


class DistressHistoryStore:
    """
    In-memory per-user distress history.

    Histories are immutable values; each write replaces the user's
    entry with an appended-then-pruned copy.

    Usage:
        store = DistressHistoryStore(retention_days=30)
        store.record("user-1", occurrence)
        history = store.get("user-1")
    """

    def __init__(
        self,
        retention_days: int = 30,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Initialize store.

        Args:
            retention_days: Age after which occurrences are pruned
            clock: Time source, defaults to datetime.utcnow
        """
        self._retention = timedelta(days=retention_days)
        self._clock = clock or datetime.utcnow
        self._histories: dict[str, UserDistressHistory] = {}

    def record(self, user_id: str, occurrence: DistressOccurrence) -> UserDistressHistory:
        """
        Append an occurrence and prune expired ones.

        Args:
            user_id: History owner
            occurrence: Crisis-positive classification

        Returns:
            The user's updated history
        """
        current = self._histories.get(user_id) or UserDistressHistory(user_id=user_id)
        updated = current.appended(occurrence).pruned(self._clock(), self._retention)
        self._histories[user_id] = updated

        pruned_count = len(current) + 1 - len(updated)
        if pruned_count:
            logger.debug(
                "Pruned expired distress occurrences",
                user_id=user_id,
                pruned=pruned_count,
            )
        return updated

    def get(self, user_id: str) -> UserDistressHistory:
        """Get a user's history (empty if none recorded)."""
        return self._histories.get(user_id) or UserDistressHistory(user_id=user_id)

    def clear(self, user_id: str) -> None:
        """Forget a user's history."""
        self._histories.pop(user_id, None)

    def user_ids(self) -> list[str]:
        """Users with a recorded history."""
        return list(self._histories.keys())
