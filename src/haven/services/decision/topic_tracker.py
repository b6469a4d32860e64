"""
Topic Repetition Tracker

Maps user messages to coarse topic buckets and detects when a
conversation keeps returning to the same topic.

Topic buckets are used only for repetition detection, never for
crisis detection.
"""

from collections import Counter
from typing import Iterable, Optional, Sequence

from haven.config.settings import ConversationSettings
from haven.domain.models.conversation import ConversationTurn

GENERAL_TOPIC = "general"


class TopicRepetitionTracker:
    """
    First-match keyword topic extraction and repetition counting.

    Usage:
        tracker = TopicRepetitionTracker()
        tracker.extract_topic("My mother called")  # "family"
        tracker.should_guide_topic(session.conversation_history)
    """

    # Checked in order; first bucket with a matching keyword wins
    TOPIC_KEYWORDS: dict[str, tuple[str, ...]] = {
        "family": ("family", "mother", "father", "sister", "brother", "children", "kids"),
        "health": ("health", "doctor", "medicine", "pain", "sick", "hospital"),
        "work": ("work", "job", "career", "boss", "colleague", "office"),
        "relationships": ("friend", "relationship", "partner", "spouse", "dating"),
        "emotions": ("sad", "happy", "angry", "frustrated", "excited", "worried"),
        "daily_life": ("home", "house", "cooking", "shopping", "routine"),
        "past": ("remember", "used to", "before", "when i was", "back then"),
        "future": ("plan", "hope", "will", "going to", "want to", "dream"),
    }

    def __init__(self, settings: Optional[ConversationSettings] = None) -> None:
        """
        Initialize tracker.

        Args:
            settings: Conversation settings (window and thresholds)
        """
        settings = settings or ConversationSettings()
        self._min_history = settings.topic_min_history
        self._window = settings.topic_window
        self._min_user_turns = settings.topic_min_user_turns
        self._threshold = settings.topic_repetition_threshold

    def extract_topic(self, message: str) -> str:
        """
        Map a message to exactly one topic bucket.

        Args:
            message: User message

        Returns:
            Topic name, or "general" if no bucket matches or the
            message is not text
        """
        if not isinstance(message, str):
            return GENERAL_TOPIC
        lowered = message.lower()
        for topic, keywords in self.TOPIC_KEYWORDS.items():
            if any(keyword in lowered for keyword in keywords):
                return topic
        return GENERAL_TOPIC

    def count_topics(self, messages: Iterable[str]) -> Counter:
        """Count topic buckets across messages."""
        return Counter(self.extract_topic(message) for message in messages)

    def should_guide_topic(self, history: Sequence[ConversationTurn]) -> bool:
        """
        Check whether the conversation keeps returning to one topic.

        Requires enough history, enough user turns in the recent
        window, and one topic reaching the repetition threshold.

        Args:
            history: Conversation turns, oldest first

        Returns:
            True if topic guidance is appropriate
        """
        if len(history) < self._min_history:
            return False

        user_messages = [
            turn.content for turn in history[-self._window:]
            if turn.is_user and isinstance(turn.content, str)
        ]
        if len(user_messages) < self._min_user_turns:
            return False

        counts = self.count_topics(user_messages)
        return any(count >= self._threshold for count in counts.values())
