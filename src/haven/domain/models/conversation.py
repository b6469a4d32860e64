"""
Conversation Domain Models

Read-only view of a conversation supplied by the session store.
The safety core never modifies these objects.

PRIVACY: Turn content may contain sensitive information.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from haven.domain.enums.conversation import Speaker


@dataclass(frozen=True)
class ConversationTurn:
    """
    A single turn in a conversation.

    Attributes:
        speaker: Who authored the turn
        content: Turn text
        timestamp: When the turn was recorded
        emotional_tone: Optional tag from upstream emotion analysis
    """

    speaker: Speaker
    content: str
    timestamp: datetime = field(default_factory=datetime.utcnow)
    emotional_tone: Optional[str] = None

    @property
    def is_user(self) -> bool:
        return self.speaker == Speaker.USER


@dataclass(frozen=True)
class SessionEmotionalState:
    """
    Session-level emotional estimate.

    Attributes:
        valence: Negative to positive (-1.0 to 1.0)
        arousal: Calm to excited (0.0 to 1.0)
        dominant_emotion: Label of the strongest emotion, if known
        confidence: Estimate confidence (0.0 to 1.0)
    """

    valence: float = 0.0
    arousal: float = 0.0
    dominant_emotion: Optional[str] = None
    confidence: float = 0.0

    def __post_init__(self) -> None:
        """Validate ranges."""
        if not -1.0 <= self.valence <= 1.0:
            raise ValueError(f"Valence must be -1.0-1.0, got {self.valence}")
        if not 0.0 <= self.arousal <= 1.0:
            raise ValueError(f"Arousal must be 0.0-1.0, got {self.arousal}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be 0.0-1.0, got {self.confidence}")

    @property
    def indicates_distress(self) -> bool:
        """High arousal with strongly negative valence."""
        return self.arousal > 0.7 and self.valence < -0.5


@dataclass
class SessionSnapshot:
    """
    Snapshot of a session passed to the flow controller.

    Attributes:
        session_id: Conversation session identifier
        user_id: Owner of the distress history for this session
        conversation_history: Turns oldest-first, excluding the current message
        emotional_context: Session emotional estimate
    """

    session_id: str
    user_id: str
    conversation_history: list[ConversationTurn] = field(default_factory=list)
    emotional_context: SessionEmotionalState = field(default_factory=SessionEmotionalState)

    def user_utterances(self) -> list[str]:
        """Content of user-authored turns, oldest first."""
        return [turn.content for turn in self.conversation_history if turn.is_user]
