"""Tests configuration and fixtures."""

from datetime import datetime, timedelta
from typing import Callable, Optional

import pytest

from haven.config import Settings
from haven.domain.enums.conversation import Speaker
from haven.domain.models.conversation import (
    ConversationTurn,
    SessionEmotionalState,
    SessionSnapshot,
)


class FakeClock:
    """Settable time source for history tests."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with default detection values."""
    return Settings(
        env="development",
    )


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at a known instant."""
    return FakeClock(datetime(2024, 1, 1, 12, 0, 0))


@pytest.fixture
def make_session() -> Callable[..., SessionSnapshot]:
    """Factory for session snapshots from plain user messages."""

    def _make(
        user_messages: Optional[list[str]] = None,
        turns: Optional[list[ConversationTurn]] = None,
        valence: float = 0.0,
        arousal: float = 0.0,
        session_id: str = "session-1",
        user_id: str = "user-1",
    ) -> SessionSnapshot:
        history = list(turns or [])
        for message in user_messages or []:
            history.append(ConversationTurn(speaker=Speaker.USER, content=message))
        return SessionSnapshot(
            session_id=session_id,
            user_id=user_id,
            conversation_history=history,
            emotional_context=SessionEmotionalState(valence=valence, arousal=arousal),
        )

    return _make
