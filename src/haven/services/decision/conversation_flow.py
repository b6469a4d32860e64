"""
Conversation Flow Controller

Chooses the response type for a user message.

SAFETY-CRITICAL: Crisis detection is evaluated first and must
never be skipped. If the crisis classifier fails, the keyword
fast path alone decides; the error is logged, never raised.

CLINICAL_REVIEW_REQUIRED: Keyword lists and rule precedence
require clinical validation.
"""

import random
from dataclasses import dataclass
from typing import Optional

from haven.config.settings import ConversationSettings
from haven.domain.enums.conversation import ResponseType
from haven.domain.models.conversation import ConversationTurn, SessionSnapshot
from haven.domain.models.crisis_assessment import CrisisAssessment
from haven.services.detection.keyword_extractor import contains_phrase, normalize_text
from haven.services.decision.topic_tracker import TopicRepetitionTracker
from haven.services.safety.crisis_classifier import CrisisClassifier
from haven.config.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FlowDecision:
    """
    Response type decision for one message.

    Attributes:
        response_type: Chosen response type
        rule: Name of the rule that fired
        assessment: Crisis assessment, if the classifier succeeded
        classifier_failed: Whether the keyword fallback was used
    """

    response_type: ResponseType
    rule: str
    assessment: Optional[CrisisAssessment] = None
    classifier_failed: bool = False

    def to_dict(self) -> dict:
        return {
            "response_type": self.response_type.value,
            "rule": self.rule,
            "assessment": self.assessment.to_dict() if self.assessment else None,
            "classifier_failed": self.classifier_failed,
        }


class ConversationFlowController:
    """
    Ordered rule list for response type selection.

    Rules (first match wins):
    1. crisis: acute crisis keywords, or SELF_HARM / MEDICAL_EMERGENCY
       from the classifier
    2. topic_guidance: one topic dominates recent user turns
    3. empathetic_support: distress keywords or distressed session state
    4. clarification: too short or filler-only message
    5. follow_up: explorable statement that is not a question
    6. general: default

    Usage:
        controller = ConversationFlowController()
        response_type = controller.determine_response_type(message, session)
    """

    # Acute phrases checked in addition to the classifier lexicon
    FALLBACK_CRISIS_PHRASES: tuple[str, ...] = (
        "can't go on", "jump off", "take my life", "self harm",
        "bleeding", "call 911",
    )

    DISTRESS_KEYWORDS: tuple[str, ...] = (
        "depressed", "anxious", "panic", "scared", "hopeless", "overwhelmed",
        "crying", "can't cope", "falling apart", "breaking down",
    )

    FILLER_WORDS: frozenset[str] = frozenset({"um", "uh", "hmm", "well", "like"})
    FILLER_PHRASES: tuple[str, ...] = ("you know",)
    MIN_MESSAGE_LENGTH = 3

    FOLLOW_UP_TRIGGERS: tuple[str, ...] = (
        "feel", "think", "remember", "worry", "hope", "wish", "dream",
        "happened", "experience", "situation", "problem", "challenge",
    )

    TOPIC_SUGGESTIONS: tuple[str, ...] = (
        "I've noticed we've been focusing on this topic for a while. "
        "Would you like to talk about something that brought you joy recently?",
        "Sometimes it helps to shift our perspective. Is there something you're looking forward to?",
        "I'm wondering if there's another part of your day or week you'd like to share with me?",
        "Would you like to explore a different topic? Perhaps something that's been on your mind lately?",
        "I sense this is important to you. Would it help to talk about how you're "
        "taking care of yourself through this?",
    )

    def __init__(
        self,
        crisis_classifier: Optional[CrisisClassifier] = None,
        settings: Optional[ConversationSettings] = None,
    ) -> None:
        """
        Initialize controller.

        Args:
            crisis_classifier: Crisis classifier (created if omitted)
            settings: Conversation settings
        """
        self._classifier = crisis_classifier or CrisisClassifier()
        self._topics = TopicRepetitionTracker(settings)

    @property
    def crisis_classifier(self) -> CrisisClassifier:
        return self._classifier

    def determine_response_type(
        self,
        message: str,
        session: SessionSnapshot,
    ) -> ResponseType:
        """
        Determine the response type for a message.

        Args:
            message: Current user message
            session: Session snapshot (history excludes this message)

        Returns:
            Chosen ResponseType
        """
        return self.route(message, session).response_type

    def route(
        self,
        message: str,
        session: SessionSnapshot,
    ) -> FlowDecision:
        """
        Determine the response type with supporting facts.

        Args:
            message: Current user message
            session: Session snapshot (history excludes this message)

        Returns:
            FlowDecision with the response type and crisis assessment
        """
        if not isinstance(message, str):
            message = "" if message is None else str(message)
        lowered = normalize_text(message)

        # Rule 1: crisis
        assessment: Optional[CrisisAssessment] = None
        classifier_failed = False
        try:
            assessment = self._classifier.assess(
                message,
                session.user_utterances(),
                user_id=session.user_id,
            )
        except Exception as e:
            classifier_failed = True
            logger.error(
                "Crisis classification failed, falling back to keyword detection",
                session_id=session.session_id,
                error_type=type(e).__name__,
            )

        if self.contains_crisis_keywords(lowered) or (
            assessment is not None and assessment.crisis_type.is_acute
        ):
            return self._decide(
                ResponseType.CRISIS_RESPONSE, "crisis", session, assessment, classifier_failed
            )

        # Rule 2: topic guidance
        if self.should_guide_topic(session.conversation_history):
            return self._decide(
                ResponseType.TOPIC_GUIDANCE, "topic_guidance", session, assessment, classifier_failed
            )

        # Rule 3: empathetic support
        if self._contains_distress_keywords(lowered) or session.emotional_context.indicates_distress:
            return self._decide(
                ResponseType.EMPATHETIC_SUPPORT, "empathetic_support", session, assessment, classifier_failed
            )

        # Rule 4: clarification
        if self._is_unclear(message):
            return self._decide(
                ResponseType.CLARIFICATION_REQUEST, "clarification", session, assessment, classifier_failed
            )

        # Rule 5: follow-up question
        if self._should_ask_follow_up(lowered):
            return self._decide(
                ResponseType.FOLLOW_UP_QUESTION, "follow_up", session, assessment, classifier_failed
            )

        return self._decide(
            ResponseType.GENERAL_CONVERSATION, "general", session, assessment, classifier_failed
        )

    def contains_crisis_keywords(self, text: str) -> bool:
        """
        Keyword-only crisis check.

        Uses the classifier's current self-harm and medical phrases
        plus the fallback phrases. Does not score.

        Args:
            text: Normalized message

        Returns:
            True if any acute crisis phrase occurs
        """
        phrases = self._classifier.config.lexicon.acute_phrases() + self.FALLBACK_CRISIS_PHRASES
        return any(contains_phrase(text, phrase) for phrase in phrases)

    def should_guide_topic(self, history: list[ConversationTurn]) -> bool:
        """Check whether topic guidance is needed."""
        return self._topics.should_guide_topic(history)

    def generate_topic_suggestion(
        self,
        session: Optional[SessionSnapshot] = None,
        rng: Optional[random.Random] = None,
    ) -> str:
        """
        Pick a prompt that invites a change of topic.

        Args:
            session: Session snapshot (reserved for personalization)
            rng: Random source, for deterministic selection in tests

        Returns:
            A topic suggestion
        """
        chooser = rng or random
        return chooser.choice(self.TOPIC_SUGGESTIONS)

    def _decide(
        self,
        response_type: ResponseType,
        rule: str,
        session: SessionSnapshot,
        assessment: Optional[CrisisAssessment],
        classifier_failed: bool,
    ) -> FlowDecision:
        logger.info(
            "Response type determined",
            session_id=session.session_id,
            response_type=response_type.value,
            rule=rule,
            classifier_failed=classifier_failed,
        )
        return FlowDecision(
            response_type=response_type,
            rule=rule,
            assessment=assessment,
            classifier_failed=classifier_failed,
        )

    def _contains_distress_keywords(self, text: str) -> bool:
        return any(keyword in text for keyword in self.DISTRESS_KEYWORDS)

    def _is_unclear(self, message: str) -> bool:
        """Too short, or made only of filler words."""
        trimmed = message.strip()
        if len(trimmed) < self.MIN_MESSAGE_LENGTH:
            return True

        remainder = trimmed.lower()
        for phrase in self.FILLER_PHRASES:
            remainder = remainder.replace(phrase, " ")

        tokens = [token.strip(".,!?…") for token in remainder.split()]
        meaningful = [token for token in tokens if token and token not in self.FILLER_WORDS]
        return not meaningful

    def _should_ask_follow_up(self, text: str) -> bool:
        if "?" in text:
            return False
        return any(trigger in text for trigger in self.FOLLOW_UP_TRIGGERS)
