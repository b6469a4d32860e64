"""
Integration Tests for Safety Flow

Tests the complete path from a user message to response type
and support resources.

SAFETY-CRITICAL: These tests verify crisis routing end to end.
"""

from typing import Callable

import pytest

from haven.config import Settings
from haven.domain.enums.conversation import ResponseType
from haven.domain.enums.crisis_type import CrisisType
from haven.domain.exceptions import AnalysisFailure
from haven.domain.models.conversation import SessionSnapshot
from haven.services.decision.conversation_flow import ConversationFlowController
from haven.services.orchestration.safety_pipeline import SafetyPipeline
from haven.services.safety.crisis_classifier import CrisisClassifier


class BrokenClassifier(CrisisClassifier):
    """Classifier that cannot analyze anything."""

    def assess(self, text, prior_user_utterances=None, user_id=None):
        raise AnalysisFailure("signal extractor crashed", component="sentiment_scorer")


class TestSafetyFlow:
    """End-to-end safety evaluation."""

    @pytest.fixture
    def pipeline(self, test_settings: Settings) -> SafetyPipeline:
        """Create pipeline from test settings."""
        return SafetyPipeline(settings=test_settings)

    def test_self_harm_gets_crisis_resources(
        self,
        pipeline: SafetyPipeline,
        make_session: Callable[..., SessionSnapshot],
    ) -> None:
        """Test self-harm message yields crisis response with lifeline."""
        evaluation = pipeline.evaluate("I want to kill myself", make_session())

        assert evaluation.requires_crisis_response
        assert evaluation.assessment.crisis_type == CrisisType.SELF_HARM
        assert all(r.crisis_type == CrisisType.SELF_HARM for r in evaluation.resources)
        assert "988" in evaluation.resource_message
        assert not evaluation.used_keyword_fallback

    def test_medical_gets_emergency_services(
        self,
        pipeline: SafetyPipeline,
        make_session: Callable[..., SessionSnapshot],
    ) -> None:
        """Test medical emergency surfaces emergency services first."""
        evaluation = pipeline.evaluate("I think I'm having a heart attack", make_session())

        assert evaluation.requires_crisis_response
        assert evaluation.resources[0].phone == "911"
        assert "**Emergency Medical Help:**" in evaluation.resource_message

    def test_high_distress_gets_mental_health_resources(
        self,
        pipeline: SafetyPipeline,
        make_session: Callable[..., SessionSnapshot],
    ) -> None:
        """Test strong distress attaches resources to empathetic support."""
        evaluation = pipeline.evaluate(
            "I feel hopeless worthless useless desperate and trapped",
            make_session(),
        )

        assert evaluation.response_type == ResponseType.EMPATHETIC_SUPPORT
        assert evaluation.resources
        assert "**Mental Health Support:**" in evaluation.resource_message

    def test_mild_distress_no_resources(
        self,
        pipeline: SafetyPipeline,
        make_session: Callable[..., SessionSnapshot],
    ) -> None:
        """Test supportive conversation without a resource list."""
        evaluation = pipeline.evaluate("I feel hopeless", make_session())

        assert evaluation.response_type == ResponseType.EMPATHETIC_SUPPORT
        assert evaluation.resources == []
        assert evaluation.resource_message == ""

    def test_everyday_message(
        self,
        pipeline: SafetyPipeline,
        make_session: Callable[..., SessionSnapshot],
    ) -> None:
        """Test ordinary conversation has no safety payload."""
        evaluation = pipeline.evaluate("The weather is nice today", make_session())

        assert evaluation.response_type == ResponseType.GENERAL_CONVERSATION
        assert evaluation.assessment.crisis_type == CrisisType.NONE
        assert evaluation.resource_message == ""

    def test_conversation_over_several_turns(
        self,
        pipeline: SafetyPipeline,
        make_session: Callable[..., SessionSnapshot],
    ) -> None:
        """Test a worsening conversation ending in self-harm language."""
        history: list[str] = []
        response_types = []
        for message in [
            "I had a rough week",
            "I feel so alone",
            "I feel hopeless about everything",
            "I want to end my life",
        ]:
            evaluation = pipeline.evaluate(message, make_session(user_messages=history))
            response_types.append(evaluation.response_type)
            history.append(message)

        assert response_types[-1] == ResponseType.CRISIS_RESPONSE
        assert ResponseType.CRISIS_RESPONSE not in response_types[:-1]

        distress = pipeline.flow_controller.crisis_classifier.get_distress_history("user-1")
        assert distress.count_by_type()[CrisisType.SELF_HARM] == 1

    def test_audit_trail(
        self,
        pipeline: SafetyPipeline,
        make_session: Callable[..., SessionSnapshot],
    ) -> None:
        """Test the audit trail names the rule and resources."""
        evaluation = pipeline.evaluate("Call 911", make_session())

        assert evaluation.audit_trail["rule"] == "crisis"
        assert "Emergency Services" in evaluation.audit_trail["resource_names"]
        assert evaluation.to_dict()["resource_count"] == len(evaluation.resources)


class TestSafetyFlowFallback:
    """Evaluation when the classifier fails."""

    @pytest.fixture
    def pipeline(self, test_settings: Settings) -> SafetyPipeline:
        """Create pipeline with a broken classifier."""
        controller = ConversationFlowController(
            crisis_classifier=BrokenClassifier(settings=test_settings.detection),
            settings=test_settings.conversation,
        )
        return SafetyPipeline(settings=test_settings, flow_controller=controller)

    def test_crisis_detected_by_keywords(
        self,
        pipeline: SafetyPipeline,
        make_session: Callable[..., SessionSnapshot],
    ) -> None:
        """Test crisis resources still surface without an assessment."""
        evaluation = pipeline.evaluate("I can't go on anymore", make_session())

        assert evaluation.requires_crisis_response
        assert evaluation.used_keyword_fallback
        assert evaluation.assessment is None

        types = {r.crisis_type for r in evaluation.resources}
        assert types == {CrisisType.SELF_HARM, CrisisType.MEDICAL_EMERGENCY}

    def test_non_crisis_continues(
        self,
        pipeline: SafetyPipeline,
        make_session: Callable[..., SessionSnapshot],
    ) -> None:
        """Test ordinary messages are still routed."""
        evaluation = pipeline.evaluate("Tell me a story", make_session())

        assert evaluation.response_type == ResponseType.GENERAL_CONVERSATION
        assert evaluation.resources == []
