"""
Safety Pipeline

Single entry point for the conversation layer: decides the
response type for a message and, where support resources are
warranted, selects and formats them.

ARCHITECTURE: The pipeline produces structured facts only. Reply
text is generated downstream from the response type and these
facts; the resource message is the only text produced here.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from haven.config.settings import Settings, get_settings
from haven.domain.enums.conversation import ResponseType
from haven.domain.enums.crisis_type import CrisisType, RecommendedAction
from haven.domain.models.conversation import SessionSnapshot
from haven.domain.models.crisis_assessment import CrisisAssessment
from haven.domain.models.resources import CrisisResource
from haven.services.decision.conversation_flow import ConversationFlowController, FlowDecision
from haven.services.safety.crisis_classifier import CrisisClassifier
from haven.services.safety.crisis_resources import CrisisResourceCatalog
from haven.config.logging_config import get_logger, bind_session_context, clear_context

logger = get_logger(__name__)


# Actions that warrant showing resources outside a crisis response
RESOURCE_ACTIONS: frozenset[RecommendedAction] = frozenset({
    RecommendedAction.IMMEDIATE_CRISIS_RESOURCES,
    RecommendedAction.EMERGENCY_SERVICES,
    RecommendedAction.MENTAL_HEALTH_RESOURCES,
})


@dataclass
class SafetyEvaluation:
    """
    Complete safety evaluation of one user message.

    Attributes:
        evaluation_id: Unique identifier
        timestamp: When evaluation was performed
        response_type: Chosen response type
        assessment: Crisis assessment (None if the classifier failed)
        resources: Selected support resources
        resource_message: Formatted resources ("" if none selected)
        used_keyword_fallback: Whether the classifier failed
        audit_trail: Audit data (no message content)
    """

    evaluation_id: UUID = field(default_factory=uuid4)
    timestamp: datetime = field(default_factory=datetime.utcnow)
    response_type: ResponseType = ResponseType.GENERAL_CONVERSATION
    assessment: Optional[CrisisAssessment] = None
    resources: list[CrisisResource] = field(default_factory=list)
    resource_message: str = ""
    used_keyword_fallback: bool = False
    audit_trail: dict = field(default_factory=dict)

    @property
    def requires_crisis_response(self) -> bool:
        return self.response_type == ResponseType.CRISIS_RESPONSE

    def to_dict(self) -> dict:
        return {
            "evaluation_id": str(self.evaluation_id),
            "timestamp": self.timestamp.isoformat(),
            "response_type": self.response_type.value,
            "assessment": self.assessment.to_dict() if self.assessment else None,
            "resource_count": len(self.resources),
            "used_keyword_fallback": self.used_keyword_fallback,
        }


class SafetyPipeline:
    """
    Unified safety evaluation pipeline.

    Orchestrates:
    1. Response type decision (crisis detection first)
    2. Resource selection for the classified crisis type
    3. Resource message formatting

    Usage:
        pipeline = SafetyPipeline()
        evaluation = pipeline.evaluate(message, session)
        if evaluation.requires_crisis_response:
            show(evaluation.resource_message)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        flow_controller: Optional[ConversationFlowController] = None,
        resource_catalog: Optional[CrisisResourceCatalog] = None,
    ) -> None:
        """
        Initialize safety pipeline.

        Args:
            settings: Application settings (cached settings if omitted)
            flow_controller: Flow controller (built from settings if omitted)
            resource_catalog: Resource catalog (built from settings if omitted)
        """
        settings = settings or get_settings()
        self._flow = flow_controller or ConversationFlowController(
            crisis_classifier=CrisisClassifier(settings=settings.detection),
            settings=settings.conversation,
        )
        self._catalog = resource_catalog or CrisisResourceCatalog(
            config_path=settings.resources.catalog_path,
        )

    @property
    def flow_controller(self) -> ConversationFlowController:
        return self._flow

    @property
    def resource_catalog(self) -> CrisisResourceCatalog:
        return self._catalog

    def evaluate(
        self,
        message: str,
        session: SessionSnapshot,
    ) -> SafetyEvaluation:
        """
        Perform complete safety evaluation of a user message.

        Args:
            message: Current user message
            session: Session snapshot (history excludes this message)

        Returns:
            SafetyEvaluation with response type and resources
        """
        bind_session_context(session.session_id)
        try:
            decision = self._flow.route(message, session)
            resources = self._select_resources(decision)

            evaluation = SafetyEvaluation(
                response_type=decision.response_type,
                assessment=decision.assessment,
                resources=resources,
                resource_message=(
                    self._catalog.format_resource_message(resources)
                    if decision.response_type == ResponseType.CRISIS_RESPONSE or resources
                    else ""
                ),
                used_keyword_fallback=decision.classifier_failed,
                audit_trail=self._build_audit(decision, resources),
            )

            logger.info(
                "Safety evaluation complete",
                response_type=evaluation.response_type.value,
                crisis_type=(
                    evaluation.assessment.crisis_type.value
                    if evaluation.assessment else None
                ),
                resource_count=len(resources),
                used_keyword_fallback=evaluation.used_keyword_fallback,
            )
            return evaluation
        finally:
            clear_context()

    def _select_resources(self, decision: FlowDecision) -> list[CrisisResource]:
        """
        Pick resources for the decision.

        A crisis response without a usable assessment (keyword fallback)
        gets self-harm and medical resources together.
        """
        assessment = decision.assessment

        if decision.response_type == ResponseType.CRISIS_RESPONSE:
            if assessment is not None and assessment.crisis_type.is_acute:
                return self._catalog.get_crisis_resources(assessment.crisis_type)
            return (
                self._catalog.get_crisis_resources(CrisisType.SELF_HARM)
                + self._catalog.get_crisis_resources(CrisisType.MEDICAL_EMERGENCY)
            )

        if assessment is not None and assessment.recommended_action in RESOURCE_ACTIONS:
            return self._catalog.get_crisis_resources(assessment.crisis_type)

        return []

    def _build_audit(
        self,
        decision: FlowDecision,
        resources: list[CrisisResource],
    ) -> dict:
        audit = decision.to_dict()
        audit["resource_names"] = [r.name for r in resources]
        return audit
