"""Decision services package - response type selection."""

from haven.services.decision.topic_tracker import TopicRepetitionTracker
from haven.services.decision.conversation_flow import ConversationFlowController, FlowDecision

__all__ = ["TopicRepetitionTracker", "ConversationFlowController", "FlowDecision"]
