"""
Conversation Enumerations

Speaker roles and the closed set of response types the
flow controller can choose between.
"""

from enum import StrEnum


class Speaker(StrEnum):
    """Author of a conversation turn."""
    
    USER = "USER"
    COMPANION = "COMPANION"


class ResponseType(StrEnum):
    """
    Reply strategy chosen for a user message.
    
    Exactly one is chosen per message. Precedence is defined by
    the ordered rule list in ConversationFlowController.
    """
    
    CRISIS_RESPONSE = "CRISIS_RESPONSE"
    """
    Crisis resources must be surfaced.
    
    SAFETY_NOTE: Always wins over every other response type.
    """
    
    EMPATHETIC_SUPPORT = "EMPATHETIC_SUPPORT"
    """Validate and support the user's emotional state."""
    
    TOPIC_GUIDANCE = "TOPIC_GUIDANCE"
    """Gently steer away from a topic the user keeps returning to."""
    
    CLARIFICATION_REQUEST = "CLARIFICATION_REQUEST"
    """Message too short or filler-only to respond to meaningfully."""
    
    FOLLOW_UP_QUESTION = "FOLLOW_UP_QUESTION"
    """Statement worth exploring with a follow-up question."""
    
    GENERAL_CONVERSATION = "GENERAL_CONVERSATION"
    """Default conversational reply."""
