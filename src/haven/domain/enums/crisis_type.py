"""
Crisis Type and Recommended Action Enumerations

Defines the mutually exclusive crisis categories produced by the
classifier and the action recommended for each.

CLINICAL_REVIEW_REQUIRED: Category definitions and action mapping
should be validated by mental health professionals.
"""

from enum import StrEnum


class CrisisType(StrEnum):
    """
    Crisis category for a single utterance.
    
    Evaluated in strict priority order: SELF_HARM wins over
    MEDICAL_EMERGENCY, which wins over SEVERE_DISTRESS.
    """
    
    SELF_HARM = "SELF_HARM"
    """
    Suicidal ideation or intent to self-harm.
    
    SAFETY_NOTE: Crisis resources must be surfaced immediately.
    """
    
    MEDICAL_EMERGENCY = "MEDICAL_EMERGENCY"
    """Physical emergency (chest pain, overdose, can't breathe)."""
    
    SEVERE_DISTRESS = "SEVERE_DISTRESS"
    """Severe psychological distress without explicit self-harm."""
    
    NONE = "NONE"
    """No crisis indicators detected."""
    
    @property
    def is_acute(self) -> bool:
        """Whether this category always forces a crisis response."""
        return self in (CrisisType.SELF_HARM, CrisisType.MEDICAL_EMERGENCY)


class RecommendedAction(StrEnum):
    """Action recommended to the reply layer for an assessment."""
    
    IMMEDIATE_CRISIS_RESOURCES = "immediate_crisis_resources"
    EMERGENCY_SERVICES = "emergency_services"
    MENTAL_HEALTH_RESOURCES = "mental_health_resources"
    SUPPORTIVE_CONVERSATION = "supportive_conversation"
    CONTINUE_CONVERSATION = "continue_conversation"
    
    @classmethod
    def for_assessment(cls, crisis_type: CrisisType, urgency: int) -> "RecommendedAction":
        """
        Map crisis type and urgency to a recommended action.
        
        Args:
            crisis_type: Classified crisis type
            urgency: Urgency on the 0-10 scale
            
        Returns:
            Corresponding recommended action
        """
        if crisis_type == CrisisType.SELF_HARM:
            return cls.IMMEDIATE_CRISIS_RESOURCES
        if crisis_type == CrisisType.MEDICAL_EMERGENCY:
            return cls.EMERGENCY_SERVICES
        if crisis_type == CrisisType.SEVERE_DISTRESS:
            if urgency > 6:
                return cls.MENTAL_HEALTH_RESOURCES
            return cls.SUPPORTIVE_CONVERSATION
        return cls.CONTINUE_CONVERSATION


class PatternType(StrEnum):
    """Cross-turn distress pattern detected in conversation history."""
    
    NONE = "none"
    REPEATED_DISTRESS = "repeated_distress"
    ESCALATING_DISTRESS = "escalating_distress"
