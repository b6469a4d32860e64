"""
Crisis Resource Domain Models

Hotlines, websites and contacts surfaced to users in crisis.

LEGAL_REVIEW_REQUIRED: Resource details must be verified for
accuracy before being shown to users.
"""

from dataclasses import dataclass
from typing import Literal, Optional

from haven.domain.enums.crisis_type import CrisisType


ContactType = Literal["crisis", "emergency", "mental_health"]


@dataclass(frozen=True)
class CrisisResource:
    """
    A support resource for one crisis category.

    Attributes:
        name: Resource name (e.g., "988 Suicide & Crisis Lifeline")
        phone: Phone number or contact instruction
        description: Brief description
        availability: Human-readable hours ("24/7", "Business hours")
        crisis_type: Category the resource is listed under
        website: Optional website URL
    """

    name: str
    phone: str
    description: str
    availability: str
    crisis_type: CrisisType
    website: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "phone": self.phone,
            "website": self.website,
            "description": self.description,
            "availability": self.availability,
            "type": self.crisis_type.value,
        }


@dataclass(frozen=True)
class Contact:
    """An emergency contact number."""

    name: str
    phone: str
    contact_type: ContactType

    def to_dict(self) -> dict:
        return {"name": self.name, "phone": self.phone, "type": self.contact_type}
