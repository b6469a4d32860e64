"""
Crisis Resources

Crisis-type aware resource catalog and message formatter.
Built-in catalog can be overridden from a JSON file.

LEGAL_REVIEW_REQUIRED: Resource information must be verified
for accuracy before production use.
"""

import json
import os
from typing import Optional

from haven.domain.enums.crisis_type import CrisisType
from haven.domain.exceptions import ResourceCatalogError
from haven.domain.models.resources import Contact, CrisisResource
from haven.config.logging_config import get_logger

logger = get_logger(__name__)


def _resource(
    crisis_type: CrisisType,
    name: str,
    phone: str,
    description: str,
    availability: str = "24/7",
    website: Optional[str] = None,
) -> CrisisResource:
    return CrisisResource(
        name=name,
        phone=phone,
        description=description,
        availability=availability,
        crisis_type=crisis_type,
        website=website,
    )


class CrisisResourceCatalog:
    """
    Crisis resource provider and formatter.

    Selection is a pure mapping from crisis type to an ordered
    resource list. SEVERE_DISTRESS additionally gets the general
    support resources.

    Usage:
        catalog = CrisisResourceCatalog()
        resources = catalog.get_crisis_resources(CrisisType.SELF_HARM)
        message = catalog.format_resource_message(resources)
    """

    # Section order and headings in formatted messages
    SECTION_ORDER: tuple[tuple[CrisisType, str], ...] = (
        (CrisisType.SELF_HARM, "Immediate Crisis Support"),
        (CrisisType.MEDICAL_EMERGENCY, "Emergency Medical Help"),
        (CrisisType.SEVERE_DISTRESS, "Mental Health Support"),
        (CrisisType.NONE, "Additional Support"),
    )

    EMPTY_MESSAGE = "I want to help you find support. Let me connect you with some resources."
    OPENING_LINE = "I'm here to support you, and there are people who can help:"
    CLOSING_LINE = (
        "Remember: You don't have to face this alone. "
        "These people are trained to help and want to support you."
    )

    # Built-in catalog (can be overridden by config file)
    # LEGAL_REVIEW_REQUIRED: Verify all numbers before production
    BUILT_IN_RESOURCES: dict[CrisisType, tuple[CrisisResource, ...]] = {
        CrisisType.SELF_HARM: (
            _resource(
                CrisisType.SELF_HARM,
                "988 Suicide & Crisis Lifeline", "988",
                "Free and confidential support for people in distress",
                website="https://988lifeline.org",
            ),
            _resource(
                CrisisType.SELF_HARM,
                "Crisis Text Line", "Text HOME to 741741",
                "Free crisis support via text message",
                website="https://www.crisistextline.org",
            ),
            _resource(
                CrisisType.SELF_HARM,
                "988 Lifeline Chat", "Online chat available",
                "Online chat support for suicide prevention",
                website="https://988lifeline.org/chat",
            ),
            _resource(
                CrisisType.SELF_HARM,
                "Veterans Crisis Line", "988 (Press 1)",
                "Crisis support specifically for veterans",
                website="https://www.veteranscrisisline.net",
            ),
            _resource(
                CrisisType.SELF_HARM,
                "LGBT National Hotline", "1-888-843-4564",
                "Confidential support for LGBTQ individuals",
                availability="Monday-Friday 4pm-midnight ET, Saturday noon-5pm ET",
                website="https://lgbthotline.org",
            ),
        ),
        CrisisType.MEDICAL_EMERGENCY: (
            _resource(
                CrisisType.MEDICAL_EMERGENCY,
                "Emergency Services", "911",
                "Immediate emergency medical response",
            ),
            _resource(
                CrisisType.MEDICAL_EMERGENCY,
                "Poison Control Center", "1-800-222-1222",
                "Poison emergency helpline",
                website="https://www.poison.org",
            ),
        ),
        CrisisType.SEVERE_DISTRESS: (
            _resource(
                CrisisType.SEVERE_DISTRESS,
                "SAMHSA National Helpline", "1-800-662-4357",
                "Treatment referral and information for mental health and substance use",
                website="https://www.samhsa.gov",
            ),
            _resource(
                CrisisType.SEVERE_DISTRESS,
                "NAMI HelpLine", "1-800-950-6264",
                "Mental health support, information and referrals",
                availability="Monday-Friday 10am-10pm ET",
                website="https://www.nami.org",
            ),
            _resource(
                CrisisType.SEVERE_DISTRESS,
                "Mental Health America", "Visit website for local resources",
                "Mental health resources and screening tools",
                availability="Online resources available 24/7",
                website="https://mhanational.org",
            ),
        ),
        CrisisType.NONE: (
            _resource(
                CrisisType.NONE,
                "211 Helpline", "211",
                "Referrals to local health and human services",
                website="https://www.211.org",
            ),
            _resource(
                CrisisType.NONE,
                "National Domestic Violence Hotline", "1-800-799-7233",
                "Confidential support for domestic violence survivors",
                website="https://www.thehotline.org",
            ),
            _resource(
                CrisisType.NONE,
                "RAINN National Sexual Assault Hotline", "1-800-656-4673",
                "Confidential support for sexual assault survivors",
                website="https://www.rainn.org",
            ),
            _resource(
                CrisisType.NONE,
                "Childhelp National Child Abuse Hotline", "1-800-422-4453",
                "Crisis counseling for children and adults",
                website="https://www.childhelp.org",
            ),
        ),
    }

    BUILT_IN_CONTACTS: tuple[Contact, ...] = (
        Contact(name="Emergency Services", phone="911", contact_type="emergency"),
        Contact(name="988 Suicide & Crisis Lifeline", phone="988", contact_type="crisis"),
        Contact(name="Crisis Text Line", phone="741741", contact_type="crisis"),
        Contact(name="SAMHSA National Helpline", phone="1-800-662-4357", contact_type="mental_health"),
        Contact(name="NAMI HelpLine", phone="1-800-950-6264", contact_type="mental_health"),
    )

    def __init__(
        self,
        config_path: Optional[str] = None,
    ) -> None:
        """
        Initialize catalog.

        Args:
            config_path: Optional path to JSON catalog override
        """
        self._resources: dict[CrisisType, list[CrisisResource]] = {
            crisis_type: list(resources)
            for crisis_type, resources in self.BUILT_IN_RESOURCES.items()
        }
        self._contacts: list[Contact] = list(self.BUILT_IN_CONTACTS)

        if config_path and os.path.exists(config_path):
            try:
                self._load_config(config_path)
            except ResourceCatalogError as e:
                logger.error(
                    "Failed to load resource catalog, using built-in catalog",
                    path=e.path,
                    error=str(e),
                )

    def _load_config(self, config_path: str) -> None:
        """
        Load resources from a JSON catalog.

        The file maps crisis type names to resource lists. Listed
        categories replace the built-in ones; others are kept.
        """
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")

            loaded: dict[CrisisType, list[CrisisResource]] = {}
            for type_name, entries in data.items():
                crisis_type = CrisisType(type_name)
                loaded[crisis_type] = [
                    CrisisResource(crisis_type=crisis_type, **entry)
                    for entry in entries
                ]
        except (OSError, ValueError, TypeError, AttributeError) as e:
            raise ResourceCatalogError(
                f"Invalid resource catalog: {e}",
                path=config_path,
            ) from e

        self._resources.update(loaded)
        logger.info(
            "Loaded crisis resource catalog",
            path=config_path,
            category_count=len(loaded),
        )

    def get_crisis_resources(self, crisis_type: CrisisType) -> list[CrisisResource]:
        """
        Get resources for a crisis type, most important first.

        Args:
            crisis_type: Classified crisis type

        Returns:
            Ordered resource list (a copy)
        """
        resources = list(self._resources.get(crisis_type, []))

        if crisis_type == CrisisType.SEVERE_DISTRESS:
            resources.extend(self._resources.get(CrisisType.NONE, []))

        return resources

    def get_emergency_contacts(self) -> list[Contact]:
        """Get emergency contacts."""
        return list(self._contacts)

    def add_crisis_resource(self, resource: CrisisResource) -> None:
        """Add a resource to its category."""
        self._resources.setdefault(resource.crisis_type, []).append(resource)

    def add_emergency_contact(self, contact: Contact) -> None:
        """Add an emergency contact."""
        self._contacts.append(contact)

    def get_resources_by_availability(self, availability: str) -> list[CrisisResource]:
        """Get all resources with an exact availability string."""
        return [
            resource
            for resources in self._resources.values()
            for resource in resources
            if resource.availability == availability
        ]

    def search_resources(self, keyword: str) -> list[CrisisResource]:
        """Case-insensitive search over resource names and descriptions."""
        term = keyword.lower()
        return [
            resource
            for resources in self._resources.values()
            for resource in resources
            if term in resource.name.lower() or term in resource.description.lower()
        ]

    def format_resource_message(self, resources: list[CrisisResource]) -> str:
        """
        Format resources for presentation to the user.

        Resources are grouped by category in fixed priority order:
        self-harm, medical, severe distress, general.

        Args:
            resources: Resources to present

        Returns:
            Formatted message, never empty
        """
        if not resources:
            return self.EMPTY_MESSAGE

        grouped: dict[CrisisType, list[CrisisResource]] = {}
        for resource in resources:
            grouped.setdefault(resource.crisis_type, []).append(resource)

        lines = [self.OPENING_LINE, ""]
        for crisis_type, heading in self.SECTION_ORDER:
            section = grouped.get(crisis_type)
            if not section:
                continue
            lines.append(f"**{heading}:**")
            for resource in section:
                lines.extend(self._format_single(resource))
            lines.append("")

        lines.append(self.CLOSING_LINE)
        return "\n".join(lines)

    def _format_single(self, resource: CrisisResource) -> list[str]:
        lines = [f"• **{resource.name}**", f"  Phone: {resource.phone}"]
        if resource.website:
            lines.append(f"  Website: {resource.website}")
        lines.append(f"  {resource.description}")
        lines.append(f"  Available: {resource.availability}")
        return lines
