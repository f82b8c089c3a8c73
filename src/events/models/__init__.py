from .event import (
    Event,
    EventDocument,
    EventParticipant,
    EventResponsibleOrganization,
    EventSpeaker,
    EventTeamMember,
    EventWaitingListEntry,
)
from .organization import Organization, OrganizationMember

__all__ = [
    # Events
    "Event",
    "EventDocument",
    "EventParticipant",
    "EventResponsibleOrganization",
    "EventSpeaker",
    "EventTeamMember",
    "EventWaitingListEntry",
    # Organizations
    "Organization",
    "OrganizationMember",
]
