"""Event participation package.

Pure rules for what a viewer may do on an event (resolver), the service that
loads their inputs, and the manager that performs self-service changes.
"""

from .enums import ParticipationStatus, Reasons
from .manager import ParticipationManager
from .resolver import (
    CONFERENCE_LINK_NOT_YET_KNOWN,
    apply_conference_link_visibility,
    can_access_conference_link,
    compute_participation_status,
    filter_child_events,
    is_participant_limit_reached,
)
from .service import ParticipationService, count_participants, get_membership, resolve_participation
from .types import (
    AlreadyParticipatingError,
    EventParticipation,
    Membership,
    ParticipantLimitReachedError,
    ParticipationError,
)

__all__ = [
    "AlreadyParticipatingError",
    "CONFERENCE_LINK_NOT_YET_KNOWN",
    "EventParticipation",
    "Membership",
    "ParticipantLimitReachedError",
    "ParticipationError",
    "ParticipationManager",
    "ParticipationService",
    "ParticipationStatus",
    "Reasons",
    "apply_conference_link_visibility",
    "can_access_conference_link",
    "compute_participation_status",
    "count_participants",
    "filter_child_events",
    "get_membership",
    "is_participant_limit_reached",
    "resolve_participation",
]
