"""Pure participation rules.

Nothing here touches the database: callers pass plain values (as loaded by
``ParticipationService``) and get a closed ``ParticipationStatus`` back.
"""

import typing as t
import uuid
from datetime import datetime

from .enums import ParticipationStatus
from .types import Membership

# Shown to eligible viewers while the organizers have not entered a link yet
CONFERENCE_LINK_NOT_YET_KNOWN = "noch nicht bekannt"


def is_participant_limit_reached(participant_limit: int | None, participant_count: int) -> bool:
    """A limit of None means unlimited."""
    return participant_limit is not None and participant_count >= participant_limit


def registration_window_status(
    participation_from: datetime, participation_until: datetime, now: datetime
) -> ParticipationStatus | None:
    """Return CLOSED_BEFORE / CLOSED_AFTER outside the window, None inside it (bounds inclusive)."""
    if now < participation_from:
        return ParticipationStatus.CLOSED_BEFORE
    if now > participation_until:
        return ParticipationStatus.CLOSED_AFTER
    return None


def compute_participation_status(
    *,
    canceled: bool,
    participation_from: datetime,
    participation_until: datetime,
    participant_limit: int | None,
    participant_count: int,
    membership: Membership,
    viewer_is_anonymous: bool,
    now: datetime,
) -> ParticipationStatus:
    """Decide what the viewer can do on an event.

    Checks run in the order of ParticipationStatus: cancellation, then the
    registration window, then existing involvement, then capacity.
    """
    if canceled:
        return ParticipationStatus.CANCELED
    if closed := registration_window_status(participation_from, participation_until, now):
        return closed
    if membership.is_participant:
        return ParticipationStatus.ALREADY_JOINED
    if membership.is_on_waiting_list:
        return ParticipationStatus.ALREADY_WAITING
    if membership.is_speaker or membership.is_team_member:
        return ParticipationStatus.ALREADY_INVOLVED
    if viewer_is_anonymous:
        return ParticipationStatus.LOGIN_REQUIRED
    if is_participant_limit_reached(participant_limit, participant_count):
        return ParticipationStatus.CAN_WAITLIST
    return ParticipationStatus.CAN_JOIN


def can_access_conference_link(membership: Membership) -> bool:
    """Participants, speakers and team members may see the conference link."""
    return membership.is_participant or membership.is_speaker or membership.is_team_member


def apply_conference_link_visibility(payload: dict[str, t.Any], membership: Membership) -> dict[str, t.Any]:
    """Mask the conference link and code according to the viewer's membership.

    Returns a new dict. Viewers without access get both fields as None. Viewers
    with access but no link entered yet get the not-yet-known placeholder.
    """
    masked = dict(payload)
    if not can_access_conference_link(membership):
        masked["conference_link"] = None
        masked["conference_code"] = None
    elif not masked.get("conference_link"):
        masked["conference_link"] = CONFERENCE_LINK_NOT_YET_KNOWN
        masked["conference_code"] = None
    return masked


def filter_child_events(
    child_events: t.Iterable[dict[str, t.Any]], team_event_ids: t.Collection[uuid.UUID]
) -> list[dict[str, t.Any]]:
    """Drop unpublished children unless the viewer is on their team.

    ``team_event_ids`` holds the ids of the events the viewer is a team member of,
    which includes the ones they administer.
    """
    return [child for child in child_events if child.get("published") or child.get("id") in team_event_ids]
