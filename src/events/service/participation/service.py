"""ParticipationService: loads everything the participation rules need."""

import uuid
from datetime import datetime

from django.db.models import QuerySet
from django.utils import timezone

from accounts.models import Profile
from common.viewer import Viewer
from events import models

from .resolver import compute_participation_status, is_participant_limit_reached
from .types import EventParticipation, Membership


def aggregated_event_ids(event: models.Event) -> list[uuid.UUID]:
    """The event itself plus, if it currently has children, all of its descendants."""
    if not event.child_events.exists():
        return [event.pk]
    return [event.pk, *event.descendant_ids()]


def count_participants(event: models.Event, event_ids: list[uuid.UUID] | None = None) -> int:
    """Distinct participants across the event's aggregation scope."""
    event_ids = event_ids if event_ids is not None else aggregated_event_ids(event)
    if len(event_ids) == 1:
        return models.EventParticipant.objects.filter(event_id=event_ids[0]).count()
    return (
        models.EventParticipant.objects.filter(event_id__in=event_ids).values("profile_id").distinct().count()
    )


def get_membership(event: models.Event, viewer: Viewer) -> Membership:
    """Independent membership lookups for the viewer on this event only."""
    if viewer.is_anonymous:
        return Membership()
    lookup = {"event": event, "profile_id": viewer.profile_id}
    return Membership(
        is_participant=models.EventParticipant.objects.filter(**lookup).exists(),
        is_on_waiting_list=models.EventWaitingListEntry.objects.filter(**lookup).exists(),
        is_speaker=models.EventSpeaker.objects.filter(**lookup).exists(),
        is_team_member=models.EventTeamMember.objects.filter(**lookup).exists(),
    )


class ParticipationService:
    """Resolves a viewer's participation on an event.

    Events with children aggregate participants and speakers over the whole
    descendant tree (full depth), deduplicated by profile. Events without children
    only look at their own records.
    """

    def __init__(self, event: models.Event, viewer: Viewer, now: datetime | None = None) -> None:
        """Load membership and the aggregation scope."""
        self.event = event
        self.viewer = viewer
        self.now = now or timezone.now()
        self.event_ids = aggregated_event_ids(event)
        self.membership = get_membership(event, viewer)

    @property
    def is_full_depth(self) -> bool:
        """Whether listings aggregate over descendants."""
        return len(self.event_ids) > 1

    def participant_count(self) -> int:
        """Distinct participants in scope."""
        return count_participants(self.event, self.event_ids)

    def participants(self) -> QuerySet[Profile]:
        """Participant profiles in scope, each profile once."""
        return Profile.objects.filter(participations__event_id__in=self.event_ids).distinct()

    def speakers(self) -> QuerySet[Profile]:
        """Speaker profiles in scope, each profile once."""
        return Profile.objects.filter(speaker_roles__event_id__in=self.event_ids).distinct()

    def resolve(self) -> EventParticipation:
        """Compute the participation projection."""
        count = self.participant_count()
        status = compute_participation_status(
            canceled=self.event.canceled,
            participation_from=self.event.participation_from,
            participation_until=self.event.participation_until,
            participant_limit=self.event.participant_limit,
            participant_count=count,
            membership=self.membership,
            viewer_is_anonymous=self.viewer.is_anonymous,
            now=self.now,
        )
        return EventParticipation(
            event_id=self.event.pk,
            **self.membership.model_dump(),
            participant_count=count,
            participant_limit=self.event.participant_limit,
            participant_limit_reached=is_participant_limit_reached(self.event.participant_limit, count),
            status=status,
        )


def resolve_participation(event: models.Event, viewer: Viewer, now: datetime | None = None) -> EventParticipation:
    """Shortcut for ParticipationService(event, viewer, now).resolve()."""
    return ParticipationService(event, viewer, now).resolve()
