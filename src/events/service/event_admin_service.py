"""Changes made by event admins (privileged team members).

Admins act on behalf of others: they may add participants beyond the participant
limit and outside the registration window. Every change runs in its own
transaction with the event row locked.
"""

import typing as t
import uuid

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import Profile
from common.exceptions import AlreadyMemberError, IdentityMismatchError, NotPrivilegedError
from common.images import ImagePreset, derive_image_url
from common.teams import ensure_other_privileged_member
from common.utils import to_payload
from common.viewer import Mode, Viewer
from events import models, schema
from events.service.event_service import ORGANIZATION_REF_FIELDS
from events.service.modes import derive_event_mode
from events.service.participation import AlreadyParticipatingError, ParticipationStatus, Reasons, count_participants

logger = structlog.get_logger(__name__)

RESPONSIBLE_ORGANIZATION_SUGGESTIONS = 10


class EventAdminService:
    def __init__(self, event: models.Event) -> None:
        """Initialize the service for one event."""
        self.event = event

    def _lock(self) -> None:
        self.event = models.Event.objects.select_for_update().get(pk=self.event.pk)

    def _log(self, event_name: str, **kwargs: object) -> None:
        logger.info(event_name, event_id=str(self.event.pk), **{k: str(v) for k, v in kwargs.items()})

    # Participants and waiting list

    @transaction.atomic
    def add_participant(self, profile: Profile) -> models.EventParticipant:
        """Add a participant, taking them off the waiting list. The participant limit does not apply."""
        self._lock()
        if models.EventParticipant.objects.filter(event=self.event, profile=profile).exists():
            raise AlreadyParticipatingError(str(_(Reasons.ALREADY_JOINED)), status=ParticipationStatus.ALREADY_JOINED)
        models.EventWaitingListEntry.objects.filter(event=self.event, profile=profile).delete()
        participant = models.EventParticipant.objects.create(event=self.event, profile=profile)
        self._log("participant_added", profile_id=profile.pk)
        return participant

    @transaction.atomic
    def remove_participant(self, profile: Profile) -> None:
        """Remove a participant."""
        self._lock()
        get_object_or_404(models.EventParticipant, event=self.event, profile=profile).delete()
        self._log("participant_removed", profile_id=profile.pk)

    @transaction.atomic
    def move_to_participants(self, profile: Profile) -> models.EventParticipant:
        """Promote a profile from the waiting list."""
        self._lock()
        get_object_or_404(models.EventWaitingListEntry, event=self.event, profile=profile).delete()
        participant, _created = models.EventParticipant.objects.get_or_create(event=self.event, profile=profile)
        self._log("participant_promoted", profile_id=profile.pk)
        return participant

    @transaction.atomic
    def move_to_waiting_list(self, profile: Profile) -> models.EventWaitingListEntry:
        """Move a participant back to the end of the waiting list."""
        self._lock()
        get_object_or_404(models.EventParticipant, event=self.event, profile=profile).delete()
        entry, _created = models.EventWaitingListEntry.objects.get_or_create(event=self.event, profile=profile)
        self._log("participant_moved_to_waiting_list", profile_id=profile.pk)
        return entry

    @transaction.atomic
    def update_participant_limit(self, participant_limit: int | None) -> models.Event:
        """Set the participant limit. Zero, negative values and None mean unlimited.

        Raises:
            ValidationError: if the limit is below the current number of participants.
        """
        self._lock()
        limit = participant_limit if participant_limit is not None and participant_limit > 0 else None
        if limit is not None:
            current = count_participants(self.event)
            if limit < current:
                raise ValidationError(
                    {
                        "participant_limit": [
                            _("The limit cannot be lower than the current number of participants (%(count)s).")
                            % {"count": current}
                        ]
                    }
                )
        self.event.participant_limit = limit
        self.event.save(update_fields=["participant_limit", "updated_at"])
        self._log("participant_limit_updated", participant_limit=limit)
        return self.event

    # Speakers

    @transaction.atomic
    def add_speaker(self, profile: Profile) -> models.EventSpeaker:
        """Add a speaker."""
        speaker, created = models.EventSpeaker.objects.get_or_create(event=self.event, profile=profile)
        if not created:
            raise AlreadyMemberError(str(_("This profile is already a speaker.")))
        self._log("speaker_added", profile_id=profile.pk)
        return speaker

    @transaction.atomic
    def remove_speaker(self, profile: Profile) -> None:
        """Remove a speaker."""
        get_object_or_404(models.EventSpeaker, event=self.event, profile=profile).delete()
        self._log("speaker_removed", profile_id=profile.pk)

    # Team

    @transaction.atomic
    def add_team_member(self, profile: Profile, is_privileged: bool = False) -> models.EventTeamMember:
        """Add a team member."""
        member, created = models.EventTeamMember.objects.get_or_create(
            event=self.event, profile=profile, defaults={"is_privileged": is_privileged}
        )
        if not created:
            raise AlreadyMemberError(str(_("This profile is already on the team.")))
        self._log("team_member_added", profile_id=profile.pk, is_privileged=is_privileged)
        return member

    @transaction.atomic
    def remove_team_member(self, profile: Profile) -> None:
        """Remove a team member. The last privileged member cannot be removed."""
        self._lock()
        member = get_object_or_404(models.EventTeamMember, event=self.event, profile=profile)
        ensure_other_privileged_member(self.event.team_members.all(), profile.pk)
        member.delete()
        self._log("team_member_removed", profile_id=profile.pk)

    @transaction.atomic
    def set_team_member_privilege(self, profile: Profile, is_privileged: bool) -> models.EventTeamMember:
        """Grant or revoke admin rights. The last privileged member cannot be demoted."""
        self._lock()
        member = get_object_or_404(models.EventTeamMember, event=self.event, profile=profile)
        if not is_privileged:
            ensure_other_privileged_member(self.event.team_members.all(), profile.pk)
        member.is_privileged = is_privileged
        member.save(update_fields=["is_privileged", "updated_at"])
        self._log("team_member_privilege_set", profile_id=profile.pk, is_privileged=is_privileged)
        return member

    # Hierarchy

    @transaction.atomic
    def add_child_event(self, viewer: Viewer, child: models.Event) -> models.Event:
        """Nest another event below this one. The viewer must administer both.

        Raises:
            NotPrivilegedError: if the viewer is not an admin of the child.
            ValidationError: if the child is this event or one of its ancestors.
        """
        self._lock()
        if derive_event_mode(viewer, child) != Mode.ADMIN:
            raise NotPrivilegedError()
        if child.pk == self.event.pk or child.pk in self.event.ancestor_ids():
            raise ValidationError({"event_id": [_("An event cannot be nested inside itself.")]})
        child.parent_event = self.event
        child.save()
        self._log("child_event_added", child_event_id=child.pk)
        return child

    @transaction.atomic
    def remove_child_event(self, child: models.Event) -> None:
        """Detach a child event; it becomes a top-level event."""
        self._lock()
        if child.parent_event_id != self.event.pk:
            raise ValidationError({"event_id": [_("This event is not a child of the event.")]})
        child.parent_event = None
        child.save()
        self._log("child_event_removed", child_event_id=child.pk)

    # Lifecycle

    @transaction.atomic
    def publish(self, published: bool) -> models.Event:
        """Publish or unpublish the event."""
        self._lock()
        self.event.published = published
        self.event.save(update_fields=["published", "updated_at"])
        self._log("event_published" if published else "event_unpublished")
        return self.event

    @transaction.atomic
    def cancel(self, canceled: bool) -> models.Event:
        """Cancel the event or take the cancellation back."""
        self._lock()
        self.event.canceled = canceled
        self.event.save(update_fields=["canceled", "updated_at"])
        self._log("event_canceled" if canceled else "event_uncanceled")
        return self.event

    @transaction.atomic
    def delete_event(self, viewer: Viewer, payload: schema.EventDeleteSchema) -> None:
        """Delete the event. The payload has to repeat the admin's id, the event id and its name.

        Raises:
            IdentityMismatchError: if profile_id is not the authenticated profile.
            HttpError: 400 if the event id does not match.
            ValidationError: if the event name does not match.
        """
        if payload.profile_id != viewer.profile_id:
            raise IdentityMismatchError()
        self._lock()
        if payload.event_id != self.event.pk:
            raise HttpError(400, str(_("The event id does not match.")))
        if payload.event_name != self.event.name:
            raise ValidationError({"event_name": [_("The name does not match the event name.")]})
        event_id: uuid.UUID = self.event.pk
        self.event.delete()
        logger.info("event_deleted", event_id=str(event_id), profile_id=str(viewer.profile_id))

    # Responsible organizations

    def responsible_organizations_overview(self, viewer: Viewer, query: str | None = None) -> dict[str, t.Any]:
        """Responsible organizations plus organizations that could be added.

        ``own_organizations`` are the viewer's organizations that are not yet responsible.
        ``suggestions`` are only computed for a non-empty query; every word has to match the name.
        """
        responsible = [
            record.organization
            for record in self.event.responsible_organizations.select_related("organization").order_by(
                "organization__name"
            )
        ]
        responsible_ids = [organization.pk for organization in responsible]
        own = models.Organization.objects.filter(team_members__profile_id=viewer.profile_id).exclude(
            pk__in=responsible_ids
        )
        suggestions: list[models.Organization] = []
        words = (query or "").split()
        if words:
            candidates = models.Organization.objects.exclude(pk__in=responsible_ids)
            for word in words:
                candidates = candidates.filter(name__icontains=word)
            suggestions = list(candidates[:RESPONSIBLE_ORGANIZATION_SUGGESTIONS])
        return {
            "responsible_organizations": [_organization_ref(organization) for organization in responsible],
            "own_organizations": [_organization_ref(organization) for organization in own.distinct()],
            "suggestions": [_organization_ref(organization) for organization in suggestions],
        }

    @transaction.atomic
    def add_responsible_organization(self, organization: models.Organization) -> models.EventResponsibleOrganization:
        """Mark an organization as responsible for the event."""
        self._lock()
        record, created = models.EventResponsibleOrganization.objects.get_or_create(
            event=self.event, organization=organization
        )
        if not created:
            raise AlreadyMemberError(str(_("This organization is already responsible for the event.")))
        self._log("responsible_organization_added", organization_id=organization.pk)
        return record

    @transaction.atomic
    def remove_responsible_organization(self, organization: models.Organization) -> None:
        """Remove an organization from the responsible ones."""
        self._lock()
        get_object_or_404(models.EventResponsibleOrganization, event=self.event, organization=organization).delete()
        self._log("responsible_organization_removed", organization_id=organization.pk)


def _organization_ref(organization: models.Organization) -> dict[str, t.Any]:
    payload = to_payload(organization, ORGANIZATION_REF_FIELDS)
    payload["logo"] = derive_image_url(payload["logo"], ImagePreset.RESPONSIBLE_ORGANIZATION_LOGO)
    return payload
