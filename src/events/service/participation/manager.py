"""ParticipationManager for self-service participation changes."""

import typing as t

import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone
from django.utils.translation import gettext as _

from accounts.models import Profile
from common.viewer import Viewer
from events import models

from .enums import STATUS_REASONS, ParticipationStatus, Reasons
from .resolver import registration_window_status
from .service import ParticipationService, count_participants
from .types import (
    AlreadyParticipatingError,
    EventParticipation,
    ParticipantLimitReachedError,
    ParticipationError,
)

logger = structlog.get_logger(__name__)


class ParticipationManager:
    """The Participation Manager Class.

    Every operation locks the event row and re-resolves the participation state
    before writing. The resolved state is only a hint for the UI: after inserting a
    participant the count is taken again and the transaction is rolled back if the
    limit was exceeded by a concurrent request.
    """

    def __init__(self, profile: Profile, event: models.Event) -> None:
        """Initialize the ParticipationManager."""
        self.profile = profile
        self.event = event

    def _lock_and_resolve(self) -> EventParticipation:
        self.event = models.Event.objects.select_for_update().get(pk=self.event.pk)
        return ParticipationService(self.event, Viewer.from_user(self.profile), timezone.now()).resolve()

    def _raise(self, status: ParticipationStatus) -> t.NoReturn:
        message = _(STATUS_REASONS[status])
        raise ParticipationError(message, status=status)

    def _assert_window_open(self) -> None:
        if self.event.canceled:
            self._raise(ParticipationStatus.CANCELED)
        if closed := registration_window_status(
            self.event.participation_from, self.event.participation_until, timezone.now()
        ):
            self._raise(closed)

    @transaction.atomic
    def join(self) -> models.EventParticipant:
        """Participate in the event.

        Profiles on the waiting list are moved over when a place is free.

        Raises:
            ParticipationError: if the viewer cannot participate right now.
            ParticipantLimitReachedError: if a concurrent join took the last place.
        """
        participation = self._lock_and_resolve()
        promoted_from_waiting_list = (
            participation.status == ParticipationStatus.ALREADY_WAITING and not participation.participant_limit_reached
        )
        if participation.status != ParticipationStatus.CAN_JOIN and not promoted_from_waiting_list:
            self._raise(participation.status)

        models.EventWaitingListEntry.objects.filter(event=self.event, profile=self.profile).delete()
        try:
            with transaction.atomic():
                participant = models.EventParticipant.objects.create(event=self.event, profile=self.profile)
        except (IntegrityError, ValidationError) as e:
            status = ParticipationStatus.ALREADY_JOINED
            raise AlreadyParticipatingError(_(Reasons.ALREADY_JOINED), status=status) from e

        self._assert_capacity_after_write()
        logger.info(
            "participant_joined",
            event_id=str(self.event.pk),
            profile_id=str(self.profile.pk),
            from_waiting_list=promoted_from_waiting_list,
        )
        return participant

    @transaction.atomic
    def leave(self) -> None:
        """Stop participating in the event."""
        participation = self._lock_and_resolve()
        self._assert_window_open()
        if not participation.is_participant:
            raise ParticipationError(_(Reasons.NOT_PARTICIPATING))
        models.EventParticipant.objects.filter(event=self.event, profile=self.profile).delete()
        logger.info("participant_left", event_id=str(self.event.pk), profile_id=str(self.profile.pk))

    @transaction.atomic
    def join_waiting_list(self) -> models.EventWaitingListEntry:
        """Queue up for a full event."""
        participation = self._lock_and_resolve()
        if participation.status != ParticipationStatus.CAN_WAITLIST:
            self._raise(participation.status)
        try:
            with transaction.atomic():
                entry = models.EventWaitingListEntry.objects.create(event=self.event, profile=self.profile)
        except (IntegrityError, ValidationError) as e:
            status = ParticipationStatus.ALREADY_WAITING
            raise AlreadyParticipatingError(_(Reasons.ALREADY_WAITING), status=status) from e
        logger.info("waiting_list_joined", event_id=str(self.event.pk), profile_id=str(self.profile.pk))
        return entry

    @transaction.atomic
    def leave_waiting_list(self) -> None:
        """Leave the waiting list."""
        participation = self._lock_and_resolve()
        self._assert_window_open()
        if not participation.is_on_waiting_list:
            raise ParticipationError(_(Reasons.NOT_WAITING))
        models.EventWaitingListEntry.objects.filter(event=self.event, profile=self.profile).delete()
        logger.info("waiting_list_left", event_id=str(self.event.pk), profile_id=str(self.profile.pk))

    def _assert_capacity_after_write(self) -> None:
        limit = self.event.participant_limit
        if limit is None:
            return
        if count_participants(self.event) > limit:
            logger.warning("participant_limit_race", event_id=str(self.event.pk), participant_limit=limit)
            raise ParticipantLimitReachedError(_(Reasons.LIMIT_RACE), status=ParticipationStatus.CAN_WAITLIST)
