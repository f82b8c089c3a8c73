import typing as t
from uuid import UUID

from ninja_extra import api_controller, route

from accounts.service.profile_service import enhance_profile_ref, profile_ref_payload
from common.authentication import I18nJWTAuth
from common.schema import ProfileIdSchema, ResponseOk
from common.throttling import UserDefaultThrottle, WriteThrottle
from events import models, schema
from events.controllers.permissions import EventAdminPermission

from .base import EventAdminBaseController


@api_controller(
    "/event-admin/{uuid:event_id}",
    auth=I18nJWTAuth(),
    permissions=[EventAdminPermission()],
    tags=["Event Admin"],
    throttle=WriteThrottle(),
)
class EventAdminParticipantsController(EventAdminBaseController):
    """Participants, waiting list and speakers."""

    @route.get(
        "/waiting-list",
        url_name="list_waiting_list",
        response=list[schema.ParticipantSchema],
        throttle=UserDefaultThrottle(),
    )
    def list_waiting_list(self, event_id: UUID) -> list[dict[str, t.Any]]:
        """The waiting list, first come first served."""
        event = self.get_one(event_id)
        records = []
        for entry in models.EventWaitingListEntry.objects.select_related("profile").filter(event=event):
            ref = profile_ref_payload(entry.profile)
            enhance_profile_ref(ref)
            records.append({"profile": ref})
        return records

    @route.post("/participants", url_name="add_participant", response=ResponseOk)
    def add_participant(self, event_id: UUID, payload: ProfileIdSchema) -> ResponseOk:
        """Add a participant. The participant limit does not apply to admins."""
        self.admin_service(event_id).add_participant(self.get_profile(payload.profile_id))
        return ResponseOk()

    @route.delete("/participants/{uuid:profile_id}", url_name="remove_participant", response={204: None})
    def remove_participant(self, event_id: UUID, profile_id: UUID) -> tuple[int, None]:
        """Remove a participant."""
        self.admin_service(event_id).remove_participant(self.get_profile(profile_id))
        return 204, None

    @route.post("/waiting-list/{uuid:profile_id}/promote", url_name="move_to_participants", response=ResponseOk)
    def move_to_participants(self, event_id: UUID, profile_id: UUID) -> ResponseOk:
        """Move a profile from the waiting list to the participants."""
        self.admin_service(event_id).move_to_participants(self.get_profile(profile_id))
        return ResponseOk()

    @route.post("/participants/{uuid:profile_id}/demote", url_name="move_to_waiting_list", response=ResponseOk)
    def move_to_waiting_list(self, event_id: UUID, profile_id: UUID) -> ResponseOk:
        """Move a participant to the end of the waiting list."""
        self.admin_service(event_id).move_to_waiting_list(self.get_profile(profile_id))
        return ResponseOk()

    @route.post("/speakers", url_name="add_speaker", response=ResponseOk)
    def add_speaker(self, event_id: UUID, payload: ProfileIdSchema) -> ResponseOk:
        """Add a speaker. Speakers see the conference link."""
        self.admin_service(event_id).add_speaker(self.get_profile(payload.profile_id))
        return ResponseOk()

    @route.delete("/speakers/{uuid:profile_id}", url_name="remove_speaker", response={204: None})
    def remove_speaker(self, event_id: UUID, profile_id: UUID) -> tuple[int, None]:
        """Remove a speaker."""
        self.admin_service(event_id).remove_speaker(self.get_profile(profile_id))
        return 204, None
