import typing as t
from uuid import UUID

from django.shortcuts import get_object_or_404
from ninja_extra import api_controller, route

from common.authentication import I18nJWTAuth
from common.schema import ResponseOk, VisibilitySettingsSchema
from common.throttling import WriteThrottle
from events import models, schema
from events.controllers.permissions import EventAdminPermission
from events.service import event_service

from .base import EventAdminBaseController


@api_controller(
    "/event-admin/{uuid:event_id}",
    auth=I18nJWTAuth(),
    permissions=[EventAdminPermission()],
    tags=["Event Admin"],
    throttle=WriteThrottle(),
)
class EventAdminCoreController(EventAdminBaseController):
    """Event data, lifecycle and hierarchy."""

    @route.put("", url_name="update_event", response=schema.EventInListSchema)
    def update_event(self, event_id: UUID, payload: schema.EventEditSchema) -> dict[str, t.Any]:
        """Change event details. Only the fields sent are updated."""
        event = event_service.update_event(self.get_one(event_id), payload)
        return event_service.event_list_payloads([event], viewer_is_anonymous=False)[0]

    @route.put("/visibility", url_name="update_event_visibility", response=ResponseOk)
    def update_visibility(self, event_id: UUID, payload: VisibilitySettingsSchema) -> ResponseOk:
        """Choose which event fields anonymous visitors can see."""
        event_service.update_visibility_settings(self.get_one(event_id), payload.visibility_settings)
        return ResponseOk()

    @route.put("/participant-limit", url_name="update_participant_limit", response=schema.ParticipantLimitSchema)
    def update_participant_limit(self, event_id: UUID, payload: schema.ParticipantLimitSchema) -> models.Event:
        """Set the participant limit. Zero, negative or null removes it.

        The limit cannot be set below the current number of participants.
        """
        return self.admin_service(event_id).update_participant_limit(payload.participant_limit)

    @route.put("/publish", url_name="publish_event", response=schema.PublishSchema)
    def publish(self, event_id: UUID, payload: schema.PublishSchema) -> models.Event:
        """Publish or unpublish the event."""
        return self.admin_service(event_id).publish(payload.published)

    @route.put("/cancel", url_name="cancel_event", response=schema.CancelSchema)
    def cancel(self, event_id: UUID, payload: schema.CancelSchema) -> models.Event:
        """Cancel the event or take the cancellation back. Canceled events accept no registrations."""
        return self.admin_service(event_id).cancel(payload.canceled)

    @route.post("/child-events", url_name="add_child_event", response=ResponseOk)
    def add_child_event(self, event_id: UUID, payload: schema.ChildEventActionSchema) -> ResponseOk:
        """Nest an event you also administer below this one."""
        child = get_object_or_404(models.Event, pk=payload.event_id)
        self.admin_service(event_id).add_child_event(self.viewer(), child)
        return ResponseOk()

    @route.delete("/child-events/{uuid:child_id}", url_name="remove_child_event", response={204: None})
    def remove_child_event(self, event_id: UUID, child_id: UUID) -> tuple[int, None]:
        """Detach a child event; it becomes a top-level event."""
        child = get_object_or_404(models.Event, pk=child_id)
        self.admin_service(event_id).remove_child_event(child)
        return 204, None

    @route.post("/delete", url_name="delete_event", response={204: None})
    def delete_event(self, event_id: UUID, payload: schema.EventDeleteSchema) -> tuple[int, None]:
        """Delete the event for good.

        The payload must repeat your profile id, the event id and the exact event name.
        """
        self.admin_service(event_id).delete_event(self.viewer(), payload)
        return 204, None
