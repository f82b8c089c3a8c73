import typing as t
from uuid import UUID

from django.shortcuts import get_object_or_404

from accounts.models import Profile
from common.controllers import UserAwareController
from events import models
from events.service.event_admin_service import EventAdminService


class EventAdminBaseController(UserAwareController):
    """Base controller for event admin endpoints.

    Subclasses should be decorated with @api_controller to register routes.
    """

    def get_one(self, event_id: UUID) -> models.Event:
        """The event, if the viewer administers it."""
        return t.cast(models.Event, self.get_object_or_exception(models.Event, pk=event_id))

    def admin_service(self, event_id: UUID) -> EventAdminService:
        """Admin operations on the event."""
        return EventAdminService(self.get_one(event_id))

    def get_profile(self, profile_id: UUID) -> Profile:
        """Wrapper helper."""
        return get_object_or_404(Profile, pk=profile_id)
