from django.http import HttpRequest
from ninja_extra import ControllerBase
from ninja_extra.permissions import BasePermission

from common.viewer import Mode, Viewer
from events import models
from events.service.modes import derive_event_mode, derive_organization_mode


class RootPermission(BasePermission):
    message = "Not privileged"

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Must implement abstract method. This is due to an error in Ninja Extra.

        This Method will be ignored, only has_object_permission will be called.
        """
        return True


class EventAdminPermission(RootPermission):
    def has_object_permission(self, request: HttpRequest, controller: ControllerBase, obj: models.Event) -> bool:
        """Privileged event team members administer the event."""
        return derive_event_mode(Viewer.from_user(request.user), obj) == Mode.ADMIN  # type: ignore[arg-type]


class OrganizationAdminPermission(RootPermission):
    def has_object_permission(
        self, request: HttpRequest, controller: ControllerBase, obj: models.Organization
    ) -> bool:
        """Privileged organization members administer the organization."""
        return derive_organization_mode(Viewer.from_user(request.user), obj) == Mode.ADMIN  # type: ignore[arg-type]
