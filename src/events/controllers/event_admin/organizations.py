from uuid import UUID

from django.shortcuts import get_object_or_404
from ninja_extra import api_controller, route

from common.authentication import I18nJWTAuth
from common.schema import ResponseOk
from common.throttling import WriteThrottle
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
class EventAdminOrganizationsController(EventAdminBaseController):
    """Organizations responsible for the event."""

    @route.get(
        "/organizations", url_name="list_responsible_organizations", response=schema.ResponsibleOrganizationsSchema
    )
    def list_organizations(self, event_id: UUID, query: str | None = None) -> dict[str, object]:
        """List the responsible organizations.

        Also lists your own organizations that are not responsible yet and, when `query` is given,
        other organizations whose name contains every word of it.
        """
        return self.admin_service(event_id).responsible_organizations_overview(self.viewer(), query)

    @route.post("/organizations", url_name="add_responsible_organization", response=ResponseOk)
    def add_organization(self, event_id: UUID, payload: schema.ResponsibleOrganizationAddSchema) -> ResponseOk:
        """Mark an organization as responsible for the event."""
        service = self.admin_service(event_id)
        service.add_responsible_organization(get_object_or_404(models.Organization, pk=payload.organization_id))
        return ResponseOk()

    @route.delete(
        "/organizations/{uuid:organization_id}", url_name="remove_responsible_organization", response={204: None}
    )
    def remove_organization(self, event_id: UUID, organization_id: UUID) -> tuple[int, None]:
        """Remove an organization from the responsible ones."""
        service = self.admin_service(event_id)
        service.remove_responsible_organization(get_object_or_404(models.Organization, pk=organization_id))
        return 204, None
