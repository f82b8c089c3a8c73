from ninja_extra import api_controller, route

from common.authentication import I18nJWTAuth
from common.schema import ResponseOk, VisibilitySettingsSchema
from common.throttling import WriteThrottle
from events import models, schema
from events.controllers.permissions import OrganizationAdminPermission
from events.service import organization_service

from .base import OrganizationAdminBaseController


@api_controller(
    "/organization-admin/{slug}",
    auth=I18nJWTAuth(),
    permissions=[OrganizationAdminPermission()],
    tags=["Organization Admin"],
    throttle=WriteThrottle(),
)
class OrganizationAdminCoreController(OrganizationAdminBaseController):
    """Organization data and deletion."""

    @route.get("", url_name="get_organization_admin", response=schema.OrganizationAdminSchema)
    def get_organization(self, slug: str) -> dict[str, object]:
        """The organization with its private fields and visibility settings."""
        organization = self.get_one(slug)
        detail = organization_service.get_organization_detail(slug, self.viewer())
        return {**detail, "visibility_settings": organization.visibility_settings}

    @route.put("", url_name="update_organization", response=schema.OrganizationAdminSchema)
    def update_organization(self, slug: str, payload: schema.OrganizationEditSchema) -> dict[str, object]:
        """Change organization details. Only the fields sent are updated."""
        organization = organization_service.update_organization(self.get_one(slug), payload)
        detail = organization_service.get_organization_detail(organization.slug, self.viewer())
        return {**detail, "visibility_settings": organization.visibility_settings}

    @route.put("/visibility", url_name="update_organization_visibility", response=ResponseOk)
    def update_visibility(self, slug: str, payload: VisibilitySettingsSchema) -> ResponseOk:
        """Choose which organization fields anonymous visitors can see."""
        organization_service.update_visibility_settings(self.get_one(slug), payload.visibility_settings)
        return ResponseOk()

    @route.post("/delete", url_name="delete_organization", response={204: None})
    def delete_organization(self, slug: str, payload: schema.OrganizationDeleteSchema) -> tuple[int, None]:
        """Delete the organization. The confirmation must read `really delete`."""
        organization: models.Organization = self.get_one(slug)
        organization_service.delete_organization(organization, payload.confirmation)
        return 204, None
