from uuid import UUID

from ninja_extra import api_controller, route

from common.authentication import I18nJWTAuth
from common.schema import MemberAddSchema, ResponseOk, SetPrivilegeSchema
from common.throttling import WriteThrottle
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
class OrganizationAdminMembersController(OrganizationAdminBaseController):
    """Organization team management."""

    @route.post("/members", url_name="add_organization_member", response=ResponseOk)
    def add_member(self, slug: str, payload: MemberAddSchema) -> ResponseOk:
        """Add a profile to the team by username."""
        organization_service.add_member(self.get_one(slug), payload.username, payload.is_privileged)
        return ResponseOk()

    @route.delete("/members/{uuid:profile_id}", url_name="remove_organization_member", response={204: None})
    def remove_member(self, slug: str, profile_id: UUID) -> tuple[int, None]:
        """Remove a profile from the team. The last privileged member cannot be removed."""
        organization_service.remove_member(self.get_one(slug), profile_id)
        return 204, None

    @route.put("/members/privilege", url_name="set_organization_member_privilege", response=ResponseOk)
    def set_privilege(self, slug: str, payload: SetPrivilegeSchema) -> ResponseOk:
        """Grant or revoke admin rights. The last privileged member cannot be demoted."""
        organization_service.set_member_privilege(self.get_one(slug), payload.profile_id, payload.is_privileged)
        return ResponseOk()
