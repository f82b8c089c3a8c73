from uuid import UUID

from ninja_extra import api_controller, route

from common.authentication import I18nJWTAuth
from common.schema import ProfileIdSchema, ResponseOk, SetPrivilegeSchema
from common.throttling import WriteThrottle
from events.controllers.permissions import EventAdminPermission

from .base import EventAdminBaseController


class TeamMemberAddSchema(ProfileIdSchema):
    is_privileged: bool = False


@api_controller(
    "/event-admin/{uuid:event_id}",
    auth=I18nJWTAuth(),
    permissions=[EventAdminPermission()],
    tags=["Event Admin"],
    throttle=WriteThrottle(),
)
class EventAdminTeamController(EventAdminBaseController):
    """Event team management."""

    @route.post("/team", url_name="add_event_team_member", response=ResponseOk)
    def add_team_member(self, event_id: UUID, payload: TeamMemberAddSchema) -> ResponseOk:
        """Add a team member. Privileged team members administer the event."""
        self.admin_service(event_id).add_team_member(self.get_profile(payload.profile_id), payload.is_privileged)
        return ResponseOk()

    @route.delete("/team/{uuid:profile_id}", url_name="remove_event_team_member", response={204: None})
    def remove_team_member(self, event_id: UUID, profile_id: UUID) -> tuple[int, None]:
        """Remove a team member. The last privileged member cannot be removed."""
        self.admin_service(event_id).remove_team_member(self.get_profile(profile_id))
        return 204, None

    @route.put("/team/privilege", url_name="set_event_team_member_privilege", response=ResponseOk)
    def set_privilege(self, event_id: UUID, payload: SetPrivilegeSchema) -> ResponseOk:
        """Grant or revoke admin rights. The last privileged member cannot be demoted."""
        self.admin_service(event_id).set_team_member_privilege(
            self.get_profile(payload.profile_id), payload.is_privileged
        )
        return ResponseOk()
