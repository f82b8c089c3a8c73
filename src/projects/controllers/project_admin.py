import typing as t
from uuid import UUID

from django.http import HttpRequest
from ninja_extra import ControllerBase, api_controller, route

from common.authentication import I18nJWTAuth
from common.controllers import UserAwareController
from common.schema import MemberAddSchema, ResponseOk, SetPrivilegeSchema, TeamMemberSchema, VisibilitySettingsSchema
from common.throttling import WriteThrottle
from common.viewer import Mode, Viewer
from events.controllers.permissions import RootPermission
from projects import schema
from projects.models import Project
from projects.service import project_service


class ProjectAdminPermission(RootPermission):
    def has_object_permission(self, request: HttpRequest, controller: ControllerBase, obj: Project) -> bool:
        """Privileged project team members administer the project."""
        viewer = Viewer.from_user(request.user)  # type: ignore[arg-type]
        return project_service.derive_project_mode(viewer, obj) == Mode.ADMIN


@api_controller(
    "/project-admin/{slug}",
    auth=I18nJWTAuth(),
    permissions=[ProjectAdminPermission()],
    tags=["Project Admin"],
    throttle=WriteThrottle(),
)
class ProjectAdminController(UserAwareController):
    def get_one(self, slug: str) -> Project:
        """The project, if the viewer administers it."""
        return t.cast(Project, self.get_object_or_exception(Project, slug=slug))

    @route.put("", url_name="update_project", response=schema.ProjectSchema)
    def update_project(self, slug: str, payload: schema.ProjectEditSchema) -> dict[str, t.Any]:
        """Change project details. Only the fields sent are updated."""
        project = project_service.update_project(self.get_one(slug), payload)
        return project_service.get_project_detail(project.slug, self.viewer())

    @route.put("/visibility", url_name="update_project_visibility", response=ResponseOk)
    def update_visibility(self, slug: str, payload: VisibilitySettingsSchema) -> ResponseOk:
        """Choose which project fields anonymous visitors can see."""
        project_service.update_visibility_settings(self.get_one(slug), payload.visibility_settings)
        return ResponseOk()

    @route.get("/admins", url_name="list_project_admins", response=list[TeamMemberSchema])
    def list_admins(self, slug: str) -> list[dict[str, t.Any]]:
        """Privileged team members of the project."""
        return project_service.list_admins(self.get_one(slug))

    @route.post("/members", url_name="add_project_member", response=ResponseOk)
    def add_member(self, slug: str, payload: MemberAddSchema) -> ResponseOk:
        """Add a profile to the team by username."""
        project_service.add_member(self.get_one(slug), payload.username, payload.is_privileged)
        return ResponseOk()

    @route.delete("/members/{uuid:profile_id}", url_name="remove_project_member", response={204: None})
    def remove_member(self, slug: str, profile_id: UUID) -> tuple[int, None]:
        """Remove a profile from the team. The last privileged member cannot be removed."""
        project_service.remove_member(self.get_one(slug), profile_id)
        return 204, None

    @route.put("/members/privilege", url_name="set_project_member_privilege", response=ResponseOk)
    def set_privilege(self, slug: str, payload: SetPrivilegeSchema) -> ResponseOk:
        """Grant or revoke admin rights. Unknown profiles are ignored."""
        project_service.set_member_privilege(self.get_one(slug), payload.profile_id, payload.is_privileged)
        return ResponseOk()
