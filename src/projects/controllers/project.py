import typing as t

from ninja_extra import api_controller, route

from common.authentication import I18nJWTAuth, OptionalAuth
from common.controllers import UserAwareController
from common.throttling import WriteThrottle
from projects import schema
from projects.service import project_service


@api_controller("/projects", auth=OptionalAuth(), tags=["Projects"])
class ProjectController(UserAwareController):
    @route.get("/", url_name="list_projects", response=list[schema.ProjectInListSchema])
    def list_projects(self, skip: int = 0, take: int = 20) -> list[dict[str, t.Any]]:
        """Browse projects by name."""
        return project_service.list_projects(self.viewer(), skip=max(skip, 0), take=min(max(take, 1), 100))

    @route.post(
        "/",
        url_name="create_project",
        response={201: schema.ProjectSchema},
        auth=I18nJWTAuth(),
        throttle=WriteThrottle(),
    )
    def create_project(self, payload: schema.ProjectCreateSchema) -> tuple[int, dict[str, t.Any]]:
        """Create a project. You become its privileged team member."""
        project = project_service.create_project(self.user(), payload)
        return 201, project_service.get_project_detail(project.slug, self.viewer())

    @route.get("/{slug}", url_name="get_project", response=schema.ProjectSchema)
    def get_project(self, slug: str) -> dict[str, t.Any]:
        """Retrieve the project page with its team and responsible organizations.

        Fields the project did not make public are null for anonymous visitors.
        """
        return project_service.get_project_detail(slug, self.viewer())
