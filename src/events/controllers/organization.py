import typing as t

from ninja_extra import api_controller, route

from common.authentication import I18nJWTAuth, OptionalAuth
from common.controllers import UserAwareController
from common.throttling import WriteThrottle
from events import schema
from events.service import organization_service


@api_controller("/organizations", auth=OptionalAuth(), tags=["Organization"])
class OrganizationController(UserAwareController):
    @route.get("/", url_name="list_organizations", response=list[schema.OrganizationInListSchema])
    def list_organizations(self, skip: int = 0, take: int = 20) -> list[dict[str, t.Any]]:
        """Browse organizations by name. Private fields are null for anonymous visitors."""
        return organization_service.list_organizations(
            self.viewer(), skip=max(skip, 0), take=min(max(take, 1), 100)
        )

    @route.post(
        "/",
        url_name="create_organization",
        response={201: schema.OrganizationSchema},
        auth=I18nJWTAuth(),
        throttle=WriteThrottle(),
    )
    def create_organization(self, payload: schema.OrganizationCreateSchema) -> tuple[int, dict[str, t.Any]]:
        """Create an organization. You become its privileged member."""
        organization = organization_service.create_organization(self.user(), payload)
        return 201, organization_service.get_organization_detail(organization.slug, self.viewer())

    @route.get("/{slug}", url_name="get_organization", response=schema.OrganizationSchema)
    def get_organization(self, slug: str) -> dict[str, t.Any]:
        """Retrieve the organization page with its team, ordered by first name.

        Fields the organization did not make public are null for anonymous visitors.
        """
        return organization_service.get_organization_detail(slug, self.viewer())
