import typing as t

from ninja_extra import ControllerBase, api_controller, route

from api import schema, service
from common.authentication import ApiKeyAuth
from common.throttling import PublicApiThrottle


@api_controller("/public", auth=ApiKeyAuth(), tags=["Public API"], throttle=PublicApiThrottle())
class PublicApiController(ControllerBase):
    """Read-only API for partner sites, authenticated with an `X-API-Key` header.

    Everything is returned as an anonymous visitor would see it, plus a `url` pointing to the
    entity's page on the community site.
    """

    @route.get("/profile/{username}", url_name="public_profile", response=schema.PublicProfileSchema)
    def get_profile(self, username: str) -> dict[str, t.Any]:
        """A profile by username."""
        return service.get_public_profile(username)

    @route.get("/project/{slug}", url_name="public_project", response=schema.PublicProjectSchema)
    def get_project(self, slug: str) -> dict[str, t.Any]:
        """A project by slug, with its team and responsible organizations."""
        return service.get_public_project(slug)

    @route.get("/events", url_name="public_events", response=list[schema.PublicEventSchema])
    def list_events(self, skip: int = 0, take: int = 20) -> list[dict[str, t.Any]]:
        """Published events. Upcoming and running events come first, past events after them."""
        return service.list_public_events(max(skip, 0), min(max(take, 1), 100))

    @route.get("/organizations", url_name="public_organizations", response=list[schema.PublicOrganizationSchema])
    def list_organizations(self, skip: int = 0, take: int = 20) -> list[dict[str, t.Any]]:
        """Organizations by name."""
        return service.list_public_organizations(max(skip, 0), min(max(take, 1), 100))
