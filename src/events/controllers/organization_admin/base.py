from common.controllers import UserAwareController
from events import models


class OrganizationAdminBaseController(UserAwareController):
    """Base controller for organization admin endpoints.

    Subclasses should be decorated with @api_controller to register routes.
    """

    def get_one(self, slug: str) -> models.Organization:
        """The organization, if the viewer administers it."""
        return self.get_object_or_exception(models.Organization, slug=slug)  # type: ignore[no-any-return]
