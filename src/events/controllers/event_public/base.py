import typing as t

from common.controllers import UserAwareController
from events import models


class EventPublicBaseController(UserAwareController):
    """Base controller for public event endpoints.

    Subclasses should be decorated with @api_controller to register routes.
    """

    def get_one(self, slug: str) -> models.Event:
        """Event by slug among the ones the viewer may open."""
        return t.cast(
            models.Event,
            self.get_object_or_exception(models.Event.objects.for_viewer(self.viewer()), slug=slug),
        )
