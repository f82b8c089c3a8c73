import typing as t

from ninja_extra import api_controller, route

from common.authentication import I18nJWTAuth, OptionalAuth
from common.throttling import WriteThrottle
from events import schema
from events.service import event_service

from .base import EventPublicBaseController


@api_controller("/events", auth=OptionalAuth(), tags=["Events"])
class EventPublicDetailsController(EventPublicBaseController):
    """Event listing, detail page and creation."""

    @route.get("/", url_name="list_events", response=list[schema.EventInListSchema])
    def list_events(self, skip: int = 0, take: int = 20) -> list[dict[str, t.Any]]:
        """Browse events. Upcoming and running events come first in start order, past events follow.

        Anonymous visitors see published events only, team members also see their unpublished ones.
        """
        return event_service.list_events(self.viewer(), skip=max(skip, 0), take=min(max(take, 1), 100))

    @route.post(
        "/",
        url_name="create_event",
        response={201: schema.EventInListSchema},
        auth=I18nJWTAuth(),
        throttle=WriteThrottle(),
    )
    def create_event(self, payload: schema.EventCreateSchema) -> tuple[int, dict[str, t.Any]]:
        """Create an unpublished event. You become its privileged team member.

        Set `parent_event_id` to nest it below an event you administer.
        """
        event = event_service.create_event(self.user(), payload)
        return 201, event_service.event_list_payloads([event], viewer_is_anonymous=False)[0]

    @route.get("/{slug}", url_name="get_event", response=schema.EventDetailSchema)
    def get_event(self, slug: str) -> dict[str, t.Any]:
        """Retrieve the event page.

        Includes participants and speakers (aggregated over all sub-events when the event has any),
        visible child events with your participation state on each, the team and the responsible
        organizations. Fields the organizers did not make public are null for anonymous visitors.
        The conference link is only shown to participants, speakers and team members.
        Unpublished events return 403 unless you are on the team.
        """
        return event_service.get_event_detail(slug, self.viewer())
