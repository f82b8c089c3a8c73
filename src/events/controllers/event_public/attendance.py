from ninja_extra import api_controller, route

from common.authentication import I18nJWTAuth, OptionalAuth
from common.throttling import WriteThrottle
from events.service.participation import EventParticipation, ParticipationManager, resolve_participation

from .base import EventPublicBaseController


@api_controller("/events", auth=OptionalAuth(), tags=["Events"])
class EventPublicAttendanceController(EventPublicBaseController):
    """Self-service participation and waiting list."""

    @route.get("/{slug}/participation", url_name="get_my_participation", response=EventParticipation)
    def get_participation(self, slug: str) -> EventParticipation:
        """What you can do on this event right now.

        `status` tells the frontend which action to offer: `can_join`, `can_waitlist`, or the reason
        why neither is possible (canceled, registration not open yet or closed, already involved,
        login required).
        """
        return resolve_participation(self.get_one(slug), self.viewer())

    @route.post(
        "/{slug}/participate",
        url_name="participate",
        response=EventParticipation,
        auth=I18nJWTAuth(),
        throttle=WriteThrottle(),
    )
    def participate(self, slug: str) -> EventParticipation:
        """Join the event as a participant.

        Possible while registration is open and there is a free place. Profiles on the waiting
        list are moved over. Fails with 400 if a concurrent registration took the last place.
        """
        event = self.get_one(slug)
        ParticipationManager(self.user(), event).join()
        return resolve_participation(event, self.viewer())

    @route.delete(
        "/{slug}/participate",
        url_name="leave_event",
        response=EventParticipation,
        auth=I18nJWTAuth(),
        throttle=WriteThrottle(),
    )
    def leave(self, slug: str) -> EventParticipation:
        """Stop participating while registration is open."""
        event = self.get_one(slug)
        ParticipationManager(self.user(), event).leave()
        return resolve_participation(event, self.viewer())

    @route.post(
        "/{slug}/waiting-list",
        url_name="join_waiting_list",
        response=EventParticipation,
        auth=I18nJWTAuth(),
        throttle=WriteThrottle(),
    )
    def join_waiting_list(self, slug: str) -> EventParticipation:
        """Queue up for a full event."""
        event = self.get_one(slug)
        ParticipationManager(self.user(), event).join_waiting_list()
        return resolve_participation(event, self.viewer())

    @route.delete(
        "/{slug}/waiting-list",
        url_name="leave_waiting_list",
        response=EventParticipation,
        auth=I18nJWTAuth(),
        throttle=WriteThrottle(),
    )
    def leave_waiting_list(self, slug: str) -> EventParticipation:
        """Leave the waiting list."""
        event = self.get_one(slug)
        ParticipationManager(self.user(), event).leave_waiting_list()
        return resolve_participation(event, self.viewer())
