"""Enums for event participation."""

from enum import StrEnum

from django.utils.translation import gettext_noop


class ParticipationStatus(StrEnum):
    """What a viewer can currently do on an event, in order of precedence."""

    CANCELED = "canceled"
    CLOSED_BEFORE = "closed_before"
    CLOSED_AFTER = "closed_after"
    ALREADY_JOINED = "already_joined"
    ALREADY_WAITING = "already_waiting"
    ALREADY_INVOLVED = "already_involved"
    LOGIN_REQUIRED = "login_required"
    CAN_WAITLIST = "can_waitlist"
    CAN_JOIN = "can_join"


class Reasons(StrEnum):
    """Messages explaining why an action is not possible.

    Note: Strings are marked with gettext_noop() for translation extraction.
    The actual translation happens where the error is raised.
    """

    CANCELED = gettext_noop("This event has been canceled.")
    CLOSED_BEFORE = gettext_noop("Registration for this event has not opened yet.")
    CLOSED_AFTER = gettext_noop("Registration for this event is closed.")
    ALREADY_JOINED = gettext_noop("You are already participating in this event.")
    ALREADY_WAITING = gettext_noop("You are already on the waiting list for this event.")
    ALREADY_INVOLVED = gettext_noop("Speakers and team members cannot register as participants.")
    LOGIN_REQUIRED = gettext_noop("You need to log in to participate.")
    EVENT_IS_FULL = gettext_noop("The participant limit of this event has been reached.")
    EVENT_NOT_FULL = gettext_noop("There are free places left, please participate directly.")
    NOT_PARTICIPATING = gettext_noop("You are not participating in this event.")
    NOT_WAITING = gettext_noop("You are not on the waiting list for this event.")
    LIMIT_RACE = gettext_noop(
        "The participant limit was reached while processing your request. Please check the current number of "
        "participants and try again."
    )


STATUS_REASONS: dict[ParticipationStatus, Reasons] = {
    ParticipationStatus.CANCELED: Reasons.CANCELED,
    ParticipationStatus.CLOSED_BEFORE: Reasons.CLOSED_BEFORE,
    ParticipationStatus.CLOSED_AFTER: Reasons.CLOSED_AFTER,
    ParticipationStatus.ALREADY_JOINED: Reasons.ALREADY_JOINED,
    ParticipationStatus.ALREADY_WAITING: Reasons.ALREADY_WAITING,
    ParticipationStatus.ALREADY_INVOLVED: Reasons.ALREADY_INVOLVED,
    ParticipationStatus.LOGIN_REQUIRED: Reasons.LOGIN_REQUIRED,
    ParticipationStatus.CAN_WAITLIST: Reasons.EVENT_IS_FULL,
    ParticipationStatus.CAN_JOIN: Reasons.EVENT_NOT_FULL,
}
