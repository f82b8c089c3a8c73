"""Types and exceptions for event participation."""

import uuid

from pydantic import BaseModel, computed_field

from .enums import ParticipationStatus


class Membership(BaseModel):
    """How a viewer is related to an event. The kinds are independent."""

    is_participant: bool = False
    is_on_waiting_list: bool = False
    is_speaker: bool = False
    is_team_member: bool = False


class EventParticipation(BaseModel):
    """Read-only projection of a viewer's participation state on an event."""

    event_id: uuid.UUID
    is_participant: bool = False
    is_on_waiting_list: bool = False
    is_speaker: bool = False
    is_team_member: bool = False
    participant_count: int
    participant_limit: int | None = None
    participant_limit_reached: bool
    status: ParticipationStatus

    @computed_field  # type: ignore[prop-decorator]
    @property
    def can_participate(self) -> bool:
        """Whether the viewer may join as a participant right now."""
        return self.status == ParticipationStatus.CAN_JOIN

    @computed_field  # type: ignore[prop-decorator]
    @property
    def can_join_waiting_list(self) -> bool:
        """Whether the viewer may join the waiting list right now."""
        return self.status == ParticipationStatus.CAN_WAITLIST

    @property
    def membership(self) -> Membership:
        """The membership flags alone."""
        return Membership(
            is_participant=self.is_participant,
            is_on_waiting_list=self.is_on_waiting_list,
            is_speaker=self.is_speaker,
            is_team_member=self.is_team_member,
        )


class ParticipationError(Exception):
    """Raised when a participation change is not allowed."""

    def __init__(self, message: str, status: ParticipationStatus | None = None) -> None:
        """Initialize the exception with the status that blocked the action."""
        super().__init__(message)
        self.status = status


class ParticipantLimitReachedError(ParticipationError):
    """Raised when a write would exceed the participant limit."""


class AlreadyParticipatingError(ParticipationError):
    """Raised when the profile already holds the record being created."""
