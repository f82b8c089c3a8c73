"""Event-related schemas."""

import typing as t
from datetime import datetime
from uuid import UUID

from ninja import Schema
from pydantic import AwareDatetime, Field, StringConstraints, model_validator

from common.schema import OneToOneFiftyString, ProfileRefSchema, StrippedString, TeamMemberSchema
from common.viewer import Mode
from events.service.participation import EventParticipation

from .organization import ResponsibleOrganizationSchema


class ParticipantSchema(Schema):
    profile: ProfileRefSchema


class ParentEventSchema(Schema):
    id: UUID
    name: str
    slug: str
    subline: str | None = None
    start_time: datetime
    end_time: datetime


class ChildEventSchema(Schema):
    """A child event as listed on its parent's page, with the viewer's participation on it."""

    id: UUID
    name: str
    slug: str
    subline: str | None = None
    start_time: datetime
    end_time: datetime
    published: bool
    canceled: bool
    background: str | None = None
    background_blurred: str | None = None
    participation: EventParticipation


class EventInListSchema(Schema):
    id: UUID
    name: str
    slug: str
    subline: str | None = None
    start_time: datetime
    end_time: datetime
    canceled: bool
    participant_limit: int | None = None
    background: str | None = None


class EventDocumentSchema(Schema):
    id: UUID
    filename: str
    title: str | None = None
    description: str | None = None
    mime_type: str
    size: int
    size_in_mb: float
    created_at: datetime


class EventDetailSchema(Schema):
    """Event page payload.

    Fields the organizers did not make public are null for anonymous viewers. The conference
    link and code are only shown to participants, speakers and team members.
    Documents are only listed for signed-in viewers.
    """

    id: UUID
    name: str
    slug: str
    subline: str | None = None
    description: str | None = None
    start_time: datetime
    end_time: datetime
    participation_from: datetime
    participation_until: datetime
    participant_limit: int | None = None
    canceled: bool
    published: bool
    conference_link: str | None = None
    conference_code: str | None = None
    venue_name: str | None = None
    venue_street: str | None = None
    venue_street_number: str | None = None
    venue_zip_code: str | None = None
    venue_city: str | None = None
    background: str | None = None
    background_blurred: str | None = None
    parent_event: ParentEventSchema | None = None
    child_events: list[ChildEventSchema] = Field(default_factory=list)
    participants: list[ParticipantSchema] = Field(default_factory=list)
    speakers: list[ParticipantSchema] = Field(default_factory=list)
    team_members: list[TeamMemberSchema] = Field(default_factory=list)
    responsible_organizations: list[ResponsibleOrganizationSchema] = Field(default_factory=list)
    documents: list[EventDocumentSchema] = Field(default_factory=list)
    is_full_depth: bool
    mode: Mode
    participation: EventParticipation


class _EventFieldsMixin(Schema):
    subline: StrippedString | None = None
    description: str | None = None
    participant_limit: int | None = Field(None, ge=0)
    conference_link: StrippedString | None = None
    conference_code: StrippedString | None = None
    venue_name: StrippedString | None = None
    venue_street: StrippedString | None = None
    venue_street_number: StrippedString | None = None
    venue_zip_code: StrippedString | None = None
    venue_city: StrippedString | None = None


class EventCreateSchema(_EventFieldsMixin):
    name: OneToOneFiftyString
    start_time: AwareDatetime
    end_time: AwareDatetime
    participation_from: AwareDatetime
    participation_until: AwareDatetime
    parent_event_id: UUID | None = None

    @model_validator(mode="after")
    def check_ranges(self) -> "EventCreateSchema":
        """Ends must not precede starts."""
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time.")
        if self.participation_until < self.participation_from:
            raise ValueError("participation_until must not be before participation_from.")
        return self


class EventEditSchema(_EventFieldsMixin):
    """All fields optional; only the ones sent are changed. Ranges are checked by the model."""

    name: OneToOneFiftyString | None = None
    start_time: AwareDatetime | None = None
    end_time: AwareDatetime | None = None
    participation_from: AwareDatetime | None = None
    participation_until: AwareDatetime | None = None


class ParticipantLimitSchema(Schema):
    """A limit of zero, a negative one or null removes the limit."""

    participant_limit: int | None = None


class ChildEventActionSchema(Schema):
    event_id: UUID


class PublishSchema(Schema):
    published: bool


class CancelSchema(Schema):
    canceled: bool


class EventDeleteSchema(Schema):
    """Deleting an event requires repeating who is deleting what."""

    profile_id: UUID
    event_id: UUID
    event_name: str


class EventDocumentEditSchema(Schema):
    title: t.Annotated[str, StringConstraints(max_length=255, strip_whitespace=True)] | None = None
    description: StrippedString | None = None
