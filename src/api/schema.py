"""Schemas of the public REST API."""

import uuid
from datetime import datetime

from ninja import Schema
from pydantic import Field

from common.schema import TeamMemberSchema
from events.schema import ResponsibleOrganizationSchema


class PublicProfileSchema(Schema):
    id: uuid.UUID
    username: str
    academic_title: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    position: str | None = None
    email: str | None = None
    phone: str | None = None
    bio: str | None = None
    website: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    xing: str | None = None
    instagram: str | None = None
    youtube: str | None = None
    skills: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    avatar: str | None = None
    background: str | None = None
    url: str | None = None


class PublicProjectSchema(Schema):
    id: uuid.UUID
    name: str
    slug: str
    headline: str | None = None
    excerpt: str | None = None
    description: str | None = None
    email: str | None = None
    phone: str | None = None
    street: str | None = None
    street_number: str | None = None
    zip_code: str | None = None
    city: str | None = None
    website: str | None = None
    logo: str | None = None
    background: str | None = None
    team_members: list[TeamMemberSchema] = Field(default_factory=list)
    responsible_organizations: list[ResponsibleOrganizationSchema] = Field(default_factory=list)
    url: str | None = None


class PublicEventSchema(Schema):
    id: uuid.UUID
    name: str
    slug: str
    subline: str | None = None
    start_time: datetime
    end_time: datetime
    canceled: bool
    participant_limit: int | None = None
    background: str | None = None
    url: str | None = None


class PublicOrganizationSchema(Schema):
    id: uuid.UUID
    name: str
    slug: str
    bio: str | None = None
    city: str | None = None
    logo: str | None = None
    url: str | None = None
