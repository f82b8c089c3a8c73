import uuid

from ninja import Schema
from pydantic import EmailStr, Field

from common.schema import OneToOneFiftyString, StrippedString, TeamMemberSchema
from events.schema import ResponsibleOrganizationSchema


class _ProjectFieldsMixin(Schema):
    headline: StrippedString | None = None
    excerpt: str | None = None
    description: str | None = None
    email: EmailStr | None = None
    phone: StrippedString | None = None
    street: StrippedString | None = None
    street_number: StrippedString | None = None
    zip_code: StrippedString | None = None
    city: StrippedString | None = None
    website: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    xing: str | None = None
    instagram: str | None = None
    youtube: str | None = None


class ProjectCreateSchema(_ProjectFieldsMixin):
    name: OneToOneFiftyString
    responsible_organization_slugs: list[str] = Field(default_factory=list)


class ProjectEditSchema(_ProjectFieldsMixin):
    name: OneToOneFiftyString | None = None


class ProjectInListSchema(Schema):
    id: uuid.UUID
    name: str
    slug: str
    headline: str | None = None
    excerpt: str | None = None
    logo: str | None = None


class ProjectSchema(Schema):
    """Project page. Private fields are null for anonymous viewers."""

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
    facebook: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    xing: str | None = None
    instagram: str | None = None
    youtube: str | None = None
    logo: str | None = None
    background: str | None = None
    team_members: list[TeamMemberSchema] = Field(default_factory=list)
    responsible_organizations: list[ResponsibleOrganizationSchema] = Field(default_factory=list)
    mode: str
