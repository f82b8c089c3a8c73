"""Organization-related schemas."""

import typing as t
from uuid import UUID

from ninja import Schema
from pydantic import EmailStr, Field

from common.schema import OneToOneFiftyString, StrippedString, TeamMemberSchema


class _OrganizationFieldsMixin(Schema):
    bio: str | None = None
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
    supported_by: list[StrippedString] = Field(default_factory=list)


class OrganizationCreateSchema(_OrganizationFieldsMixin):
    name: OneToOneFiftyString


class OrganizationEditSchema(_OrganizationFieldsMixin):
    """All fields optional; only the ones sent are changed."""

    name: OneToOneFiftyString | None = None
    supported_by: list[StrippedString] | None = None  # type: ignore[assignment]


class OrganizationRefSchema(Schema):
    """Organization embedded in events and projects."""

    id: UUID
    name: str
    slug: str
    logo: str | None = None


class ResponsibleOrganizationSchema(Schema):
    organization: OrganizationRefSchema


class ResponsibleOrganizationsSchema(Schema):
    """Responsible organizations of an event and candidates for adding."""

    responsible_organizations: list[OrganizationRefSchema]
    own_organizations: list[OrganizationRefSchema]
    suggestions: list[OrganizationRefSchema]


class ResponsibleOrganizationAddSchema(Schema):
    organization_id: UUID


class OrganizationInListSchema(Schema):
    id: UUID
    name: str
    slug: str
    bio: str | None = None
    city: str | None = None
    logo: str | None = None


class OrganizationSchema(Schema):
    """Organization page. Private fields are null for anonymous viewers."""

    id: UUID
    name: str
    slug: str
    bio: str | None = None
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
    supported_by: list[str] = Field(default_factory=list)
    logo: str | None = None
    background: str | None = None
    team_members: list[TeamMemberSchema] = Field(default_factory=list)
    mode: str


class OrganizationAdminSchema(OrganizationSchema):
    visibility_settings: dict[str, bool] = Field(default_factory=dict)


class OrganizationDeleteSchema(Schema):
    """The confirmation text must read ``really delete``."""

    confirmation: t.Annotated[str, Field(examples=["really delete"])]
