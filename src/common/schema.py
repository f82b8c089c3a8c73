"""Common schemas for the API."""

import typing as t
import uuid

from ninja import Schema
from pydantic import StringConstraints

StrippedString = t.Annotated[str, StringConstraints(strip_whitespace=True)]
OneToOneFiftyString = t.Annotated[str, StringConstraints(min_length=1, max_length=150, strip_whitespace=True)]


class VersionResponse(Schema):
    version: str


class ResponseOk(Schema):
    status: t.Literal["ok"] = "ok"


class ResponseMessage(Schema):
    message: str


class VisibilitySettingsSchema(Schema):
    visibility_settings: dict[str, bool]


class ProfileRefSchema(Schema):
    """Compact profile payload embedded in event, organization and project payloads."""

    id: uuid.UUID
    username: str
    academic_title: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    position: str | None = None
    avatar: str | None = None


class TeamMemberSchema(Schema):
    profile: ProfileRefSchema
    is_privileged: bool


class SetPrivilegeSchema(Schema):
    profile_id: uuid.UUID
    is_privileged: bool


class AddMemberSchema(Schema):
    username: StrippedString


class ProfileIdSchema(Schema):
    profile_id: uuid.UUID


class MemberAddSchema(AddMemberSchema):
    is_privileged: bool = False
