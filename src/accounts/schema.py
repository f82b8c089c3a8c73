import typing as t
import uuid

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from ninja import ModelSchema, Schema
from pydantic import EmailStr, Field, field_validator

from common.schema import OneToOneFiftyString, StrippedString

from .models import Profile


class RegisterProfileSchema(Schema):
    username: OneToOneFiftyString
    email: EmailStr
    password: str
    first_name: OneToOneFiftyString
    last_name: OneToOneFiftyString
    academic_title: StrippedString | None = None
    terms_accepted: bool

    @field_validator("password")
    @classmethod
    def password_is_strong(cls, value: str) -> str:
        """Run Django's password validators."""
        try:
            validate_password(value)
        except DjangoValidationError as e:
            raise ValueError(" ".join(e.messages)) from e
        return value


class ProfileSchema(Schema):
    """Profile as returned by the API. Private fields are null for anonymous viewers."""

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
    mode: str


class OwnProfileSchema(ModelSchema):
    class Meta:
        model = Profile
        fields = [
            "id",
            "username",
            "email",
            "academic_title",
            "first_name",
            "last_name",
            "position",
            "phone",
            "bio",
            "website",
            "skills",
            "interests",
            "avatar",
            "background",
            "language",
            "visibility_settings",
        ]


class ProfileUpdateSchema(Schema):
    """Profile changes. The profile_id must match the authenticated profile."""

    profile_id: uuid.UUID
    academic_title: StrippedString | None = None
    first_name: OneToOneFiftyString | None = None
    last_name: OneToOneFiftyString | None = None
    position: StrippedString | None = None
    email: EmailStr | None = None
    phone: StrippedString | None = None
    bio: str | None = None
    website: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    xing: str | None = None
    instagram: str | None = None
    youtube: str | None = None
    skills: list[StrippedString] | None = None
    interests: list[StrippedString] | None = None
    language: t.Literal["en", "de"] | None = None
