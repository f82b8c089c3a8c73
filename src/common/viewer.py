"""Who is looking at a resource, passed explicitly through services."""

import typing as t
import uuid
from dataclasses import dataclass
from enum import StrEnum

if t.TYPE_CHECKING:
    from django.contrib.auth.models import AnonymousUser

    from accounts.models import Profile


class Mode(StrEnum):
    """Coarse privilege of a viewer on a resource."""

    ANON = "anon"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"
    OWNER = "owner"


@dataclass(frozen=True)
class Viewer:
    profile_id: uuid.UUID | None = None

    @property
    def is_anonymous(self) -> bool:
        """True when nobody is logged in."""
        return self.profile_id is None

    @classmethod
    def from_user(cls, user: "Profile | AnonymousUser | None") -> "Viewer":
        """Build a viewer from the request user."""
        if user is None or user.is_anonymous:
            return cls()
        return cls(profile_id=t.cast(uuid.UUID, user.pk))


ANONYMOUS = Viewer()
