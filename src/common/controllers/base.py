import typing as t

from django.contrib.auth.models import AnonymousUser
from ninja_extra import ControllerBase

from accounts.models import Profile
from common.viewer import Viewer


class UserAwareController(ControllerBase):
    def maybe_user(self) -> Profile | AnonymousUser:
        """Get the user for this request."""
        return t.cast(Profile | AnonymousUser, self.context.request.user)  # type: ignore[union-attr]

    def user(self) -> Profile:
        """Get the user for this request."""
        return t.cast(Profile, self.context.request.user)  # type: ignore[union-attr]

    def viewer(self) -> Viewer:
        """The viewer context handed to services and filters."""
        return Viewer.from_user(self.maybe_user())
