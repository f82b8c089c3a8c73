from django.utils.translation import gettext_lazy as _
from ninja_extra import status
from ninja_extra.exceptions import APIException


class NotPrivilegedError(APIException):
    """Raised when the viewer's mode does not allow a mutation."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("Not privileged")


class IdentityMismatchError(APIException):
    """Raised when the identity in a payload differs from the authenticated user."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = _("Identity check failed")


class AlreadyMemberError(Exception):
    """Raised when a profile is already on a team."""


class LastPrivilegedMemberError(Exception):
    """Raised when a change would leave a team without privileged members."""
