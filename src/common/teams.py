"""Helpers shared by the event, organization and project teams."""

import uuid

from django.db import models
from django.utils.translation import gettext as _

from accounts.service.profile_service import profile_ref_payload
from common.exceptions import LastPrivilegedMemberError


def ensure_other_privileged_member(members: models.QuerySet[models.Model], profile_id: uuid.UUID) -> None:
    """Raise if the profile is the only privileged member of the team.

    Raises:
        LastPrivilegedMemberError: when removing or demoting the profile would leave nobody to administer the team.
    """
    privileged = members.filter(is_privileged=True)
    if privileged.filter(profile_id=profile_id).exists() and not privileged.exclude(profile_id=profile_id).exists():
        raise LastPrivilegedMemberError(_("A team needs at least one privileged member."))


def team_member_records(members: models.QuerySet[models.Model]) -> list[dict[str, object]]:
    """Team members ordered by first name, as relation records for visibility filtering."""
    return [
        {"profile": profile_ref_payload(member.profile), "is_privileged": member.is_privileged}  # type: ignore[attr-defined]
        for member in members.select_related("profile").order_by("profile__first_name", "profile__username")
    ]
