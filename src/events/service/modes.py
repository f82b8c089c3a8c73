"""Viewer modes for events and organizations."""

from common.viewer import Mode, Viewer
from events import models


def derive_event_mode(viewer: Viewer, event: models.Event) -> Mode:
    """ADMIN for privileged event team members."""
    if viewer.is_anonymous:
        return Mode.ANON
    if models.EventTeamMember.objects.filter(event=event, profile_id=viewer.profile_id, is_privileged=True).exists():
        return Mode.ADMIN
    return Mode.AUTHENTICATED


def derive_organization_mode(viewer: Viewer, organization: models.Organization) -> Mode:
    """ADMIN for privileged organization members."""
    if viewer.is_anonymous:
        return Mode.ANON
    if models.OrganizationMember.objects.filter(
        organization=organization, profile_id=viewer.profile_id, is_privileged=True
    ).exists():
        return Mode.ADMIN
    return Mode.AUTHENTICATED
