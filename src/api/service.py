"""Payloads of the public REST API.

Everything is rendered as seen by an anonymous viewer, with a canonical link to the
community site appended.
"""

import typing as t

from django.conf import settings
from django.utils import timezone

from accounts.models import Profile
from accounts.service.profile_service import PROFILE_FIELDS, enhance_profile_ref, get_profile_by_username
from common.images import ImagePreset, derive_image_url
from common.utils import to_payload
from common.viewer import ANONYMOUS
from common.visibility import EntityType, filter_by_visibility
from events.models import Event, Organization
from events.service.event_service import event_list_payloads
from events.service.organization_service import organization_list_payloads
from projects.service.project_service import get_project_by_slug, project_payload


def community_url(kind: str, slug: str | None) -> str | None:
    """Canonical page on the community site, or None when no base URL is configured."""
    base_url = settings.COMMUNITY_BASE_URL
    if not base_url or not slug:
        return None
    return f"{base_url.rstrip('/')}/{kind}/{slug}"


def get_public_profile(username: str) -> dict[str, t.Any]:
    """Profile as an anonymous visitor sees it."""
    profile: Profile = get_profile_by_username(username)
    payload = filter_by_visibility(EntityType.PROFILE, to_payload(profile, PROFILE_FIELDS), ANONYMOUS.is_anonymous)
    return {
        **payload,
        "avatar": derive_image_url(payload.get("avatar"), ImagePreset.PUBLIC_API_AVATAR),
        "background": derive_image_url(payload.get("background"), ImagePreset.PUBLIC_API_BACKGROUND),
        "url": community_url("profile", profile.username),
    }


def get_public_project(slug: str) -> dict[str, t.Any]:
    """Project as an anonymous visitor sees it."""
    project = get_project_by_slug(slug)
    payload = project_payload(project, ANONYMOUS.is_anonymous)
    team_members = [dict(record, profile=dict(record["profile"])) for record in payload["team_members"]]
    for record in team_members:
        enhance_profile_ref(record["profile"], ImagePreset.PUBLIC_API_AVATAR)
    return {
        **payload,
        "team_members": team_members,
        "logo": derive_image_url(payload.get("logo"), ImagePreset.PUBLIC_API_LOGO),
        "background": derive_image_url(payload.get("background"), ImagePreset.PUBLIC_API_BACKGROUND),
        "url": community_url("project", project.slug),
    }


def list_public_events(skip: int, take: int) -> list[dict[str, t.Any]]:
    """Published events, upcoming ones first."""
    events = Event.objects.published().upcoming_first(timezone.now())[skip : skip + take]
    return [
        {**payload, "url": community_url("event", payload["slug"])}
        for payload in event_list_payloads(events, ANONYMOUS.is_anonymous)
    ]


def list_public_organizations(skip: int, take: int) -> list[dict[str, t.Any]]:
    """Organizations by name."""
    organizations = Organization.objects.order_by("name")[skip : skip + take]
    return [
        {**payload, "url": community_url("organization", payload["slug"])}
        for payload in organization_list_payloads(organizations, ANONYMOUS.is_anonymous)
    ]
