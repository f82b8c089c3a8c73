import typing as t
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils.translation import gettext_lazy as _

from accounts.models import Profile
from accounts.service.profile_service import enhance_profile_ref
from common.exceptions import AlreadyMemberError
from common.images import ImagePreset, derive_image_url
from common.teams import ensure_other_privileged_member, team_member_records
from common.utils import to_payload, update_db_instance
from common.viewer import Viewer
from common.visibility import EntityType, filter_by_visibility, filter_list_by_visibility
from events import schema
from events.models import Organization, OrganizationMember
from events.service.modes import derive_organization_mode

logger = structlog.get_logger(__name__)

DELETE_CONFIRMATION = "really delete"

ORGANIZATION_FIELDS = (
    "name",
    "slug",
    "bio",
    "email",
    "phone",
    "street",
    "street_number",
    "zip_code",
    "city",
    "website",
    "facebook",
    "linkedin",
    "twitter",
    "xing",
    "instagram",
    "youtube",
    "supported_by",
    "logo",
    "background",
)
ORGANIZATION_LIST_FIELDS = ("name", "slug", "bio", "city", "logo")


def get_organization_by_slug(slug: str) -> Organization:
    """404 if the slug is unknown."""
    return get_object_or_404(Organization, slug=slug)


def get_organization_detail(slug: str, viewer: Viewer) -> dict[str, t.Any]:
    """Organization page with its team, filtered for anonymous viewers."""
    organization = get_organization_by_slug(slug)
    payload = to_payload(organization, ORGANIZATION_FIELDS)
    payload["team_members"] = team_member_records(organization.team_members.all())
    payload = filter_by_visibility(EntityType.ORGANIZATION, payload, viewer.is_anonymous)

    team_members = [dict(record, profile=dict(record["profile"])) for record in payload["team_members"]]
    for record in team_members:
        enhance_profile_ref(record["profile"])
    return {
        **payload,
        "team_members": team_members,
        "logo": derive_image_url(payload.get("logo"), ImagePreset.ORGANIZATION_LOGO),
        "background": derive_image_url(payload.get("background"), ImagePreset.EVENT_BACKGROUND),
        "mode": derive_organization_mode(viewer, organization),
    }


def organization_list_payloads(
    organizations: t.Iterable[Organization], viewer_is_anonymous: bool
) -> list[dict[str, t.Any]]:
    """Filtered list entries with their logo URL."""
    payloads = filter_list_by_visibility(
        EntityType.ORGANIZATION,
        [to_payload(organization, ORGANIZATION_LIST_FIELDS) for organization in organizations],
        viewer_is_anonymous,
    )
    return [
        {**payload, "logo": derive_image_url(payload.get("logo"), ImagePreset.ORGANIZATION_LOGO)}
        for payload in payloads
    ]


def list_organizations(viewer: Viewer, skip: int = 0, take: int = 20) -> list[dict[str, t.Any]]:
    """Organizations by name."""
    return organization_list_payloads(Organization.objects.order_by("name")[skip : skip + take], viewer.is_anonymous)


@transaction.atomic
def create_organization(profile: Profile, payload: schema.OrganizationCreateSchema) -> Organization:
    """Create an organization. The creator becomes its privileged member."""
    organization = Organization.objects.create(**payload.model_dump())
    OrganizationMember.objects.create(organization=organization, profile=profile, is_privileged=True)
    logger.info("organization_created", organization_id=str(organization.pk), profile_id=str(profile.pk))
    return organization


def update_organization(organization: Organization, payload: schema.OrganizationEditSchema) -> Organization:
    """Change the fields that were sent."""
    changes = payload.model_dump(exclude_unset=True)
    for required in ("name", "supported_by"):
        if changes.get(required, ...) is None:
            changes.pop(required)
    return update_db_instance(organization, **changes)


@transaction.atomic
def update_visibility_settings(organization: Organization, visibility_settings: dict[str, bool]) -> Organization:
    """Merge new visibility flags into the organization's settings. The model validates the keys."""
    merged = {**organization.visibility_settings, **visibility_settings}
    return update_db_instance(organization, visibility_settings=merged)


@transaction.atomic
def add_member(organization: Organization, username: str, is_privileged: bool = False) -> OrganizationMember:
    """Add a profile to the team by username.

    Raises:
        Http404: if there is no such profile.
        AlreadyMemberError: if the profile is already on the team.
    """
    profile = get_object_or_404(Profile.objects.by_username(username))
    member, created = OrganizationMember.objects.get_or_create(
        organization=organization, profile=profile, defaults={"is_privileged": is_privileged}
    )
    if not created:
        raise AlreadyMemberError(str(_("This profile is already on the team.")))
    logger.info("organization_member_added", organization_id=str(organization.pk), profile_id=str(profile.pk))
    return member


@transaction.atomic
def remove_member(organization: Organization, profile_id: UUID) -> None:
    """Remove a profile from the team. The last privileged member cannot be removed."""
    member = get_object_or_404(OrganizationMember, organization=organization, profile_id=profile_id)
    ensure_other_privileged_member(organization.team_members.all(), profile_id)
    member.delete()
    logger.info("organization_member_removed", organization_id=str(organization.pk), profile_id=str(profile_id))


@transaction.atomic
def set_member_privilege(organization: Organization, profile_id: UUID, is_privileged: bool) -> OrganizationMember:
    """Grant or revoke admin rights. The last privileged member cannot be demoted."""
    member = get_object_or_404(
        OrganizationMember.objects.select_for_update(), organization=organization, profile_id=profile_id
    )
    if not is_privileged:
        ensure_other_privileged_member(organization.team_members.all(), profile_id)
    member.is_privileged = is_privileged
    member.save(update_fields=["is_privileged", "updated_at"])
    return member


@transaction.atomic
def delete_organization(organization: Organization, confirmation: str) -> None:
    """Delete the organization once the confirmation text matches.

    Raises:
        ValidationError: if the confirmation is not ``really delete``.
    """
    if confirmation != DELETE_CONFIRMATION:
        raise ValidationError({"confirmation": [_('Type "%(text)s" to confirm.') % {"text": DELETE_CONFIRMATION}]})
    organization_id = organization.pk
    organization.delete()
    logger.info("organization_deleted", organization_id=str(organization_id))
