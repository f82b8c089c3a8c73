"""Service layer for profiles."""

import typing as t

import structlog
from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts import schema
from accounts.models import Profile
from common.exceptions import IdentityMismatchError, NotPrivilegedError
from common.images import ImagePreset, derive_image_url
from common.utils import to_payload, update_db_instance
from common.viewer import Mode, Viewer
from common.visibility import EntityType, filter_by_visibility, validate_visibility_settings

logger = structlog.get_logger(__name__)

PROFILE_FIELDS = (
    "username",
    "academic_title",
    "first_name",
    "last_name",
    "position",
    "email",
    "phone",
    "bio",
    "website",
    "facebook",
    "linkedin",
    "twitter",
    "xing",
    "instagram",
    "youtube",
    "skills",
    "interests",
    "avatar",
    "background",
)

PROFILE_REF_FIELDS = ("username", "academic_title", "first_name", "last_name", "position", "avatar")


def derive_profile_mode(viewer: Viewer, profile: Profile) -> Mode:
    """OWNER when the viewer is the profile itself."""
    if viewer.is_anonymous:
        return Mode.ANON
    if viewer.profile_id == profile.pk:
        return Mode.OWNER
    return Mode.AUTHENTICATED


def get_profile_by_username(username: str) -> Profile:
    """Case-insensitive lookup, 404 if missing."""
    return get_object_or_404(Profile.objects.by_username(username))


def profile_ref_payload(profile: Profile) -> dict[str, t.Any]:
    """Compact payload for embedding a profile in other entities."""
    return to_payload(profile, PROFILE_REF_FIELDS)


def enhance_profile_ref(record: dict[str, t.Any] | None, preset: ImagePreset = ImagePreset.AVATAR) -> None:
    """Replace the stored avatar path of an embedded profile with its image URL, in place."""
    if record is None:
        return
    record["avatar"] = derive_image_url(record.get("avatar"), preset)


def get_profile_detail(username: str, viewer: Viewer) -> dict[str, t.Any]:
    """The profile page payload: filtered for anonymous viewers, with image URLs."""
    profile = get_profile_by_username(username)
    payload = filter_by_visibility(EntityType.PROFILE, to_payload(profile, PROFILE_FIELDS), viewer.is_anonymous)
    payload = {
        **payload,
        "avatar": derive_image_url(payload.get("avatar"), ImagePreset.AVATAR),
        "background": derive_image_url(payload.get("background"), ImagePreset.PUBLIC_API_BACKGROUND),
        "mode": derive_profile_mode(viewer, profile),
    }
    return payload


@transaction.atomic
def register_profile(payload: schema.RegisterProfileSchema) -> Profile:
    """Create a profile. Terms must be accepted."""
    if not payload.terms_accepted:
        raise HttpError(400, str(_("You have to accept the terms of use.")))
    if Profile.objects.by_username(payload.username).exists():
        raise HttpError(400, str(_("This username is already taken.")))
    if Profile.objects.filter(email__iexact=payload.email).exists():
        raise HttpError(400, str(_("A profile with this email already exists.")))
    profile = Profile.objects.create_user(
        username=payload.username,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        academic_title=payload.academic_title,
        terms_accepted=True,
    )
    logger.info("profile_registered", profile_id=str(profile.pk))
    return profile


def update_profile(profile: Profile, viewer: Viewer, payload: schema.ProfileUpdateSchema) -> Profile:
    """Update profile data.

    Raises:
        NotPrivilegedError: if the viewer is not the profile owner.
        IdentityMismatchError: if payload.profile_id is not the authenticated profile.
    """
    if derive_profile_mode(viewer, profile) != Mode.OWNER:
        raise NotPrivilegedError()
    if payload.profile_id != viewer.profile_id:
        raise IdentityMismatchError()
    changes = payload.model_dump(exclude_unset=True, exclude={"profile_id"})
    with transaction.atomic():
        profile = Profile.objects.select_for_update().get(pk=profile.pk)
        for key, value in changes.items():
            setattr(profile, key, value)
        profile.full_clean()
        profile.save()
    logger.info("profile_updated", profile_id=str(profile.pk), fields=sorted(changes))
    return profile


def update_visibility_settings(profile: Profile, visibility_settings: dict[str, bool]) -> Profile:
    """Merge new visibility flags into the profile's settings."""
    validate_visibility_settings(EntityType.PROFILE, visibility_settings)
    merged = {**profile.visibility_settings, **visibility_settings}
    return update_db_instance(profile, visibility_settings=merged)
