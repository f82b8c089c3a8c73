"""Image uploads for profiles, organizations, events and projects."""

import typing as t
import uuid
from enum import StrEnum

import structlog
from django.core.exceptions import ValidationError
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile
from django.db import models
from django.shortcuts import get_object_or_404
from django.utils.translation import gettext_lazy as _

from common.exceptions import NotPrivilegedError
from common.utils import strip_exif, update_db_instance, validate_image_file
from common.viewer import Mode, Viewer

logger = structlog.get_logger(__name__)


class UploadSubject(StrEnum):
    PROFILE = "profile"
    ORGANIZATION = "organization"
    EVENT = "event"
    PROJECT = "project"


class UploadKey(StrEnum):
    AVATAR = "avatar"
    BACKGROUND = "background"
    LOGO = "logo"


ALLOWED_UPLOAD_KEYS: dict[UploadSubject, frozenset[UploadKey]] = {
    UploadSubject.PROFILE: frozenset({UploadKey.AVATAR, UploadKey.BACKGROUND}),
    UploadSubject.ORGANIZATION: frozenset({UploadKey.LOGO, UploadKey.BACKGROUND}),
    UploadSubject.EVENT: frozenset({UploadKey.BACKGROUND}),
    UploadSubject.PROJECT: frozenset({UploadKey.LOGO, UploadKey.BACKGROUND}),
}


def _resolve_target(subject: UploadSubject, slug: str, viewer: Viewer) -> tuple[models.Model, Mode]:
    from accounts.models import Profile
    from accounts.service.profile_service import derive_profile_mode
    from events.models import Event, Organization
    from events.service.modes import derive_event_mode, derive_organization_mode
    from projects.models import Project
    from projects.service.project_service import derive_project_mode

    match subject:
        case UploadSubject.PROFILE:
            profile = get_object_or_404(Profile.objects.by_username(slug))
            return profile, derive_profile_mode(viewer, profile)
        case UploadSubject.ORGANIZATION:
            organization = get_object_or_404(Organization, slug=slug)
            return organization, derive_organization_mode(viewer, organization)
        case UploadSubject.EVENT:
            event = get_object_or_404(Event, slug=slug)
            return event, derive_event_mode(viewer, event)
        case UploadSubject.PROJECT:
            project = get_object_or_404(Project, slug=slug)
            return project, derive_project_mode(viewer, project)


def _required_mode(subject: UploadSubject) -> Mode:
    return Mode.OWNER if subject == UploadSubject.PROFILE else Mode.ADMIN


def upload_image(
    viewer: Viewer, subject: UploadSubject, slug: str, upload_key: UploadKey, file: UploadedFile
) -> dict[str, t.Any]:
    """Validate, clean and store an image, then point the entity field at it.

    Raises:
        ValidationError: if the key does not apply to the subject or the file is not an acceptable image.
        NotPrivilegedError: if the viewer may not change the entity.
    """
    if upload_key not in ALLOWED_UPLOAD_KEYS[subject]:
        raise ValidationError({"upload_key": [_("This image cannot be set here.")]})

    instance, mode = _resolve_target(subject, slug, viewer)
    if mode != _required_mode(subject):
        raise NotPrivilegedError()

    validate_image_file(file)
    cleaned = strip_exif(file)
    extension = (file.name or "image.jpg").rsplit(".", 1)[-1].lower()
    path = default_storage.save(f"{subject}/{instance.pk}/{upload_key}-{uuid.uuid4().hex}.{extension}", cleaned)

    update_db_instance(instance, **{str(upload_key): path})
    logger.info("image_uploaded", subject=str(subject), entity_id=str(instance.pk), upload_key=str(upload_key))
    return {"subject": subject, "slug": slug, "upload_key": upload_key, "path": path}
