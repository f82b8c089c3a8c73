import typing as t
from io import BytesIO

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.files import File
from django.core.files.images import get_image_dimensions
from django.core.files.uploadedfile import InMemoryUploadedFile, UploadedFile
from django.db import models, transaction
from django.utils.translation import gettext_lazy as _
from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel

ALLOWED_IMAGE_EXTENSIONS: list[str] = ["jpg", "jpeg", "png", "gif", "webp"]


def max_image_size_bytes() -> int:
    """Upload limit for images, in bytes."""
    return int(settings.MAX_IMAGE_SIZE_MB) * 1024 * 1024


def validate_image_file(file: UploadedFile) -> None:
    """Validates an uploaded image."""
    limit = max_image_size_bytes()
    if file.size is None or file.size > limit:
        raise ValidationError({"file": [_("Image must be under %(mb)sMB.") % {"mb": limit // (1024 * 1024)}]})
    extension = (file.name or "").rsplit(".", 1)[-1].lower()
    if extension not in ALLOWED_IMAGE_EXTENSIONS:
        raise ValidationError({"file": [_("Unsupported image type.")]})
    width, _height = get_image_dimensions(file)
    if width is None:
        raise ValidationError({"file": [_("File is not a valid image.")]})


def strip_exif(image_file: File) -> InMemoryUploadedFile:  # type: ignore[type-arg]
    """Strip EXIF data from a Django File or InMemoryUploadedFile."""
    image_file.seek(0)
    try:
        image = Image.open(image_file)
        data = list(image.getdata())
    except (UnidentifiedImageError, OSError) as e:
        raise ValidationError({"file": [_("File is not a valid image.")]}) from e
    image_no_exif = Image.new(image.mode, image.size)
    image_no_exif.putdata(data)

    output = BytesIO()
    _format = image.format or "JPEG"
    image_no_exif.save(output, format=_format)
    size = output.tell()
    output.seek(0)

    field_name = getattr(image_file, "field_name", "image")
    name = getattr(image_file, "name", "image.jpg")
    content_type = getattr(image_file, "content_type", "image/jpeg")

    return InMemoryUploadedFile(
        output,
        field_name=field_name,
        name=name,
        content_type=content_type,
        size=size,
        charset=None,
    )


T = t.TypeVar("T", bound=models.Model)


@transaction.atomic
def update_db_instance(
    instance: T,
    payload: BaseModel | None = None,
    *,
    exclude_unset: bool = True,
    **kwargs: t.Any,
) -> T:
    """Updates a DB instance given a Pydantic payload, safely within a select_for_update lock."""
    instance = instance.__class__.objects.select_for_update().get(pk=instance.pk)  # type: ignore[attr-defined]
    data = payload.model_dump(exclude_unset=exclude_unset) if payload else {}
    data.update(**kwargs)
    for key, value in data.items():
        setattr(instance, key, value)
    instance.save()
    return instance


def to_payload(instance: models.Model, fields: t.Iterable[str]) -> dict[str, t.Any]:
    """Plain dict of the given fields plus id and visibility settings, ready for visibility filtering."""
    payload: dict[str, t.Any] = {"id": instance.pk}
    for name in fields:
        payload[name] = getattr(instance, name)
    if hasattr(instance, "visibility_settings"):
        payload["visibility_settings"] = dict(instance.visibility_settings or {})
    return payload
