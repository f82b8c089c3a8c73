import typing as t
import uuid

from django.db import models
from django.utils.text import slugify


class TimeStampedModel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        abstract = True

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Override the save method to call full_clean before saving."""
        self.full_clean()
        super().save(*args, **kwargs)


class SlugFromNameMixin(models.Model):
    class Meta:
        abstract = True

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Override save to auto-create slug."""
        if not self.slug:  # type: ignore[has-type]
            self.slug = slugify(self.name)  # type: ignore[attr-defined]
        super().save(*args, **kwargs)


class VisibilitySettingsMixin(models.Model):
    """Per-field visibility flags for anonymous viewers.

    Maps a field name to ``True`` (public) or ``False`` (private). Fields without
    a flag are private. The allowed keys are declared in ``common.visibility``
    for the model's ``VISIBILITY_ENTITY_TYPE``.
    """

    VISIBILITY_ENTITY_TYPE: t.ClassVar[str]

    visibility_settings = models.JSONField(default=dict, blank=True)

    class Meta:
        abstract = True

    def clean(self) -> None:
        """Reject flags for fields that are not visibility-tagged."""
        from common.visibility import EntityType, validate_visibility_settings

        super().clean()
        validate_visibility_settings(EntityType(self.VISIBILITY_ENTITY_TYPE), self.visibility_settings)

    def is_public(self, field_name: str) -> bool:
        """Whether the given field is shown to anonymous viewers."""
        return self.visibility_settings.get(field_name) is True
