import typing as t
import uuid

from django.conf import settings
from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models

from common.models import VisibilitySettingsMixin
from common.visibility import EntityType


class ProfileQuerySet(models.QuerySet["Profile"]):
    def by_username(self, username: str) -> t.Self:
        """Case-insensitive username lookup."""
        return self.filter(username__iexact=username)


class ProfileManager(UserManager["Profile"]):
    def get_queryset(self) -> ProfileQuerySet:
        """Get queryset for Profile."""
        return ProfileQuerySet(self.model, using=self._db)

    def by_username(self, username: str) -> ProfileQuerySet:
        """Case-insensitive username lookup."""
        return self.get_queryset().by_username(username)


class Profile(VisibilitySettingsMixin, AbstractUser):
    """A community member. Doubles as the authentication user."""

    VISIBILITY_ENTITY_TYPE = EntityType.PROFILE

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    academic_title = models.CharField(max_length=64, blank=True, null=True)
    position = models.CharField(max_length=255, blank=True, null=True)
    phone = models.CharField(max_length=32, blank=True, null=True)
    bio = models.TextField(blank=True, null=True)
    website = models.URLField(blank=True, null=True)
    facebook = models.URLField(blank=True, null=True)
    linkedin = models.URLField(blank=True, null=True)
    twitter = models.URLField(blank=True, null=True)
    xing = models.URLField(blank=True, null=True)
    instagram = models.URLField(blank=True, null=True)
    youtube = models.URLField(blank=True, null=True)
    skills = models.JSONField(default=list, blank=True)
    interests = models.JSONField(default=list, blank=True)
    avatar = models.CharField(max_length=512, blank=True, null=True, help_text="Stored object path")
    background = models.CharField(max_length=512, blank=True, null=True, help_text="Stored object path")
    terms_accepted = models.BooleanField(default=False)
    language = models.CharField(
        max_length=7,
        choices=settings.LANGUAGES,
        default=settings.LANGUAGE_CODE,
        help_text="Preferred language",
    )

    objects = ProfileManager()  # type: ignore[misc]

    class Meta:
        ordering = ["username"]

    @property
    def display_name(self) -> str:
        """Full name with academic title, falling back to the username."""
        parts = [self.academic_title, self.first_name, self.last_name]
        name = " ".join(p for p in parts if p)
        return name or self.username

    def __str__(self) -> str:
        return self.username
