import typing as t

from django.conf import settings
from django.db import models

from common.models import SlugFromNameMixin, TimeStampedModel, VisibilitySettingsMixin
from common.visibility import EntityType


class OrganizationQuerySet(models.QuerySet["Organization"]):
    def with_team(self) -> t.Self:
        """Prefetch team members and their profiles."""
        return self.prefetch_related("team_members__profile")


class OrganizationManager(models.Manager["Organization"]):
    def get_queryset(self) -> OrganizationQuerySet:
        """Get base queryset for organizations."""
        return OrganizationQuerySet(self.model, using=self._db)

    def with_team(self) -> OrganizationQuerySet:
        """Returns a queryset prefetching the team."""
        return self.get_queryset().with_team()


class Organization(SlugFromNameMixin, VisibilitySettingsMixin, TimeStampedModel):
    VISIBILITY_ENTITY_TYPE = EntityType.ORGANIZATION

    name = models.CharField(max_length=255, unique=True)
    slug = models.SlugField(max_length=255, unique=True)
    bio = models.TextField(blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    phone = models.CharField(max_length=32, blank=True, null=True)
    street = models.CharField(max_length=255, blank=True, null=True)
    street_number = models.CharField(max_length=32, blank=True, null=True)
    zip_code = models.CharField(max_length=16, blank=True, null=True)
    city = models.CharField(max_length=255, blank=True, null=True)
    website = models.URLField(blank=True, null=True)
    facebook = models.URLField(blank=True, null=True)
    linkedin = models.URLField(blank=True, null=True)
    twitter = models.URLField(blank=True, null=True)
    xing = models.URLField(blank=True, null=True)
    instagram = models.URLField(blank=True, null=True)
    youtube = models.URLField(blank=True, null=True)
    supported_by = models.JSONField(default=list, blank=True)
    logo = models.CharField(max_length=512, blank=True, null=True, help_text="Stored object path")
    background = models.CharField(max_length=512, blank=True, null=True, help_text="Stored object path")
    team = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name="organizations",
        through="events.OrganizationMember",
        blank=True,
    )

    objects = OrganizationManager()

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class OrganizationMember(TimeStampedModel):
    """Team membership. Privileged members administer the organization."""

    organization = models.ForeignKey(Organization, on_delete=models.CASCADE, related_name="team_members")
    profile = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="organization_memberships"
    )
    is_privileged = models.BooleanField(default=False)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["organization", "profile"], name="unique_organization_member"),
        ]

    def __str__(self) -> str:
        return f"{self.profile_id} @ {self.organization_id}"
