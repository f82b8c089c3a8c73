import typing as t

from django.conf import settings
from django.db import models

from common.models import SlugFromNameMixin, TimeStampedModel, VisibilitySettingsMixin
from common.visibility import EntityType


class ProjectQuerySet(models.QuerySet["Project"]):
    def with_relations(self) -> t.Self:
        """Prefetch the team and the responsible organizations."""
        return self.prefetch_related("team_members__profile", "responsible_organizations__organization")


class ProjectManager(models.Manager["Project"]):
    def get_queryset(self) -> ProjectQuerySet:
        """Get base queryset for projects."""
        return ProjectQuerySet(self.model, using=self._db)

    def with_relations(self) -> ProjectQuerySet:
        """Returns a queryset prefetching the team and organizations."""
        return self.get_queryset().with_relations()


class Project(SlugFromNameMixin, VisibilitySettingsMixin, TimeStampedModel):
    VISIBILITY_ENTITY_TYPE = EntityType.PROJECT

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    headline = models.CharField(max_length=255, blank=True, null=True)
    excerpt = models.TextField(blank=True, null=True)
    description = models.TextField(blank=True, null=True)
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
    logo = models.CharField(max_length=512, blank=True, null=True, help_text="Stored object path")
    background = models.CharField(max_length=512, blank=True, null=True, help_text="Stored object path")

    objects = ProjectManager()

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class ProjectTeamMember(TimeStampedModel):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="team_members")
    profile = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="project_team_roles")
    is_privileged = models.BooleanField(default=False)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["project", "profile"], name="unique_project_team_member"),
        ]

    def __str__(self) -> str:
        return f"{self.profile_id} @ {self.project_id}"


class ProjectResponsibleOrganization(TimeStampedModel):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="responsible_organizations")
    organization = models.ForeignKey(
        "events.Organization", on_delete=models.CASCADE, related_name="responsible_for_projects"
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["project", "organization"], name="unique_project_responsible_organization"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.organization_id} @ {self.project_id}"
