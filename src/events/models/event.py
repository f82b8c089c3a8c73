import typing as t
import uuid
from datetime import datetime

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import models
from django.db.models import BooleanField, Case, DateTimeField, F, Q, Value, When
from django.utils.translation import gettext_lazy as _

from common.models import SlugFromNameMixin, TimeStampedModel, VisibilitySettingsMixin
from common.viewer import Viewer
from common.visibility import EntityType

from .organization import Organization


class EventQuerySet(models.QuerySet["Event"]):
    def published(self) -> t.Self:
        """Only published events."""
        return self.filter(published=True)

    def for_viewer(self, viewer: Viewer) -> t.Self:
        """Events the viewer may open: published ones, plus unpublished ones they are on the team of."""
        if viewer.is_anonymous:
            return self.published()
        return self.filter(Q(published=True) | Q(team_members__profile_id=viewer.profile_id)).distinct()

    def upcoming_first(self, now: datetime) -> t.Self:
        """Events that have not ended in start order, then past events, the most recent first."""
        return self.annotate(
            is_past=Case(When(end_time__lt=now, then=Value(True)), default=Value(False), output_field=BooleanField()),
            upcoming_start=Case(When(end_time__gte=now, then=F("start_time")), output_field=DateTimeField()),
        ).order_by("is_past", "upcoming_start", "-start_time")

    def with_relations(self) -> t.Self:
        """Select the parent and prefetch everything rendered on the detail page."""
        return self.select_related("parent_event").prefetch_related(
            "child_events",
            "team_members__profile",
            "responsible_organizations__organization",
            "documents",
        )


class EventManager(models.Manager["Event"]):
    def get_queryset(self) -> EventQuerySet:
        """Get base queryset for events."""
        return EventQuerySet(self.model, using=self._db)

    def published(self) -> EventQuerySet:
        """Only published events."""
        return self.get_queryset().published()

    def for_viewer(self, viewer: Viewer) -> EventQuerySet:
        """Events the viewer may open."""
        return self.get_queryset().for_viewer(viewer)

    def with_relations(self) -> EventQuerySet:
        """Returns a queryset prefetching the detail page relations."""
        return self.get_queryset().with_relations()


class Event(SlugFromNameMixin, VisibilitySettingsMixin, TimeStampedModel):
    VISIBILITY_ENTITY_TYPE = EntityType.EVENT

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    subline = models.CharField(max_length=255, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    start_time = models.DateTimeField(db_index=True)
    end_time = models.DateTimeField()
    participation_from = models.DateTimeField(help_text="Registration opens")
    participation_until = models.DateTimeField(help_text="Registration closes")
    participant_limit = models.PositiveIntegerField(null=True, blank=True, help_text="Empty means unlimited")
    canceled = models.BooleanField(default=False)
    published = models.BooleanField(default=False, db_index=True)
    conference_link = models.CharField(max_length=1024, blank=True, null=True)
    conference_code = models.CharField(max_length=255, blank=True, null=True)
    venue_name = models.CharField(max_length=255, blank=True, null=True)
    venue_street = models.CharField(max_length=255, blank=True, null=True)
    venue_street_number = models.CharField(max_length=32, blank=True, null=True)
    venue_zip_code = models.CharField(max_length=16, blank=True, null=True)
    venue_city = models.CharField(max_length=255, blank=True, null=True)
    background = models.CharField(max_length=512, blank=True, null=True, help_text="Stored object path")
    parent_event = models.ForeignKey(
        "self", on_delete=models.SET_NULL, null=True, blank=True, related_name="child_events"
    )

    objects = EventManager()

    class Meta:
        ordering = ["start_time"]

    def __str__(self) -> str:
        return self.name

    def clean(self) -> None:
        """Validate time ranges and the parent link."""
        super().clean()
        errors: dict[str, list[t.Any]] = {}
        if self.start_time and self.end_time and self.end_time < self.start_time:
            errors["end_time"] = [_("The end must not be before the start.")]
        if (
            self.participation_from
            and self.participation_until
            and self.participation_until < self.participation_from
        ):
            errors["participation_until"] = [_("Registration must not close before it opens.")]
        if self.parent_event_id is not None and self.parent_event_id in {self.pk, *self.descendant_ids()}:
            errors["parent_event"] = [_("An event cannot be nested inside itself.")]
        if errors:
            raise DjangoValidationError(errors)

    def descendant_ids(self) -> set[uuid.UUID]:
        """Ids of all child events, at any depth."""
        found: set[uuid.UUID] = set()
        frontier = {self.pk}
        while frontier:
            children = set(
                Event.objects.filter(parent_event_id__in=frontier).exclude(pk__in=found).values_list("pk", flat=True)
            )
            children -= found | {self.pk}
            found |= children
            frontier = children
        return found

    def ancestor_ids(self) -> list[uuid.UUID]:
        """Ids from the direct parent up to the root."""
        ancestors: list[uuid.UUID] = []
        parent_id = self.parent_event_id
        while parent_id is not None and parent_id not in ancestors and parent_id != self.pk:
            ancestors.append(parent_id)
            parent_id = Event.objects.filter(pk=parent_id).values_list("parent_event_id", flat=True).first()
        return ancestors


class EventProfileRelation(TimeStampedModel):
    """Base for records linking a profile to an event."""

    event: models.ForeignKey[Event, Event]
    profile: models.ForeignKey[t.Any, t.Any]

    class Meta:
        abstract = True

    def __str__(self) -> str:
        return f"{self.profile_id} @ {self.event_id}"


class EventTeamMember(EventProfileRelation):
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="team_members")
    profile = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="event_team_roles")
    is_privileged = models.BooleanField(default=False, help_text="Privileged team members administer the event")

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["event", "profile"], name="unique_event_team_member"),
        ]


class EventParticipant(EventProfileRelation):
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="participants")
    profile = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="participations")

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["event", "profile"], name="unique_event_participant"),
        ]


class EventWaitingListEntry(EventProfileRelation):
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="waiting_list")
    profile = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="waiting_list_entries"
    )

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(fields=["event", "profile"], name="unique_event_waiting_list_entry"),
        ]


class EventSpeaker(EventProfileRelation):
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="speakers")
    profile = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="speaker_roles")

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["event", "profile"], name="unique_event_speaker"),
        ]


class EventResponsibleOrganization(TimeStampedModel):
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="responsible_organizations")
    organization = models.ForeignKey(
        Organization, on_delete=models.CASCADE, related_name="responsible_for_events"
    )

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["event", "organization"], name="unique_event_responsible_organization"),
        ]

    def __str__(self) -> str:
        return f"{self.organization_id} @ {self.event_id}"


def event_document_path(instance: "EventDocument", filename: str) -> str:
    return f"event/{instance.event_id}/documents/{uuid.uuid4()}.pdf"


class EventDocument(TimeStampedModel):
    """A PDF attached to an event, downloadable by signed-in viewers who can see the event."""

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="documents")
    file = models.FileField(upload_to=event_document_path, max_length=255)
    filename = models.CharField(max_length=255)
    title = models.CharField(max_length=255, null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    mime_type = models.CharField(max_length=100)
    size = models.PositiveIntegerField(help_text="Size of the stored file in bytes.")

    class Meta:
        ordering = ["created_at"]

    def __str__(self) -> str:
        return self.title or self.filename

    @property
    def size_in_mb(self) -> float:
        return round(self.size / (1024 * 1024), 2)
