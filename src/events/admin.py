"""Admin classes for events and organizations."""

from django.contrib import admin

from events import models


class OrganizationMemberInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.OrganizationMember
    extra = 0
    autocomplete_fields = ["profile"]


class EventTeamMemberInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.EventTeamMember
    extra = 0
    autocomplete_fields = ["profile"]


class EventParticipantInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.EventParticipant
    extra = 0
    autocomplete_fields = ["profile"]


class EventWaitingListEntryInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.EventWaitingListEntry
    extra = 0
    autocomplete_fields = ["profile"]
    readonly_fields = ["created_at"]


class EventSpeakerInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.EventSpeaker
    extra = 0
    autocomplete_fields = ["profile"]


class EventDocumentInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.EventDocument
    extra = 0
    readonly_fields = ["filename", "mime_type", "size"]


@admin.register(models.Organization)
class OrganizationAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Admin model for Organizations."""

    list_display = ["name", "slug", "city", "created_at"]
    search_fields = ["name", "slug"]
    prepopulated_fields = {"slug": ("name",)}
    inlines = [OrganizationMemberInline]


@admin.register(models.Event)
class EventAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Admin model for Events."""

    list_display = ["name", "slug", "start_time", "published", "canceled", "participant_limit", "parent_event"]
    list_filter = ["published", "canceled"]
    search_fields = ["name", "slug"]
    prepopulated_fields = {"slug": ("name",)}
    autocomplete_fields = ["parent_event"]
    inlines = [
        EventTeamMemberInline,
        EventParticipantInline,
        EventWaitingListEntryInline,
        EventSpeakerInline,
        EventDocumentInline,
    ]
