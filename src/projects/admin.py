from django.contrib import admin

from projects import models


class ProjectTeamMemberInline(admin.TabularInline):  # type: ignore[type-arg]
    model = models.ProjectTeamMember
    extra = 0
    autocomplete_fields = ["profile"]


@admin.register(models.Project)
class ProjectAdmin(admin.ModelAdmin):  # type: ignore[type-arg]
    """Admin model for Projects."""

    list_display = ["name", "slug", "headline", "created_at"]
    search_fields = ["name", "slug"]
    prepopulated_fields = {"slug": ("name",)}
    inlines = [ProjectTeamMemberInline]
