"""Admin interface for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from accounts.models import Profile


@admin.register(Profile)
class ProfileAdmin(UserAdmin):  # type: ignore[type-arg]
    """Admin model for Profiles."""

    list_display = ["username", "email", "first_name", "last_name", "is_staff", "date_joined"]
    search_fields = ["username", "email", "first_name", "last_name"]
    fieldsets = (
        *UserAdmin.fieldsets,  # type: ignore[misc]
        (
            "Community",
            {
                "fields": (
                    "academic_title",
                    "position",
                    "phone",
                    "bio",
                    "website",
                    "skills",
                    "interests",
                    "avatar",
                    "background",
                    "language",
                    "terms_accepted",
                    "visibility_settings",
                )
            },
        ),
    )
