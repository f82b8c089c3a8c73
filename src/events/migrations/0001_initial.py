import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def _timestamps() -> list[tuple[str, models.Field]]:  # type: ignore[type-arg]
    return [
        ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
        ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
    ]


def _profile_fk(related_name: str) -> models.ForeignKey:  # type: ignore[type-arg]
    return models.ForeignKey(
        on_delete=django.db.models.deletion.CASCADE,
        related_name=related_name,
        to=settings.AUTH_USER_MODEL,
    )


def _event_fk(related_name: str) -> models.ForeignKey:  # type: ignore[type-arg]
    return models.ForeignKey(
        on_delete=django.db.models.deletion.CASCADE,
        related_name=related_name,
        to="events.event",
    )


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Organization",
            fields=[
                ("visibility_settings", models.JSONField(blank=True, default=dict)),
                *_timestamps(),
                ("name", models.CharField(max_length=255, unique=True)),
                ("slug", models.SlugField(max_length=255, unique=True)),
                ("bio", models.TextField(blank=True, null=True)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("phone", models.CharField(blank=True, max_length=32, null=True)),
                ("street", models.CharField(blank=True, max_length=255, null=True)),
                ("street_number", models.CharField(blank=True, max_length=32, null=True)),
                ("zip_code", models.CharField(blank=True, max_length=16, null=True)),
                ("city", models.CharField(blank=True, max_length=255, null=True)),
                ("website", models.URLField(blank=True, null=True)),
                ("facebook", models.URLField(blank=True, null=True)),
                ("linkedin", models.URLField(blank=True, null=True)),
                ("twitter", models.URLField(blank=True, null=True)),
                ("xing", models.URLField(blank=True, null=True)),
                ("instagram", models.URLField(blank=True, null=True)),
                ("youtube", models.URLField(blank=True, null=True)),
                ("supported_by", models.JSONField(blank=True, default=list)),
                ("logo", models.CharField(blank=True, help_text="Stored object path", max_length=512, null=True)),
                (
                    "background",
                    models.CharField(blank=True, help_text="Stored object path", max_length=512, null=True),
                ),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                ("visibility_settings", models.JSONField(blank=True, default=dict)),
                *_timestamps(),
                ("name", models.CharField(max_length=255)),
                ("slug", models.SlugField(max_length=255, unique=True)),
                ("subline", models.CharField(blank=True, max_length=255, null=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("start_time", models.DateTimeField(db_index=True)),
                ("end_time", models.DateTimeField()),
                ("participation_from", models.DateTimeField(help_text="Registration opens")),
                ("participation_until", models.DateTimeField(help_text="Registration closes")),
                (
                    "participant_limit",
                    models.PositiveIntegerField(blank=True, help_text="Empty means unlimited", null=True),
                ),
                ("canceled", models.BooleanField(default=False)),
                ("published", models.BooleanField(db_index=True, default=False)),
                ("conference_link", models.CharField(blank=True, max_length=1024, null=True)),
                ("conference_code", models.CharField(blank=True, max_length=255, null=True)),
                ("venue_name", models.CharField(blank=True, max_length=255, null=True)),
                ("venue_street", models.CharField(blank=True, max_length=255, null=True)),
                ("venue_street_number", models.CharField(blank=True, max_length=32, null=True)),
                ("venue_zip_code", models.CharField(blank=True, max_length=16, null=True)),
                ("venue_city", models.CharField(blank=True, max_length=255, null=True)),
                (
                    "background",
                    models.CharField(blank=True, help_text="Stored object path", max_length=512, null=True),
                ),
                (
                    "parent_event",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="child_events",
                        to="events.event",
                    ),
                ),
            ],
            options={
                "ordering": ["start_time"],
            },
        ),
        migrations.CreateModel(
            name="OrganizationMember",
            fields=[
                *_timestamps(),
                ("is_privileged", models.BooleanField(default=False)),
                (
                    "organization",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="team_members",
                        to="events.organization",
                    ),
                ),
                ("profile", _profile_fk("organization_memberships")),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(fields=("organization", "profile"), name="unique_organization_member")
                ],
            },
        ),
        migrations.AddField(
            model_name="organization",
            name="team",
            field=models.ManyToManyField(
                blank=True,
                related_name="organizations",
                through="events.OrganizationMember",
                to=settings.AUTH_USER_MODEL,
            ),
        ),
        migrations.CreateModel(
            name="EventTeamMember",
            fields=[
                *_timestamps(),
                (
                    "is_privileged",
                    models.BooleanField(default=False, help_text="Privileged team members administer the event"),
                ),
                ("event", _event_fk("team_members")),
                ("profile", _profile_fk("event_team_roles")),
            ],
            options={
                "constraints": [models.UniqueConstraint(fields=("event", "profile"), name="unique_event_team_member")],
            },
        ),
        migrations.CreateModel(
            name="EventParticipant",
            fields=[
                *_timestamps(),
                ("event", _event_fk("participants")),
                ("profile", _profile_fk("participations")),
            ],
            options={
                "constraints": [models.UniqueConstraint(fields=("event", "profile"), name="unique_event_participant")],
            },
        ),
        migrations.CreateModel(
            name="EventWaitingListEntry",
            fields=[
                *_timestamps(),
                ("event", _event_fk("waiting_list")),
                ("profile", _profile_fk("waiting_list_entries")),
            ],
            options={
                "ordering": ["created_at"],
                "constraints": [
                    models.UniqueConstraint(fields=("event", "profile"), name="unique_event_waiting_list_entry")
                ],
            },
        ),
        migrations.CreateModel(
            name="EventSpeaker",
            fields=[
                *_timestamps(),
                ("event", _event_fk("speakers")),
                ("profile", _profile_fk("speaker_roles")),
            ],
            options={
                "constraints": [models.UniqueConstraint(fields=("event", "profile"), name="unique_event_speaker")],
            },
        ),
        migrations.CreateModel(
            name="EventResponsibleOrganization",
            fields=[
                *_timestamps(),
                ("event", _event_fk("responsible_organizations")),
                (
                    "organization",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="responsible_for_events",
                        to="events.organization",
                    ),
                ),
            ],
            options={
                "constraints": [
                    models.UniqueConstraint(
                        fields=("event", "organization"), name="unique_event_responsible_organization"
                    )
                ],
            },
        ),
    ]
