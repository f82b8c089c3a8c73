import uuid

import django.db.models.deletion
from django.db import migrations, models

import events.models.event


class Migration(migrations.Migration):
    dependencies = [
        ("events", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="EventDocument",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("file", models.FileField(max_length=255, upload_to=events.models.event.event_document_path)),
                ("filename", models.CharField(max_length=255)),
                ("title", models.CharField(blank=True, max_length=255, null=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("mime_type", models.CharField(max_length=100)),
                ("size", models.PositiveIntegerField(help_text="Size of the stored file in bytes.")),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="documents",
                        to="events.event",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
            },
        ),
    ]
