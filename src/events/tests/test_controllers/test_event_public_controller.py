from datetime import timedelta

import orjson
import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test.client import Client
from django.urls import reverse
from django.utils import timezone

from accounts.models import Profile
from conftest import EventFactory
from events.models import Event, EventDocument, EventParticipant, EventTeamMember, EventWaitingListEntry
from events.service import document_service

pytestmark = pytest.mark.django_db


class TestListEvents:
    def test_anonymous_sees_published_events(
        self, anon_client: Client, event: Event, event_factory: EventFactory
    ) -> None:
        # Arrange
        event_factory(published=False)
        url = reverse("api:list_events")

        # Act
        response = anon_client.get(url)

        # Assert
        assert response.status_code == 200
        assert [e["slug"] for e in response.json()] == [event.slug]

    def test_pagination(self, anon_client: Client, event_factory: EventFactory) -> None:
        for _ in range(3):
            event_factory()

        response = anon_client.get(reverse("api:list_events"), {"skip": 1, "take": 1})

        assert response.status_code == 200
        assert len(response.json()) == 1


class TestCreateEvent:
    def test_create_event(self, profile_client: Client, profile: Profile) -> None:
        # Arrange
        now = timezone.now()
        payload = {
            "name": "Hack Night",
            "start_time": (now + timedelta(days=2)).isoformat(),
            "end_time": (now + timedelta(days=2, hours=3)).isoformat(),
            "participation_from": now.isoformat(),
            "participation_until": (now + timedelta(days=1)).isoformat(),
            "participant_limit": 20,
        }

        # Act
        response = profile_client.post(
            reverse("api:create_event"), data=orjson.dumps(payload), content_type="application/json"
        )

        # Assert
        assert response.status_code == 201, response.content
        event = Event.objects.get(slug="hack-night")
        assert event.published is False
        assert event.participant_limit == 20
        assert EventTeamMember.objects.get(event=event).profile == profile

    def test_anonymous_cannot_create(self, anon_client: Client) -> None:
        response = anon_client.post(reverse("api:create_event"), data={}, content_type="application/json")

        assert response.status_code == 401

    def test_invalid_range(self, profile_client: Client) -> None:
        now = timezone.now()
        payload = {
            "name": "Backwards",
            "start_time": (now + timedelta(days=2)).isoformat(),
            "end_time": (now + timedelta(days=1)).isoformat(),
            "participation_from": now.isoformat(),
            "participation_until": (now + timedelta(days=1)).isoformat(),
        }

        response = profile_client.post(
            reverse("api:create_event"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 422


class TestGetEvent:
    def test_anonymous_detail(self, anon_client: Client, event: Event) -> None:
        # Act
        response = anon_client.get(reverse("api:get_event", kwargs={"slug": event.slug}))

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["subline"] == "All together"
        assert data["description"] is None
        assert data["conference_link"] is None
        assert data["mode"] == "anon"
        assert data["participation"]["status"] == "login_required"
        assert data["is_full_depth"] is False
        assert "visibility_settings" not in data

    def test_participant_sees_conference_link(self, profile_client: Client, profile: Profile, event: Event) -> None:
        EventParticipant.objects.create(event=event, profile=profile)

        response = profile_client.get(reverse("api:get_event", kwargs={"slug": event.slug}))

        assert response.status_code == 200
        assert response.json()["conference_link"] == "https://meet.example.com/summit"
        assert response.json()["participation"]["is_participant"] is True

    def test_unpublished_event(self, profile_client: Client, admin_client: Client, event: Event) -> None:
        event.published = False
        event.save()
        url = reverse("api:get_event", kwargs={"slug": event.slug})

        assert profile_client.get(url).status_code == 403
        assert admin_client.get(url).status_code == 200

    def test_unknown_slug(self, anon_client: Client) -> None:
        response = anon_client.get(reverse("api:get_event", kwargs={"slug": "missing"}))

        assert response.status_code == 404

    def test_child_events_carry_participation(
        self, profile_client: Client, profile: Profile, event: Event, event_factory: EventFactory
    ) -> None:
        # Arrange
        child = event_factory(parent_event=event, name="Workshop")
        EventParticipant.objects.create(event=child, profile=profile)

        # Act
        response = profile_client.get(reverse("api:get_event", kwargs={"slug": event.slug}))

        # Assert
        data = response.json()
        assert data["is_full_depth"] is True
        assert data["child_events"][0]["slug"] == "workshop"
        assert data["child_events"][0]["participation"]["status"] == "already_joined"
        assert data["participants"][0]["profile"]["username"] == "alice"


class TestAttendance:
    def test_get_participation(self, profile_client: Client, event: Event) -> None:
        response = profile_client.get(reverse("api:get_my_participation", kwargs={"slug": event.slug}))

        assert response.status_code == 200
        assert response.json()["status"] == "can_join"
        assert response.json()["can_participate"] is True

    def test_participate_and_leave(self, profile_client: Client, profile: Profile, event: Event) -> None:
        url = reverse("api:participate", kwargs={"slug": event.slug})

        response = profile_client.post(url)
        assert response.status_code == 200
        assert response.json()["status"] == "already_joined"
        assert EventParticipant.objects.filter(event=event, profile=profile).exists()

        response = profile_client.delete(reverse("api:leave_event", kwargs={"slug": event.slug}))
        assert response.status_code == 200
        assert response.json()["status"] == "can_join"

    def test_participate_full_event(
        self, profile_client: Client, other_profile: Profile, event: Event
    ) -> None:
        # Arrange
        event.participant_limit = 1
        event.save()
        EventParticipant.objects.create(event=event, profile=other_profile)

        # Act
        response = profile_client.post(reverse("api:participate", kwargs={"slug": event.slug}))

        # Assert
        assert response.status_code == 400
        assert response.json()["status"] == "can_waitlist"

    def test_waiting_list(
        self, profile_client: Client, profile: Profile, other_profile: Profile, event: Event
    ) -> None:
        # Arrange
        event.participant_limit = 1
        event.save()
        EventParticipant.objects.create(event=event, profile=other_profile)

        # Act
        response = profile_client.post(reverse("api:join_waiting_list", kwargs={"slug": event.slug}))

        # Assert
        assert response.status_code == 200
        assert response.json()["is_on_waiting_list"] is True
        assert EventWaitingListEntry.objects.filter(event=event, profile=profile).exists()

        response = profile_client.delete(reverse("api:leave_waiting_list", kwargs={"slug": event.slug}))
        assert response.status_code == 200
        assert response.json()["status"] == "can_waitlist"

    def test_anonymous_cannot_participate(self, anon_client: Client, event: Event) -> None:
        response = anon_client.post(reverse("api:participate", kwargs={"slug": event.slug}))

        assert response.status_code == 401

    def test_unpublished_event_is_not_found(self, profile_client: Client, event: Event) -> None:
        event.published = False
        event.save()

        response = profile_client.post(reverse("api:participate", kwargs={"slug": event.slug}))

        assert response.status_code == 404


class TestDocuments:
    @pytest.fixture
    def document(self, event: Event) -> EventDocument:
        pdf = SimpleUploadedFile("agenda.pdf", b"%PDF-1.4\n%%EOF\n", content_type="application/pdf")
        return document_service.upload_document(event, pdf)

    def test_documents_are_listed_for_signed_in_viewers(
        self, anon_client: Client, profile_client: Client, event: Event, document: EventDocument
    ) -> None:
        url = reverse("api:get_event", kwargs={"slug": event.slug})

        assert anon_client.get(url).json()["documents"] == []
        assert [d["id"] for d in profile_client.get(url).json()["documents"]] == [str(document.pk)]

    def test_download(self, profile_client: Client, event: Event, document: EventDocument) -> None:
        response = profile_client.get(
            reverse("api:download_event_document", kwargs={"slug": event.slug, "document_id": document.pk})
        )

        assert response.status_code == 200
        assert response["Content-Disposition"] == 'attachment; filename="agenda.pdf"'
        assert b"".join(response.streaming_content) == b"%PDF-1.4\n%%EOF\n"  # type: ignore[attr-defined]

    def test_anonymous_cannot_download(self, anon_client: Client, event: Event, document: EventDocument) -> None:
        response = anon_client.get(
            reverse("api:download_event_document", kwargs={"slug": event.slug, "document_id": document.pk})
        )

        assert response.status_code == 401

    def test_documents_of_unpublished_events_stay_hidden(
        self, profile_client: Client, event: Event, document: EventDocument
    ) -> None:
        event.published = False
        event.save()

        response = profile_client.get(
            reverse("api:download_event_document", kwargs={"slug": event.slug, "document_id": document.pk})
        )

        assert response.status_code == 404
