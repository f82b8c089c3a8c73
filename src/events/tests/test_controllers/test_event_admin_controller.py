import typing as t
import uuid

import orjson
import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test.client import Client
from django.urls import reverse

from accounts.models import Profile
from conftest import EventFactory
from events.models import (
    Event,
    EventDocument,
    EventParticipant,
    EventResponsibleOrganization,
    EventSpeaker,
    EventTeamMember,
    EventWaitingListEntry,
    Organization,
)

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"

pytestmark = pytest.mark.django_db


def _json(data: object) -> bytes:
    return orjson.dumps(data)


class TestPermissions:
    def test_non_admin_is_forbidden(self, profile_client: Client, event: Event) -> None:
        url = reverse("api:update_event", kwargs={"event_id": event.pk})

        response = profile_client.put(url, data=_json({"name": "Hijacked"}), content_type="application/json")

        assert response.status_code == 403
        event.refresh_from_db()
        assert event.name == "Community Summit"

    def test_non_privileged_team_member_is_forbidden(
        self, profile_client: Client, profile: Profile, event: Event
    ) -> None:
        EventTeamMember.objects.create(event=event, profile=profile)

        response = profile_client.put(
            reverse("api:publish_event", kwargs={"event_id": event.pk}),
            data=_json({"published": False}),
            content_type="application/json",
        )

        assert response.status_code == 403

    def test_anonymous_is_unauthorized(self, anon_client: Client, event: Event) -> None:
        response = anon_client.get(reverse("api:list_waiting_list", kwargs={"event_id": event.pk}))

        assert response.status_code == 401


class TestCore:
    def test_update_event(self, admin_client: Client, event: Event) -> None:
        response = admin_client.put(
            reverse("api:update_event", kwargs={"event_id": event.pk}),
            data=_json({"venue_city": "Leipzig"}),
            content_type="application/json",
        )

        assert response.status_code == 200
        event.refresh_from_db()
        assert event.venue_city == "Leipzig"

    def test_update_visibility(self, admin_client: Client, event: Event) -> None:
        response = admin_client.put(
            reverse("api:update_event_visibility", kwargs={"event_id": event.pk}),
            data=_json({"visibility_settings": {"description": True}}),
            content_type="application/json",
        )

        assert response.status_code == 200
        event.refresh_from_db()
        assert event.visibility_settings["description"] is True

    def test_update_visibility_with_unknown_field(self, admin_client: Client, event: Event) -> None:
        response = admin_client.put(
            reverse("api:update_event_visibility", kwargs={"event_id": event.pk}),
            data=_json({"visibility_settings": {"name": True}}),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert "visibility_settings" in response.json()["errors"]

    def test_participant_limit_below_count(
        self, admin_client: Client, profile: Profile, other_profile: Profile, event: Event
    ) -> None:
        # Arrange
        EventParticipant.objects.create(event=event, profile=profile)
        EventParticipant.objects.create(event=event, profile=other_profile)
        url = reverse("api:update_participant_limit", kwargs={"event_id": event.pk})

        # Act
        response = admin_client.put(url, data=_json({"participant_limit": 1}), content_type="application/json")

        # Assert
        assert response.status_code == 400
        assert "participant_limit" in response.json()["errors"]

    def test_participant_limit_zero_removes_limit(self, admin_client: Client, event: Event) -> None:
        event.participant_limit = 5
        event.save()

        response = admin_client.put(
            reverse("api:update_participant_limit", kwargs={"event_id": event.pk}),
            data=_json({"participant_limit": 0}),
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json() == {"participant_limit": None}

    def test_publish_and_cancel(self, admin_client: Client, event: Event) -> None:
        response = admin_client.put(
            reverse("api:cancel_event", kwargs={"event_id": event.pk}),
            data=_json({"canceled": True}),
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json() == {"canceled": True}
        event.refresh_from_db()
        assert event.canceled is True

    def test_add_and_remove_child_event(
        self, admin_client: Client, admin_profile: Profile, event: Event, event_factory: EventFactory
    ) -> None:
        # Arrange
        child = event_factory(team=[admin_profile])

        # Act
        response = admin_client.post(
            reverse("api:add_child_event", kwargs={"event_id": event.pk}),
            data=_json({"event_id": str(child.pk)}),
            content_type="application/json",
        )

        # Assert
        assert response.status_code == 200
        child.refresh_from_db()
        assert child.parent_event_id == event.pk

        response = admin_client.delete(
            reverse("api:remove_child_event", kwargs={"event_id": event.pk, "child_id": child.pk})
        )
        assert response.status_code == 204
        child.refresh_from_db()
        assert child.parent_event_id is None

    def test_add_foreign_child_event(self, admin_client: Client, event: Event, event_factory: EventFactory) -> None:
        child = event_factory()

        response = admin_client.post(
            reverse("api:add_child_event", kwargs={"event_id": event.pk}),
            data=_json({"event_id": str(child.pk)}),
            content_type="application/json",
        )

        assert response.status_code == 403

    def test_delete_event(self, admin_client: Client, admin_profile: Profile, event: Event) -> None:
        payload = {"profile_id": str(admin_profile.pk), "event_id": str(event.pk), "event_name": event.name}

        response = admin_client.post(
            reverse("api:delete_event", kwargs={"event_id": event.pk}),
            data=_json(payload),
            content_type="application/json",
        )

        assert response.status_code == 204
        assert not Event.objects.filter(pk=event.pk).exists()

    def test_delete_event_with_foreign_profile_id(
        self, admin_client: Client, profile: Profile, event: Event
    ) -> None:
        payload = {"profile_id": str(profile.pk), "event_id": str(event.pk), "event_name": event.name}

        response = admin_client.post(
            reverse("api:delete_event", kwargs={"event_id": event.pk}),
            data=_json(payload),
            content_type="application/json",
        )

        assert response.status_code == 401
        assert Event.objects.filter(pk=event.pk).exists()

    def test_delete_event_with_wrong_name(self, admin_client: Client, admin_profile: Profile, event: Event) -> None:
        payload = {"profile_id": str(admin_profile.pk), "event_id": str(event.pk), "event_name": "Other"}

        response = admin_client.post(
            reverse("api:delete_event", kwargs={"event_id": event.pk}),
            data=_json(payload),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert "event_name" in response.json()["errors"]


class TestParticipants:
    def test_add_participant_beyond_limit(
        self, admin_client: Client, profile: Profile, other_profile: Profile, event: Event
    ) -> None:
        # Arrange
        event.participant_limit = 1
        event.save()
        EventParticipant.objects.create(event=event, profile=other_profile)

        # Act
        response = admin_client.post(
            reverse("api:add_participant", kwargs={"event_id": event.pk}),
            data=_json({"profile_id": str(profile.pk)}),
            content_type="application/json",
        )

        # Assert
        assert response.status_code == 200
        assert EventParticipant.objects.filter(event=event).count() == 2

    def test_add_participant_twice(self, admin_client: Client, profile: Profile, event: Event) -> None:
        EventParticipant.objects.create(event=event, profile=profile)

        response = admin_client.post(
            reverse("api:add_participant", kwargs={"event_id": event.pk}),
            data=_json({"profile_id": str(profile.pk)}),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json()["status"] == "already_joined"

    def test_waiting_list_is_first_come_first_served(
        self, admin_client: Client, profile: Profile, other_profile: Profile, event: Event
    ) -> None:
        # Arrange
        EventWaitingListEntry.objects.create(event=event, profile=other_profile)
        EventWaitingListEntry.objects.create(event=event, profile=profile)

        # Act
        response = admin_client.get(reverse("api:list_waiting_list", kwargs={"event_id": event.pk}))

        # Assert
        assert response.status_code == 200
        assert [entry["profile"]["username"] for entry in response.json()] == ["bob", "alice"]

    def test_promote_and_demote(self, admin_client: Client, profile: Profile, event: Event) -> None:
        EventWaitingListEntry.objects.create(event=event, profile=profile)
        kwargs = {"event_id": event.pk, "profile_id": profile.pk}

        response = admin_client.post(reverse("api:move_to_participants", kwargs=kwargs))
        assert response.status_code == 200
        assert EventParticipant.objects.filter(event=event, profile=profile).exists()

        response = admin_client.post(reverse("api:move_to_waiting_list", kwargs=kwargs))
        assert response.status_code == 200
        assert EventWaitingListEntry.objects.filter(event=event, profile=profile).exists()

    def test_remove_missing_participant(self, admin_client: Client, profile: Profile, event: Event) -> None:
        response = admin_client.delete(
            reverse("api:remove_participant", kwargs={"event_id": event.pk, "profile_id": profile.pk})
        )

        assert response.status_code == 404

    def test_speakers(self, admin_client: Client, profile: Profile, event: Event) -> None:
        response = admin_client.post(
            reverse("api:add_speaker", kwargs={"event_id": event.pk}),
            data=_json({"profile_id": str(profile.pk)}),
            content_type="application/json",
        )
        assert response.status_code == 200
        assert EventSpeaker.objects.filter(event=event, profile=profile).exists()

        response = admin_client.delete(
            reverse("api:remove_speaker", kwargs={"event_id": event.pk, "profile_id": profile.pk})
        )
        assert response.status_code == 204
        assert not EventSpeaker.objects.filter(event=event, profile=profile).exists()


class TestTeam:
    def test_add_team_member(self, admin_client: Client, profile: Profile, event: Event) -> None:
        response = admin_client.post(
            reverse("api:add_event_team_member", kwargs={"event_id": event.pk}),
            data=_json({"profile_id": str(profile.pk), "is_privileged": True}),
            content_type="application/json",
        )

        assert response.status_code == 200
        assert EventTeamMember.objects.get(event=event, profile=profile).is_privileged is True

    def test_last_privileged_member_cannot_leave(
        self, admin_client: Client, admin_profile: Profile, event: Event
    ) -> None:
        response = admin_client.delete(
            reverse("api:remove_event_team_member", kwargs={"event_id": event.pk, "profile_id": admin_profile.pk})
        )

        assert response.status_code == 400
        assert EventTeamMember.objects.filter(event=event, profile=admin_profile).exists()

    def test_demote_with_another_admin(
        self, admin_client: Client, admin_profile: Profile, profile: Profile, event: Event
    ) -> None:
        EventTeamMember.objects.create(event=event, profile=profile, is_privileged=True)

        response = admin_client.put(
            reverse("api:set_event_team_member_privilege", kwargs={"event_id": event.pk}),
            data=_json({"profile_id": str(admin_profile.pk), "is_privileged": False}),
            content_type="application/json",
        )

        assert response.status_code == 200
        assert EventTeamMember.objects.get(event=event, profile=admin_profile).is_privileged is False


class TestResponsibleOrganizations:
    def test_add_list_and_remove(self, admin_client: Client, event: Event, organization: Organization) -> None:
        # Add
        response = admin_client.post(
            reverse("api:add_responsible_organization", kwargs={"event_id": event.pk}),
            data=_json({"organization_id": str(organization.pk)}),
            content_type="application/json",
        )
        assert response.status_code == 200

        # List
        response = admin_client.get(reverse("api:list_responsible_organizations", kwargs={"event_id": event.pk}))
        assert response.status_code == 200
        body = response.json()
        assert [o["slug"] for o in body["responsible_organizations"]] == [organization.slug]
        assert body["own_organizations"] == []

        # Remove
        response = admin_client.delete(
            reverse(
                "api:remove_responsible_organization",
                kwargs={"event_id": event.pk, "organization_id": organization.pk},
            )
        )
        assert response.status_code == 204
        assert not EventResponsibleOrganization.objects.filter(event=event).exists()

    def test_adding_twice_is_rejected(self, admin_client: Client, event: Event, organization: Organization) -> None:
        EventResponsibleOrganization.objects.create(event=event, organization=organization)

        response = admin_client.post(
            reverse("api:add_responsible_organization", kwargs={"event_id": event.pk}),
            data=_json({"organization_id": str(organization.pk)}),
            content_type="application/json",
        )

        assert response.status_code == 400

    def test_unknown_organization(self, admin_client: Client, event: Event) -> None:
        response = admin_client.post(
            reverse("api:add_responsible_organization", kwargs={"event_id": event.pk}),
            data=_json({"organization_id": str(uuid.uuid4())}),
            content_type="application/json",
        )

        assert response.status_code == 404

    def test_non_admin_is_forbidden(self, profile_client: Client, event: Event, organization: Organization) -> None:
        response = profile_client.post(
            reverse("api:add_responsible_organization", kwargs={"event_id": event.pk}),
            data=_json({"organization_id": str(organization.pk)}),
            content_type="application/json",
        )

        assert response.status_code == 403
        assert not EventResponsibleOrganization.objects.exists()


class TestDocuments:
    def _upload(self, client: Client, event: Event, content: bytes = PDF_BYTES) -> t.Any:
        return client.post(
            reverse("api:upload_event_document", kwargs={"event_id": event.pk}),
            data={"file": SimpleUploadedFile("agenda.pdf", content, content_type="application/pdf")},
        )

    def test_upload_edit_and_delete(
        self, admin_client: Client, event: Event, django_capture_on_commit_callbacks: t.Any
    ) -> None:
        # Upload
        response = self._upload(admin_client, event)
        assert response.status_code == 201
        document_id = response.json()["id"]
        assert response.json()["filename"] == "agenda.pdf"

        # Edit
        response = admin_client.put(
            reverse("api:edit_event_document", kwargs={"event_id": event.pk, "document_id": document_id}),
            data=_json({"title": "Agenda", "description": "Both days"}),
            content_type="application/json",
        )
        assert response.status_code == 200
        assert response.json()["title"] == "Agenda"

        # List
        response = admin_client.get(reverse("api:list_event_documents", kwargs={"event_id": event.pk}))
        assert [d["description"] for d in response.json()] == ["Both days"]

        # Delete
        with django_capture_on_commit_callbacks(execute=True):
            response = admin_client.delete(
                reverse("api:delete_event_document", kwargs={"event_id": event.pk, "document_id": document_id})
            )
        assert response.status_code == 204
        assert not EventDocument.objects.exists()

    def test_non_pdf_is_rejected(self, admin_client: Client, event: Event) -> None:
        response = self._upload(admin_client, event, content=b"<html>not a pdf</html>")

        assert response.status_code == 400
        assert "file" in response.json()["errors"]
        assert not EventDocument.objects.exists()

    def test_non_admin_cannot_upload(self, profile_client: Client, event: Event) -> None:
        response = self._upload(profile_client, event)

        assert response.status_code == 403
        assert not EventDocument.objects.exists()
