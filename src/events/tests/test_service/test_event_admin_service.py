import pytest
from django.core.exceptions import ValidationError
from django.http import Http404
from ninja.errors import HttpError

from accounts.models import Profile
from common.exceptions import AlreadyMemberError, IdentityMismatchError, LastPrivilegedMemberError, NotPrivilegedError
from common.viewer import Viewer
from conftest import EventFactory
from events import schema
from events.models import (
    Event,
    EventParticipant,
    EventResponsibleOrganization,
    EventSpeaker,
    EventTeamMember,
    EventWaitingListEntry,
    Organization,
    OrganizationMember,
)
from events.service.event_admin_service import EventAdminService
from events.service.participation import AlreadyParticipatingError

pytestmark = pytest.mark.django_db


class TestParticipants:
    def test_admin_can_exceed_the_limit(self, profile: Profile, other_profile: Profile, event: Event) -> None:
        # Arrange
        event.participant_limit = 1
        event.save()
        EventParticipant.objects.create(event=event, profile=other_profile)

        # Act
        EventAdminService(event).add_participant(profile)

        # Assert
        assert EventParticipant.objects.filter(event=event).count() == 2

    def test_adding_takes_profile_off_the_waiting_list(self, profile: Profile, event: Event) -> None:
        EventWaitingListEntry.objects.create(event=event, profile=profile)

        EventAdminService(event).add_participant(profile)

        assert not EventWaitingListEntry.objects.filter(event=event, profile=profile).exists()

    def test_add_existing_participant(self, profile: Profile, event: Event) -> None:
        EventParticipant.objects.create(event=event, profile=profile)

        with pytest.raises(AlreadyParticipatingError):
            EventAdminService(event).add_participant(profile)

    def test_remove_participant(self, profile: Profile, event: Event) -> None:
        EventParticipant.objects.create(event=event, profile=profile)

        EventAdminService(event).remove_participant(profile)

        assert not EventParticipant.objects.filter(event=event).exists()

    def test_remove_unknown_participant(self, profile: Profile, event: Event) -> None:
        with pytest.raises(Http404):
            EventAdminService(event).remove_participant(profile)

    def test_move_between_waiting_list_and_participants(self, profile: Profile, event: Event) -> None:
        # Arrange
        EventWaitingListEntry.objects.create(event=event, profile=profile)
        service = EventAdminService(event)

        # Act / Assert
        service.move_to_participants(profile)
        assert EventParticipant.objects.filter(event=event, profile=profile).exists()
        assert not EventWaitingListEntry.objects.filter(event=event, profile=profile).exists()

        service.move_to_waiting_list(profile)
        assert EventWaitingListEntry.objects.filter(event=event, profile=profile).exists()
        assert not EventParticipant.objects.filter(event=event, profile=profile).exists()


class TestParticipantLimit:
    @pytest.mark.parametrize("limit", [0, -3, None])
    def test_non_positive_limit_means_unlimited(self, event: Event, limit: int | None) -> None:
        event.participant_limit = 10
        event.save()

        updated = EventAdminService(event).update_participant_limit(limit)

        assert updated.participant_limit is None

    def test_limit_below_current_count(self, profile: Profile, other_profile: Profile, event: Event) -> None:
        # Arrange
        EventParticipant.objects.create(event=event, profile=profile)
        EventParticipant.objects.create(event=event, profile=other_profile)

        # Act
        with pytest.raises(ValidationError) as exc_info:
            EventAdminService(event).update_participant_limit(1)

        # Assert
        assert "participant_limit" in exc_info.value.message_dict
        event.refresh_from_db()
        assert event.participant_limit is None

    def test_limit_equal_to_current_count(self, profile: Profile, event: Event) -> None:
        EventParticipant.objects.create(event=event, profile=profile)

        updated = EventAdminService(event).update_participant_limit(1)

        assert updated.participant_limit == 1


class TestSpeakers:
    def test_add_and_remove_speaker(self, profile: Profile, event: Event) -> None:
        service = EventAdminService(event)

        service.add_speaker(profile)
        assert EventSpeaker.objects.filter(event=event, profile=profile).exists()

        service.remove_speaker(profile)
        assert not EventSpeaker.objects.filter(event=event, profile=profile).exists()

    def test_add_speaker_twice(self, profile: Profile, event: Event) -> None:
        EventSpeaker.objects.create(event=event, profile=profile)

        with pytest.raises(AlreadyMemberError):
            EventAdminService(event).add_speaker(profile)


class TestTeam:
    def test_add_team_member(self, profile: Profile, event: Event) -> None:
        member = EventAdminService(event).add_team_member(profile, is_privileged=True)

        assert member.is_privileged is True

    def test_add_team_member_twice(self, admin_profile: Profile, event: Event) -> None:
        with pytest.raises(AlreadyMemberError):
            EventAdminService(event).add_team_member(admin_profile)

    def test_last_privileged_member_cannot_be_removed(self, admin_profile: Profile, event: Event) -> None:
        with pytest.raises(LastPrivilegedMemberError):
            EventAdminService(event).remove_team_member(admin_profile)

        assert EventTeamMember.objects.filter(event=event, profile=admin_profile).exists()

    def test_last_privileged_member_cannot_be_demoted(self, admin_profile: Profile, event: Event) -> None:
        with pytest.raises(LastPrivilegedMemberError):
            EventAdminService(event).set_team_member_privilege(admin_profile, is_privileged=False)

    def test_removal_with_another_privileged_member(
        self, profile: Profile, admin_profile: Profile, event: Event
    ) -> None:
        # Arrange
        service = EventAdminService(event)
        service.add_team_member(profile)
        service.set_team_member_privilege(profile, is_privileged=True)

        # Act
        service.remove_team_member(admin_profile)

        # Assert
        assert list(EventTeamMember.objects.filter(event=event).values_list("profile_id", flat=True)) == [profile.pk]

    def test_non_privileged_member_can_always_be_removed(self, profile: Profile, event: Event) -> None:
        EventTeamMember.objects.create(event=event, profile=profile)

        EventAdminService(event).remove_team_member(profile)

        assert not EventTeamMember.objects.filter(event=event, profile=profile).exists()


class TestHierarchy:
    def test_add_child_event(self, admin_profile: Profile, event: Event, event_factory: EventFactory) -> None:
        child = event_factory(team=[admin_profile])

        EventAdminService(event).add_child_event(Viewer.from_user(admin_profile), child)

        child.refresh_from_db()
        assert child.parent_event == event

    def test_child_must_be_administered_too(
        self, admin_profile: Profile, event: Event, event_factory: EventFactory
    ) -> None:
        child = event_factory()

        with pytest.raises(NotPrivilegedError):
            EventAdminService(event).add_child_event(Viewer.from_user(admin_profile), child)

    def test_ancestor_cannot_become_a_child(
        self, admin_profile: Profile, event: Event, event_factory: EventFactory
    ) -> None:
        # Arrange
        child = event_factory(parent_event=event, team=[admin_profile])

        # Act
        with pytest.raises(ValidationError) as exc_info:
            EventAdminService(child).add_child_event(Viewer.from_user(admin_profile), event)

        # Assert
        assert "event_id" in exc_info.value.message_dict

    def test_event_cannot_be_its_own_child(self, admin_profile: Profile, event: Event) -> None:
        with pytest.raises(ValidationError):
            EventAdminService(event).add_child_event(Viewer.from_user(admin_profile), event)

    def test_remove_child_event(self, event: Event, event_factory: EventFactory) -> None:
        child = event_factory(parent_event=event)

        EventAdminService(event).remove_child_event(child)

        child.refresh_from_db()
        assert child.parent_event is None

    def test_remove_foreign_child(self, event: Event, event_factory: EventFactory) -> None:
        other = event_factory()

        with pytest.raises(ValidationError):
            EventAdminService(event).remove_child_event(other)


class TestLifecycle:
    def test_publish_and_cancel(self, event: Event) -> None:
        service = EventAdminService(event)

        assert service.publish(False).published is False
        assert service.cancel(True).canceled is True

    def test_delete_event(self, admin_profile: Profile, event: Event) -> None:
        payload = schema.EventDeleteSchema(profile_id=admin_profile.pk, event_id=event.pk, event_name=event.name)

        EventAdminService(event).delete_event(Viewer.from_user(admin_profile), payload)

        assert not Event.objects.filter(pk=event.pk).exists()

    def test_delete_requires_own_profile_id(self, admin_profile: Profile, profile: Profile, event: Event) -> None:
        payload = schema.EventDeleteSchema(profile_id=profile.pk, event_id=event.pk, event_name=event.name)

        with pytest.raises(IdentityMismatchError):
            EventAdminService(event).delete_event(Viewer.from_user(admin_profile), payload)

    def test_delete_requires_matching_event_id(
        self, admin_profile: Profile, event: Event, event_factory: EventFactory
    ) -> None:
        other = event_factory()
        payload = schema.EventDeleteSchema(profile_id=admin_profile.pk, event_id=other.pk, event_name=event.name)

        with pytest.raises(HttpError) as exc_info:
            EventAdminService(event).delete_event(Viewer.from_user(admin_profile), payload)

        assert exc_info.value.status_code == 400

    def test_delete_requires_matching_name(self, admin_profile: Profile, event: Event) -> None:
        payload = schema.EventDeleteSchema(profile_id=admin_profile.pk, event_id=event.pk, event_name="Wrong")

        with pytest.raises(ValidationError) as exc_info:
            EventAdminService(event).delete_event(Viewer.from_user(admin_profile), payload)

        assert "event_name" in exc_info.value.message_dict
        assert Event.objects.filter(pk=event.pk).exists()


class TestResponsibleOrganizations:
    def test_add_and_remove_organization(self, event: Event, organization: Organization) -> None:
        service = EventAdminService(event)

        service.add_responsible_organization(organization)
        assert EventResponsibleOrganization.objects.filter(event=event, organization=organization).exists()

        service.remove_responsible_organization(organization)
        assert not EventResponsibleOrganization.objects.filter(event=event).exists()

    def test_add_organization_twice(self, event: Event, organization: Organization) -> None:
        EventResponsibleOrganization.objects.create(event=event, organization=organization)

        with pytest.raises(AlreadyMemberError):
            EventAdminService(event).add_responsible_organization(organization)

        assert EventResponsibleOrganization.objects.filter(event=event).count() == 1

    def test_remove_organization_that_is_not_responsible(self, event: Event, organization: Organization) -> None:
        with pytest.raises(Http404):
            EventAdminService(event).remove_responsible_organization(organization)

    def test_overview_suggests_own_organizations_not_yet_responsible(
        self, admin_profile: Profile, event: Event, organization: Organization
    ) -> None:
        # Arrange
        second = Organization.objects.create(name="Makers Guild", logo="organization/makers/logo.png")
        OrganizationMember.objects.create(organization=second, profile=admin_profile)
        Organization.objects.create(name="Unrelated Society")
        EventResponsibleOrganization.objects.create(event=event, organization=organization)

        # Act
        overview = EventAdminService(event).responsible_organizations_overview(Viewer.from_user(admin_profile))

        # Assert
        assert [o["name"] for o in overview["responsible_organizations"]] == ["Open Source Club"]
        assert [o["name"] for o in overview["own_organizations"]] == ["Makers Guild"]
        assert "/rs:fill:64:64:0/g:ce/" in overview["own_organizations"][0]["logo"]
        assert overview["suggestions"] == []

    def test_overview_search_matches_every_word(
        self, admin_profile: Profile, event: Event, organization: Organization
    ) -> None:
        Organization.objects.create(name="Open Data Lab")
        Organization.objects.create(name="Closed Data Lab")
        EventResponsibleOrganization.objects.create(event=event, organization=organization)

        overview = EventAdminService(event).responsible_organizations_overview(
            Viewer.from_user(admin_profile), query="open lab"
        )

        assert [o["name"] for o in overview["suggestions"]] == ["Open Data Lab"]
