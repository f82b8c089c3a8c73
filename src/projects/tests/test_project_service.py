import uuid

import pytest
from django.http import Http404

from accounts.models import Profile
from common.exceptions import AlreadyMemberError, LastPrivilegedMemberError
from common.viewer import ANONYMOUS, Mode, Viewer
from conftest import ProfileFactory
from events.models import Organization
from projects import schema
from projects.models import Project, ProjectResponsibleOrganization, ProjectTeamMember
from projects.service import project_service

pytestmark = pytest.mark.django_db


@pytest.fixture
def project(profile: Profile) -> Project:
    project = Project.objects.create(
        name="Open Maps",
        headline="Mapping the city",
        email="maps@example.com",
        visibility_settings={"headline": True},
    )
    ProjectTeamMember.objects.create(project=project, profile=profile, is_privileged=True)
    return project


class TestGetProjectDetail:
    def test_anonymous_viewer(self, project: Project) -> None:
        detail = project_service.get_project_detail(project.slug, ANONYMOUS)

        assert detail["headline"] == "Mapping the city"
        assert detail["email"] is None
        assert detail["mode"] == Mode.ANON
        assert detail["team_members"][0]["profile"]["username"] == "alice"

    def test_admin_viewer(self, profile: Profile, project: Project) -> None:
        detail = project_service.get_project_detail(project.slug, Viewer.from_user(profile))

        assert detail["email"] == "maps@example.com"
        assert detail["mode"] == Mode.ADMIN

    def test_responsible_organizations_are_filtered_with_their_own_settings(self, project: Project) -> None:
        # Arrange
        organization = Organization.objects.create(name="City Lab", logo="organization/lab/logo.png")
        ProjectResponsibleOrganization.objects.create(project=project, organization=organization)

        # Act
        detail = project_service.get_project_detail(project.slug, ANONYMOUS)

        # Assert
        responsible = detail["responsible_organizations"][0]["organization"]
        assert responsible["name"] == "City Lab"
        assert responsible["logo"] is None

    def test_unknown_slug(self) -> None:
        with pytest.raises(Http404):
            project_service.get_project_detail("missing", ANONYMOUS)


class TestCreateProject:
    def test_creator_becomes_privileged(self, other_profile: Profile) -> None:
        # Arrange
        Organization.objects.create(name="City Lab")
        payload = schema.ProjectCreateSchema(name="Bike Paths", responsible_organization_slugs=["city-lab"])

        # Act
        project = project_service.create_project(other_profile, payload)

        # Assert
        assert ProjectTeamMember.objects.get(project=project).profile == other_profile
        assert project.responsible_organizations.get().organization.slug == "city-lab"

    def test_unknown_organization(self, other_profile: Profile) -> None:
        payload = schema.ProjectCreateSchema(name="Bike Paths", responsible_organization_slugs=["nope"])

        with pytest.raises(Http404):
            project_service.create_project(other_profile, payload)

        assert not Project.objects.filter(name="Bike Paths").exists()


class TestTeam:
    def test_add_member(self, other_profile: Profile, project: Project) -> None:
        member = project_service.add_member(project, "bob")

        assert member.profile == other_profile
        assert member.is_privileged is False

    def test_add_member_twice(self, project: Project) -> None:
        with pytest.raises(AlreadyMemberError):
            project_service.add_member(project, "alice")

    def test_last_privileged_member(self, profile: Profile, project: Project) -> None:
        with pytest.raises(LastPrivilegedMemberError):
            project_service.remove_member(project, profile.pk)
        with pytest.raises(LastPrivilegedMemberError):
            project_service.set_member_privilege(project, profile.pk, False)

    def test_set_privilege_of_unknown_profile_is_ignored(self, project: Project) -> None:
        assert project_service.set_member_privilege(project, uuid.uuid4(), True) is None

    def test_set_privilege_of_non_member(self, other_profile: Profile, project: Project) -> None:
        with pytest.raises(Http404):
            project_service.set_member_privilege(project, other_profile.pk, True)

    def test_list_admins_ordered_by_first_name(
        self, profile: Profile, profile_factory: ProfileFactory, project: Project
    ) -> None:
        # Arrange
        aaron = profile_factory(username="aaron", first_name="Aaron")
        zoe = profile_factory(username="zoe", first_name="Zoe")
        ProjectTeamMember.objects.create(project=project, profile=zoe, is_privileged=True)
        ProjectTeamMember.objects.create(project=project, profile=aaron, is_privileged=True)
        ProjectTeamMember.objects.create(project=project, profile=profile_factory(first_name="Ben"))

        # Act
        admins = project_service.list_admins(project)

        # Assert
        assert [a["profile"]["first_name"] for a in admins] == ["Aaron", "Alice", "Zoe"]
