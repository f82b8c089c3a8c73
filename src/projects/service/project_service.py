import typing as t
from uuid import UUID

import structlog
from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils.translation import gettext_lazy as _

from accounts.models import Profile
from accounts.service.profile_service import enhance_profile_ref
from common.exceptions import AlreadyMemberError
from common.images import ImagePreset, derive_image_url
from common.teams import ensure_other_privileged_member, team_member_records
from common.utils import to_payload, update_db_instance
from common.viewer import Mode, Viewer
from common.visibility import EntityType, filter_by_visibility
from events.models import Organization
from projects import schema
from projects.models import Project, ProjectResponsibleOrganization, ProjectTeamMember

logger = structlog.get_logger(__name__)

PROJECT_FIELDS = (
    "name",
    "slug",
    "headline",
    "excerpt",
    "description",
    "email",
    "phone",
    "street",
    "street_number",
    "zip_code",
    "city",
    "website",
    "facebook",
    "linkedin",
    "twitter",
    "xing",
    "instagram",
    "youtube",
    "logo",
    "background",
)
ORGANIZATION_REF_FIELDS = ("name", "slug", "logo")


def derive_project_mode(viewer: Viewer, project: Project) -> Mode:
    """ADMIN for privileged project team members."""
    if viewer.is_anonymous:
        return Mode.ANON
    if ProjectTeamMember.objects.filter(project=project, profile_id=viewer.profile_id, is_privileged=True).exists():
        return Mode.ADMIN
    return Mode.AUTHENTICATED


def get_project_by_slug(slug: str) -> Project:
    """404 if the slug is unknown."""
    return get_object_or_404(Project.objects.with_relations(), slug=slug)


def project_payload(project: Project, viewer_is_anonymous: bool) -> dict[str, t.Any]:
    """Project with its team and responsible organizations, filtered for anonymous viewers.

    Image fields still hold stored paths.
    """
    payload = to_payload(project, PROJECT_FIELDS)
    payload["team_members"] = team_member_records(project.team_members.all())
    payload["responsible_organizations"] = [
        {"organization": to_payload(record.organization, ORGANIZATION_REF_FIELDS)}
        for record in project.responsible_organizations.all()
    ]
    return filter_by_visibility(EntityType.PROJECT, payload, viewer_is_anonymous)


def get_project_detail(slug: str, viewer: Viewer) -> dict[str, t.Any]:
    """The project page for the viewer."""
    project = get_project_by_slug(slug)
    payload = project_payload(project, viewer.is_anonymous)
    team_members = [dict(record, profile=dict(record["profile"])) for record in payload["team_members"]]
    for record in team_members:
        enhance_profile_ref(record["profile"])
    return {
        **payload,
        "team_members": team_members,
        "responsible_organizations": [
            {
                "organization": {
                    **record["organization"],
                    "logo": derive_image_url(record["organization"].get("logo"), ImagePreset.ORGANIZATION_LOGO),
                }
            }
            for record in payload["responsible_organizations"]
        ],
        "logo": derive_image_url(payload.get("logo"), ImagePreset.ORGANIZATION_LOGO),
        "background": derive_image_url(payload.get("background"), ImagePreset.EVENT_BACKGROUND),
        "mode": derive_project_mode(viewer, project),
    }


def list_projects(viewer: Viewer, skip: int = 0, take: int = 20) -> list[dict[str, t.Any]]:
    """Projects by name, with their logo URL."""
    projects = Project.objects.order_by("name")[skip : skip + take]
    entries = []
    for project in projects:
        payload = filter_by_visibility(
            EntityType.PROJECT,
            to_payload(project, ("name", "slug", "headline", "excerpt", "logo")),
            viewer.is_anonymous,
        )
        entries.append({**payload, "logo": derive_image_url(payload.get("logo"), ImagePreset.ORGANIZATION_LOGO)})
    return entries


@transaction.atomic
def create_project(profile: Profile, payload: schema.ProjectCreateSchema) -> Project:
    """Create a project. The creator becomes its privileged team member."""
    project = Project.objects.create(**payload.model_dump(exclude={"responsible_organization_slugs"}))
    ProjectTeamMember.objects.create(project=project, profile=profile, is_privileged=True)
    for slug in payload.responsible_organization_slugs:
        organization = get_object_or_404(Organization, slug=slug)
        ProjectResponsibleOrganization.objects.create(project=project, organization=organization)
    logger.info("project_created", project_id=str(project.pk), profile_id=str(profile.pk))
    return project


def update_project(project: Project, payload: schema.ProjectEditSchema) -> Project:
    """Change the fields that were sent."""
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("name", ...) is None:
        changes.pop("name")
    return update_db_instance(project, **changes)


@transaction.atomic
def update_visibility_settings(project: Project, visibility_settings: dict[str, bool]) -> Project:
    """Merge new visibility flags into the project's settings. The model validates the keys."""
    merged = {**project.visibility_settings, **visibility_settings}
    return update_db_instance(project, visibility_settings=merged)


@transaction.atomic
def add_member(project: Project, username: str, is_privileged: bool = False) -> ProjectTeamMember:
    """Add a profile to the team by username.

    Raises:
        Http404: if there is no such profile.
        AlreadyMemberError: if the profile is already on the team.
    """
    profile = get_object_or_404(Profile.objects.by_username(username))
    member, created = ProjectTeamMember.objects.get_or_create(
        project=project, profile=profile, defaults={"is_privileged": is_privileged}
    )
    if not created:
        raise AlreadyMemberError(str(_("This profile is already on the team.")))
    logger.info("project_member_added", project_id=str(project.pk), profile_id=str(profile.pk))
    return member


@transaction.atomic
def remove_member(project: Project, profile_id: UUID) -> None:
    """Remove a profile from the team. The last privileged member cannot be removed."""
    member = get_object_or_404(ProjectTeamMember, project=project, profile_id=profile_id)
    ensure_other_privileged_member(project.team_members.all(), profile_id)
    member.delete()
    logger.info("project_member_removed", project_id=str(project.pk), profile_id=str(profile_id))


@transaction.atomic
def set_member_privilege(project: Project, profile_id: UUID, is_privileged: bool) -> ProjectTeamMember | None:
    """Grant or revoke admin rights.

    Unknown profiles are ignored. A known profile that is not on the team is a 404.
    The last privileged member cannot be demoted.
    """
    if not Profile.objects.filter(pk=profile_id).exists():
        return None
    member = get_object_or_404(ProjectTeamMember.objects.select_for_update(), project=project, profile_id=profile_id)
    if not is_privileged:
        ensure_other_privileged_member(project.team_members.all(), profile_id)
    member.is_privileged = is_privileged
    member.save(update_fields=["is_privileged", "updated_at"])
    return member


def list_admins(project: Project) -> list[dict[str, t.Any]]:
    """Privileged team members, ordered by first name, with avatar URLs."""
    records = team_member_records(project.team_members.filter(is_privileged=True))
    for record in records:
        enhance_profile_ref(record["profile"])
    return records
