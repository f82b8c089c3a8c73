import typing as t
from datetime import datetime

import structlog
from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import Profile
from accounts.service.profile_service import enhance_profile_ref, profile_ref_payload
from common.exceptions import NotPrivilegedError
from common.images import ImagePreset, derive_image_url
from common.teams import team_member_records
from common.utils import to_payload, update_db_instance
from common.viewer import Mode, Viewer
from common.visibility import EntityType, filter_by_visibility, filter_list_by_visibility
from events import schema
from events.models import Event, EventTeamMember
from events.service.document_service import list_documents
from events.service.modes import derive_event_mode
from events.service.participation import (
    ParticipationService,
    apply_conference_link_visibility,
    filter_child_events,
    resolve_participation,
)

logger = structlog.get_logger(__name__)

EVENT_FIELDS = (
    "name",
    "slug",
    "subline",
    "description",
    "start_time",
    "end_time",
    "participation_from",
    "participation_until",
    "participant_limit",
    "canceled",
    "published",
    "conference_link",
    "conference_code",
    "venue_name",
    "venue_street",
    "venue_street_number",
    "venue_zip_code",
    "venue_city",
    "background",
)
PARENT_EVENT_FIELDS = ("name", "slug", "subline", "start_time", "end_time")
CHILD_EVENT_FIELDS = ("name", "slug", "subline", "start_time", "end_time", "published", "canceled", "background")
EVENT_LIST_FIELDS = ("name", "slug", "subline", "start_time", "end_time", "canceled", "participant_limit", "background")
ORGANIZATION_REF_FIELDS = ("name", "slug", "logo")


def _profile_records(profiles: t.Iterable[Profile]) -> list[dict[str, t.Any]]:
    return [{"profile": profile_ref_payload(profile)} for profile in profiles]


def _add_background_urls(
    payload: dict[str, t.Any], preset: ImagePreset, blurred_preset: ImagePreset
) -> dict[str, t.Any]:
    path = payload.get("background")
    return {
        **payload,
        "background": derive_image_url(path, preset),
        "background_blurred": derive_image_url(path, blurred_preset),
    }


def _viewer_team_event_ids(viewer: Viewer, events: t.Iterable[Event]) -> set[t.Any]:
    if viewer.is_anonymous:
        return set()
    return set(
        EventTeamMember.objects.filter(profile_id=viewer.profile_id, event__in=list(events)).values_list(
            "event_id", flat=True
        )
    )


def get_event_by_slug(slug: str) -> Event:
    """404 if the slug is unknown."""
    return get_object_or_404(Event.objects.with_relations(), slug=slug)


def get_event_detail(slug: str, viewer: Viewer, now: datetime | None = None) -> dict[str, t.Any]:
    """Assemble the event page for the viewer.

    Unpublished events are only shown to their team. Participants and speakers are
    aggregated over the descendant tree when the event has children. Child events
    the viewer may not see are dropped, the conference link is masked, and for
    anonymous viewers every embedded entity is filtered with its own visibility
    settings. Image paths are turned into URLs last, so only images that survived
    filtering are derived.
    """
    now = now or timezone.now()
    event = get_event_by_slug(slug)
    mode = derive_event_mode(viewer, event)
    service = ParticipationService(event, viewer, now)
    participation = service.resolve()

    if not event.published and mode != Mode.ADMIN and not participation.is_team_member:
        raise HttpError(403, str(_("Event not published")))

    children = list(event.child_events.all())
    child_payloads = [to_payload(child, CHILD_EVENT_FIELDS) for child in children]
    child_payloads = filter_child_events(child_payloads, _viewer_team_event_ids(viewer, children))

    payload = to_payload(event, EVENT_FIELDS)
    payload["parent_event"] = to_payload(event.parent_event, PARENT_EVENT_FIELDS) if event.parent_event else None
    payload["child_events"] = child_payloads
    payload["participants"] = _profile_records(service.participants().order_by("first_name", "username"))
    payload["speakers"] = _profile_records(service.speakers().order_by("first_name", "username"))
    payload["team_members"] = team_member_records(event.team_members.all())
    payload["responsible_organizations"] = [
        {"organization": to_payload(record.organization, ORGANIZATION_REF_FIELDS)}
        for record in event.responsible_organizations.all()
    ]

    payload = apply_conference_link_visibility(payload, participation.membership)
    payload = filter_by_visibility(EntityType.EVENT, payload, viewer.is_anonymous)

    payload = _add_background_urls(payload, ImagePreset.EVENT_BACKGROUND, ImagePreset.EVENT_BACKGROUND_BLURRED)
    children_by_id = {child.pk: child for child in children}
    payload["child_events"] = [
        {
            **_add_background_urls(
                child, ImagePreset.CHILD_EVENT_BACKGROUND, ImagePreset.CHILD_EVENT_BACKGROUND_BLURRED
            ),
            "participation": resolve_participation(children_by_id[child["id"]], viewer, now),
        }
        for child in payload["child_events"]
    ]
    for key in ("participants", "speakers", "team_members"):
        payload[key] = [dict(record, profile=dict(record["profile"])) for record in payload[key]]
        for record in payload[key]:
            enhance_profile_ref(record["profile"])
    payload["responsible_organizations"] = [
        {
            "organization": {
                **record["organization"],
                "logo": derive_image_url(record["organization"].get("logo"), ImagePreset.ORGANIZATION_LOGO),
            }
        }
        for record in payload["responsible_organizations"]
    ]

    payload["documents"] = [] if viewer.is_anonymous else list_documents(event)

    return {**payload, "is_full_depth": service.is_full_depth, "mode": mode, "participation": participation}


def event_list_payloads(events: t.Iterable[Event], viewer_is_anonymous: bool) -> list[dict[str, t.Any]]:
    """Filtered list entries with their background image URL."""
    payloads = filter_list_by_visibility(
        EntityType.EVENT, [to_payload(event, EVENT_LIST_FIELDS) for event in events], viewer_is_anonymous
    )
    return [
        {**payload, "background": derive_image_url(payload.get("background"), ImagePreset.CHILD_EVENT_BACKGROUND)}
        for payload in payloads
    ]


def list_events(
    viewer: Viewer, skip: int = 0, take: int = 20, now: datetime | None = None
) -> list[dict[str, t.Any]]:
    """Events the viewer may open. Upcoming and running events come first, past events after them."""
    events = Event.objects.for_viewer(viewer).upcoming_first(now or timezone.now())[skip : skip + take]
    return event_list_payloads(events, viewer.is_anonymous)


@transaction.atomic
def create_event(profile: Profile, payload: schema.EventCreateSchema) -> Event:
    """Create an unpublished event. The creator becomes its privileged team member.

    Nesting below a parent requires being an admin of the parent.
    """
    data = payload.model_dump(exclude={"parent_event_id"})
    parent = None
    if payload.parent_event_id is not None:
        parent = get_object_or_404(Event, pk=payload.parent_event_id)
        if derive_event_mode(Viewer.from_user(profile), parent) != Mode.ADMIN:
            raise NotPrivilegedError()
    if data.get("participant_limit") is not None and data["participant_limit"] <= 0:
        data["participant_limit"] = None
    event = Event.objects.create(**data, parent_event=parent)
    EventTeamMember.objects.create(event=event, profile=profile, is_privileged=True)
    logger.info("event_created", event_id=str(event.pk), profile_id=str(profile.pk))
    return event


def update_event(event: Event, payload: schema.EventEditSchema) -> Event:
    """Change the event fields that were sent.

    The participant limit has its own operation because it is checked against the current count.
    """
    changes = payload.model_dump(exclude_unset=True, exclude={"participant_limit"})
    for required in ("name", "start_time", "end_time", "participation_from", "participation_until"):
        if changes.get(required, ...) is None:
            changes.pop(required)
    updated = update_db_instance(event, **changes)
    logger.info("event_updated", event_id=str(event.pk), fields=sorted(changes))
    return updated


@transaction.atomic
def update_visibility_settings(event: Event, visibility_settings: dict[str, bool]) -> Event:
    """Merge new visibility flags into the event's settings. The model validates the keys."""
    merged = {**event.visibility_settings, **visibility_settings}
    return update_db_instance(event, visibility_settings=merged)
