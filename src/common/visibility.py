"""Field-level visibility filtering for anonymous viewers.

Every entity type declares which of its fields carry a visibility flag and which
of its keys embed other entities. Payloads are plain dicts (as built by the
services from querysets); each entity dict carries its own flags under
``visibility_settings``.

Rules for an anonymous viewer:

- a tagged field whose flag is not literally ``True`` becomes ``None``
  (scalars) or ``[]`` (lists); missing settings mean everything tagged is private.
- keys that are not tagged (ids, slugs, urls, ...) pass through.
- embedded entities are filtered with their own flags, independently of the parent.

Authenticated viewers get the payload unchanged.
"""

import typing as t
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

VISIBILITY_KEY = "visibility_settings"

Entity = dict[str, t.Any]


class EntityType(StrEnum):
    PROFILE = "profile"
    ORGANIZATION = "organization"
    PROJECT = "project"
    EVENT = "event"


@dataclass(frozen=True)
class NestedRelation:
    """A key of an entity payload that embeds other entities.

    Attributes:
        key: The key in the parent payload.
        entity_type: The type of the embedded entity.
        many: Whether the key holds a list.
        via: For relation records (e.g. ``{"profile": {...}, "is_privileged": True}``),
            the key of the record that holds the entity.
    """

    key: str
    entity_type: EntityType
    many: bool = False
    via: str | None = None


@dataclass(frozen=True)
class VisibilitySchema:
    entity_type: EntityType
    scalar_fields: frozenset[str]
    list_fields: frozenset[str] = field(default_factory=frozenset)
    relations: tuple[NestedRelation, ...] = ()

    @property
    def tagged_fields(self) -> frozenset[str]:
        """All fields that carry a visibility flag."""
        return self.scalar_fields | self.list_fields


_SOCIAL_FIELDS = frozenset({"facebook", "linkedin", "twitter", "xing", "instagram", "youtube"})
_ADDRESS_FIELDS = frozenset({"street", "street_number", "zip_code", "city"})

VISIBILITY_SCHEMAS: dict[EntityType, VisibilitySchema] = {
    EntityType.PROFILE: VisibilitySchema(
        entity_type=EntityType.PROFILE,
        scalar_fields=frozenset(
            {
                "academic_title",
                "first_name",
                "last_name",
                "position",
                "email",
                "phone",
                "bio",
                "website",
                "avatar",
                "background",
            }
        )
        | _SOCIAL_FIELDS,
        list_fields=frozenset({"skills", "interests"}),
    ),
    EntityType.ORGANIZATION: VisibilitySchema(
        entity_type=EntityType.ORGANIZATION,
        scalar_fields=frozenset({"bio", "email", "phone", "website", "logo", "background"})
        | _ADDRESS_FIELDS
        | _SOCIAL_FIELDS,
        list_fields=frozenset({"supported_by"}),
        relations=(NestedRelation("team_members", EntityType.PROFILE, many=True, via="profile"),),
    ),
    EntityType.PROJECT: VisibilitySchema(
        entity_type=EntityType.PROJECT,
        scalar_fields=frozenset(
            {"headline", "excerpt", "description", "email", "phone", "website", "logo", "background"}
        )
        | _ADDRESS_FIELDS
        | _SOCIAL_FIELDS,
        relations=(
            NestedRelation("team_members", EntityType.PROFILE, many=True, via="profile"),
            NestedRelation("responsible_organizations", EntityType.ORGANIZATION, many=True, via="organization"),
        ),
    ),
    EntityType.EVENT: VisibilitySchema(
        entity_type=EntityType.EVENT,
        scalar_fields=frozenset(
            {
                "subline",
                "description",
                "participant_limit",
                "venue_name",
                "venue_street",
                "venue_street_number",
                "venue_zip_code",
                "venue_city",
                "conference_link",
                "conference_code",
                "background",
            }
        ),
        relations=(
            NestedRelation("parent_event", EntityType.EVENT),
            NestedRelation("child_events", EntityType.EVENT, many=True),
            NestedRelation("participants", EntityType.PROFILE, many=True, via="profile"),
            NestedRelation("speakers", EntityType.PROFILE, many=True, via="profile"),
            NestedRelation("team_members", EntityType.PROFILE, many=True, via="profile"),
            NestedRelation("responsible_organizations", EntityType.ORGANIZATION, many=True, via="organization"),
        ),
    ),
}


def filter_by_visibility(entity_type: EntityType, entity: Entity, viewer_is_anonymous: bool) -> Entity:
    """Strip the fields an anonymous viewer is not allowed to see.

    Returns a new dict for anonymous viewers and the very same payload otherwise.
    The input is never mutated.
    """
    if not viewer_is_anonymous:
        return entity
    return _filter_entity(VISIBILITY_SCHEMAS[entity_type], entity)


def filter_list_by_visibility(
    entity_type: EntityType, entities: t.Iterable[Entity], viewer_is_anonymous: bool
) -> list[Entity]:
    """Apply filter_by_visibility to every entity."""
    return [filter_by_visibility(entity_type, entity, viewer_is_anonymous) for entity in entities]


def _filter_entity(schema: VisibilitySchema, entity: Entity) -> Entity:
    raw_flags = entity.get(VISIBILITY_KEY)
    flags: Mapping[str, t.Any] = raw_flags if isinstance(raw_flags, Mapping) else {}

    filtered = dict(entity)
    for name in schema.scalar_fields:
        if name in filtered and flags.get(name) is not True:
            filtered[name] = None
    for name in schema.list_fields:
        if name in filtered and flags.get(name) is not True:
            filtered[name] = []

    for relation in schema.relations:
        if relation.key not in filtered:
            continue
        nested_schema = VISIBILITY_SCHEMAS[relation.entity_type]
        value = filtered[relation.key]
        if relation.many:
            filtered[relation.key] = [_filter_embedded(nested_schema, item, relation.via) for item in value or []]
        else:
            filtered[relation.key] = _filter_embedded(nested_schema, value, relation.via)
    return filtered


def _filter_embedded(schema: VisibilitySchema, value: Entity | None, via: str | None) -> Entity | None:
    if value is None:
        return None
    if via is None:
        return _filter_entity(schema, value)
    record = dict(value)
    if record.get(via) is not None:
        record[via] = _filter_entity(schema, record[via])
    return record


def validate_visibility_settings(entity_type: EntityType, visibility_settings: t.Any) -> None:
    """Validate a visibility settings mapping for the given entity type.

    Raises:
        ValidationError: if the value is not a mapping, names an untagged field,
            or holds a non-boolean flag.
    """
    if not isinstance(visibility_settings, Mapping):
        raise ValidationError({VISIBILITY_KEY: [_("Visibility settings must be an object.")]})

    allowed = VISIBILITY_SCHEMAS[entity_type].tagged_fields
    errors = []
    for key, value in visibility_settings.items():
        if key not in allowed:
            errors.append(_("Unknown visibility field: %(field)s") % {"field": key})
        elif not isinstance(value, bool):
            errors.append(_("Visibility of %(field)s must be true or false.") % {"field": key})
    if errors:
        raise ValidationError({VISIBILITY_KEY: errors})
