"""Events schema package.

Schemas for events and organizations, re-exported for convenience.
"""

from .event import (
    CancelSchema,
    ChildEventActionSchema,
    ChildEventSchema,
    EventCreateSchema,
    EventDeleteSchema,
    EventDetailSchema,
    EventDocumentEditSchema,
    EventDocumentSchema,
    EventEditSchema,
    EventInListSchema,
    ParentEventSchema,
    ParticipantLimitSchema,
    ParticipantSchema,
    PublishSchema,
)
from .organization import (
    OrganizationAdminSchema,
    OrganizationCreateSchema,
    OrganizationDeleteSchema,
    OrganizationEditSchema,
    OrganizationInListSchema,
    OrganizationRefSchema,
    OrganizationSchema,
    ResponsibleOrganizationAddSchema,
    ResponsibleOrganizationSchema,
    ResponsibleOrganizationsSchema,
)

__all__ = [
    # Events
    "CancelSchema",
    "ChildEventActionSchema",
    "ChildEventSchema",
    "EventCreateSchema",
    "EventDeleteSchema",
    "EventDetailSchema",
    "EventDocumentEditSchema",
    "EventDocumentSchema",
    "EventEditSchema",
    "EventInListSchema",
    "ParentEventSchema",
    "ParticipantLimitSchema",
    "ParticipantSchema",
    "PublishSchema",
    # Organizations
    "OrganizationAdminSchema",
    "OrganizationCreateSchema",
    "OrganizationDeleteSchema",
    "OrganizationEditSchema",
    "OrganizationInListSchema",
    "OrganizationRefSchema",
    "OrganizationSchema",
    "ResponsibleOrganizationAddSchema",
    "ResponsibleOrganizationSchema",
    "ResponsibleOrganizationsSchema",
]
