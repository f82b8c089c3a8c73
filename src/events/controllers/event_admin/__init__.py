"""Event admin controllers package.

The event admin endpoints are split into logical groupings.
"""

from .core import EventAdminCoreController
from .documents import EventAdminDocumentsController
from .organizations import EventAdminOrganizationsController
from .participants import EventAdminParticipantsController
from .team import EventAdminTeamController

EVENT_ADMIN_CONTROLLERS: list[type] = [
    EventAdminCoreController,
    EventAdminParticipantsController,
    EventAdminTeamController,
    EventAdminOrganizationsController,
    EventAdminDocumentsController,
]

__all__ = [
    "EventAdminCoreController",
    "EventAdminDocumentsController",
    "EventAdminOrganizationsController",
    "EventAdminParticipantsController",
    "EventAdminTeamController",
    "EVENT_ADMIN_CONTROLLERS",
]
