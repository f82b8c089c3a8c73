from .attendance import EventPublicAttendanceController
from .details import EventPublicDetailsController
from .documents import EventPublicDocumentsController

# Controllers in order to preserve path resolution.
EVENT_PUBLIC_CONTROLLERS: list[type] = [
    EventPublicDetailsController,  # /, /{slug}
    EventPublicAttendanceController,  # /{slug}/participation, participate, waiting-list
    EventPublicDocumentsController,  # /{slug}/documents/{document_id}
]

__all__ = [
    "EventPublicAttendanceController",
    "EventPublicDetailsController",
    "EventPublicDocumentsController",
    "EVENT_PUBLIC_CONTROLLERS",
]
