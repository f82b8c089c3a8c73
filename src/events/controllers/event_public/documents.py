from uuid import UUID

from ninja_extra import api_controller, route

from common.authentication import I18nJWTAuth
from events.service import document_service

from .base import EventPublicBaseController


@api_controller("/events", auth=I18nJWTAuth(), tags=["Events"])
class EventPublicDocumentsController(EventPublicBaseController):
    """Document downloads for signed-in viewers."""

    @route.get("/{slug}/documents/{uuid:document_id}", url_name="download_event_document")
    def download_document(self, slug: str, document_id: UUID):
        """Download a document of an event you may open."""
        document = document_service.get_document(self.get_one(slug), document_id)
        return document_service.download_response(document)
