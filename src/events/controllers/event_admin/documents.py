import typing as t
from uuid import UUID

from ninja import File
from ninja.files import UploadedFile
from ninja_extra import api_controller, route

from common.authentication import I18nJWTAuth
from common.throttling import UploadThrottle, WriteThrottle
from events import schema
from events.controllers.permissions import EventAdminPermission
from events.service import document_service

from .base import EventAdminBaseController


@api_controller(
    "/event-admin/{uuid:event_id}",
    auth=I18nJWTAuth(),
    permissions=[EventAdminPermission()],
    tags=["Event Admin"],
    throttle=WriteThrottle(),
)
class EventAdminDocumentsController(EventAdminBaseController):
    """PDF documents attached to the event."""

    @route.get("/documents", url_name="list_event_documents", response=list[schema.EventDocumentSchema])
    def list_documents(self, event_id: UUID) -> list[dict[str, t.Any]]:
        """List the event's documents in upload order."""
        return document_service.list_documents(self.get_one(event_id))

    @route.post(
        "/documents",
        url_name="upload_event_document",
        response={201: schema.EventDocumentSchema},
        throttle=UploadThrottle(),
    )
    def upload_document(self, event_id: UUID, file: File[UploadedFile]) -> tuple[int, dict[str, t.Any]]:
        """Upload a PDF of at most 5MB. The type is detected from the file content."""
        document = document_service.upload_document(self.get_one(event_id), file)
        return 201, document_service.document_payload(document)

    @route.put("/documents/{uuid:document_id}", url_name="edit_event_document", response=schema.EventDocumentSchema)
    def edit_document(
        self, event_id: UUID, document_id: UUID, payload: schema.EventDocumentEditSchema
    ) -> dict[str, t.Any]:
        """Change the title and the description of a document."""
        document = document_service.get_document(self.get_one(event_id), document_id)
        return document_service.document_payload(document_service.update_document(document, payload))

    @route.delete("/documents/{uuid:document_id}", url_name="delete_event_document", response={204: None})
    def delete_document(self, event_id: UUID, document_id: UUID) -> tuple[int, None]:
        """Delete a document and its stored file."""
        document_service.delete_document(document_service.get_document(self.get_one(event_id), document_id))
        return 204, None
