"""PDF documents attached to events.

Admins upload, describe and delete documents. Any signed-in viewer who may open
the event can download them.
"""

import typing as t

import magic
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.http import FileResponse
from django.shortcuts import get_object_or_404
from django.utils.translation import gettext_lazy as _

from common.utils import update_db_instance
from events import schema
from events.models import Event, EventDocument

logger = structlog.get_logger(__name__)

ALLOWED_DOCUMENT_MIME_TYPES = frozenset({"application/pdf"})
DOCUMENT_FIELDS = ("filename", "title", "description", "mime_type", "size", "created_at")


def max_document_size_bytes() -> int:
    return int(settings.MAX_DOCUMENT_SIZE_MB) * 1024 * 1024


def document_payload(document: EventDocument) -> dict[str, t.Any]:
    payload: dict[str, t.Any] = {"id": document.pk}
    for name in DOCUMENT_FIELDS:
        payload[name] = getattr(document, name)
    payload["size_in_mb"] = document.size_in_mb
    return payload


def list_documents(event: Event) -> list[dict[str, t.Any]]:
    return [document_payload(document) for document in event.documents.all()]


@transaction.atomic
def upload_document(event: Event, file: UploadedFile) -> EventDocument:
    """Store a PDF for the event.

    The type is detected from the content; the client's content type header is ignored.

    Raises:
        ValidationError: if the file is too large or not a PDF.
    """
    limit = max_document_size_bytes()
    if file.size is None or file.size > limit:
        raise ValidationError({"file": [_("Document must be under %(mb)sMB.") % {"mb": limit // (1024 * 1024)}]})

    head = file.read(2048)
    file.seek(0)
    mime_type = magic.from_buffer(head, mime=True)
    if mime_type not in ALLOWED_DOCUMENT_MIME_TYPES:
        raise ValidationError({"file": [_("Only PDF documents can be uploaded.")]})

    document = EventDocument(
        event=event,
        filename=file.name or "document.pdf",
        mime_type=mime_type,
        size=file.size,
    )
    document.file.save(document.filename, file, save=False)
    document.save()
    logger.info("event_document_uploaded", event_id=str(event.pk), document_id=str(document.pk), size=document.size)
    return document


def get_document(event: Event, document_id: t.Any) -> EventDocument:
    """404 unless the document belongs to the event."""
    return get_object_or_404(EventDocument, event=event, pk=document_id)


def update_document(document: EventDocument, payload: schema.EventDocumentEditSchema) -> EventDocument:
    """Change title and description. Empty values clear them."""
    changes = payload.model_dump(exclude_unset=True)
    updated = update_db_instance(document, **{key: value or None for key, value in changes.items()})
    logger.info("event_document_updated", event_id=str(document.event_id), document_id=str(document.pk))
    return updated


@transaction.atomic
def delete_document(document: EventDocument) -> None:
    """Delete the record and, once the transaction commits, the stored file."""
    storage, name = document.file.storage, document.file.name
    document_id, event_id = document.pk, document.event_id
    document.delete()
    if name:
        transaction.on_commit(lambda: storage.delete(name))
    logger.info("event_document_deleted", event_id=str(event_id), document_id=str(document_id))


def download_response(document: EventDocument) -> FileResponse:
    """Stream the stored file as an attachment under its original name."""
    return FileResponse(
        document.file.open("rb"),
        as_attachment=True,
        filename=document.filename,
        content_type=document.mime_type,
    )
