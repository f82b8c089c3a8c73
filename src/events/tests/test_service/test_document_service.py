import pytest
from django.core.exceptions import ValidationError
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.http import Http404

from conftest import EventFactory
from events import schema
from events.models import Event, EventDocument
from events.service import document_service

pytestmark = pytest.mark.django_db

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"


def _pdf(name: str = "agenda.pdf", content: bytes = PDF_BYTES) -> SimpleUploadedFile:
    return SimpleUploadedFile(name, content, content_type="application/pdf")


@pytest.fixture
def document(event: Event) -> EventDocument:
    return document_service.upload_document(event, _pdf())


class TestUploadDocument:
    def test_pdf_is_stored_below_the_event(self, event: Event) -> None:
        # Act
        document = document_service.upload_document(event, _pdf())

        # Assert
        assert document.filename == "agenda.pdf"
        assert document.mime_type == "application/pdf"
        assert document.size == len(PDF_BYTES)
        assert document.file.name.startswith(f"event/{event.pk}/documents/")
        assert document.file.name.endswith(".pdf")
        assert default_storage.exists(document.file.name)

    def test_content_decides_not_the_header(self, event: Event) -> None:
        disguised = SimpleUploadedFile("agenda.pdf", b"just some text", content_type="application/pdf")

        with pytest.raises(ValidationError) as exc_info:
            document_service.upload_document(event, disguised)

        assert "file" in exc_info.value.message_dict
        assert not EventDocument.objects.exists()

    def test_size_limit(self, settings: object, event: Event) -> None:
        settings.MAX_DOCUMENT_SIZE_MB = 1  # type: ignore[attr-defined]
        too_large = _pdf(content=PDF_BYTES + b"0" * (1024 * 1024))

        with pytest.raises(ValidationError):
            document_service.upload_document(event, too_large)

        assert not EventDocument.objects.exists()


class TestManageDocuments:
    def test_payload_reports_size_in_mb(self, document: EventDocument) -> None:
        payload = document_service.document_payload(document)

        assert payload["id"] == document.pk
        assert payload["size_in_mb"] == 0.0
        assert payload["title"] is None

    def test_update_title_and_description(self, document: EventDocument) -> None:
        payload = schema.EventDocumentEditSchema(title=" Agenda ", description="Day one")

        updated = document_service.update_document(document, payload)

        assert updated.title == "Agenda"
        assert updated.description == "Day one"

    def test_empty_title_is_cleared(self, document: EventDocument) -> None:
        document.title = "Agenda"
        document.save()

        updated = document_service.update_document(document, schema.EventDocumentEditSchema(title=""))

        assert updated.title is None

    def test_delete_removes_the_stored_file(
        self, document: EventDocument, django_capture_on_commit_callbacks: object
    ) -> None:
        name = document.file.name

        with django_capture_on_commit_callbacks(execute=True):  # type: ignore[operator]
            document_service.delete_document(document)

        assert not EventDocument.objects.exists()
        assert not default_storage.exists(name)

    def test_document_of_another_event_is_not_found(
        self, document: EventDocument, event_factory: EventFactory
    ) -> None:
        other_event = event_factory()

        with pytest.raises(Http404):
            document_service.get_document(other_event, document.pk)

    def test_download_is_an_attachment(self, document: EventDocument) -> None:
        response = document_service.download_response(document)

        assert response["Content-Type"] == "application/pdf"
        assert 'filename="agenda.pdf"' in response["Content-Disposition"]
        assert b"".join(response.streaming_content) == PDF_BYTES  # type: ignore[arg-type]
        response.close()
