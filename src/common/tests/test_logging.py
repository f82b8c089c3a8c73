import io
import logging
import typing as t

import orjson
import pytest
import structlog
from django.conf import settings


@pytest.fixture
def log_stream() -> t.Iterator[io.StringIO]:
    """A stdlib logger wired to the configured json formatter."""
    stream = io.StringIO()
    formatter_config = dict(settings.LOGGING["formatters"]["json"])
    formatter_class = formatter_config.pop("()")
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter_class(**formatter_config))
    std_logger = logging.getLogger("community.tests.logging")
    std_logger.addHandler(handler)
    std_logger.setLevel(logging.INFO)
    std_logger.propagate = False
    yield stream
    std_logger.removeHandler(handler)


def test_structlog_events_are_rendered_once(log_stream: io.StringIO) -> None:
    # Act
    structlog.get_logger("community.tests.logging").info("event_document_uploaded", document_id="abc")

    # Assert
    lines = log_stream.getvalue().strip().splitlines()
    assert len(lines) == 1
    payload = orjson.loads(lines[0])
    assert isinstance(payload, dict)
    assert payload["event"] == "event_document_uploaded"
    assert payload["document_id"] == "abc"
    assert payload["level"] == "info"
    assert payload["service"] == settings.SERVICE_NAME


def test_foreign_log_records_share_the_format(log_stream: io.StringIO) -> None:
    logging.getLogger("community.tests.logging").warning("Disk almost full")

    payload = orjson.loads(log_stream.getvalue())

    assert payload["event"] == "Disk almost full"
    assert payload["level"] == "warning"


def test_secrets_are_scrubbed(log_stream: io.StringIO) -> None:
    structlog.get_logger("community.tests.logging").info("login", password="hunter2", note="mail me at a@b.de")

    payload = orjson.loads(log_stream.getvalue())

    assert payload["password"] == "[REDACTED]"
    assert payload["note"] == "mail me at [EMAIL]"
