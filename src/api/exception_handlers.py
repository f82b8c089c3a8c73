"""Exception handlers for the API."""

import traceback
import typing as t
from copy import deepcopy

import orjson
import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja.responses import Response

from common.exceptions import AlreadyMemberError, LastPrivilegedMemberError
from events.service.participation import ParticipationError

logger = structlog.get_logger(__name__)


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle a general exception.

    Args:
        request: The incoming HTTP request.
        exc: The exception.

    Returns:
        The response.
    """
    data = {"detail": "Internal Server Error."}
    tb_str = traceback.format_exc()
    is_staff = getattr(request, "user", None) and request.user.is_staff
    if request.method in ("POST", "PUT", "PATCH") and request.headers.get("Content-Type") == "application/json":
        try:
            json_payload = obfuscate(orjson.loads(request.body))
        except orjson.JSONDecodeError:
            json_payload = None
    else:
        json_payload = None
    logger.exception(
        "INTERNAL_SERVER_ERROR",
        method=request.method,
        path=request.path,
        headers=obfuscate(dict(request.headers)),
        query=obfuscate(request.GET.dict()),
        json_payload=json_payload,
        user=str(request.user) if getattr(request, "user", None) else None,
    )
    if settings.DEBUG or is_staff:  # pragma: no cover
        data["traceback"] = tb_str
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a validation error.

    Args:
        request: The incoming HTTP request.
        exc: The exception.
    """
    logger.info("VALIDATION_ERROR", path=request.path)
    if hasattr(exc, "error_dict"):
        error_dict = {k: [ee for e in v for ee in e] for k, v in exc.error_dict.items()}
    else:
        error_dict = {"__all__": list(exc.messages)}  # type: ignore[union-attr]
    return Response(status=400, data={"errors": error_dict})


def handle_participation_error(
    request: HttpRequest, exc: ParticipationError | t.Type[ParticipationError]
) -> Response:
    """Handle a participation error, telling the client which status blocked the action."""
    status = exc.status if isinstance(exc, ParticipationError) else None
    return Response(status=400, data={"detail": str(exc), "status": status})


def handle_already_member_error(request: HttpRequest, exc: AlreadyMemberError | t.Type[AlreadyMemberError]) -> Response:
    """Handle an already member error."""
    return Response(status=400, data={"detail": str(exc)})


def handle_last_privileged_member_error(
    request: HttpRequest, exc: LastPrivilegedMemberError | t.Type[LastPrivilegedMemberError]
) -> Response:
    """Handle a last privileged member error."""
    return Response(status=400, data={"detail": str(exc)})


SENSITIVE_KEYS = {"password", "token", "x-api-key", "authorization", "authentication", "conference_code"}


def obfuscate(data: dict[str, t.Any]) -> dict[str, t.Any]:
    """Obfuscate sensitive data in payloads and headers."""
    if not isinstance(data, dict):
        return data
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data
