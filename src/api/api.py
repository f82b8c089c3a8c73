from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest
from ninja_extra import NinjaExtraAPI

from accounts.controllers.auth import AuthController
from accounts.controllers.profile import ProfileController
from api.controllers.public import PublicApiController
from common.controllers import UploadController
from common.exceptions import AlreadyMemberError, LastPrivilegedMemberError
from common.schema import ResponseOk, VersionResponse
from common.throttling import AnonDefaultThrottle, UserDefaultThrottle
from events.controllers.event_admin import EVENT_ADMIN_CONTROLLERS
from events.controllers.event_public import EVENT_PUBLIC_CONTROLLERS
from events.controllers.organization import OrganizationController
from events.controllers.organization_admin import ORGANIZATION_ADMIN_CONTROLLERS
from events.service.participation import ParticipationError
from projects.controllers.project import ProjectController
from projects.controllers.project_admin import ProjectAdminController

from .exception_handlers import (
    handle_already_member_error,
    handle_django_validation_error,
    handle_general_exception,
    handle_last_privileged_member_error,
    handle_participation_error,
)

api = NinjaExtraAPI(
    title="Community API",
    docs_url="/docs",
    version=settings.VERSION,
    description=f"Community API {settings.VERSION}",
    app_name=f"community-api-{settings.VERSION}",
    urls_namespace="api",
    servers=[
        {"url": settings.SERVICE_URL, "description": settings.SERVICE_DESCRIPTION},
    ],
    throttle=[AnonDefaultThrottle(), UserDefaultThrottle()],
)


@api.get("/version", tags=["Version"], response={200: VersionResponse})
def version(request: HttpRequest) -> tuple[int, VersionResponse]:
    """Get the API version.

    Args:
        request: The incoming HTTP request.

    Returns:
        The response status code and message.
    """
    return 200, VersionResponse(version=settings.VERSION)


@api.get("/healthcheck", tags=["Healthcheck"], response={200: ResponseOk})
def healthcheck(request: HttpRequest) -> tuple[int, ResponseOk]:
    """Check the health of the API."""
    return 200, ResponseOk()


api.register_controllers(
    # Auth/Profile controllers
    AuthController,
    ProfileController,
    # Event controllers
    OrganizationController,
    *ORGANIZATION_ADMIN_CONTROLLERS,
    *EVENT_PUBLIC_CONTROLLERS,
    *EVENT_ADMIN_CONTROLLERS,
    # Project controllers
    ProjectController,
    ProjectAdminController,
    # Common controllers
    UploadController,
    # Public REST API
    PublicApiController,
)

EXCEPTION_HANDLERS = {
    Exception: handle_general_exception,
    ValidationError: handle_django_validation_error,
    ParticipationError: handle_participation_error,
    AlreadyMemberError: handle_already_member_error,
    LastPrivilegedMemberError: handle_last_privileged_member_error,
}

for exc, handler in EXCEPTION_HANDLERS.items():
    api.add_exception_handler(exc, handler)
