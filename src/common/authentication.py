import hmac
import typing as t

import structlog
from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from django.http import HttpRequest
from django.utils import translation
from ninja.security import APIKeyHeader
from ninja_jwt.authentication import JWTAuth

logger = structlog.get_logger(__name__)


class I18nJWTAuth(JWTAuth):
    """JWT authentication that activates the profile's preferred language.

    Usage:
        @route.get("/endpoint", auth=I18nJWTAuth())
        def my_endpoint(request):
            # Profile language is already active
            return {"message": str(_("Hello!"))}
    """

    def authenticate(self, request: HttpRequest, token: str) -> t.Any:
        """Authenticate the request and activate the profile's language.

        Raises:
            AuthenticationFailed: If authentication fails
            InvalidToken: If the token is invalid
        """
        user = super().authenticate(request, token)

        if user_language := getattr(user, "language", None):
            translation.activate(user_language)
            request.LANGUAGE_CODE = user_language

        return user


class OptionalAuth(I18nJWTAuth):
    """Optional JWT authentication with i18n support.

    - If a bearer token is present: authenticates the profile.
    - If no token is present: sets request.user to AnonymousUser and continues.

    Public pages (event detail, profiles) use this to serve filtered payloads to
    anonymous viewers and full payloads to logged-in ones.
    """

    def __call__(self, request: HttpRequest) -> t.Any | None:
        """Overrides I18nJWTAuth __call__ to provide optional auth."""
        auth_value = request.headers.get(self.header)
        if not auth_value:
            request.user = AnonymousUser()
            return request.user
        parts = auth_value.split(" ")

        if parts[0].lower() != self.openapi_scheme:
            if settings.DEBUG:
                logger.error("unexpected_auth_header", scheme=parts[0])
            return None
        token = " ".join(parts[1:])
        return self.authenticate(request, token)


class ApiKeyAuth(APIKeyHeader):
    """Static API keys for the public REST API, configured via PUBLIC_API_KEYS."""

    param_name = "X-API-Key"

    def authenticate(self, request: HttpRequest, key: str | None) -> str | None:
        """Return the key when it matches one of the configured keys."""
        if not key:
            return None
        for allowed in settings.PUBLIC_API_KEYS:
            if allowed and hmac.compare_digest(allowed.encode(), key.encode()):
                return key
        logger.warning("public_api_key_rejected", path=request.path)
        return None
