"""Authentication endpoints."""

import typing as t

from ninja_extra import api_controller, route
from ninja_jwt.controller import TokenObtainPairController
from ninja_jwt.schema import TokenObtainPairInputSchema, TokenObtainPairOutputSchema

from accounts import schema
from accounts.service import profile_service
from common.schema import ResponseMessage
from common.throttling import AnonDefaultThrottle


@api_controller("/auth", tags=["Auth"], throttle=AnonDefaultThrottle())
class AuthController(TokenObtainPairController):
    @route.post("/token/pair", response=TokenObtainPairOutputSchema, url_name="token_obtain_pair")
    def obtain_token(self, user_token: TokenObtainPairInputSchema) -> TokenObtainPairOutputSchema:
        """Authenticate with username and password to obtain JWT access/refresh tokens."""
        return t.cast(TokenObtainPairOutputSchema, user_token.to_response_schema())  # type: ignore[no-untyped-call]

    @route.post("/register", response={201: ResponseMessage}, url_name="register")
    def register(self, payload: schema.RegisterProfileSchema) -> tuple[int, ResponseMessage]:
        """Create a new profile. The terms of use must be accepted."""
        profile = profile_service.register_profile(payload)
        return 201, ResponseMessage(message=profile.username)
