import typing as t

from ninja_extra import api_controller, route

from accounts import schema
from accounts.models import Profile
from accounts.service import profile_service
from common.authentication import I18nJWTAuth, OptionalAuth
from common.controllers import UserAwareController
from common.schema import VisibilitySettingsSchema
from common.throttling import WriteThrottle


@api_controller("/profiles", tags=["Profiles"])
class ProfileController(UserAwareController):
    @route.get("/me", url_name="my_profile", response=schema.OwnProfileSchema, auth=I18nJWTAuth())
    def me(self) -> Profile:
        """Retrieve the authenticated profile, including private fields and visibility settings."""
        return self.user()

    @route.put(
        "/me/visibility",
        url_name="update_my_visibility",
        response=schema.OwnProfileSchema,
        auth=I18nJWTAuth(),
        throttle=WriteThrottle(),
    )
    def update_visibility(self, payload: VisibilitySettingsSchema) -> Profile:
        """Choose which profile fields anonymous visitors can see.

        Flags are merged into the current settings. Only visibility-tagged fields are accepted.
        """
        return profile_service.update_visibility_settings(self.user(), payload.visibility_settings)

    @route.get("/{username}", url_name="get_profile", response=schema.ProfileSchema, auth=OptionalAuth())
    def get_profile(self, username: str) -> dict[str, t.Any]:
        """Retrieve a profile by username.

        Anonymous visitors only see the fields the owner made public. The `mode` tells the
        frontend whether the viewer owns the profile.
        """
        return profile_service.get_profile_detail(username, self.viewer())

    @route.put(
        "/{username}",
        url_name="update_profile",
        response=schema.OwnProfileSchema,
        auth=I18nJWTAuth(),
        throttle=WriteThrottle(),
    )
    def update_profile(self, username: str, payload: schema.ProfileUpdateSchema) -> Profile:
        """Update a profile. Only the owner may do this, and `profile_id` must be their own id."""
        profile = profile_service.get_profile_by_username(username)
        return profile_service.update_profile(profile, self.viewer(), payload)
