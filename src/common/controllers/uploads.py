from ninja import File, Form, Schema
from ninja.files import UploadedFile
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from common.controllers.base import UserAwareController
from common.service.upload_service import UploadKey, UploadSubject, upload_image
from common.throttling import UploadThrottle


class UploadResponseSchema(Schema):
    subject: UploadSubject
    slug: str
    upload_key: UploadKey
    path: str


@api_controller("/uploads", tags=["Uploads"], auth=JWTAuth(), throttle=UploadThrottle())
class UploadController(UserAwareController):
    @route.post("/image", url_name="upload_image", response={200: UploadResponseSchema})
    def upload_image(
        self,
        subject: Form[UploadSubject],
        slug: Form[str],
        upload_key: Form[UploadKey],
        file: File[UploadedFile],
    ) -> dict[str, object]:
        """Upload an avatar, logo or background image.

        Profiles can only be changed by their owner, organizations, events and projects only by
        their admins. The image is validated, stripped of EXIF data and stored; the entity then
        points at the stored path.
        """
        return upload_image(self.viewer(), subject, slug, upload_key, file)
