from .base import UserAwareController
from .uploads import UploadController

__all__ = ["UploadController", "UserAwareController"]
