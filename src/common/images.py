"""imgproxy URL derivation for stored images.

Stored object paths are first turned into public URLs, then wrapped into a
signed imgproxy URL carrying the processing options:

    {IMGPROXY_URL}/{signature}/rs:fill:64:64:0/g:ce/{base64url(source_url)}

The signature is the unpadded base64url HMAC-SHA256 of ``salt + path`` using the
hex-encoded key and salt from settings. Without a key the literal ``insecure``
signature is used, which imgproxy accepts when signing is disabled.
"""

import base64
import hashlib
import hmac
from dataclasses import dataclass
from enum import StrEnum

from django.conf import settings

__all__ = [
    "Gravity",
    "ResizeType",
    "Resize",
    "ImageOptions",
    "ImagePreset",
    "IMAGE_PRESETS",
    "get_public_url",
    "get_image_url",
    "derive_image_url",
]


class ResizeType(StrEnum):
    FIT = "fit"
    FILL = "fill"
    FILL_DOWN = "fill-down"
    FORCE = "force"
    AUTO = "auto"


class Gravity(StrEnum):
    CENTER = "ce"
    NORTH = "no"
    SOUTH = "so"
    EAST = "ea"
    WEST = "we"
    SMART = "sm"


@dataclass(frozen=True)
class Resize:
    type: ResizeType
    width: int
    height: int
    enlarge: bool = False


@dataclass(frozen=True)
class ImageOptions:
    """Processing options for a single derived image.

    Attributes:
        resize: How to resize the source image.
        gravity: Where to anchor the crop when filling.
        blur: Gaussian blur sigma.
    """

    resize: Resize | None = None
    gravity: Gravity | None = None
    blur: float | None = None

    def to_path_segments(self) -> list[str]:
        """Render the options as imgproxy path segments."""
        segments: list[str] = []
        if self.resize is not None:
            r = self.resize
            segments.append(f"rs:{r.type}:{r.width}:{r.height}:{int(r.enlarge)}")
        if self.gravity is not None:
            segments.append(f"g:{self.gravity}")
        if self.blur:
            segments.append(f"bl:{self.blur:g}")
        return segments


class ImagePreset(StrEnum):
    AVATAR = "avatar"
    EVENT_BACKGROUND = "event_background"
    EVENT_BACKGROUND_BLURRED = "event_background_blurred"
    CHILD_EVENT_BACKGROUND = "child_event_background"
    CHILD_EVENT_BACKGROUND_BLURRED = "child_event_background_blurred"
    ORGANIZATION_LOGO = "organization_logo"
    PUBLIC_API_AVATAR = "public_api_avatar"
    PUBLIC_API_BACKGROUND = "public_api_background"
    PUBLIC_API_LOGO = "public_api_logo"
    RESPONSIBLE_ORGANIZATION_LOGO = "responsible_organization_logo"


# Centralized sizes for every image rendered by the API
IMAGE_PRESETS: dict[ImagePreset, ImageOptions] = {
    ImagePreset.AVATAR: ImageOptions(resize=Resize(ResizeType.FILL, 64, 64), gravity=Gravity.CENTER),
    ImagePreset.EVENT_BACKGROUND: ImageOptions(resize=Resize(ResizeType.FILL, 720, 480, enlarge=True)),
    ImagePreset.EVENT_BACKGROUND_BLURRED: ImageOptions(resize=Resize(ResizeType.FILL, 72, 48), blur=5),
    ImagePreset.CHILD_EVENT_BACKGROUND: ImageOptions(resize=Resize(ResizeType.FILL, 144, 96)),
    ImagePreset.CHILD_EVENT_BACKGROUND_BLURRED: ImageOptions(resize=Resize(ResizeType.FILL, 18, 12), blur=5),
    ImagePreset.ORGANIZATION_LOGO: ImageOptions(resize=Resize(ResizeType.FIT, 144, 144)),
    ImagePreset.PUBLIC_API_AVATAR: ImageOptions(resize=Resize(ResizeType.FILL, 64, 64), gravity=Gravity.CENTER),
    ImagePreset.PUBLIC_API_BACKGROUND: ImageOptions(resize=Resize(ResizeType.FILL, 1488, 480, enlarge=True)),
    ImagePreset.PUBLIC_API_LOGO: ImageOptions(resize=Resize(ResizeType.FILL, 64, 64), gravity=Gravity.CENTER),
    ImagePreset.RESPONSIBLE_ORGANIZATION_LOGO: ImageOptions(
        resize=Resize(ResizeType.FILL, 64, 64), gravity=Gravity.CENTER
    ),
}


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()


def _sign(path: str) -> str:
    key = settings.IMGPROXY_KEY
    salt = settings.IMGPROXY_SALT
    if not key or not salt:
        return "insecure"
    digest = hmac.new(bytes.fromhex(key), msg=bytes.fromhex(salt) + path.encode(), digestmod=hashlib.sha256).digest()
    return _b64url(digest)


def get_public_url(path: str | None) -> str | None:
    """Build the public storage URL for a stored object path."""
    if not path:
        return None
    return f"{settings.STORAGE_PUBLIC_BASE_URL.rstrip('/')}/{path.lstrip('/')}"


def get_image_url(public_url: str, options: ImageOptions) -> str:
    """Build a signed imgproxy URL for a public source URL."""
    segments = [*options.to_path_segments(), _b64url(public_url.encode())]
    path = "/" + "/".join(segments)
    return f"{settings.IMGPROXY_URL.rstrip('/')}/{_sign(path)}{path}"


def derive_image_url(path: str | None, preset: ImagePreset) -> str | None:
    """Turn a stored object path into the processed image URL for a preset."""
    public_url = get_public_url(path)
    if public_url is None:
        return None
    return get_image_url(public_url, IMAGE_PRESETS[preset])
