"""Storage and image proxy settings.

Stored object paths (avatars, backgrounds, logos) are turned into public URLs
by prefixing STORAGE_PUBLIC_BASE_URL, then wrapped into imgproxy URLs.
"""

from decouple import config

STORAGE_PUBLIC_BASE_URL = config("STORAGE_PUBLIC_BASE_URL", default="http://localhost:8000/media/")

IMGPROXY_URL = config("IMGPROXY_URL", default="http://localhost:8080")
# Hex encoded. When empty, URLs are emitted with the "insecure" signature.
IMGPROXY_KEY = config("IMGPROXY_KEY", default="")
IMGPROXY_SALT = config("IMGPROXY_SALT", default="")

MAX_IMAGE_SIZE_MB = config("MAX_IMAGE_SIZE_MB", default=5, cast=int)
MAX_DOCUMENT_SIZE_MB = config("MAX_DOCUMENT_SIZE_MB", default=5, cast=int)
