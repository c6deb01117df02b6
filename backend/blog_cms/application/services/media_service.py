"""Application service for editor media — image uploads and link previews."""

import logging
from urllib.parse import urlparse

from blog_cms.application.interfaces import ImageStorage, StoredImage
from blog_cms.domain.exceptions import DomainValidationError

logger = logging.getLogger(__name__)

FAVICON_URL = "https://www.google.com/s2/favicons?domain={host}&sz=64"


class MediaService:
    """Validates uploads before handing them to the image storage port."""

    def __init__(self, storage: ImageStorage, max_image_bytes: int = 5 * 1024 * 1024):
        self._storage = storage
        self._max_image_bytes = max_image_bytes

    async def upload_image(
        self, content: bytes, filename: str, content_type: str | None
    ) -> StoredImage:
        if not content:
            raise DomainValidationError("image", "No image file provided")
        if not content_type or not content_type.startswith("image/"):
            raise DomainValidationError("image", "Only image files are allowed")
        if len(content) > self._max_image_bytes:
            limit_mb = self._max_image_bytes // (1024 * 1024)
            raise DomainValidationError("image", f"File too large. Maximum size is {limit_mb}MB")

        stored = await self._storage.store_image(content, filename, content_type)
        logger.info("Stored image %s (%d bytes)", stored.filename, stored.size)
        return stored

    @staticmethod
    def link_preview(url: str) -> dict:
        """Build a preview card from the URL's host name alone (no network fetch)."""
        host = urlparse(url).hostname or ""
        if not host:
            raise DomainValidationError("url", "Invalid URL format")
        domain = host.removeprefix("www.")
        return {
            "link": url,
            "meta": {
                "title": domain[:1].upper() + domain[1:],
                "description": f"Visit {domain}",
                "image": {"url": FAVICON_URL.format(host=host)},
            },
        }
