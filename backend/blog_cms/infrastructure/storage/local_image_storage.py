"""Local filesystem storage for article images.

Storage layout:
    <upload_dir>/images/<stem>_<YYYYMMDD_HHmmss>_<token>.<ext>

Files are served back under ``<public_base_url>/uploads/images/``.
"""

import logging
import re
import uuid
from datetime import datetime, timezone
from pathlib import Path

from blog_cms.application.interfaces import ImageStorage, StoredImage

logger = logging.getLogger(__name__)


def _datetime_stamp() -> str:
    """Return a UTC datetime stamp suitable for filenames: YYYYMMDD_HHmmss."""
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _sanitise(name: str, max_len: int = 80) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-]", "_", name)[:max_len].strip("_") or "image"


class LocalImageStorage(ImageStorage):
    """Infrastructure adapter that writes images below the upload directory."""

    def __init__(self, upload_dir: str, public_base_url: str):
        self._images_dir = Path(upload_dir) / "images"
        self._public_base_url = public_base_url.rstrip("/")

    async def store_image(
        self, content: bytes, filename: str, content_type: str
    ) -> StoredImage:
        """Store an uploaded image; the name gets a stamp and a short random token."""
        self._images_dir.mkdir(parents=True, exist_ok=True)

        stem = Path(filename).stem
        suffix = Path(filename).suffix.lower()
        stored_name = f"{_sanitise(stem)}_{_datetime_stamp()}_{uuid.uuid4().hex[:8]}{suffix}"

        dest_path = self._images_dir / stored_name
        dest_path.write_bytes(content)

        logger.info("Stored image: %s (%d bytes)", dest_path, len(content))

        return StoredImage(
            url=f"{self._public_base_url}/uploads/images/{stored_name}",
            filename=stored_name,
            original_name=filename,
            size=len(content),
            content_type=content_type,
        )
