"""Abstract interface for article image storage."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class StoredImage:
    """A stored image and the stable URL it can be fetched from."""

    url: str
    filename: str
    original_name: str
    size: int
    content_type: str


class ImageStorage(ABC):
    """Port for blob storage — the core keeps only the returned URL."""

    @abstractmethod
    async def store_image(
        self, content: bytes, filename: str, content_type: str
    ) -> StoredImage:
        """Store the image bytes and return where they can be fetched."""
        ...
