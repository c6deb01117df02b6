"""Unit tests for image upload validation, local storage and link previews."""

import pytest

from blog_cms.application.interfaces import ImageStorage, StoredImage
from blog_cms.application.services import MediaService
from blog_cms.domain.exceptions import DomainValidationError
from blog_cms.infrastructure.storage.local_image_storage import LocalImageStorage


class RecordingStorage(ImageStorage):
    def __init__(self):
        self.calls: list[tuple[bytes, str, str]] = []

    async def store_image(self, content: bytes, filename: str, content_type: str) -> StoredImage:
        self.calls.append((content, filename, content_type))
        return StoredImage(
            url=f"http://cdn.test/{filename}",
            filename=filename,
            original_name=filename,
            size=len(content),
            content_type=content_type,
        )


@pytest.fixture
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.mark.asyncio
async def test_upload_image_delegates_to_storage(storage: RecordingStorage):
    service = MediaService(storage, max_image_bytes=10)
    stored = await service.upload_image(b"12345", "cat.png", "image/png")
    assert stored.url == "http://cdn.test/cat.png"
    assert storage.calls == [(b"12345", "cat.png", "image/png")]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content, content_type",
    [
        (b"", "image/png"),
        (b"data", "application/pdf"),
        (b"data", None),
        (b"x" * 11, "image/jpeg"),
    ],
)
async def test_upload_image_rejects_invalid(storage: RecordingStorage, content, content_type):
    service = MediaService(storage, max_image_bytes=10)
    with pytest.raises(DomainValidationError):
        await service.upload_image(content, "file", content_type)
    assert storage.calls == []


@pytest.mark.asyncio
async def test_local_image_storage_writes_file(tmp_path):
    storage = LocalImageStorage(upload_dir=str(tmp_path), public_base_url="http://localhost:8000/")
    stored = await storage.store_image(b"\x89PNG", "My Photo!.PNG", "image/png")

    written = tmp_path / "images" / stored.filename
    assert written.read_bytes() == b"\x89PNG"
    assert stored.filename.startswith("My_Photo_")
    assert stored.filename.endswith(".png")
    assert stored.url == f"http://localhost:8000/uploads/images/{stored.filename}"
    assert stored.original_name == "My Photo!.PNG"
    assert stored.size == 4


def test_link_preview_uses_domain():
    preview = MediaService.link_preview("https://www.example.com/some/page")
    assert preview["link"] == "https://www.example.com/some/page"
    assert preview["meta"]["title"] == "Example.com"
    assert preview["meta"]["description"] == "Visit example.com"
    assert "www.example.com" in preview["meta"]["image"]["url"]


def test_link_preview_rejects_url_without_host():
    with pytest.raises(DomainValidationError):
        MediaService.link_preview("not a url")
