"""Pydantic DTOs for editor media helpers (image upload, link preview).

Response shapes follow what Editor.js image and link tools expect.
"""

from pydantic import BaseModel, HttpUrl


class UploadedFileSchema(BaseModel):
    url: str
    name: str | None = None
    size: int | None = None


class ImageUploadResponse(BaseModel):
    success: int = 1
    file: UploadedFileSchema


class ImageByUrlRequest(BaseModel):
    url: HttpUrl


class LinkPreviewRequest(BaseModel):
    url: HttpUrl


class LinkPreviewImage(BaseModel):
    url: str


class LinkPreviewMeta(BaseModel):
    title: str
    description: str
    image: LinkPreviewImage


class LinkPreviewResponse(BaseModel):
    success: int = 1
    link: str
    meta: LinkPreviewMeta
