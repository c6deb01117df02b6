"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, Field, field_validator

from blog_cms.domain.categories import CATEGORIES
from blog_cms.domain.entities import ArticleStatus, LegacyBlockType

TAG_MAX_LENGTH = 100
FEATURED_IMAGE_MAX_LENGTH = 1000

Tag = Annotated[str, Field(max_length=TAG_MAX_LENGTH)]


def _check_category(value: str | None) -> str | None:
    if value and value not in CATEGORIES:
        raise ValueError(f"Invalid category. Must be one of: {', '.join(CATEGORIES)}")
    return value or None


def _strip_title(value: str | None) -> str | None:
    return value.strip() if isinstance(value, str) else value


class ContentBlockSchema(BaseModel):
    """One legacy content block."""

    type: LegacyBlockType
    content: str = Field(..., min_length=1)
    alt: str = ""
    order: int = 0

    model_config = {"from_attributes": True}


class ArticleCreate(BaseModel):
    """Schema for creating a new article."""

    title: str = Field(..., min_length=1, max_length=200, examples=["Hello, World!"])
    category: str | None = Field(None, examples=["Development"])
    tags: list[Tag] = Field(default_factory=list)
    content_blocks: list[ContentBlockSchema] = Field(default_factory=list)
    editor_data: dict[str, Any] | None = None
    status: ArticleStatus = ArticleStatus.DRAFT
    featured_image: str = Field("", max_length=FEATURED_IMAGE_MAX_LENGTH)
    seo_title: str | None = Field(None, max_length=60)
    seo_description: str | None = Field(None, max_length=160)
    is_featured: bool = False
    allow_comments: bool = True

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value: str | None) -> str | None:
        return _strip_title(value)

    @field_validator("category")
    @classmethod
    def validate_category(cls, value: str | None) -> str | None:
        return _check_category(value)


class ArticleUpdate(BaseModel):
    """Schema for updating an existing article — all fields optional.

    Omitted fields are left untouched; ``editor_data: null`` clears the
    editor document.
    """

    title: str | None = Field(None, min_length=1, max_length=200)
    category: str | None = None
    tags: list[Tag] | None = None
    content_blocks: list[ContentBlockSchema] | None = None
    editor_data: dict[str, Any] | None = None
    status: ArticleStatus | None = None
    featured_image: str | None = Field(None, max_length=FEATURED_IMAGE_MAX_LENGTH)
    seo_title: str | None = Field(None, max_length=60)
    seo_description: str | None = Field(None, max_length=160)
    is_featured: bool | None = None
    allow_comments: bool | None = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value: str | None) -> str | None:
        return _strip_title(value)

    @field_validator("category")
    @classmethod
    def validate_category(cls, value: str | None) -> str | None:
        return _check_category(value)


class ArticleSummaryResponse(BaseModel):
    """List-view schema — omits both content representations."""

    id: str
    title: str
    slug: str
    url: str
    excerpt: str
    read_time: int
    category: str | None
    tags: list[str]
    status: ArticleStatus
    author_id: str
    featured_image: str
    published_at: datetime | None
    views: int
    likes: int
    seo_title: str | None
    seo_description: str | None
    is_featured: bool
    allow_comments: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ArticleResponse(ArticleSummaryResponse):
    """Single-article schema — includes full content and likers."""

    content_blocks: list[ContentBlockSchema]
    editor_data: dict[str, Any] | None
    liked_by: list[str]


class PaginationSchema(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class ArticleListResponse(BaseModel):
    """A page of articles plus pagination metadata."""

    articles: list[ArticleSummaryResponse]
    pagination: PaginationSchema


class ArticleCollectionResponse(BaseModel):
    """An unpaginated, bounded list of articles (featured, popular)."""

    articles: list[ArticleSummaryResponse]


class StatusStatsSchema(BaseModel):
    status: ArticleStatus
    count: int
    total_views: int
    total_likes: int

    model_config = {"from_attributes": True}


class StatsTotalsSchema(BaseModel):
    total_articles: int
    total_views: int
    total_likes: int


class ArticleStatsResponse(BaseModel):
    stats: list[StatusStatsSchema]
    totals: StatsTotalsSchema


class CategoriesResponse(BaseModel):
    version: int
    categories: list[str]


class RegenerateResponse(BaseModel):
    updated: int
    message: str
