"""Domain value objects for article listings — filters, sorting and pagination."""

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from blog_cms.domain.exceptions import DomainValidationError
from blog_cms.domain.lifecycle import ArticleStatus

T = TypeVar("T")

# API sort names → entity attribute names
SORTABLE_FIELDS: dict[str, str] = {
    "publishedAt": "published_at",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "title": "title",
    "views": "views",
    "likes": "likes",
    "readTime": "read_time",
}

_SORT_TOKEN = re.compile(r"^-?[a-zA-Z]+$")


class PopularTimeframe(str, Enum):
    ALL = "all"
    WEEK = "week"
    MONTH = "month"

    @property
    def days(self) -> int | None:
        return {"week": 7, "month": 30}.get(self.value)


@dataclass(frozen=True)
class SortField:
    attribute: str
    descending: bool = False


@dataclass(frozen=True)
class SortSpec:
    """Ordered list of sort keys parsed from ``"-views -likes"`` style strings."""

    fields: tuple[SortField, ...]

    @classmethod
    def parse(cls, raw: str) -> "SortSpec":
        tokens = [t for t in re.split(r"[\s,]+", raw.strip()) if t]
        if not tokens:
            raise DomainValidationError("sort", "Sort parameter must not be empty")

        fields: list[SortField] = []
        for token in tokens:
            if not _SORT_TOKEN.match(token):
                raise DomainValidationError("sort", f"Invalid sort parameter '{token}'")
            descending = token.startswith("-")
            name = token.lstrip("-")
            if name not in SORTABLE_FIELDS:
                raise DomainValidationError(
                    "sort",
                    f"Unknown sort field '{name}'. Must be one of: {', '.join(SORTABLE_FIELDS)}",
                )
            fields.append(SortField(attribute=SORTABLE_FIELDS[name], descending=descending))
        return cls(fields=tuple(fields))


@dataclass(frozen=True)
class PageRequest:
    """1-indexed page request; ``page_size`` is clamped to ``[1, max_page_size]``."""

    page: int = 1
    page_size: int = 10

    @classmethod
    def create(cls, page: int | None, page_size: int | None, *, default_size: int, max_size: int) -> "PageRequest":
        page = max(1, page or 1)
        size = page_size if page_size is not None else default_size
        size = min(max(1, size), max_size)
        return cls(page=page, page_size=size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass
class Page(Generic[T]):
    """One page of results plus the totals needed to render pagination."""

    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0


@dataclass
class ArticleFilter:
    """Composable article filter. Unset fields do not constrain the result."""

    author_id: str | None = None
    status: ArticleStatus | None = None
    category: str | None = None
    tag: str | None = None
    search: str | None = None
    article_ids: list[str] | None = None
    is_featured: bool | None = None
    published_since: datetime | None = None

    @classmethod
    def public(cls, **kwargs) -> "ArticleFilter":
        """Filter restricted to what anonymous readers may see."""
        return cls(status=ArticleStatus.PUBLISHED, **kwargs)


@dataclass
class StatusStats:
    status: ArticleStatus
    count: int = 0
    total_views: int = 0
    total_likes: int = 0


@dataclass
class AuthorStats:
    """Aggregated counters over one author's articles."""

    by_status: list[StatusStats] = field(default_factory=list)
    total_articles: int = 0
    total_views: int = 0
    total_likes: int = 0
