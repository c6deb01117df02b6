"""Application service for anonymous readers — published articles only."""

import logging
from datetime import datetime, timedelta, timezone

from blog_cms.application.interfaces import ArticleRepository
from blog_cms.application.services.pagination import ArticlePaginator
from blog_cms.domain.categories import validate_category
from blog_cms.domain.entities import (
    Article,
    ArticleFilter,
    Page,
    PopularTimeframe,
    SortSpec,
)
from blog_cms.domain.exceptions import EntityNotFoundError
from blog_cms.domain.lifecycle import is_publicly_visible

logger = logging.getLogger(__name__)

PUBLIC_DEFAULT_SORT = "-publishedAt"
POPULAR_SORT = "-views -likes"


class PublicArticleService:
    """Read side of the blog: listings and single-article fetches with view counting."""

    def __init__(
        self,
        repository: ArticleRepository,
        default_page_size: int = 10,
        max_page_size: int = 100,
        featured_limit: int = 5,
        popular_limit: int = 5,
    ):
        self._repository = repository
        self._paginator = ArticlePaginator(repository, default_page_size, max_page_size)
        self._max_page_size = max_page_size
        self._featured_limit = featured_limit
        self._popular_limit = popular_limit

    async def _record_view(self, article: Article | None, key: str) -> Article:
        if article is None or not is_publicly_visible(article):
            raise EntityNotFoundError("Article", key)
        views = await self._repository.increment_views(article.id)
        if views is None:
            # Unpublished between the lookup and the increment
            raise EntityNotFoundError("Article", key)
        article.views = views
        return article

    async def get_by_slug(self, slug: str) -> Article:
        """Fetch a published article by slug and count the view."""
        article = await self._repository.get_by_slug(slug)
        return await self._record_view(article, slug)

    async def get_by_id(self, article_id: str) -> Article:
        """Fetch a published article by ID and count the view."""
        article = await self._repository.get_by_id(article_id)
        return await self._record_view(article, article_id)

    async def list_published(
        self,
        *,
        category: str | None = None,
        tag: str | None = None,
        author_id: str | None = None,
        search: str | None = None,
        page: int | None = None,
        page_size: int | None = None,
        sort: str | None = PUBLIC_DEFAULT_SORT,
    ) -> Page[Article]:
        criteria = ArticleFilter.public(
            category=category,
            tag=tag.strip().lower() if tag else None,
            author_id=author_id,
            search=search or None,
        )
        return await self._paginator.paginate(
            criteria, sort, page, page_size, default_sort=PUBLIC_DEFAULT_SORT
        )

    async def list_by_category(
        self,
        category: str,
        page: int | None = None,
        page_size: int | None = None,
        sort: str | None = PUBLIC_DEFAULT_SORT,
    ) -> Page[Article]:
        validate_category(category)
        return await self.list_published(
            category=category, page=page, page_size=page_size, sort=sort
        )

    async def list_by_author(
        self,
        author_id: str,
        page: int | None = None,
        page_size: int | None = None,
        sort: str | None = PUBLIC_DEFAULT_SORT,
    ) -> Page[Article]:
        return await self.list_published(
            author_id=author_id, page=page, page_size=page_size, sort=sort
        )

    def _limit(self, limit: int | None, default: int) -> int:
        return min(max(1, limit or default), self._max_page_size)

    async def list_featured(self, limit: int | None = None) -> list[Article]:
        items, _ = await self._repository.find(
            ArticleFilter.public(is_featured=True),
            SortSpec.parse(PUBLIC_DEFAULT_SORT),
            limit=self._limit(limit, self._featured_limit),
        )
        return items

    async def list_popular(
        self,
        limit: int | None = None,
        timeframe: PopularTimeframe = PopularTimeframe.ALL,
        now: datetime | None = None,
    ) -> list[Article]:
        """Most viewed, then most liked; optionally only those published in the last 7/30 days."""
        since = None
        if timeframe.days is not None:
            since = (now or datetime.now(timezone.utc)) - timedelta(days=timeframe.days)
        items, _ = await self._repository.find(
            ArticleFilter.public(published_since=since),
            SortSpec.parse(POPULAR_SORT),
            limit=self._limit(limit, self._popular_limit),
        )
        return items
