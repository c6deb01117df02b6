"""Application service (use case) for an author's own articles."""

import logging

from blog_cms.application.interfaces import ArticleRepository
from blog_cms.application.schemas import ArticleCreate, ArticleUpdate, ContentBlockSchema
from blog_cms.application.services.pagination import ArticlePaginator
from blog_cms.domain.categories import CATEGORIES, CATEGORY_SET_VERSION
from blog_cms.domain.entities import (
    Article,
    ArticleFilter,
    ArticleStatus,
    AuthorStats,
    ContentBlock,
    Page,
)
from blog_cms.domain.exceptions import (
    ConcurrentModificationError,
    DomainValidationError,
    EntityNotFoundError,
)

logger = logging.getLogger(__name__)

OWNER_DEFAULT_SORT = "-createdAt"


def to_content_blocks(blocks: list[ContentBlockSchema]) -> list[ContentBlock]:
    return [
        ContentBlock(type=b.type, content=b.content, alt=b.alt, order=b.order)
        for b in blocks
    ]


class ArticleService:
    """Orchestrates article authoring and lifecycle. Depends on the repository port (DI).

    Articles belonging to another author are reported as not found.
    """

    def __init__(
        self,
        repository: ArticleRepository,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ):
        self._repository = repository
        self._paginator = ArticlePaginator(repository, default_page_size, max_page_size)

    async def get_article(self, article_id: str, owner_id: str) -> Article:
        article = await self._repository.get_by_id(article_id)
        if article is None or article.author_id != owner_id:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def list_articles(
        self,
        owner_id: str,
        *,
        status: ArticleStatus | None = None,
        category: str | None = None,
        tag: str | None = None,
        search: str | None = None,
        page: int | None = None,
        page_size: int | None = None,
        sort: str | None = OWNER_DEFAULT_SORT,
    ) -> Page[Article]:
        criteria = ArticleFilter(
            author_id=owner_id,
            status=status,
            category=category,
            tag=tag.strip().lower() if tag else None,
            search=search or None,
        )
        return await self._paginator.paginate(
            criteria, sort, page, page_size, default_sort=OWNER_DEFAULT_SORT
        )

    async def create_article(self, author_id: str, data: ArticleCreate) -> Article:
        article = Article(title=data.title, author_id=author_id)
        article.rename(data.title)
        article.set_category(data.category)
        article.set_tags(data.tags)
        article.set_content(
            content_blocks=to_content_blocks(data.content_blocks),
            editor_data=data.editor_data,
        )
        article.featured_image = data.featured_image
        article.seo_title = data.seo_title
        article.seo_description = data.seo_description
        article.is_featured = data.is_featured
        article.allow_comments = data.allow_comments
        if data.status != ArticleStatus.DRAFT:
            article.transition_to(data.status)

        created = await self._repository.create(article)
        logger.info(
            "Created article %s (slug=%s, status=%s) for author %s",
            created.id, created.slug, created.status.value, author_id,
        )
        return created

    async def update_article(
        self, article_id: str, owner_id: str, data: ArticleUpdate
    ) -> Article:
        article = await self.get_article(article_id, owner_id)
        provided = data.model_fields_set

        if data.title is not None:
            article.rename(data.title)
        if "category" in provided:
            article.set_category(data.category)
        if data.tags is not None:
            article.set_tags(data.tags)

        # Both representations feed the same excerpt/read-time pair
        content: dict = {}
        if data.content_blocks is not None:
            content["content_blocks"] = to_content_blocks(data.content_blocks)
        if "editor_data" in provided:
            content["editor_data"] = data.editor_data
        if content:
            article.set_content(**content)

        if data.featured_image is not None:
            article.featured_image = data.featured_image
        if "seo_title" in provided:
            article.seo_title = data.seo_title
        if "seo_description" in provided:
            article.seo_description = data.seo_description
        if data.is_featured is not None:
            article.is_featured = data.is_featured
        if data.allow_comments is not None:
            article.allow_comments = data.allow_comments

        if data.status is not None:
            article.transition_to(data.status)
        elif article.status == ArticleStatus.PUBLISHED and not article.category:
            raise DomainValidationError("category", "Category is required for published articles")

        article.touch()
        updated = await self._repository.update(article)
        logger.info("Updated article %s (fields=%s)", article_id, sorted(provided))
        return updated

    async def delete_article(self, article_id: str, owner_id: str) -> bool:
        await self.get_article(article_id, owner_id)
        deleted = await self._repository.delete(article_id)
        if not deleted:
            raise EntityNotFoundError("Article", article_id)
        logger.info("Deleted article %s", article_id)
        return deleted

    # ── Lifecycle ───────────────────────────────────────────────────

    async def _transition(self, article_id: str, owner_id: str, target: ArticleStatus) -> Article:
        article = await self.get_article(article_id, owner_id)
        previous = article.status
        article.transition_to(target)
        article.touch()
        updated = await self._repository.update(article)
        logger.info("Article %s: %s -> %s", article_id, previous.value, target.value)
        return updated

    async def publish_article(self, article_id: str, owner_id: str) -> Article:
        return await self._transition(article_id, owner_id, ArticleStatus.PUBLISHED)

    async def unpublish_article(self, article_id: str, owner_id: str) -> Article:
        return await self._transition(article_id, owner_id, ArticleStatus.DRAFT)

    async def archive_article(self, article_id: str, owner_id: str) -> Article:
        return await self._transition(article_id, owner_id, ArticleStatus.ARCHIVED)

    # ── Reporting & maintenance ─────────────────────────────────────

    async def get_stats(self, owner_id: str) -> AuthorStats:
        return await self._repository.author_stats(owner_id)

    @staticmethod
    def list_categories() -> dict:
        return {"version": CATEGORY_SET_VERSION, "categories": list(CATEGORIES)}

    async def regenerate_derived_fields(self, batch_size: int = 100) -> int:
        """Recompute excerpt and read time for every article.

        Goes through the regular update path one article at a time and only
        writes articles whose stored values are stale, so repeated runs are
        no-ops. Returns the number of articles rewritten.
        """
        updated = 0
        skip = 0
        while True:
            article_ids = await self._repository.list_ids(skip=skip, limit=batch_size)
            if not article_ids:
                break
            for article_id in article_ids:
                article = await self._repository.get_by_id(article_id)
                if article is None or not article.refresh_derived_fields():
                    continue
                try:
                    await self._repository.update(article)
                except ConcurrentModificationError:
                    # Edited meanwhile; that edit already recomputed the fields
                    logger.warning("Skipped article %s: modified during regeneration", article_id)
                    continue
                updated += 1
            skip += batch_size

        logger.info("Regenerated derived fields for %d articles", updated)
        return updated
