"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod

from blog_cms.domain.entities import (
    Article,
    ArticleFilter,
    AuthorStats,
    LikeResult,
    SortSpec,
)


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer.

    Every mutating method is a single atomic operation against one article.
    ``update`` never writes the ``views`` / ``likes`` counters; those change
    only through the dedicated increment and toggle methods.
    """

    @abstractmethod
    async def get_by_id(self, article_id: str) -> Article | None:
        """Retrieve a single article (with its likers) by ID."""
        ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Article | None:
        """Retrieve a single article (with its likers) by slug."""
        ...

    @abstractmethod
    async def find(
        self,
        criteria: ArticleFilter,
        sort: SortSpec,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[Article], int]:
        """Return one page of matching articles and the total match count."""
        ...

    @abstractmethod
    async def list_ids(self, skip: int = 0, limit: int = 100) -> list[str]:
        """Return article IDs in a stable order, for batch maintenance."""
        ...

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Persist a new article. Raises DuplicateEntityError on slug collision."""
        ...

    @abstractmethod
    async def update(self, article: Article) -> Article:
        """Write authored, derived and lifecycle fields if ``article.version`` is current.

        Raises ConcurrentModificationError when the stored version moved on,
        EntityNotFoundError when the article is gone and DuplicateEntityError
        on slug collision.
        """
        ...

    @abstractmethod
    async def delete(self, article_id: str) -> bool:
        """Delete an article. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def increment_views(self, article_id: str) -> int | None:
        """Add one view to a published article. Returns the new count, None if not published."""
        ...

    @abstractmethod
    async def increment_likes(self, article_id: str) -> int | None:
        """Add one anonymous like to a published article. Returns the new count."""
        ...

    @abstractmethod
    async def toggle_like(self, article_id: str, user_id: str) -> LikeResult | None:
        """Flip ``user_id``'s like on a published article. None if not published."""
        ...

    @abstractmethod
    async def liked_status(self, article_ids: list[str], user_id: str) -> dict[str, bool]:
        """Map each published article among ``article_ids`` to whether ``user_id`` liked it."""
        ...

    @abstractmethod
    async def author_stats(self, author_id: str) -> AuthorStats:
        """Aggregate article counts, views and likes per status for one author."""
        ...
