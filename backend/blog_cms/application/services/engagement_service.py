"""Application service for likes and saved articles.

Known limitation: two toggles by the *same* user on the same article race;
whichever write lands last decides the final state. Toggles by different
users never lose updates because the counter changes are single atomic
statements.
"""

import logging

from blog_cms.application.interfaces import ArticleRepository, UserRepository
from blog_cms.application.services.pagination import ArticlePaginator
from blog_cms.domain.entities import (
    Article,
    ArticleFilter,
    InteractionStatus,
    LikeResult,
    Page,
    SaveResult,
    UnsaveResult,
    User,
)
from blog_cms.domain.exceptions import DomainValidationError, EntityNotFoundError
from blog_cms.domain.lifecycle import is_publicly_visible

logger = logging.getLogger(__name__)

SAVED_DEFAULT_SORT = "-publishedAt"


class EngagementService:
    """Likes (authenticated toggle and anonymous increment) and the saved-articles set."""

    def __init__(
        self,
        article_repository: ArticleRepository,
        user_repository: UserRepository,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ):
        self._articles = article_repository
        self._users = user_repository
        self._paginator = ArticlePaginator(article_repository, default_page_size, max_page_size)

    async def toggle_like(self, article_id: str, user: User) -> LikeResult:
        result = await self._articles.toggle_like(article_id, user.id)
        if result is None:
            raise EntityNotFoundError("Article", article_id)
        logger.info(
            "User %s %s article %s (likes=%d)",
            user.id, "liked" if result.liked else "unliked", article_id, result.likes,
        )
        return result

    async def anonymous_like(self, article_id: str) -> LikeResult:
        """Unconditional +1 without membership tracking.

        This can push ``likes`` above the number of recorded likers.
        """
        likes = await self._articles.increment_likes(article_id)
        if likes is None:
            raise EntityNotFoundError("Article", article_id)
        return LikeResult(likes=likes, liked=False)

    async def save_article(self, article_id: str, user: User) -> SaveResult:
        article = await self._articles.get_by_id(article_id)
        if article is None or not is_publicly_visible(article):
            raise EntityNotFoundError("Article", article_id)

        if user.has_saved(article_id):
            return SaveResult(saved=True, was_already_saved=True)

        inserted = await self._users.add_saved_article(user.id, article_id)
        user.save_article(article_id)
        if inserted:
            logger.info("User %s saved article %s", user.id, article_id)
        return SaveResult(saved=True, was_already_saved=not inserted)

    async def unsave_article(self, article_id: str, user: User) -> UnsaveResult:
        if not user.has_saved(article_id):
            return UnsaveResult(saved=False, was_saved=False)

        removed = await self._users.remove_saved_article(user.id, article_id)
        user.unsave_article(article_id)
        if removed:
            logger.info("User %s unsaved article %s", user.id, article_id)
        return UnsaveResult(saved=False, was_saved=removed)

    async def list_saved_articles(
        self,
        user: User,
        page: int | None = None,
        page_size: int | None = None,
    ) -> Page[Article]:
        """The user's saved articles that are still published, newest publication first."""
        if not user.saved_article_ids:
            request = self._paginator.page_request(page, page_size)
            return Page(items=[], total=0, page=request.page, page_size=request.page_size)
        criteria = ArticleFilter.public(article_ids=list(user.saved_article_ids))
        return await self._paginator.paginate(
            criteria, None, page, page_size, default_sort=SAVED_DEFAULT_SORT
        )

    async def interaction_status(
        self, article_ids: list[str], user: User
    ) -> list[InteractionStatus]:
        """Liked/saved flags per article, in request order.

        IDs that do not resolve to a published article are left out.
        """
        ids = list(dict.fromkeys(a.strip() for a in article_ids if a and a.strip()))
        if not ids:
            raise DomainValidationError("article_ids", "Article IDs are required")

        liked = await self._articles.liked_status(ids, user.id)
        return [
            InteractionStatus(
                article_id=article_id,
                liked=liked[article_id],
                saved=user.has_saved(article_id),
            )
            for article_id in ids
            if article_id in liked
        ]
