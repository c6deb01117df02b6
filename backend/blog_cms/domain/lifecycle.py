"""Article lifecycle — the draft / published / archived state machine."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

from blog_cms.domain.exceptions import InvalidStateTransitionError

if TYPE_CHECKING:
    from blog_cms.domain.entities.article import Article


class ArticleStatus(str, Enum):
    """Lifecycle states of an article."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


# Self-transitions are allowed so that re-saving with the same status is a no-op.
ALLOWED_TRANSITIONS: dict[ArticleStatus, frozenset[ArticleStatus]] = {
    ArticleStatus.DRAFT: frozenset(
        {ArticleStatus.DRAFT, ArticleStatus.PUBLISHED, ArticleStatus.ARCHIVED}
    ),
    ArticleStatus.PUBLISHED: frozenset(
        {ArticleStatus.PUBLISHED, ArticleStatus.DRAFT, ArticleStatus.ARCHIVED}
    ),
    ArticleStatus.ARCHIVED: frozenset({ArticleStatus.ARCHIVED}),
}


def can_transition(current: ArticleStatus, target: ArticleStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def apply_transition(
    article: Article,
    target: ArticleStatus,
    now: datetime | None = None,
) -> None:
    """Move ``article`` to ``target``, applying the timestamp policy.

    Raises InvalidStateTransitionError (leaving the article untouched) when
    the move is not allowed or publishing without a category.
    """
    current = article.status
    if not can_transition(current, target):
        raise InvalidStateTransitionError(current.value, target.value, "transition not allowed")

    if target == ArticleStatus.PUBLISHED:
        if not article.category:
            raise InvalidStateTransitionError(
                current.value, target.value, "category is required for published articles"
            )
        if article.published_at is None:
            article.published_at = now or datetime.now(timezone.utc)
    elif target == ArticleStatus.DRAFT:
        article.published_at = None

    article.status = target


def is_publicly_visible(article: Article) -> bool:
    """Only published articles are visible outside their owner's workspace."""
    return article.status == ArticleStatus.PUBLISHED
