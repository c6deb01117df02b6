"""Concrete article repository backed by SQLAlchemy.

Authored writes are a single ``UPDATE … WHERE id = :id AND version = :version``;
engagement counters are changed with in-place ``col = col ± 1`` statements.
No application-level locks are taken.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import and_, case, delete, exists, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_cms.application.interfaces import ArticleRepository
from blog_cms.domain.entities import (
    Article,
    ArticleFilter,
    ArticleStatus,
    AuthorStats,
    ContentBlock,
    LegacyBlockType,
    LikeResult,
    SortSpec,
    StatusStats,
)
from blog_cms.domain.exceptions import (
    ConcurrentModificationError,
    DuplicateEntityError,
    EntityNotFoundError,
)
from blog_cms.infrastructure.database.models import (
    ArticleLikeModel,
    ArticleModel,
    ArticleTagModel,
    SavedArticleModel,
)

logger = logging.getLogger(__name__)

_PUBLISHED = ArticleStatus.PUBLISHED.value


def _aware(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    # ── Mapping ─────────────────────────────────────────────────────

    @staticmethod
    def _blocks_to_json(blocks: list[ContentBlock]) -> list[dict[str, Any]]:
        return [
            {"type": b.type.value, "content": b.content, "alt": b.alt, "order": b.order}
            for b in blocks
        ]

    @staticmethod
    def _blocks_from_json(raw: list[dict[str, Any]] | None) -> list[ContentBlock]:
        return [
            ContentBlock(
                type=LegacyBlockType(item["type"]),
                content=item.get("content", ""),
                alt=item.get("alt", ""),
                order=item.get("order", 0),
            )
            for item in raw or []
        ]

    def _to_entity(
        self,
        model: ArticleModel,
        tags: list[str] | None = None,
        liked_by: set[str] | None = None,
    ) -> Article:
        """Map ORM model → domain entity."""
        return Article(
            id=model.id,
            title=model.title,
            author_id=model.author_id,
            slug=model.slug,
            content_blocks=self._blocks_from_json(model.content_blocks),
            editor_data=model.editor_data,
            excerpt=model.excerpt or "",
            read_time=model.read_time,
            category=model.category,
            tags=list(tags or []),
            status=ArticleStatus(model.status),
            featured_image=model.featured_image or "",
            published_at=_aware(model.published_at),
            views=model.views,
            likes=model.likes,
            liked_by=set(liked_by or ()),
            seo_title=model.seo_title,
            seo_description=model.seo_description,
            is_featured=model.is_featured,
            allow_comments=model.allow_comments,
            version=model.version,
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
        )

    def _authored_values(self, article: Article) -> dict[str, Any]:
        """Columns owned by the author and the derivation pipeline (never the counters)."""
        return {
            "title": article.title,
            "slug": article.slug,
            "content_blocks": self._blocks_to_json(article.content_blocks),
            "editor_data": article.editor_data,
            "excerpt": article.excerpt,
            "read_time": article.read_time,
            "category": article.category,
            "status": article.status.value,
            "featured_image": article.featured_image,
            "published_at": article.published_at,
            "seo_title": article.seo_title,
            "seo_description": article.seo_description,
            "is_featured": article.is_featured,
            "allow_comments": article.allow_comments,
            "updated_at": article.updated_at,
        }

    # ── Child rows ──────────────────────────────────────────────────

    async def _tags_for(self, article_ids: list[str]) -> dict[str, list[str]]:
        if not article_ids:
            return {}
        result = await self._session.execute(
            select(ArticleTagModel.article_id, ArticleTagModel.tag)
            .where(ArticleTagModel.article_id.in_(article_ids))
            .order_by(ArticleTagModel.article_id, ArticleTagModel.position)
        )
        tags: dict[str, list[str]] = {}
        for article_id, tag in result.all():
            tags.setdefault(article_id, []).append(tag)
        return tags

    async def _liked_by(self, article_id: str) -> set[str]:
        result = await self._session.execute(
            select(ArticleLikeModel.user_id).where(ArticleLikeModel.article_id == article_id)
        )
        return set(result.scalars().all())

    async def _replace_tags(self, article_id: str, tags: list[str]) -> None:
        await self._session.execute(
            delete(ArticleTagModel)
            .where(ArticleTagModel.article_id == article_id)
            .execution_options(synchronize_session=False)
        )
        if tags:
            await self._session.execute(
                insert(ArticleTagModel),
                [
                    {"article_id": article_id, "tag": tag, "position": i}
                    for i, tag in enumerate(tags)
                ],
            )

    async def _ensure_slug_available(self, slug: str, exclude_id: str | None = None) -> None:
        stmt = select(ArticleModel.id).where(ArticleModel.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(ArticleModel.id != exclude_id)
        if await self._session.scalar(stmt) is not None:
            raise DuplicateEntityError("Article", "slug", slug)

    @staticmethod
    def _raise_integrity(exc: IntegrityError, article: Article) -> None:
        if "slug" in str(exc.orig):
            raise DuplicateEntityError("Article", "slug", article.slug) from exc
        raise exc

    # ── Queries ─────────────────────────────────────────────────────

    async def _get_one(self, condition) -> Article | None:
        result = await self._session.execute(
            select(ArticleModel).where(condition).execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        if model is None:
            return None
        tags = await self._tags_for([model.id])
        return self._to_entity(model, tags.get(model.id), await self._liked_by(model.id))

    async def get_by_id(self, article_id: str) -> Article | None:
        return await self._get_one(ArticleModel.id == article_id)

    async def get_by_slug(self, slug: str) -> Article | None:
        return await self._get_one(ArticleModel.slug == slug)

    @staticmethod
    def _apply_filter(stmt, criteria: ArticleFilter):
        if criteria.author_id is not None:
            stmt = stmt.where(ArticleModel.author_id == criteria.author_id)
        if criteria.status is not None:
            stmt = stmt.where(ArticleModel.status == criteria.status.value)
        if criteria.category:
            stmt = stmt.where(ArticleModel.category == criteria.category)
        if criteria.tag:
            stmt = stmt.where(
                exists().where(
                    ArticleTagModel.article_id == ArticleModel.id,
                    ArticleTagModel.tag == criteria.tag,
                )
            )
        if criteria.search:
            pattern = _like_pattern(criteria.search)
            stmt = stmt.where(
                or_(
                    ArticleModel.title.ilike(pattern, escape="\\"),
                    ArticleModel.excerpt.ilike(pattern, escape="\\"),
                    exists().where(
                        ArticleTagModel.article_id == ArticleModel.id,
                        ArticleTagModel.tag.ilike(pattern, escape="\\"),
                    ),
                )
            )
        if criteria.article_ids is not None:
            stmt = stmt.where(ArticleModel.id.in_(criteria.article_ids))
        if criteria.is_featured is not None:
            stmt = stmt.where(ArticleModel.is_featured == criteria.is_featured)
        if criteria.published_since is not None:
            stmt = stmt.where(ArticleModel.published_at >= criteria.published_since)
        return stmt

    @staticmethod
    def _order_by(sort: SortSpec) -> list:
        clauses = []
        for sort_field in sort.fields:
            column = getattr(ArticleModel, sort_field.attribute)
            ordered = column.desc() if sort_field.descending else column.asc()
            clauses.append(ordered.nulls_last())
        # Tie-breaker keeps pagination stable
        clauses.append(ArticleModel.id.asc())
        return clauses

    async def find(
        self,
        criteria: ArticleFilter,
        sort: SortSpec,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[Article], int]:
        count_stmt = self._apply_filter(select(ArticleModel.id), criteria)
        total = await self._session.scalar(
            select(func.count()).select_from(count_stmt.subquery())
        )

        stmt = (
            self._apply_filter(select(ArticleModel), criteria)
            .order_by(*self._order_by(sort))
            .offset(skip)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        models = list(result.scalars().all())
        tags = await self._tags_for([m.id for m in models])
        return [self._to_entity(m, tags.get(m.id)) for m in models], total or 0

    async def list_ids(self, skip: int = 0, limit: int = 100) -> list[str]:
        result = await self._session.execute(
            select(ArticleModel.id)
            .order_by(ArticleModel.created_at.asc(), ArticleModel.id.asc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def author_stats(self, author_id: str) -> AuthorStats:
        result = await self._session.execute(
            select(
                ArticleModel.status,
                func.count(ArticleModel.id),
                func.coalesce(func.sum(ArticleModel.views), 0),
                func.coalesce(func.sum(ArticleModel.likes), 0),
            )
            .where(ArticleModel.author_id == author_id)
            .group_by(ArticleModel.status)
        )
        by_status = [
            StatusStats(
                status=ArticleStatus(status),
                count=int(count),
                total_views=int(views),
                total_likes=int(likes),
            )
            for status, count, views, likes in result.all()
        ]
        return AuthorStats(
            by_status=by_status,
            total_articles=sum(s.count for s in by_status),
            total_views=sum(s.total_views for s in by_status),
            total_likes=sum(s.total_likes for s in by_status),
        )

    # ── Authored writes ─────────────────────────────────────────────

    async def create(self, article: Article) -> Article:
        await self._ensure_slug_available(article.slug)
        model = ArticleModel(
            id=article.id,
            author_id=article.author_id,
            views=article.views,
            likes=article.likes,
            version=article.version,
            created_at=article.created_at,
            **self._authored_values(article),
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            self._raise_integrity(exc, article)
        await self._replace_tags(article.id, article.tags)
        return self._to_entity(model, article.tags)

    async def update(self, article: Article) -> Article:
        await self._ensure_slug_available(article.slug, exclude_id=article.id)
        stmt = (
            update(ArticleModel)
            .where(ArticleModel.id == article.id, ArticleModel.version == article.version)
            .values(**self._authored_values(article), version=ArticleModel.version + 1)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self._session.execute(stmt)
        except IntegrityError as exc:
            self._raise_integrity(exc, article)

        if result.rowcount == 0:
            still_there = await self._session.scalar(
                select(ArticleModel.id).where(ArticleModel.id == article.id)
            )
            if still_there is None:
                raise EntityNotFoundError("Article", article.id)
            logger.warning("Version conflict on article %s (v%d)", article.id, article.version)
            raise ConcurrentModificationError("Article", article.id)

        await self._replace_tags(article.id, article.tags)
        refreshed = await self.get_by_id(article.id)
        if refreshed is None:
            raise EntityNotFoundError("Article", article.id)
        return refreshed

    async def delete(self, article_id: str) -> bool:
        for child in (ArticleTagModel, ArticleLikeModel, SavedArticleModel):
            await self._session.execute(
                delete(child)
                .where(child.article_id == article_id)
                .execution_options(synchronize_session=False)
            )
        result = await self._session.execute(
            delete(ArticleModel)
            .where(ArticleModel.id == article_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    # ── Engagement counters ─────────────────────────────────────────

    async def _bump(self, article_id: str, column, delta_expr) -> int | None:
        """Apply ``column = delta_expr`` to a published article, returning the new value."""
        result = await self._session.execute(
            update(ArticleModel)
            .where(ArticleModel.id == article_id, ArticleModel.status == _PUBLISHED)
            .values({column: delta_expr})
            .returning(column)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none()

    async def increment_views(self, article_id: str) -> int | None:
        return await self._bump(article_id, ArticleModel.views, ArticleModel.views + 1)

    async def increment_likes(self, article_id: str) -> int | None:
        return await self._bump(article_id, ArticleModel.likes, ArticleModel.likes + 1)

    async def toggle_like(self, article_id: str, user_id: str) -> LikeResult | None:
        published = await self._session.scalar(
            select(ArticleModel.id).where(
                ArticleModel.id == article_id, ArticleModel.status == _PUBLISHED
            )
        )
        if published is None:
            return None

        removed = await self._session.execute(
            delete(ArticleLikeModel)
            .where(
                and_(
                    ArticleLikeModel.article_id == article_id,
                    ArticleLikeModel.user_id == user_id,
                )
            )
            .execution_options(synchronize_session=False)
        )
        if removed.rowcount:
            likes = await self._bump(
                article_id,
                ArticleModel.likes,
                case((ArticleModel.likes > 0, ArticleModel.likes - 1), else_=0),
            )
            return None if likes is None else LikeResult(likes=likes, liked=False)

        try:
            await self._session.execute(
                insert(ArticleLikeModel).values(
                    article_id=article_id,
                    user_id=user_id,
                    created_at=datetime.now(timezone.utc),
                )
            )
        except IntegrityError as exc:
            # Same user toggling twice at once; the other request won
            raise ConcurrentModificationError("Article", article_id) from exc
        likes = await self._bump(article_id, ArticleModel.likes, ArticleModel.likes + 1)
        return None if likes is None else LikeResult(likes=likes, liked=True)

    async def liked_status(self, article_ids: list[str], user_id: str) -> dict[str, bool]:
        if not article_ids:
            return {}
        published = await self._session.execute(
            select(ArticleModel.id).where(
                ArticleModel.id.in_(article_ids), ArticleModel.status == _PUBLISHED
            )
        )
        published_ids = set(published.scalars().all())
        if not published_ids:
            return {}
        liked = await self._session.execute(
            select(ArticleLikeModel.article_id).where(
                ArticleLikeModel.user_id == user_id,
                ArticleLikeModel.article_id.in_(published_ids),
            )
        )
        liked_ids = set(liked.scalars().all())
        return {article_id: article_id in liked_ids for article_id in published_ids}
