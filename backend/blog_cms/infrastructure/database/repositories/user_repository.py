"""Concrete user repository backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_cms.application.interfaces import UserRepository
from blog_cms.domain.entities import User, UserRole
from blog_cms.domain.exceptions import ConcurrentModificationError
from blog_cms.infrastructure.database.models import SavedArticleModel, UserModel


class SQLAlchemyUserRepository(UserRepository):
    """Implements the UserRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @staticmethod
    def _to_entity(model: UserModel, saved_article_ids: list[str]) -> User:
        created_at = model.created_at
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=UserRole(model.role),
            avatar=model.avatar,
            bio=model.bio,
            is_active=model.is_active,
            saved_article_ids=saved_article_ids,
            created_at=created_at,
        )

    async def _saved_ids(self, user_id: str) -> list[str]:
        result = await self._session.execute(
            select(SavedArticleModel.article_id)
            .where(SavedArticleModel.user_id == user_id)
            .order_by(SavedArticleModel.saved_at.asc(), SavedArticleModel.article_id.asc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, user_id: str) -> User | None:
        model = await self._session.get(UserModel, user_id, populate_existing=True)
        if model is None:
            return None
        return self._to_entity(model, await self._saved_ids(user_id))

    async def create(self, user: User) -> User:
        model = UserModel(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            avatar=user.avatar,
            bio=user.bio,
            is_active=user.is_active,
            created_at=user.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        for article_id in user.saved_article_ids:
            await self.add_saved_article(user.id, article_id)
        return self._to_entity(model, list(user.saved_article_ids))

    async def add_saved_article(self, user_id: str, article_id: str) -> bool:
        already = await self._session.scalar(
            select(SavedArticleModel.article_id).where(
                SavedArticleModel.user_id == user_id,
                SavedArticleModel.article_id == article_id,
            )
        )
        if already is not None:
            return False
        try:
            await self._session.execute(
                insert(SavedArticleModel).values(
                    user_id=user_id,
                    article_id=article_id,
                    saved_at=datetime.now(timezone.utc),
                )
            )
        except IntegrityError as exc:
            raise ConcurrentModificationError("User", user_id) from exc
        return True

    async def remove_saved_article(self, user_id: str, article_id: str) -> bool:
        result = await self._session.execute(
            delete(SavedArticleModel)
            .where(
                SavedArticleModel.user_id == user_id,
                SavedArticleModel.article_id == article_id,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0
