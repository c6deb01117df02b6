"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from blog_cms.config import get_settings
from blog_cms.application.services import (
    ArticleService,
    EngagementService,
    MediaService,
    PublicArticleService,
)
from blog_cms.domain.entities import User
from blog_cms.infrastructure.database.session import get_db_session
from blog_cms.infrastructure.database.repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyUserRepository,
)
from blog_cms.infrastructure.storage.local_image_storage import LocalImageStorage


async def get_article_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService instance with its repository wired up."""
    settings = get_settings()
    repository = SQLAlchemyArticleRepository(session)
    yield ArticleService(
        repository,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )


async def get_public_article_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[PublicArticleService, None]:
    """Provides the read-only PublicArticleService."""
    settings = get_settings()
    repository = SQLAlchemyArticleRepository(session)
    yield PublicArticleService(
        repository,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
        featured_limit=settings.featured_limit,
        popular_limit=settings.popular_limit,
    )


async def get_engagement_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[EngagementService, None]:
    """Provides an EngagementService over the article and user repositories."""
    settings = get_settings()
    yield EngagementService(
        article_repository=SQLAlchemyArticleRepository(session),
        user_repository=SQLAlchemyUserRepository(session),
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )


async def get_media_service() -> AsyncGenerator[MediaService, None]:
    """Provides a MediaService writing to the local upload directory."""
    settings = get_settings()
    storage = LocalImageStorage(
        upload_dir=settings.upload_dir,
        public_base_url=settings.public_base_url,
    )
    yield MediaService(storage, max_image_bytes=settings.max_image_size_mb * 1024 * 1024)


# ── Identity ────────────────────────────────────────────────────────


async def get_optional_user(
    x_user_id: str | None = Header(default=None),
    session: AsyncSession = Depends(get_db_session),
) -> User | None:
    """Resolve the upstream-authenticated user from ``X-User-Id``, if any."""
    if not x_user_id or not x_user_id.strip():
        return None
    user = await SQLAlchemyUserRepository(session).get_by_id(x_user_id.strip())
    if user is None or not user.is_active:
        return None
    return user


async def get_current_user(
    user: User | None = Depends(get_optional_user),
) -> User:
    """Like ``get_optional_user`` but rejects anonymous requests with 401."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no valid user",
        )
    return user
