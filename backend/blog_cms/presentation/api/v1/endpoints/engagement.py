"""Per-reader engagement endpoints — likes, saved articles, interaction status."""

from fastapi import APIRouter, Depends, Query

from blog_cms.application.schemas import (
    ArticleListResponse,
    InteractionStatusResponse,
    InteractionStatusSchema,
    LikeResponse,
    SaveArticleRequest,
    SaveArticleResponse,
    UnsaveArticleResponse,
)
from blog_cms.application.services import EngagementService
from blog_cms.domain.entities import User
from blog_cms.infrastructure.dependencies import get_current_user, get_engagement_service
from blog_cms.presentation.api.v1.serializers import to_page

router = APIRouter(prefix="/me/articles", tags=["Engagement"])


@router.get("/saved", response_model=ArticleListResponse)
async def list_saved(
    page: int | None = None,
    limit: int | None = None,
    user: User = Depends(get_current_user),
    service: EngagementService = Depends(get_engagement_service),
) -> ArticleListResponse:
    """The caller's saved articles that are still published."""
    result = await service.list_saved_articles(user, page=page, page_size=limit)
    return to_page(result)


@router.get("/status", response_model=InteractionStatusResponse)
async def interaction_status(
    article_ids: str = Query(..., description="Comma-separated article IDs"),
    user: User = Depends(get_current_user),
    service: EngagementService = Depends(get_engagement_service),
) -> InteractionStatusResponse:
    """Liked/saved flags for several articles at once."""
    statuses = await service.interaction_status(article_ids.split(","), user)
    return InteractionStatusResponse(
        status=[InteractionStatusSchema.model_validate(s, from_attributes=True) for s in statuses]
    )


@router.post("/save", response_model=SaveArticleResponse)
async def save_article(
    data: SaveArticleRequest,
    user: User = Depends(get_current_user),
    service: EngagementService = Depends(get_engagement_service),
) -> SaveArticleResponse:
    result = await service.save_article(data.article_id, user)
    return SaveArticleResponse(
        saved=result.saved,
        was_already_saved=result.was_already_saved,
        message="Article already saved" if result.was_already_saved else "Article saved",
    )


@router.delete("/{article_id}/save", response_model=UnsaveArticleResponse)
async def unsave_article(
    article_id: str,
    user: User = Depends(get_current_user),
    service: EngagementService = Depends(get_engagement_service),
) -> UnsaveArticleResponse:
    result = await service.unsave_article(article_id, user)
    return UnsaveArticleResponse(
        saved=result.saved,
        was_saved=result.was_saved,
        message="Article removed from saved" if result.was_saved else "Article was not saved",
    )


@router.post("/{article_id}/like", response_model=LikeResponse)
async def toggle_like(
    article_id: str,
    user: User = Depends(get_current_user),
    service: EngagementService = Depends(get_engagement_service),
) -> LikeResponse:
    """Like the article, or remove the caller's like if already present."""
    result = await service.toggle_like(article_id, user)
    return LikeResponse(
        likes=result.likes,
        liked=result.liked,
        message="Article liked" if result.liked else "Article unliked",
    )
