"""Anonymous read endpoints — published articles only."""

from fastapi import APIRouter, Depends

from blog_cms.application.schemas import (
    ArticleCollectionResponse,
    ArticleListResponse,
    ArticleResponse,
    LikeResponse,
)
from blog_cms.application.services import EngagementService, PublicArticleService
from blog_cms.domain.entities import PopularTimeframe
from blog_cms.infrastructure.dependencies import (
    get_engagement_service,
    get_public_article_service,
)
from blog_cms.presentation.api.v1.serializers import to_collection, to_detail, to_page

router = APIRouter(prefix="/public/articles", tags=["Public Articles"])


@router.get("", response_model=ArticleListResponse)
async def list_published(
    category: str | None = None,
    tag: str | None = None,
    author: str | None = None,
    search: str | None = None,
    page: int | None = None,
    limit: int | None = None,
    sort: str = "-publishedAt",
    service: PublicArticleService = Depends(get_public_article_service),
) -> ArticleListResponse:
    """Paginated list of published articles."""
    result = await service.list_published(
        category=category,
        tag=tag,
        author_id=author,
        search=search,
        page=page,
        page_size=limit,
        sort=sort,
    )
    return to_page(result)


@router.get("/featured", response_model=ArticleCollectionResponse)
async def list_featured(
    limit: int | None = None,
    service: PublicArticleService = Depends(get_public_article_service),
) -> ArticleCollectionResponse:
    return to_collection(await service.list_featured(limit))


@router.get("/popular", response_model=ArticleCollectionResponse)
async def list_popular(
    limit: int | None = None,
    timeframe: PopularTimeframe = PopularTimeframe.ALL,
    service: PublicArticleService = Depends(get_public_article_service),
) -> ArticleCollectionResponse:
    """Most viewed articles, optionally limited to the last week or month."""
    return to_collection(await service.list_popular(limit, timeframe))


@router.get("/category/{category}", response_model=ArticleListResponse)
async def list_by_category(
    category: str,
    page: int | None = None,
    limit: int | None = None,
    sort: str = "-publishedAt",
    service: PublicArticleService = Depends(get_public_article_service),
) -> ArticleListResponse:
    result = await service.list_by_category(category, page=page, page_size=limit, sort=sort)
    return to_page(result)


@router.get("/author/{author_id}", response_model=ArticleListResponse)
async def list_by_author(
    author_id: str,
    page: int | None = None,
    limit: int | None = None,
    sort: str = "-publishedAt",
    service: PublicArticleService = Depends(get_public_article_service),
) -> ArticleListResponse:
    result = await service.list_by_author(author_id, page=page, page_size=limit, sort=sort)
    return to_page(result)


@router.get("/id/{article_id}", response_model=ArticleResponse)
async def get_by_id(
    article_id: str,
    service: PublicArticleService = Depends(get_public_article_service),
) -> ArticleResponse:
    """Fetch a published article by ID; counts one view."""
    return to_detail(await service.get_by_id(article_id))


@router.get("/{slug}", response_model=ArticleResponse)
async def get_by_slug(
    slug: str,
    service: PublicArticleService = Depends(get_public_article_service),
) -> ArticleResponse:
    """Fetch a published article by slug; counts one view."""
    return to_detail(await service.get_by_slug(slug))


@router.post("/{article_id}/like", response_model=LikeResponse)
async def anonymous_like(
    article_id: str,
    service: EngagementService = Depends(get_engagement_service),
) -> LikeResponse:
    """Anonymous +1 like; not tracked per reader."""
    result = await service.anonymous_like(article_id)
    return LikeResponse(likes=result.likes, liked=result.liked, message="Article liked")
