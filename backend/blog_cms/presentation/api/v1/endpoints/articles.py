"""Author-facing article endpoints — CRUD, lifecycle, stats and editor media."""

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from blog_cms.application.schemas import (
    ArticleCreate,
    ArticleListResponse,
    ArticleResponse,
    ArticleStatsResponse,
    ArticleUpdate,
    CategoriesResponse,
    ImageByUrlRequest,
    ImageUploadResponse,
    LinkPreviewRequest,
    LinkPreviewResponse,
    RegenerateResponse,
    StatsTotalsSchema,
    StatusStatsSchema,
    UploadedFileSchema,
)
from blog_cms.application.services import ArticleService, MediaService
from blog_cms.domain.entities import ArticleStatus, User
from blog_cms.infrastructure.dependencies import (
    get_article_service,
    get_current_user,
    get_media_service,
)
from blog_cms.presentation.api.v1.serializers import to_detail, to_page

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.get("", response_model=ArticleListResponse)
async def list_articles(
    status_filter: ArticleStatus | None = Query(None, alias="status"),
    category: str | None = None,
    tag: str | None = None,
    search: str | None = None,
    page: int | None = None,
    limit: int | None = None,
    sort: str = "-createdAt",
    user: User = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
) -> ArticleListResponse:
    """List the caller's own articles in every status."""
    result = await service.list_articles(
        user.id,
        status=status_filter,
        category=category,
        tag=tag,
        search=search,
        page=page,
        page_size=limit,
        sort=sort,
    )
    return to_page(result)


@router.get("/stats", response_model=ArticleStatsResponse)
async def get_stats(
    user: User = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
) -> ArticleStatsResponse:
    """Per-status counts, views and likes over the caller's articles."""
    stats = await service.get_stats(user.id)
    return ArticleStatsResponse(
        stats=[StatusStatsSchema.model_validate(s, from_attributes=True) for s in stats.by_status],
        totals=StatsTotalsSchema(
            total_articles=stats.total_articles,
            total_views=stats.total_views,
            total_likes=stats.total_likes,
        ),
    )


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories() -> CategoriesResponse:
    """The fixed category set, with its version."""
    return CategoriesResponse(**ArticleService.list_categories())


@router.post("/regenerate-excerpts", response_model=RegenerateResponse)
async def regenerate_excerpts(
    user: User = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
) -> RegenerateResponse:
    """Recompute excerpt and read time for all articles."""
    updated = await service.regenerate_derived_fields()
    return RegenerateResponse(
        updated=updated,
        message=f"Regenerated excerpts for {updated} articles",
    )


# ── Editor media ─────────────────────────────────────────────────────


@router.post("/upload-image", response_model=ImageUploadResponse)
async def upload_image(
    image: UploadFile = File(...),
    user: User = Depends(get_current_user),
    service: MediaService = Depends(get_media_service),
) -> ImageUploadResponse:
    """Store an image for the editor and return its public URL."""
    content = await image.read()
    stored = await service.upload_image(
        content, image.filename or "image", image.content_type
    )
    return ImageUploadResponse(
        file=UploadedFileSchema(url=stored.url, name=stored.filename, size=stored.size)
    )


@router.post("/upload-image/by-url", response_model=ImageUploadResponse)
async def upload_image_by_url(
    data: ImageByUrlRequest,
    user: User = Depends(get_current_user),
) -> ImageUploadResponse:
    """Accept an external image URL as-is."""
    return ImageUploadResponse(file=UploadedFileSchema(url=str(data.url)))


@router.post("/link-preview", response_model=LinkPreviewResponse)
async def link_preview(
    data: LinkPreviewRequest,
    user: User = Depends(get_current_user),
) -> LinkPreviewResponse:
    """Build a link card from the URL's domain."""
    return LinkPreviewResponse(**MediaService.link_preview(str(data.url)))


# ── Single article ───────────────────────────────────────────────────


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: str,
    user: User = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Retrieve one of the caller's articles by ID."""
    article = await service.get_article(article_id, user.id)
    return to_detail(article)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    user: User = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Create a new article owned by the caller."""
    article = await service.create_article(user.id, data)
    return to_detail(article)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    data: ArticleUpdate,
    user: User = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Partially update an article; omitted fields are kept."""
    article = await service.update_article(article_id, user.id, data)
    return to_detail(article)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: str,
    user: User = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
) -> None:
    """Delete an article by ID."""
    await service.delete_article(article_id, user.id)


@router.put("/{article_id}/publish", response_model=ArticleResponse)
async def publish_article(
    article_id: str,
    user: User = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    article = await service.publish_article(article_id, user.id)
    return to_detail(article)


@router.put("/{article_id}/unpublish", response_model=ArticleResponse)
async def unpublish_article(
    article_id: str,
    user: User = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    article = await service.unpublish_article(article_id, user.id)
    return to_detail(article)


@router.put("/{article_id}/archive", response_model=ArticleResponse)
async def archive_article(
    article_id: str,
    user: User = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    article = await service.archive_article(article_id, user.id)
    return to_detail(article)
