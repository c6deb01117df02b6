from .article import (
    ArticleCollectionResponse,
    ArticleCreate,
    ArticleListResponse,
    ArticleResponse,
    ArticleStatsResponse,
    ArticleSummaryResponse,
    ArticleUpdate,
    CategoriesResponse,
    ContentBlockSchema,
    PaginationSchema,
    RegenerateResponse,
    StatsTotalsSchema,
    StatusStatsSchema,
)
from .engagement import (
    InteractionStatusResponse,
    InteractionStatusSchema,
    LikeResponse,
    SaveArticleRequest,
    SaveArticleResponse,
    UnsaveArticleResponse,
)
from .media import (
    ImageByUrlRequest,
    ImageUploadResponse,
    LinkPreviewImage,
    LinkPreviewMeta,
    LinkPreviewRequest,
    LinkPreviewResponse,
    UploadedFileSchema,
)

__all__ = [
    "ArticleCollectionResponse",
    "ArticleCreate",
    "ArticleListResponse",
    "ArticleResponse",
    "ArticleStatsResponse",
    "ArticleSummaryResponse",
    "ArticleUpdate",
    "CategoriesResponse",
    "ContentBlockSchema",
    "PaginationSchema",
    "RegenerateResponse",
    "StatsTotalsSchema",
    "StatusStatsSchema",
    "InteractionStatusResponse",
    "InteractionStatusSchema",
    "LikeResponse",
    "SaveArticleRequest",
    "SaveArticleResponse",
    "UnsaveArticleResponse",
    "ImageByUrlRequest",
    "ImageUploadResponse",
    "LinkPreviewImage",
    "LinkPreviewMeta",
    "LinkPreviewRequest",
    "LinkPreviewResponse",
    "UploadedFileSchema",
]
