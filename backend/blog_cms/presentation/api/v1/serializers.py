"""Entity → response DTO mapping shared by the article routers."""

from blog_cms.application.schemas import (
    ArticleCollectionResponse,
    ArticleListResponse,
    ArticleResponse,
    ArticleSummaryResponse,
    PaginationSchema,
)
from blog_cms.domain.entities import Article, Page


def to_detail(article: Article) -> ArticleResponse:
    return ArticleResponse.model_validate(article, from_attributes=True)


def to_summary(article: Article) -> ArticleSummaryResponse:
    return ArticleSummaryResponse.model_validate(article, from_attributes=True)


def to_page(page: Page[Article]) -> ArticleListResponse:
    return ArticleListResponse(
        articles=[to_summary(a) for a in page.items],
        pagination=PaginationSchema(
            current_page=page.page,
            total_pages=page.total_pages,
            total_items=page.total,
            items_per_page=page.page_size,
        ),
    )


def to_collection(articles: list[Article]) -> ArticleCollectionResponse:
    return ArticleCollectionResponse(articles=[to_summary(a) for a in articles])
