from .article_service import ArticleService
from .engagement_service import EngagementService
from .media_service import MediaService
from .pagination import ArticlePaginator
from .public_article_service import PublicArticleService

__all__ = [
    "ArticleService",
    "EngagementService",
    "MediaService",
    "ArticlePaginator",
    "PublicArticleService",
]
