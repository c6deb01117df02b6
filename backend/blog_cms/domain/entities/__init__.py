from .article import Article, normalize_tags
from .user import User, UserRole
from .engagement import InteractionStatus, LikeResult, SaveResult, UnsaveResult
from .listing import (
    ArticleFilter,
    AuthorStats,
    Page,
    PageRequest,
    PopularTimeframe,
    SortField,
    SortSpec,
    StatusStats,
)
from blog_cms.domain.content import ContentBlock, LegacyBlockType
from blog_cms.domain.lifecycle import ArticleStatus

__all__ = [
    "Article",
    "normalize_tags",
    "ArticleStatus",
    "ContentBlock",
    "LegacyBlockType",
    "User",
    "UserRole",
    "InteractionStatus",
    "LikeResult",
    "SaveResult",
    "UnsaveResult",
    "ArticleFilter",
    "AuthorStats",
    "Page",
    "PageRequest",
    "PopularTimeframe",
    "SortField",
    "SortSpec",
    "StatusStats",
]
