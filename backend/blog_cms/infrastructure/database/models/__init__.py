from .article import ArticleLikeModel, ArticleModel, ArticleTagModel
from .user import SavedArticleModel, UserModel

__all__ = [
    "ArticleModel",
    "ArticleTagModel",
    "ArticleLikeModel",
    "UserModel",
    "SavedArticleModel",
]
