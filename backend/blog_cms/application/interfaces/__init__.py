from .article_repository import ArticleRepository
from .user_repository import UserRepository
from .image_storage import ImageStorage, StoredImage

__all__ = [
    "ArticleRepository",
    "UserRepository",
    "ImageStorage",
    "StoredImage",
]
