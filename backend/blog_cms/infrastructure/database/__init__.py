from .base import Base
from .session import build_engine, engine, async_session_factory, get_db_session
from .models import ArticleModel, UserModel

__all__ = [
    "Base",
    "build_engine",
    "engine",
    "async_session_factory",
    "get_db_session",
    "ArticleModel",
    "UserModel",
]
