"""Abstract repository interface (port) for users and their saved articles."""

from abc import ABC, abstractmethod

from blog_cms.domain.entities import User


class UserRepository(ABC):
    """Port for user lookups — user accounts themselves are managed by the identity service."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> User | None:
        """Retrieve a user with its saved-article IDs in save order."""
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a user record."""
        ...

    @abstractmethod
    async def add_saved_article(self, user_id: str, article_id: str) -> bool:
        """Add an article to the saved set. Returns False if it was already there."""
        ...

    @abstractmethod
    async def remove_saved_article(self, user_id: str, article_id: str) -> bool:
        """Remove an article from the saved set. Returns False if it was not there."""
        ...
