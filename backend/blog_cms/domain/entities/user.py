"""Domain entity for blog users (readers, authors and admins)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class UserRole(str, Enum):
    """Stored for the authorization collaborator; not enforced by the core."""

    USER = "user"
    AUTHOR = "author"
    ADMIN = "admin"


@dataclass
class User:
    """A resolved identity together with its saved-article set."""

    id: str
    name: str
    email: str = ""
    role: UserRole = UserRole.USER
    avatar: str = ""
    bio: str = ""
    is_active: bool = True
    saved_article_ids: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def has_saved(self, article_id: str) -> bool:
        return article_id in self.saved_article_ids

    def save_article(self, article_id: str) -> bool:
        """Add ``article_id`` to the saved set. Returns True if it was already saved."""
        if self.has_saved(article_id):
            return True
        self.saved_article_ids.append(article_id)
        return False

    def unsave_article(self, article_id: str) -> bool:
        """Remove ``article_id`` from the saved set. Returns True if it was saved."""
        if not self.has_saved(article_id):
            return False
        self.saved_article_ids = [a for a in self.saved_article_ids if a != article_id]
        return True
