"""Domain entities — pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from blog_cms.domain.categories import validate_category
from blog_cms.domain.content import ContentBlock
from blog_cms.domain.derived_fields import derive_fields, slugify
from blog_cms.domain.exceptions import DomainValidationError
from blog_cms.domain.lifecycle import ArticleStatus, apply_transition


def normalize_tags(tags: list[str] | None) -> list[str]:
    """Trim and lowercase tags, dropping empties and duplicates (first one wins)."""
    normalized: list[str] = []
    for tag in tags or []:
        value = tag.strip().lower()
        if value and value not in normalized:
            normalized.append(value)
    return normalized


@dataclass
class Article:
    """Core domain entity representing a blog article.

    ``slug``, ``excerpt`` and ``read_time`` are derived: they change only
    through :meth:`rename` and :meth:`set_content`, never by assignment from
    caller input. ``likes`` mirrors ``liked_by`` for authenticated likes;
    anonymous likes bump ``likes`` alone.
    """

    title: str
    author_id: str
    id: str = field(default_factory=lambda: str(uuid4()))
    slug: str = ""
    content_blocks: list[ContentBlock] = field(default_factory=list)
    editor_data: dict[str, Any] | None = None
    excerpt: str = ""
    read_time: int = 0
    category: str | None = None
    tags: list[str] = field(default_factory=list)
    status: ArticleStatus = ArticleStatus.DRAFT
    featured_image: str = ""
    published_at: datetime | None = None
    views: int = 0
    likes: int = 0
    liked_by: set[str] = field(default_factory=set)
    seo_title: str | None = None
    seo_description: str | None = None
    is_featured: bool = False
    allow_comments: bool = True
    version: int = 1
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def url(self) -> str:
        return f"/article/{self.slug}"

    # ── Authored fields ─────────────────────────────────────────────

    def rename(self, title: str) -> None:
        """Change the title and recompute the slug from it."""
        title = title.strip()
        slug = slugify(title)
        if not slug:
            raise DomainValidationError(
                "title", "Title must contain at least one letter or digit"
            )
        self.title = title
        self.slug = slug

    def set_content(
        self,
        content_blocks: list[ContentBlock] | None = ...,  # type: ignore[assignment]
        editor_data: dict[str, Any] | None = ...,  # type: ignore[assignment]
    ) -> None:
        """Replace either content representation and recompute excerpt + read time.

        An omitted argument (``...``) keeps the current value; ``None``
        clears it.
        """
        if content_blocks is not ...:
            self.content_blocks = sorted(content_blocks or [], key=lambda b: b.order)
        if editor_data is not ...:
            self.editor_data = editor_data
        derived = derive_fields(self.content_blocks, self.editor_data)
        self.excerpt = derived.excerpt
        self.read_time = derived.read_time

    def refresh_derived_fields(self) -> bool:
        """Recompute excerpt and read time from stored content. Returns True if either changed."""
        before = (self.excerpt, self.read_time)
        self.set_content()
        return before != (self.excerpt, self.read_time)

    def set_tags(self, tags: list[str] | None) -> None:
        self.tags = normalize_tags(tags)

    def set_category(self, category: str | None) -> None:
        self.category = validate_category(category or None)

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

    # ── Lifecycle ───────────────────────────────────────────────────

    def transition_to(self, status: ArticleStatus, now: datetime | None = None) -> None:
        apply_transition(self, status, now)

    def publish(self, now: datetime | None = None) -> None:
        self.transition_to(ArticleStatus.PUBLISHED, now)

    def unpublish(self) -> None:
        self.transition_to(ArticleStatus.DRAFT)

    def archive(self) -> None:
        self.transition_to(ArticleStatus.ARCHIVED)

    # ── Engagement ──────────────────────────────────────────────────

    def register_view(self) -> None:
        self.views += 1

    def register_like(self) -> None:
        """Anonymous like — bumps the counter without membership tracking."""
        self.likes += 1

    def toggle_like(self, user_id: str) -> bool:
        """Flip ``user_id``'s like. Returns the new liked state."""
        if user_id in self.liked_by:
            self.liked_by.discard(user_id)
            self.likes = max(0, self.likes - 1)
            return False
        self.liked_by.add(user_id)
        self.likes += 1
        return True
