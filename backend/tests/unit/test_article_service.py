"""Unit tests for the ArticleService."""

import pytest

from blog_cms.application.schemas import ArticleCreate, ArticleUpdate, ContentBlockSchema
from blog_cms.application.services import ArticleService
from blog_cms.domain.entities import ArticleStatus, ContentBlock, LegacyBlockType
from blog_cms.domain.exceptions import (
    ConcurrentModificationError,
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidStateTransitionError,
)
from fakes import FakeArticleRepository, make_article

OWNER = "author-1"


@pytest.fixture
def service(article_repo: FakeArticleRepository) -> ArticleService:
    return ArticleService(article_repo)


def _text(content: str, order: int = 0) -> ContentBlockSchema:
    return ContentBlockSchema(type="text", content=content, order=order)


@pytest.mark.asyncio
async def test_create_article_derives_fields(service: ArticleService):
    body = " ".join(["word"] * 250)
    article = await service.create_article(
        OWNER,
        ArticleCreate(
            title="Hello, World!",
            category="Development",
            tags=[" Python", "python", "API "],
            content_blocks=[_text(body)],
        ),
    )
    assert article.slug == "hello-world"
    assert article.status == ArticleStatus.DRAFT
    assert article.published_at is None
    assert article.read_time == 2
    assert len(article.excerpt) == 203
    assert article.tags == ["python", "api"]
    assert article.views == 0 and article.likes == 0


@pytest.mark.asyncio
async def test_create_published_requires_category(service: ArticleService):
    with pytest.raises(InvalidStateTransitionError):
        await service.create_article(OWNER, ArticleCreate(title="No category", status="published"))


@pytest.mark.asyncio
async def test_create_published_sets_published_at(service: ArticleService):
    article = await service.create_article(
        OWNER, ArticleCreate(title="Live", category="AI", status="published")
    )
    assert article.status == ArticleStatus.PUBLISHED
    assert article.published_at is not None


@pytest.mark.asyncio
async def test_duplicate_slug_conflicts(service: ArticleService):
    await service.create_article(OWNER, ArticleCreate(title="Hello, World!"))
    with pytest.raises(DuplicateEntityError):
        await service.create_article(OWNER, ArticleCreate(title="hello world"))


@pytest.mark.asyncio
async def test_get_article_of_other_owner_is_not_found(service: ArticleService):
    created = await service.create_article(OWNER, ArticleCreate(title="Mine"))
    with pytest.raises(EntityNotFoundError):
        await service.get_article(created.id, "someone-else")
    with pytest.raises(EntityNotFoundError):
        await service.get_article("missing", OWNER)


@pytest.mark.asyncio
async def test_update_title_recomputes_slug(service: ArticleService):
    created = await service.create_article(OWNER, ArticleCreate(title="Old Title"))
    updated = await service.update_article(created.id, OWNER, ArticleUpdate(title="New Title"))
    assert updated.slug == "new-title"
    assert updated.version == created.version + 1


@pytest.mark.asyncio
async def test_update_editor_data_recomputes_excerpt(service: ArticleService):
    created = await service.create_article(
        OWNER, ArticleCreate(title="Content", content_blocks=[_text("legacy body")])
    )
    updated = await service.update_article(
        created.id,
        OWNER,
        ArticleUpdate(editor_data={"blocks": [{"type": "paragraph", "data": {"text": "one two three"}}]}),
    )
    # Legacy text still comes first for the excerpt; read time covers both
    assert updated.excerpt == "legacy body..."
    assert updated.read_time == 1
    assert updated.content_blocks[0].content == "legacy body"


@pytest.mark.asyncio
async def test_update_never_touches_counters(
    service: ArticleService, article_repo: FakeArticleRepository
):
    article = article_repo.seed(make_article(publish=True))
    await article_repo.increment_views(article.id)
    await article_repo.increment_likes(article.id)

    await service.update_article(article.id, OWNER, ArticleUpdate(title="Renamed"))
    stored = article_repo.stored(article.id)
    assert stored.views == 1
    assert stored.likes == 1


@pytest.mark.asyncio
async def test_clearing_category_of_published_article_fails(
    service: ArticleService, article_repo: FakeArticleRepository
):
    article = article_repo.seed(make_article(publish=True))
    with pytest.raises(DomainValidationError):
        await service.update_article(article.id, OWNER, ArticleUpdate(category=None))
    assert article_repo.stored(article.id).category == "Development"


@pytest.mark.asyncio
async def test_stale_version_is_rejected(
    service: ArticleService, article_repo: FakeArticleRepository
):
    article = article_repo.seed(make_article())
    stale = await article_repo.get_by_id(article.id)
    await service.update_article(article.id, OWNER, ArticleUpdate(title="First writer"))

    stale.rename("Second writer")
    with pytest.raises(ConcurrentModificationError):
        await article_repo.update(stale)
    assert article_repo.stored(article.id).title == "First writer"


@pytest.mark.asyncio
async def test_publish_without_category_keeps_draft(
    service: ArticleService, article_repo: FakeArticleRepository
):
    article = article_repo.seed(make_article(category=None))
    with pytest.raises(InvalidStateTransitionError):
        await service.publish_article(article.id, OWNER)
    stored = article_repo.stored(article.id)
    assert stored.status == ArticleStatus.DRAFT
    assert stored.published_at is None


@pytest.mark.asyncio
async def test_publish_is_idempotent(service: ArticleService):
    created = await service.create_article(OWNER, ArticleCreate(title="Twice", category="UX"))
    first = await service.publish_article(created.id, OWNER)
    second = await service.publish_article(created.id, OWNER)
    assert second.status == ArticleStatus.PUBLISHED
    assert second.published_at == first.published_at


@pytest.mark.asyncio
async def test_unpublish_then_archive(service: ArticleService):
    created = await service.create_article(
        OWNER, ArticleCreate(title="Cycle", category="UI", status="published")
    )
    draft = await service.unpublish_article(created.id, OWNER)
    assert draft.status == ArticleStatus.DRAFT
    assert draft.published_at is None

    archived = await service.archive_article(created.id, OWNER)
    assert archived.status == ArticleStatus.ARCHIVED
    with pytest.raises(InvalidStateTransitionError):
        await service.publish_article(created.id, OWNER)


@pytest.mark.asyncio
async def test_delete_article(service: ArticleService):
    created = await service.create_article(OWNER, ArticleCreate(title="Delete Me"))
    assert await service.delete_article(created.id, OWNER) is True
    with pytest.raises(EntityNotFoundError):
        await service.get_article(created.id, OWNER)


@pytest.mark.asyncio
async def test_list_articles_is_scoped_to_owner(service: ArticleService):
    await service.create_article(OWNER, ArticleCreate(title="A1", tags=["Python"]))
    await service.create_article(OWNER, ArticleCreate(title="A2", category="AI", status="published"))
    await service.create_article("other", ArticleCreate(title="B1"))

    page = await service.list_articles(OWNER)
    assert page.total == 2
    assert {a.title for a in page.items} == {"A1", "A2"}

    drafts = await service.list_articles(OWNER, status=ArticleStatus.DRAFT)
    assert [a.title for a in drafts.items] == ["A1"]

    tagged = await service.list_articles(OWNER, tag="PYTHON")
    assert [a.title for a in tagged.items] == ["A1"]


@pytest.mark.asyncio
async def test_list_articles_rejects_unknown_sort(service: ArticleService):
    with pytest.raises(DomainValidationError):
        await service.list_articles(OWNER, sort="-secret")


@pytest.mark.asyncio
async def test_get_stats(service: ArticleService, article_repo: FakeArticleRepository):
    published = article_repo.seed(make_article("One", publish=True))
    article_repo.seed(make_article("Two"))
    await article_repo.increment_views(published.id)
    await article_repo.increment_views(published.id)

    stats = await service.get_stats(OWNER)
    assert stats.total_articles == 2
    assert stats.total_views == 2
    by_status = {s.status: s.count for s in stats.by_status}
    assert by_status == {ArticleStatus.PUBLISHED: 1, ArticleStatus.DRAFT: 1}


def test_list_categories():
    result = ArticleService.list_categories()
    assert result["version"] == 1
    assert "Development" in result["categories"]


@pytest.mark.asyncio
async def test_regenerate_derived_fields_is_idempotent(
    service: ArticleService, article_repo: FakeArticleRepository
):
    stale = make_article("Stale")
    stale.set_content(content_blocks=[])
    stale.content_blocks = [ContentBlock(type=LegacyBlockType.TEXT, content="fresh text")]
    article_repo.seed(stale)
    article_repo.seed(make_article("Fine"))

    assert await service.regenerate_derived_fields(batch_size=1) == 1
    assert article_repo.stored(stale.id).excerpt == "fresh text..."
    assert await service.regenerate_derived_fields() == 0