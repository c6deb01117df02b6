"""Unit tests for likes, saved articles and interaction status."""

import pytest

from blog_cms.application.services import EngagementService
from blog_cms.domain.entities import User
from blog_cms.domain.exceptions import DomainValidationError, EntityNotFoundError
from fakes import FakeArticleRepository, FakeUserRepository, make_article


@pytest.fixture
def service(
    article_repo: FakeArticleRepository, user_repo: FakeUserRepository
) -> EngagementService:
    return EngagementService(article_repo, user_repo)


async def _user(user_repo: FakeUserRepository, user_id: str = "reader-1") -> User:
    await user_repo.create(User(id=user_id, name=user_id))
    return await user_repo.get_by_id(user_id)


@pytest.mark.asyncio
async def test_toggle_like_twice_restores_state(
    service: EngagementService, article_repo: FakeArticleRepository, user_repo: FakeUserRepository
):
    article = article_repo.seed(make_article(publish=True))
    user = await _user(user_repo)

    liked = await service.toggle_like(article.id, user)
    assert liked.liked is True
    assert liked.likes == 1

    unliked = await service.toggle_like(article.id, user)
    assert unliked.liked is False
    assert unliked.likes == 0
    assert article_repo.stored(article.id).liked_by == set()


@pytest.mark.asyncio
async def test_two_users_like(
    service: EngagementService, article_repo: FakeArticleRepository, user_repo: FakeUserRepository
):
    article = article_repo.seed(make_article(publish=True))
    first = await _user(user_repo, "u1")
    second = await _user(user_repo, "u2")

    await service.toggle_like(article.id, first)
    result = await service.toggle_like(article.id, second)
    assert result.likes == 2
    stored = article_repo.stored(article.id)
    assert stored.liked_by == {"u1", "u2"}
    assert stored.likes == len(stored.liked_by)


@pytest.mark.asyncio
async def test_like_draft_is_not_found(
    service: EngagementService, article_repo: FakeArticleRepository, user_repo: FakeUserRepository
):
    article = article_repo.seed(make_article())
    user = await _user(user_repo)
    with pytest.raises(EntityNotFoundError):
        await service.toggle_like(article.id, user)
    with pytest.raises(EntityNotFoundError):
        await service.anonymous_like(article.id)


@pytest.mark.asyncio
async def test_anonymous_like_only_bumps_counter(
    service: EngagementService, article_repo: FakeArticleRepository
):
    article = article_repo.seed(make_article(publish=True))
    result = await service.anonymous_like(article.id)
    assert result.likes == 1
    assert result.liked is False
    stored = article_repo.stored(article.id)
    # likes may exceed the tracked likers after anonymous likes
    assert stored.likes == 1
    assert stored.liked_by == set()


@pytest.mark.asyncio
async def test_save_and_unsave(
    service: EngagementService, article_repo: FakeArticleRepository, user_repo: FakeUserRepository
):
    article = article_repo.seed(make_article(publish=True))
    user = await _user(user_repo)

    saved = await service.save_article(article.id, user)
    assert (saved.saved, saved.was_already_saved) == (True, False)

    again = await service.save_article(article.id, user)
    assert (again.saved, again.was_already_saved) == (True, True)
    assert (await user_repo.get_by_id(user.id)).saved_article_ids == [article.id]

    removed = await service.unsave_article(article.id, user)
    assert (removed.saved, removed.was_saved) == (False, True)
    assert (await user_repo.get_by_id(user.id)).saved_article_ids == []


@pytest.mark.asyncio
async def test_unsave_never_saved(service: EngagementService, user_repo: FakeUserRepository):
    user = await _user(user_repo)
    result = await service.unsave_article("does-not-exist", user)
    assert (result.saved, result.was_saved) == (False, False)


@pytest.mark.asyncio
async def test_save_unpublished_is_not_found(
    service: EngagementService, article_repo: FakeArticleRepository, user_repo: FakeUserRepository
):
    draft = article_repo.seed(make_article())
    user = await _user(user_repo)
    with pytest.raises(EntityNotFoundError):
        await service.save_article(draft.id, user)
    with pytest.raises(EntityNotFoundError):
        await service.save_article("missing", user)


@pytest.mark.asyncio
async def test_list_saved_articles_skips_unpublished(
    service: EngagementService, article_repo: FakeArticleRepository, user_repo: FakeUserRepository
):
    kept = article_repo.seed(make_article("Kept", publish=True))
    gone = article_repo.seed(make_article("Gone", publish=True))
    user = await _user(user_repo)
    await service.save_article(kept.id, user)
    await service.save_article(gone.id, user)

    stored = article_repo.stored(gone.id)
    stored.unpublish()

    page = await service.list_saved_articles(user)
    assert [a.title for a in page.items] == ["Kept"]
    assert page.total == 1


@pytest.mark.asyncio
async def test_list_saved_articles_empty(service: EngagementService, user_repo: FakeUserRepository):
    user = await _user(user_repo)
    page = await service.list_saved_articles(user, page=3, page_size=20)
    assert page.items == []
    assert page.total == 0
    assert page.page == 3


@pytest.mark.asyncio
async def test_interaction_status_omits_missing_ids(
    service: EngagementService, article_repo: FakeArticleRepository, user_repo: FakeUserRepository
):
    liked = article_repo.seed(make_article("Liked", publish=True))
    saved = article_repo.seed(make_article("Saved", publish=True))
    user = await _user(user_repo)
    await service.toggle_like(liked.id, user)
    await service.save_article(saved.id, user)

    statuses = await service.interaction_status([saved.id, "missing", liked.id, saved.id], user)
    assert [(s.article_id, s.liked, s.saved) for s in statuses] == [
        (saved.id, False, True),
        (liked.id, True, False),
    ]


@pytest.mark.asyncio
async def test_interaction_status_requires_ids(
    service: EngagementService, user_repo: FakeUserRepository
):
    user = await _user(user_repo)
    with pytest.raises(DomainValidationError):
        await service.interaction_status(["", " "], user)
