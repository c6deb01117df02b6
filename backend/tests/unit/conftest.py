import pytest

from fakes import FakeArticleRepository, FakeUserRepository


@pytest.fixture
def article_repo() -> FakeArticleRepository:
    return FakeArticleRepository()


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository()
