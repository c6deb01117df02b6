"""Fixtures wiring the real SQLAlchemy repositories to a throwaway SQLite database."""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blog_cms.domain.entities import User
from blog_cms.infrastructure.database import Base, build_engine
from blog_cms.infrastructure.database.repositories import SQLAlchemyUserRepository
from blog_cms.infrastructure.database.session import get_db_session
from blog_cms.main import app

AUTHOR_ID = "author-1"
READER_ID = "reader-1"
OTHER_READER_ID = "reader-2"


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        users = SQLAlchemyUserRepository(session)
        await users.create(User(id=AUTHOR_ID, name="Author"))
        await users.create(User(id=READER_ID, name="Reader"))
        await users.create(User(id=OTHER_READER_ID, name="Other reader"))
        await users.create(User(id="inactive", name="Gone", is_active=False))
        await session.commit()

    yield factory
    await engine.dispose()


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncIterator[AsyncClient]:
    async def override_db_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def author_headers() -> dict[str, str]:
    return {"X-User-Id": AUTHOR_ID}


@pytest.fixture
def reader_headers() -> dict[str, str]:
    return {"X-User-Id": READER_ID}
