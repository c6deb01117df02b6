"""Async engine, session factory and the per-request session dependency."""

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from blog_cms.config import get_settings

# Plain driver URLs in .env are mapped to their async drivers
_ASYNC_DRIVERS = {
    "sqlite:///": "sqlite+aiosqlite:///",
    "postgresql://": "postgresql+asyncpg://",
    "postgres://": "postgresql+asyncpg://",
}


def to_async_url(url: str) -> str:
    for prefix, replacement in _ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            return replacement + url[len(prefix):]
    return url


def _configure_sqlite_connection(dbapi_connection, _connection_record) -> None:
    # The driver must not emit its own BEGIN; _begin_immediate does it
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _begin_immediate(conn) -> None:
    # Take the write lock up front so concurrent writers queue instead of
    # failing with "database is locked" on lock upgrade
    conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine.

    SQLite connections get foreign-key enforcement and immediate transactions.
    """
    async_engine = create_async_engine(to_async_url(url), echo=echo)
    if async_engine.dialect.name == "sqlite":
        event.listen(async_engine.sync_engine, "connect", _configure_sqlite_connection)
        event.listen(async_engine.sync_engine, "begin", _begin_immediate)
    return async_engine


_settings = get_settings()

engine = build_engine(_settings.database_url, echo=_settings.sql_echo)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency — one session (and one transaction) per request.

    Everything a request writes is committed together or rolled back.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
