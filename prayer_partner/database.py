from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from prayer_partner.config import settings


def normalize_database_url(url: str) -> str:
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def build_engine(url: str) -> AsyncEngine:
    url = normalize_database_url(url)

    engine_kwargs: dict = {"echo": False}
    if _is_sqlite(url):
        engine_kwargs.update(poolclass=NullPool)
    else:
        engine_kwargs.update(pool_size=5, max_overflow=10, pool_pre_ping=True)

    new_engine = create_async_engine(url, **engine_kwargs)

    if _is_sqlite(url):
        # Cascading deletes depend on this.
        @event.listens_for(new_engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.database_url)
async_session = build_sessionmaker(engine)


class Base(DeclarativeBase):
    pass


async def create_tables(bind: AsyncEngine | None = None):
    async with (bind or engine).begin() as conn:
        from prayer_partner.models import user, category, prayer_request  # noqa: F401
        await conn.run_sync(Base.metadata.create_all)
