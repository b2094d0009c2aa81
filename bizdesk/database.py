"""
BizDesk — Engine and session factory behind the SQL document store.

SQLite (aiosqlite) is the zero-setup default; any other URL, typically
``postgresql+asyncpg://...``, gets a pooled engine sized from settings.
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from bizdesk.config import settings


def engine_options(url: str) -> dict:
    """Keyword arguments for ``create_async_engine`` on ``url``."""
    options = {"echo": settings.database_echo}
    if make_url(url).get_backend_name() == "sqlite":
        return options
    return {
        **options,
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        # Drop connections that went stale while idle
        "pool_pre_ping": True,
        "pool_recycle": 300,
    }


engine = create_async_engine(settings.database_url, **engine_options(settings.database_url))
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def init_db() -> None:
    """Create the ``documents`` table if it does not exist yet."""
    import bizdesk.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    await engine.dispose()
