"""Database session management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from dsa_flash.config import get_settings
from dsa_flash.db.base import Base

settings = get_settings()

engine_kwargs: dict[str, Any] = {"echo": settings.debug}
if not settings.database_is_sqlite:
    engine_kwargs.update(pool_pre_ping=True, pool_size=5, max_overflow=10)
if settings.database_requires_ssl:
    engine_kwargs["connect_args"] = {"ssl": "require"}

# Create async engine
engine = create_async_engine(settings.database_url, **engine_kwargs)

# Session factory
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def init_models() -> None:
    """Create any missing tables. There is no migration step."""
    from dsa_flash.db import models  # noqa: F401 - Import models to register them

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
