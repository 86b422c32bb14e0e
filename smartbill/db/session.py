"""
Async engine and session management
"""
from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
)

from smartbill.core.config import settings


@lru_cache
def get_engine() -> AsyncEngine:
    """Return the process-wide engine, created on first use."""
    return create_async_engine(
        settings.DATABASE_URI,
        echo=settings.DATABASE_ECHO,
        pool_pre_ping=True,
    )


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(get_engine(), expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session for one request; anything left uncommitted is rolled back.
    """
    async with get_session_factory()() as session:
        try:
            yield session
        finally:
            await session.rollback()


async def dispose_engine() -> None:
    if get_engine.cache_info().currsize:
        await get_engine().dispose()
