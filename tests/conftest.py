"""
Pytest configuration for the application
"""
import os
from typing import AsyncGenerator, Dict

import httpx
import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
)

from smartbill.core.config import settings
from smartbill.db.base import Base
from smartbill.db.session import get_db
from smartbill.main import create_application
from smartbill.services import limits as limits_service
from smartbill.services.clock import ManualClock
from smartbill.services.engine import BillingEngine
from smartbill.services.ledger import DatabaseLedger
import smartbill.db.models  # noqa: F401


# Set test environment and override runtime settings to avoid external deps
os.environ["ENV"] = "test"
settings.ENV = "test"
settings.clock.backend = "manual"

GENESIS_TICK = 100


class FakeRedis:
    """Minimal async Redis stub for rate limiting and idempotency."""

    def __init__(self) -> None:
        self.store: Dict[str, int | str] = {}

    async def incr(self, key: str) -> int:
        current = int(self.store.get(key, 0)) + 1
        self.store[key] = current
        return current

    async def expire(self, key: str, seconds: int) -> None:
        self.store.setdefault(f"{key}:ttl", seconds)

    async def set(self, key: str, value: str, ex: int | None = None, nx: bool = False) -> bool:
        if nx and key in self.store:
            return False
        self.store[key] = value
        if ex is not None:
            self.store[f"{key}:ttl"] = ex
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
            self.store.pop(f"{key}:ttl", None)
        return removed

    async def aclose(self) -> None:
        return None


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch) -> FakeRedis:
    """Patch the limits module to use an in-memory Redis stub."""

    fake = FakeRedis()
    monkeypatch.setattr(limits_service, "_redis_client", fake, raising=False)
    yield fake
    monkeypatch.setattr(limits_service, "_redis_client", None, raising=False)


@pytest_asyncio.fixture
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """
    Create a throwaway SQLite database with every table.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'smartbill.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as db_session:
        yield db_session


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(GENESIS_TICK)


@pytest.fixture
def billing(clock) -> BillingEngine:
    return BillingEngine(clock)


@pytest.fixture
def fund(session_factory):
    """Return a helper that credits native currency to an account."""

    async def _fund(account: str, amount: int) -> int:
        async with session_factory() as db_session:
            balance = await DatabaseLedger(db_session).deposit(account, amount)
            await db_session.commit()
            return balance

    return _fund


@pytest.fixture
def balance_of(session_factory):
    async def _balance_of(account: str) -> int:
        async with session_factory() as db_session:
            return await DatabaseLedger(db_session).balance(account)

    return _balance_of


@pytest_asyncio.fixture
async def test_app(clock, session_factory) -> AsyncGenerator[FastAPI, None]:
    """
    Create a FastAPI test application driven by the manual clock.
    """
    app = create_application(clock=clock)

    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as db_session:
            try:
                yield db_session
            finally:
                await db_session.rollback()

    app.dependency_overrides[get_db] = _override_get_db
    async with LifespanManager(app):
        yield app


@pytest_asyncio.fixture
async def client(test_app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    Create an async HTTP client for testing.
    """
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://test",
    ) as async_client:
        yield async_client
