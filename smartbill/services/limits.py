"""Rate limiting and idempotency helpers."""
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import redis.asyncio as redis
from fastapi import HTTPException, status

from smartbill.core.config import settings


logger = logging.getLogger(__name__)

_redis_client: redis.Redis | None = None


async def _get_client() -> redis.Redis:
    """Return a cached Redis client instance."""

    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            str(settings.REDIS_URI), decode_responses=True
        )
    return _redis_client


async def check_rate_limit(account: str) -> None:
    """Enforce a simple fixed-window rate limit per account."""

    if not settings.limits.enabled:
        return
    client = await _get_client()
    minute_window = int(time.time() // 60)
    key = f"rl:{account}:{minute_window}"
    current = await client.incr(key)
    if current == 1:
        await client.expire(key, 60)
    if current > settings.limits.rate_limit_rpm:
        logger.warning(f"Rate limit exceeded for {account}")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Rate limit exceeded",
        )


async def ensure_idempotent(account: str, key: Optional[str]) -> None:
    """Reject duplicate POST requests sharing the same idempotency key."""

    if not key or not settings.limits.enabled:
        return
    client = await _get_client()
    redis_key = f"idemp:{account}:{key}"
    was_set = await client.set(
        redis_key, "1", ex=settings.limits.idempotency_ttl_seconds, nx=True
    )
    if not was_set:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Duplicate request (idempotency)",
        )


async def release_idempotency_key(account: str, key: Optional[str]) -> None:
    """Forget a reserved key so the same request can be retried."""

    if not key or not settings.limits.enabled:
        return
    client = await _get_client()
    await client.delete(f"idemp:{account}:{key}")


@asynccontextmanager
async def idempotent(account: str, key: Optional[str]) -> AsyncIterator[None]:
    """
    Reserve ``key`` for the duration of an operation.

    The reservation is kept only when the operation succeeds; a failed
    attempt leaves the key free for a retry.
    """

    await ensure_idempotent(account, key)
    try:
        yield
    except Exception:
        await release_idempotency_key(account, key)
        raise


async def close_client() -> None:
    global _redis_client
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
