"""Endpoints for enrolling in and leaving plans."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from smartbill.api.deps import get_db_session, get_engine
from smartbill.auth.jwt import require_auth
from smartbill.schemas.enrollment import EnrollmentRead, SubscriptionCount
from smartbill.services.engine import BillingEngine
from smartbill.services.limits import check_rate_limit, idempotent


router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.post("/{plan_id}")
async def subscribe(
    plan_id: int,
    auth=Depends(require_auth),
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key"),
    db: AsyncSession = Depends(get_db_session),
    engine: BillingEngine = Depends(get_engine),
):
    account = auth["account"]
    await check_rate_limit(account)
    async with idempotent(account, idempotency_key):
        enrollment = await engine.subscribe(db, account, plan_id)
    return {
        "status": "ok",
        "plan_id": plan_id,
        "start_tick": enrollment.start_tick,
        "next_payment_tick": enrollment.next_payment_tick,
    }


@router.delete("/{plan_id}")
async def cancel(
    plan_id: int,
    auth=Depends(require_auth),
    db: AsyncSession = Depends(get_db_session),
    engine: BillingEngine = Depends(get_engine),
):
    account = auth["account"]
    await check_rate_limit(account)

    await engine.cancel(db, account, plan_id)
    return {"status": "ok", "plan_id": plan_id}


@router.get("/{account}/count", response_model=SubscriptionCount)
async def get_subscription_count(
    account: str,
    db: AsyncSession = Depends(get_db_session),
    engine: BillingEngine = Depends(get_engine),
):
    return {"count": await engine.get_subscription_count(db, account)}


@router.get("/{account}/{plan_id}", response_model=EnrollmentRead | None)
async def get_user_subscription(
    account: str,
    plan_id: int,
    db: AsyncSession = Depends(get_db_session),
    engine: BillingEngine = Depends(get_engine),
):
    return await engine.get_user_subscription(db, account, plan_id)
