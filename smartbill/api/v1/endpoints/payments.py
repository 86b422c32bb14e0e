"""Endpoints for checking and collecting recurring payments."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from smartbill.api.deps import get_db_session, get_engine
from smartbill.auth.jwt import require_auth
from smartbill.schemas.enrollment import PaymentDue
from smartbill.services.engine import BillingEngine
from smartbill.services.limits import check_rate_limit, idempotent


router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("/{account}/{plan_id}/due", response_model=PaymentDue)
async def is_payment_due(
    account: str,
    plan_id: int,
    db: AsyncSession = Depends(get_db_session),
    engine: BillingEngine = Depends(get_engine),
):
    due = await engine.is_payment_due(db, account, plan_id)
    return {"account": account, "plan_id": plan_id, "due": due}


@router.post("/{account}/{plan_id}")
async def process_payment(
    account: str,
    plan_id: int,
    auth=Depends(require_auth),
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key"),
    db: AsyncSession = Depends(get_db_session),
    engine: BillingEngine = Depends(get_engine),
):
    caller = auth["account"]
    await check_rate_limit(caller)
    async with idempotent(caller, idempotency_key):
        enrollment = await engine.process_payment(db, caller, account, plan_id)
    return {
        "status": "ok",
        "payment_count": enrollment.payment_count,
        "next_payment_tick": enrollment.next_payment_tick,
    }
