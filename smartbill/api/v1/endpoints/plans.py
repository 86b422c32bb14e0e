"""Endpoints for publishing and managing subscription plans."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Header, status
from sqlalchemy.ext.asyncio import AsyncSession

from smartbill.api.deps import get_db_session, get_engine
from smartbill.auth.jwt import require_auth
from smartbill.schemas.plan import PlanCount, PlanCreate, PlanCreated, PlanRead, PlanUpdate
from smartbill.services.engine import BillingEngine
from smartbill.services.limits import check_rate_limit, idempotent


router = APIRouter(prefix="/plans", tags=["plans"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PlanCreated)
async def create_plan(
    body: PlanCreate,
    auth=Depends(require_auth),
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key"),
    db: AsyncSession = Depends(get_db_session),
    engine: BillingEngine = Depends(get_engine),
):
    account = auth["account"]
    await check_rate_limit(account)
    async with idempotent(account, idempotency_key):
        plan_id = await engine.create_plan(
            db, account, body.name, body.description, body.price, body.period
        )
    return {"plan_id": plan_id}


@router.get("/count", response_model=PlanCount)
async def get_plan_count(
    db: AsyncSession = Depends(get_db_session),
    engine: BillingEngine = Depends(get_engine),
):
    return {"count": await engine.get_plan_count(db)}


@router.get("/{plan_id}", response_model=PlanRead | None)
async def get_plan(
    plan_id: int,
    db: AsyncSession = Depends(get_db_session),
    engine: BillingEngine = Depends(get_engine),
):
    return await engine.get_plan(db, plan_id)


@router.put("/{plan_id}")
async def update_plan(
    plan_id: int,
    body: PlanUpdate,
    auth=Depends(require_auth),
    db: AsyncSession = Depends(get_db_session),
    engine: BillingEngine = Depends(get_engine),
):
    account = auth["account"]
    await check_rate_limit(account)

    await engine.update_plan(
        db,
        account,
        plan_id,
        body.name,
        body.description,
        body.price,
        body.period,
        body.active,
    )
    return {"status": "ok"}
