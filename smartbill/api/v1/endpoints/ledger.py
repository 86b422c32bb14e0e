"""Endpoints for funding accounts held in the database ledger."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from smartbill.api.deps import get_db_session, get_engine
from smartbill.auth.jwt import require_auth
from smartbill.core.config import settings
from smartbill.schemas.ledger import Balance, DepositCreate
from smartbill.services.engine import BillingEngine
from smartbill.services.limits import check_rate_limit


router = APIRouter(prefix="/ledger", tags=["ledger"])


@router.post("/{account}/deposit", response_model=Balance)
async def deposit(
    account: str,
    body: DepositCreate,
    auth=Depends(require_auth),
    db: AsyncSession = Depends(get_db_session),
    engine: BillingEngine = Depends(get_engine),
):
    operator = auth["account"]
    if operator not in settings.LEDGER_OPERATORS:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only ledger operators may deposit funds",
        )
    await check_rate_limit(operator)

    balance = await engine.deposit(db, account, body.amount)
    return {"account": account, "balance": balance}


@router.get("/{account}/balance", response_model=Balance)
async def get_balance(
    account: str,
    db: AsyncSession = Depends(get_db_session),
    engine: BillingEngine = Depends(get_engine),
):
    return {"account": account, "balance": await engine.balance(db, account)}
