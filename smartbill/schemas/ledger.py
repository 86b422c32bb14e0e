"""Pydantic schemas for ledger balances"""
from pydantic import BaseModel, Field

from smartbill.schemas.plan import BIGINT_MAX


class DepositCreate(BaseModel):
    """Schema for crediting an account."""

    amount: int = Field(..., gt=0, le=BIGINT_MAX, description="Native units to credit")


class Balance(BaseModel):
    account: str
    balance: int
