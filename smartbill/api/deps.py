"""Shared FastAPI dependencies."""
from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from smartbill.db.session import get_db
from smartbill.services.engine import BillingEngine


async def get_db_session(
    session: AsyncSession = Depends(get_db),
) -> AsyncGenerator[AsyncSession, None]:
    yield session


def get_engine(request: Request) -> BillingEngine:
    return request.app.state.billing_engine
