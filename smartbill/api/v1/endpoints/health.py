"""Liveness endpoint."""
from fastapi import APIRouter, Depends

from smartbill.api.deps import get_engine
from smartbill.services.engine import BillingEngine


router = APIRouter(tags=["health"])


@router.get("/health")
async def health(engine: BillingEngine = Depends(get_engine)):
    return {"status": "ok", "tick": engine.clock.now()}
