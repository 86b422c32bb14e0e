"""Aggregate router for API v1."""
from fastapi import APIRouter

from smartbill.api.v1.endpoints import health, ledger, payments, plans, subscriptions


api_router = APIRouter(prefix="/v1")
api_router.include_router(plans.router)
api_router.include_router(subscriptions.router)
api_router.include_router(payments.router)
api_router.include_router(ledger.router)
api_router.include_router(health.router)
