"""FastAPI application factory."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from smartbill.api.v1.router import api_router
from smartbill.core.config import settings
from smartbill.core.exceptions import BillingError
from smartbill.core.logging import setup_logging
from smartbill.db.session import dispose_engine
from smartbill.services.clock import Clock, build_clock
from smartbill.services.engine import BillingEngine
from smartbill.services.limits import close_client


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(
        f"{settings.PROJECT_NAME} starting in {settings.ENV} "
        f"(clock={settings.clock.backend}, tick={app.state.billing_engine.clock.now()})"
    )
    yield
    await close_client()
    await dispose_engine()
    logger.info(f"{settings.PROJECT_NAME} stopped")


async def billing_error_handler(request: Request, exc: BillingError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=exc.headers,
    )


def create_application(clock: Clock | None = None) -> FastAPI:
    """Build the app with its billing engine bound to ``clock``."""

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )
    app.state.billing_engine = BillingEngine(clock or build_clock(settings.clock))
    app.add_exception_handler(BillingError, billing_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_application()
