import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.api_v1.api import api_router
from api.api_v1.deps import AppContext
from bg_tasks.era_poller import create_era_poller
from core.config import Settings, get_settings
from core.db import create_chain_stores
from core.errors import (
    Duplicate,
    NotFound,
    ReportDateTooEarly,
    StakingInsightError,
    StoreUnavailable,
    SubprocessFailed,
    WriteFailed,
)
from log import setup_logging_to_console, setup_logging_to_file

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    NotFound: 404,
    Duplicate: 409,
    ReportDateTooEarly: 400,
    StoreUnavailable: 503,
    WriteFailed: 502,
    SubprocessFailed: 502,
}


def status_code_for(error: StakingInsightError) -> int:
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return 500


async def handle_staking_insight_error(request: Request, exc: StakingInsightError):
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@asynccontextmanager
async def lifespan(app: FastAPI):
    ctx: AppContext = app.state.context
    for chain, store in ctx.stores.items():
        try:
            store.connect()
        except StoreUnavailable as e:
            logger.error("Store of %s unavailable: %s", chain, e)

    poller = create_era_poller(ctx.settings, ctx.stores, ctx.era_cache)
    poller.start(ctx.settings.ERA_POLL_CHAINS)
    try:
        yield
    finally:
        await poller.stop()
        for store in ctx.stores.values():
            store.dispose()


def create_app(
    settings: Optional[Settings] = None, context: Optional[AppContext] = None
) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        lifespan=lifespan,
    )
    app.state.context = context or AppContext(settings, create_chain_stores(settings))

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(StakingInsightError, handle_staking_insight_error)
    app.include_router(api_router, prefix=settings.API_V1_STR)
    return app


def create_default_app() -> FastAPI:
    settings = get_settings()
    setup_logging_to_console()
    setup_logging_to_file(app="api", level=logging.INFO, logger=logger, settings=settings)
    return create_app(settings)
