"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from talkbuddy.config import configure_logging, get_settings
from talkbuddy.core import container
from talkbuddy.database import dispose_engine, initialize_database
from talkbuddy.domain.common.exceptions import DomainError
from talkbuddy.exceptions import TalkbuddyError
from talkbuddy.infrastructure.common.routers import health
from talkbuddy.infrastructure.learning.routers import chat
from talkbuddy.infrastructure.progress.routers import progress
from talkbuddy.infrastructure.progress.services.progress_update_dispatcher import (
    ProgressUpdateDispatcher,
)

settings = get_settings()
configure_logging(settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Open the database and inference client on startup, release them on shutdown."""
    initialize_database(settings)
    inference_service = container.inference_service()
    logger.info("application_started", environment=settings.ENVIRONMENT)
    try:
        yield
    finally:
        await ProgressUpdateDispatcher.drain()
        await inference_service.close()
        container.inference_service.reset()
        dispose_engine()
        logger.info("application_stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TalkbuddyError)
async def talkbuddy_error_handler(_request: Request, exc: TalkbuddyError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(_request: Request, exc: DomainError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


app.include_router(health.router)
app.include_router(chat.router, prefix=settings.API_V1_PREFIX)
app.include_router(progress.router, prefix=settings.API_V1_PREFIX)
