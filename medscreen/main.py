"""FastAPI application entry point.

Run with: uvicorn medscreen.main:app
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from medscreen.api.v1.router import api_router
from medscreen.core.config import settings
from medscreen.core.logging import setup_logging
from medscreen.db.init_db import init_db
from medscreen.db.session import AsyncSessionLocal

setup_logging()
logger = logging.getLogger(__name__)

SERVICE_NAME = "MedScreen API"
VERSION = "0.1.0"
API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(f"Starting {SERVICE_NAME} {VERSION} (env={settings.env})")

    if settings.init_db_on_startup and settings.is_dev:
        async with AsyncSessionLocal() as session:
            await init_db(session)

    yield

    logger.info(f"Stopping {SERVICE_NAME}")


def _dev_only(url: str) -> str | None:
    return url if settings.is_dev else None


app = FastAPI(
    title=SERVICE_NAME,
    description=(
        "Doctor-authored screening questionnaires with server-side scoring, "
        "a respondent portal and a daily caloric requirement calculator"
    ),
    version=VERSION,
    docs_url=_dev_only("/docs"),
    redoc_url=_dev_only("/redoc"),
    openapi_url=_dev_only("/openapi.json"),
    lifespan=lifespan,
)

if settings.is_dev:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log anything the endpoints did not translate and answer 500."""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")

    detail = "Internal server error" if settings.is_prod else str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail},
    )


app.include_router(api_router, prefix=API_PREFIX)


@app.get("/", include_in_schema=False)
async def root() -> dict:
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "api": API_PREFIX,
        "docs": app.docs_url or "Disabled outside dev",
    }
