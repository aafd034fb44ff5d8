"""ASGI application for the wellness assessment service.

Run with ``uvicorn wellness.main:app``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wellness import __version__
from wellness.api.v1.router import api_router
from wellness.core.config import settings
from wellness.core.logging import setup_logging
from wellness.db.init_db import create_tables
from wellness.rules.engine import mental_ruleset, sleep_ruleset
from wellness.rules.models import RulesetError

SERVICE_NAME = "Wellness Assessments API"

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load the phenotype rulesets up front so a broken table fails startup."""
    logger.info(f"Starting {SERVICE_NAME} (env={settings.env})")

    for ruleset in (sleep_ruleset(), mental_ruleset()):
        logger.info(f"Phenotype ruleset ready: {ruleset.id} v{ruleset.version}")

    if settings.init_db_on_startup and settings.is_dev:
        logger.info("Creating database tables from models")
        await create_tables()

    yield

    logger.info(f"Stopping {SERVICE_NAME}")


docs_enabled = settings.is_dev

app = FastAPI(
    title=SERVICE_NAME,
    description="Sleep and mental performance self-assessments: scores, severity bands and phenotypes",
    version=__version__,
    docs_url="/docs" if docs_enabled else None,
    redoc_url="/redoc" if docs_enabled else None,
    openapi_url="/openapi.json" if docs_enabled else None,
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


@app.exception_handler(RulesetError)
async def ruleset_error_handler(request: Request, exc: RulesetError) -> JSONResponse:
    """A broken phenotype table is a deployment fault, never the caller's."""
    logger.error(f"Phenotype ruleset error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Phenotype ruleset unavailable"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")

    # Internal details stay out of production responses
    detail = "Internal server error" if settings.is_prod else str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail},
    )


app.include_router(api_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def root() -> dict:
    """Service name, version and where the docs live."""
    return {
        "service": SERVICE_NAME,
        "version": __version__,
        "docs": "/docs" if docs_enabled else "Disabled outside dev",
    }
