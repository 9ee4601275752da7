"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from votesmart_api import __version__
from votesmart_api.core.config import get_settings
from votesmart_api.core.database import dispose_engine, init_engine
from votesmart_api.core.logging import setup_logging

OPENAPI_TAGS = [
    {"name": "registry", "description": "Bootstrap and master account hand-over"},
    {"name": "campaigns", "description": "Electoral campaigns"},
    {"name": "parties", "description": "Political parties"},
    {"name": "regions", "description": "Regions grouping electoral districts"},
    {"name": "districts", "description": "Electoral districts"},
    {"name": "candidates", "description": "Candidates and their party"},
    {"name": "recommendations", "description": "Recommended candidate per campaign and district"},
    {"name": "health", "description": "Liveness and build information"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifecycle: init engine on startup, dispose on shutdown."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)
    init_engine(settings.database_url, schema=settings.database_schema)
    logger.info(f"VoteSmart registry API {__version__} starting ({settings.environment})")

    yield

    await dispose_engine()
    logger.info("VoteSmart registry API stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="VoteSmart Registry API",
        description="Curated candidate recommendations by campaign and electoral district",
        version=__version__,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc)},
        )

    from votesmart_api.api.router import create_router, setup_middleware

    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app
