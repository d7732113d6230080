"""FastAPI application factory.

Main entry point for the SQL Study Guide Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sqlguide.core.catalog import load_catalog
from sqlguide.web.routes import (
    health_router,
    categories_router,
    topics_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    # Startup: build the catalog once, read-only afterwards
    catalog = load_catalog()
    logger.info(
        "api_startup",
        topics_found=len(catalog),
        categories={c.value: n for c, n in catalog.category_counts().items()},
    )
    yield
    # Shutdown (nothing to do)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="SQL Study Guide API",
        description="Read-only reference API over the SQL study guide topics",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware for web clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health_router)
    app.include_router(categories_router)
    app.include_router(topics_router)

    return app


# Default app instance for uvicorn
app = create_app()
