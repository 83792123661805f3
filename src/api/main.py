"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures the storage backend and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.http.remote import RemoteRegistrationRepository
from src.adapters.repository.memory import InMemoryRegistrationRepository
from src.adapters.repository.postgres import PostgresRegistrationRepository, ensure_schema
from src.api.v1 import router as v1_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Registration API v1 - Submit and list registrants",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Builds the configured storage backend on startup
    - Creates the schema when storing in PostgreSQL
    - Releases pools and HTTP clients on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")
    logger.info("Storage backend: %s", settings.storage_backend)

    pool = None
    remote = None
    if settings.storage_backend == "postgres":
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )
        ensure_schema(pool)
        app.state.repository = PostgresRegistrationRepository(pool)
    elif settings.storage_backend == "api":
        remote = RemoteRegistrationRepository(
            settings.api_base_url,
            token=settings.api_token,
            timeout=settings.api_timeout_seconds,
        )
        app.state.repository = remote
    else:
        app.state.repository = InMemoryRegistrationRepository()

    app.state.storage_backend = settings.storage_backend
    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")
    if remote is not None:
        remote.close()


app = FastAPI(
    title="inscription",
    description="Registration API - Validates and stores registrants",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """Health check endpoint reporting the active storage backend."""
    return {"status": "healthy", "storage": request.app.state.storage_backend}
