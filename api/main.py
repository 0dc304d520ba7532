"""
Movies Backend API - FastAPI application.

Provides endpoints for:
- Browsing and searching movies (10 per page) on top of TMDb
- Aggregated movie details (credits, videos, reviews, images)
- Health checks

Every route is served both at the root and under `/api`.
"""
from __future__ import annotations

import logging
import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import get_settings
from api.errors import register_exception_handlers
from api.routers import health, movies

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """
    Send application logs to stdout at `LOG_LEVEL` (default INFO).

    Called from the lifespan handler, so importing the app never touches logging.
    A root logger that already has handlers (test runner, embedding app) is left alone.
    """
    level = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stdout,
    )


def get_cors_origins() -> list[str]:
    """
    Get CORS allowed origins from environment.
    Set CORS_ALLOW_ORIGINS as comma-separated list of origins.
    Example: CORS_ALLOW_ORIGINS=https://movies.example.com,http://localhost:5173
    """
    origins_str = os.getenv("CORS_ALLOW_ORIGINS", "")
    if not origins_str:
        return []
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    configure_logging()
    logger.info("Starting up Movies Backend API...")
    settings = get_settings()
    if not settings.tmdb_api_key:
        logger.warning("TMDB_API_KEY is not set; movie endpoints will fail until it is configured.")
    yield
    # Shutdown
    logger.info("Shutting down Movies Backend API...")


app = FastAPI(
    title="Movies Backend API",
    description="Paginated movie browsing and aggregated movie details backed by TMDb",
    version="0.1.0",
    lifespan=lifespan,
)

# If no origins configured, allows all origins but disables credentials
cors_origins = get_cors_origins()
allow_credentials = len(cors_origins) > 0

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if cors_origins else ["*"],
    allow_credentials=allow_credentials,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers; the `/api` copies are for hosts that forward the full path.
app.include_router(health.router)
app.include_router(movies.router)
app.include_router(health.router, prefix="/api", include_in_schema=False)
app.include_router(movies.router, prefix="/api", include_in_schema=False)
