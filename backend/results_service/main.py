"""Results Service API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ResultsServiceError → structured JSON responses
    - CORS and compression configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan
    - Every request carries a correlation id (RequestLoggingMiddleware)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - SQLite URLs get their schema created at startup; PostgreSQL schema comes from alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from results_service.api.error_handlers import register_error_handlers
from results_service.api.request_logging import RequestLoggingMiddleware
from results_service.api.routes import health, marketplace_items, segments
from results_service.config import get_settings
from results_service.db.session import create_schema
from results_service.infrastructure.database import close_db, init_db
from results_service.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if manager.is_sqlite:
        await create_schema(manager.engine)
    logger.info(f"{settings.service_name} {settings.service_version} started")
    yield
    await close_db()
    logger.info(f"{settings.service_name} shutting down")


settings = get_settings()
app = FastAPI(
    title="Results Service API",
    description="Marketplace scraping results: items observed across platform segments",
    version=settings.service_version,
    lifespan=lifespan,
)

# Middleware: last added runs first, so request logging wraps everything
app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Correlation-ID", "Location"],
)
app.add_middleware(RequestLoggingMiddleware)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(segments.router)
app.include_router(marketplace_items.router)

register_error_handlers(app)
