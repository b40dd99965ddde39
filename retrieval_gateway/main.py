"""Retrieval Gateway API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly under settings.api_prefix (no auto-discovery)
    - Global error handlers map GatewayError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Store client created once on startup, closed on shutdown, shared by all requests

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py, main.py only wires them
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from retrieval_gateway.api.error_handlers import register_error_handlers
from retrieval_gateway.api.routes import health, query
from retrieval_gateway.config import get_settings
from retrieval_gateway.infrastructure.observability import setup_logging
from retrieval_gateway.infrastructure.store_client import close_store, init_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_store(
        settings.store_base_url,
        search_path=settings.store_search_path,
        fetch_path=settings.store_fetch_path,
        health_path=settings.store_health_path,
        timeout_seconds=settings.store_timeout_seconds,
        max_retries=settings.store_max_retries,
        base_delay_ms=settings.store_base_delay_ms,
        max_delay_ms=settings.store_max_delay_ms,
    )
    logger.info(f"Retrieval Gateway started (store: {settings.store_base_url})")
    yield
    await close_store()
    logger.info("Retrieval Gateway shutting down")


app = FastAPI(
    title="Retrieval Gateway", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(query.router, prefix=settings.api_prefix)

register_error_handlers(app)
