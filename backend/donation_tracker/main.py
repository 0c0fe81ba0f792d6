"""Donation API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure onto the response envelope
    - CORS configured from settings (not hardcoded)
    - The DonationStore is built, initialized and closed by the lifespan;
      a store that fails to initialize aborts startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Store kept on app.state and injected via Depends(get_store), so tests
      swap it with dependency_overrides instead of patching a module global
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from donation_tracker.api.error_handlers import register_error_handlers
from donation_tracker.api.request_logging import register_request_logging
from donation_tracker.api.routes import donations, health, index
from donation_tracker.config import get_settings
from donation_tracker.infrastructure.observability import setup_logging
from donation_tracker.services.donation_store import DonationStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = DonationStore.from_url(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await store.initialize()
    app.state.store = store
    logger.info("Donation API started")
    yield
    logger.info("Donation API shutting down")
    await store.close()


settings = get_settings()
app = FastAPI(
    title=settings.api_title, version=settings.api_version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_request_logging(app)

# Routes: explicit registration, fallback last
app.include_router(index.router)
app.include_router(health.router)
app.include_router(donations.router)
app.include_router(index.fallback_router)

register_error_handlers(app)
