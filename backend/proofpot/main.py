"""ProofPot API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map ProofPotError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Provenance services (and the database, when selected) initialized on startup
      via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py (ADR: ExMA import fan-out < 10)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from proofpot.api.error_handlers import register_error_handlers
from proofpot.api.routes import (
    administration, correlations, health, registry, tokens,
)
from proofpot.config import get_settings
from proofpot.infrastructure import database
from proofpot.infrastructure.observability import setup_logging
from proofpot.services.provenance_context import init_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_services(settings)
    logger.info("ProofPot API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("ProofPot API shutting down")


app = FastAPI(
    title="ProofPot API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration (ExMA: no convention-over-config)
app.include_router(health.router)
app.include_router(registry.router)
app.include_router(administration.router)
app.include_router(tokens.router)
app.include_router(correlations.router)

register_error_handlers(app)
