"""Payment Instructions API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the SY03 result envelope
    - CORS configured from settings (not hardcoded)
    - Logging configured on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Docs served at /api-docs
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from paymentflow.api.error_handlers import register_error_handlers
from paymentflow.infrastructure.observability import setup_logging
from paymentflow.config import get_settings
from paymentflow.api.routes import health, payment_instructions

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Payment Instructions API started")
    yield
    logger.info("Payment Instructions API shutting down")


settings = get_settings()
app = FastAPI(
    title="Payment Instructions API",
    description="Parse and execute payment instructions between accounts",
    version=settings.service_version,
    lifespan=lifespan,
    docs_url="/api-docs",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(payment_instructions.router)

register_error_handlers(app)
