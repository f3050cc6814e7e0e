"""Payment Eligibility API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map EligibilityError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging configured on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Policy built once at startup as a fail-fast check; routes rebuild it per request
      from cached settings so dependency overrides work in tests
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cc_eligibility.api.error_handlers import register_error_handlers
from cc_eligibility.api.routes import cart_payment_methods, health
from cc_eligibility.config import get_settings
from cc_eligibility.infrastructure.observability import setup_logging
from cc_eligibility.services.payment_eligibility import build_policy

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    policy = build_policy(settings)
    logger.info(
        "Payment eligibility API started",
        extra={"policy_mode": policy.mode.value},
    )
    yield
    logger.info("Payment eligibility API shutting down")


app = FastAPI(
    title="CC Payment Eligibility API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(cart_payment_methods.router)

register_error_handlers(app)
