"""SeatFinder API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SeatFinderError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Student source client created on startup and closed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers: SeatFinderError (domain), RequestValidationError
      (Pydantic), Exception (catch-all) — never leaks internal details
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seatfinder.api.error_handlers import register_error_handlers
from seatfinder.api.routes import health, options, seats, views
from seatfinder.config import get_settings
from seatfinder.infrastructure.observability import setup_logging
from seatfinder.infrastructure.student_source import (
    close_student_source, init_student_source,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_student_source(settings.source_url, settings.source_timeout_seconds)
    logger.info(
        "SeatFinder API started", extra={"source_url": settings.source_url},
    )
    yield
    await close_student_source()
    logger.info("SeatFinder API shutting down")


app = FastAPI(title="SeatFinder API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(options.router)
app.include_router(seats.router)
app.include_router(views.router)

register_error_handlers(app)
