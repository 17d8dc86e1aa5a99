"""ClawPress API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ClawPressError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, tables and HTTP clients initialized on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Frontend catch-all registered LAST so /api/* routes take precedence
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import clawpress.models  # noqa: F401  (populate Base.metadata)
from clawpress.api.error_handlers import register_error_handlers
from clawpress.api.routes import auth, posts, engagement, images, health, frontend
from clawpress.config import get_settings
from clawpress.infrastructure.database import init_db
from clawpress.infrastructure.email_client import init_email_client
from clawpress.infrastructure.image_client import init_image_client
from clawpress.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await db.create_tables()
    image_client = init_image_client(
        settings.image_api_key,
        settings.image_api_url,
        model=settings.image_model,
        size=settings.image_size,
        timeout_seconds=settings.image_timeout_seconds,
    )
    email_client = init_email_client(
        settings.email_api_key,
        settings.email_api_url,
        settings.email_from,
        timeout_seconds=settings.email_timeout_seconds,
    )
    logger.info(
        f"ClawPress API started (image generation "
        f"{'on' if image_client else 'off'}, email "
        f"{'on' if email_client else 'off'})",
    )
    yield
    logger.info("ClawPress API shutting down")
    if image_client:
        await image_client.aclose()
    if email_client:
        await email_client.aclose()
    await db.close()


app = FastAPI(
    title="ClawPress API", version="1.0.0", lifespan=lifespan,
)

# CORS from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routes (frontend catch-all last)
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(posts.router)
app.include_router(engagement.router)
app.include_router(images.router)
app.include_router(frontend.router)
