"""MelodyHub API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MelodyHubError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Tables created on startup when missing: a fresh install needs no manual
      migration step; Alembic remains the upgrade path
    - Static UI mounted AFTER API routes so /api/v1/* and /api.php take precedence

Run:
    uvicorn melodyhub.main:app --host 0.0.0.0 --port 8000
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from melodyhub.api.error_handlers import register_error_handlers
from melodyhub.api.routes import health, legacy, library, queues
from melodyhub.config import get_settings
from melodyhub.infrastructure.database import init_db
from melodyhub.infrastructure.observability import setup_logging

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
    await manager.create_all()
    if not os.path.isdir(settings.media_root):
        logger.warning(
            "Media root does not exist",
            extra={"media_path": settings.media_root},
        )
    logger.info("MelodyHub API started", extra={"media_path": settings.media_root})
    yield
    await manager.dispose()
    logger.info("MelodyHub API shutting down")


app = FastAPI(title="MelodyHub API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Range", "Accept-Ranges", "Content-Length"],
)

app.include_router(health.router)
app.include_router(library.router)
app.include_router(queues.router)
app.include_router(legacy.router)

register_error_handlers(app)

# html=True serves index.html for the root URL
if os.path.isdir(settings.static_dir):
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
