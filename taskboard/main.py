"""Taskboard API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskboardError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers: TaskboardError (domain), RequestValidationError
      (Pydantic), Exception (catch-all) — never leaks internal details
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.api.error_handlers import register_error_handlers
from taskboard.api.routes import health, tasks, team_members
from taskboard.config import get_settings
from taskboard.infrastructure.database import init_db
from taskboard.infrastructure.observability import setup_logging
from taskboard.infrastructure.seed import seed_demo_data

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
    if settings.database_create_schema:
        await manager.create_schema()
    if settings.seed_demo_data:
        await seed_demo_data(manager)
    logger.info("Taskboard API started")
    yield
    await manager.dispose()
    logger.info("Taskboard API shutting down")


app = FastAPI(
    title="Taskboard API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(tasks.router)
app.include_router(team_members.router)

register_error_handlers(app)
