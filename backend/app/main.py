"""Chat API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ChatError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized, and the controller built, on startup via lifespan;
      the engine is disposed on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import health, msgs, users
from app.config import get_settings
from app.infrastructure.database import dispose_db, init_db
from app.infrastructure.observability import setup_logging
from app.services.chat_controller import ChatController

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
        isolation_level=settings.database_isolation_level,
    )
    if settings.database_create_tables:
        await db.create_tables()
    app.state.controller = await ChatController.create(
        db, session_hours=settings.session_hours,
    )
    logger.info("Chat API started")
    yield
    logger.info("Chat API shutting down")
    await dispose_db()


app = FastAPI(title="Chat API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(msgs.router)

register_error_handlers(app)
