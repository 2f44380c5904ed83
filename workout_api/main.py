"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import sessionmaker

from workout_api.config import get_settings
from workout_api.infrastructure.database import SessionLocal, init_db
from workout_api.core.logging import configure_logging
from workout_api.core.middleware import setup_middleware
from workout_api.core.exceptions import register_exception_handlers
from workout_api.interfaces.deps import build_user_repository

# Import routers
from workout_api.interfaces.api.auth import router as auth_router
from workout_api.interfaces.api.workouts import router as workouts_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting Workout API...", env=settings.ENVIRONMENT)

    # A schema failure propagates and the server never starts accepting requests
    init_db(bind=app.state.session_factory.kw["bind"])
    logger.info("Database tables created/verified")

    yield

    logger.info("Workout API stopped")


def create_app(session_factory: sessionmaker = SessionLocal) -> FastAPI:
    app = FastAPI(
        title="Workout API",
        description="Users, authentication tokens and workout tracking",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.session_factory = session_factory

    setup_middleware(app, repository_factory=build_user_repository)
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(workouts_router)

    @app.get("/health", response_class=PlainTextResponse)
    def health():
        return "status: available\n"

    return app


app = create_app()
