"""FastAPI application entrypoint for the table booking service."""

import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import Callable, Optional

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from core.config import Settings, get_settings
from core.logging import setup_logging
from core.time_window import get_current_date
from db.session import create_db_engine, create_session_factory, init_db
from db.unit_of_work import SqlAlchemyUnitOfWork
from services.reservation_service import ReservationService
from apps.api.errors import register_error_handlers
from apps.api.routers import admin, reservations


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    clock: Callable[[], date] = get_current_date,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings (defaults to environment)
        engine: Existing engine to use instead of creating one from settings
        clock: Returns today's date for booking-date validation

    Returns:
        FastAPI application
    """
    settings = settings or get_settings()
    engine = engine or create_db_engine(settings=settings)
    session_factory = create_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name}...")
        try:
            init_db(engine)
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise

        yield

        logger.info(f"Shutting down {settings.app_name}...")
        engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Table reservations with automatic best-fit table assignment",
        version="1.0.0",
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.reservation_service = ReservationService(
        lambda: SqlAlchemyUnitOfWork(session_factory),
        clock=clock,
    )

    register_error_handlers(app)
    app.include_router(reservations.router, prefix=settings.api_prefix)
    app.include_router(admin.router, prefix=settings.api_prefix)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "app": settings.app_name}

    return app


setup_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
    )
