import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gametracker.config import get_settings
from gametracker.infrastructure.database import engine, initialize_database
from gametracker.interfaces.api.routes import register_routes
from gametracker.interfaces.scheduler import JobScheduler

logger = logging.getLogger("gametracker")


def configure_logging(level_name: str) -> None:
    """Attach a console handler to the ``gametracker`` logger."""

    level = getattr(logging, (level_name or "INFO").upper(), logging.INFO)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and start the scheduled jobs; stop them on shutdown."""

    settings = get_settings()
    configure_logging(settings.log_level)
    initialize_database()

    scheduler = JobScheduler(settings) if settings.scheduler_enabled else None
    if scheduler is not None:
        scheduler.start()
    else:
        logger.info("Scheduled jobs are disabled")
    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.shutdown()
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="Game Tracker", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
