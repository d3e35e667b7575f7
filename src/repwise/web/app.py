"""FastAPI application for the repwise JSON API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request

from .. import __version__
from ..db import StateRepository, get_db_path, get_export_dir, init_db
from ..services.workout_engine import WorkoutEngine
from .deps import get_engine
from .routers import data, history, library, settings, timer, workout

logger = logging.getLogger(__name__)


def create_app(data_dir: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Load the engine on startup and flush pending writes on shutdown."""
        db_path = get_db_path(data_dir)
        if not db_path.exists():
            await init_db(db_path)
        repo = StateRepository(db_path, export_dir=get_export_dir(data_dir))
        engine = WorkoutEngine(repo)
        await engine.initialize()
        app.state.engine = engine
        logger.info("repwise API using %s", db_path)
        yield
        engine.close()
        await engine.flush()

    app = FastAPI(
        title="repwise",
        description="Workout log with supersets, rest timer and personal records",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(library.router)
    app.include_router(workout.router)
    app.include_router(history.router)
    app.include_router(timer.router)
    app.include_router(settings.router)
    app.include_router(data.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    @app.get("/api/state")
    async def full_state(request: Request):
        """The whole persisted state, as it would be exported."""
        return get_engine(request).serialize()

    return app
