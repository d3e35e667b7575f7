"""Request helpers shared by the routers."""

from fastapi import HTTPException, Request

from ..services.workout_engine import WorkoutEngine


def get_engine(request: Request) -> WorkoutEngine:
    """Get the engine from app state."""
    return request.app.state.engine


def not_found(what: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{what} not found")


def rejected(reason: str) -> HTTPException:
    """A mutation the engine refused in the current state."""
    return HTTPException(status_code=409, detail=reason)
