"""Workout history and personal record routes."""

from datetime import date

from fastapi import APIRouter, Request

from ..deps import get_engine, not_found

router = APIRouter(prefix="/api", tags=["history"])


@router.get("/history")
async def list_history(request: Request, muscle_group_id: str | None = None):
    """Completed workouts grouped by day, most recent day first."""
    engine = get_engine(request)
    days = []
    for day, sessions in sorted(engine.completed_sessions_by_date().items(), reverse=True):
        if muscle_group_id is not None:
            sessions = [
                session
                for session in sessions
                if any(log.muscle_group_id == muscle_group_id for log in session.exercises)
            ]
        if sessions:
            days.append(
                {"date": day.isoformat(), "sessions": [s.to_dict() for s in sessions]}
            )
    return days


@router.get("/history/{day}")
async def history_for_day(request: Request, day: date):
    return [session.to_dict() for session in get_engine(request).sessions_for_day(day)]


@router.delete("/history/{session_id}/exercises/{log_id}/sets/{set_id}")
async def remove_completed_set(request: Request, session_id: str, log_id: str, set_id: str):
    """Delete a logged set; emptied exercises and workouts are removed too."""
    engine = get_engine(request)
    if not engine.remove_completed_set(session_id, log_id, set_id):
        raise not_found("Set")
    return {"removed": set_id}


@router.get("/records/{exercise_id}")
async def personal_records(request: Request, exercise_id: str):
    """Ids of the sets currently holding a personal record for an exercise."""
    engine = get_engine(request)
    exercise = engine.exercise_by_id(exercise_id)
    if exercise is None:
        raise not_found("Exercise")
    return {
        "exerciseId": exercise.id,
        "unit": exercise.unit.value,
        "setIds": sorted(engine.current_prs(exercise_id)),
    }
