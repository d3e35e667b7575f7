"""Active workout routes: session, exercise logs and sets."""

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from ...models.workout import WorkoutSetEntry
from ...services.workout_engine import WorkoutEngine
from ..deps import get_engine, not_found, rejected

router = APIRouter(prefix="/api/workout", tags=["workout"])


class ExerciseStart(BaseModel):
    muscle_group_id: str
    exercise_ids: list[str] = Field(min_length=1)


class EntryIn(BaseModel):
    exercise_id: str
    reps: int | None = None
    weight: float | None = None
    distance: float | None = None
    duration_seconds: int | None = None
    half_reps: int | None = None
    comment: str | None = None


class SetIn(BaseModel):
    entries: list[EntryIn] = Field(min_length=1)


class SetMove(BaseModel):
    old_index: int
    new_index: int


def _to_entries(engine: WorkoutEngine, body: SetIn) -> list[WorkoutSetEntry]:
    """Build entries, taking each unit from the library. Unknown exercises are skipped."""
    entries = []
    for item in body.entries:
        exercise = engine.exercise_by_id(item.exercise_id)
        if exercise is None:
            continue
        comment = item.comment.strip() if item.comment else None
        entries.append(
            WorkoutSetEntry(
                exercise_id=item.exercise_id,
                unit=exercise.unit,
                reps=item.reps,
                weight=item.weight,
                distance=item.distance,
                duration_seconds=item.duration_seconds,
                half_reps=item.half_reps,
                comment=comment or None,
            )
        )
    return entries


def _workout_view(engine: WorkoutEngine) -> dict:
    session = engine.active_session
    active = engine.active_exercise
    return {
        "session": session.to_dict() if session else None,
        "activeExerciseId": active.id if active else None,
        "activeMuscleGroupId": engine.active_workout_muscle_group_id,
    }


def _require_log(engine: WorkoutEngine, log_id: str):
    session = engine.active_session
    if session is None:
        raise rejected("No workout in progress")
    log = session.find_exercise(log_id)
    if log is None:
        raise not_found("Exercise log")
    return log


@router.get("")
async def current_workout(request: Request):
    """The workout in progress, if any."""
    return _workout_view(get_engine(request))


@router.post("/start")
async def start_workout(request: Request):
    """Start a workout; reports started=false if one is already running."""
    engine = get_engine(request)
    started = engine.start_workout()
    return {"started": started, **_workout_view(engine)}


@router.post("/finish")
async def finish_workout(request: Request):
    engine = get_engine(request)
    if engine.active_session is None:
        raise rejected("No workout in progress")
    session = engine.finish_workout()
    return {"saved": session is not None, "session": session.to_dict() if session else None}


@router.post("/exercises", status_code=201)
async def start_exercise(request: Request, body: ExerciseStart):
    """Open an exercise log; several exercise ids make a superset."""
    engine = get_engine(request)
    if engine.active_session is None:
        raise rejected("No workout in progress")
    if engine.muscle_group_by_id(body.muscle_group_id) is None:
        raise not_found("Muscle group")
    log = engine.start_exercise(body.muscle_group_id, body.exercise_ids)
    if log is None:
        raise rejected("Another exercise is open or the exercises are not in this group")
    return log.to_dict()


@router.post("/exercises/{log_id}/complete")
async def complete_exercise(request: Request, log_id: str):
    engine = get_engine(request)
    log = _require_log(engine, log_id)
    if not engine.complete_exercise(log_id):
        raise rejected("Exercise has no sets")
    return log.to_dict()


@router.post("/exercises/{log_id}/reopen")
async def reopen_exercise(request: Request, log_id: str):
    engine = get_engine(request)
    log = _require_log(engine, log_id)
    if not engine.reopen_exercise(log_id):
        raise rejected("Another exercise is open")
    return log.to_dict()


@router.post("/exercises/{log_id}/cancel")
async def cancel_exercise(request: Request, log_id: str):
    engine = get_engine(request)
    _require_log(engine, log_id)
    if not engine.cancel_exercise(log_id):
        raise rejected("Exercise has sets")
    return _workout_view(engine)


@router.delete("/exercises/{log_id}")
async def remove_exercise(request: Request, log_id: str):
    engine = get_engine(request)
    _require_log(engine, log_id)
    engine.remove_active_exercise(log_id)
    return _workout_view(engine)


@router.post("/exercises/{log_id}/sets", status_code=201)
async def add_set(request: Request, log_id: str, body: SetIn):
    """Log a set. Entries without a positive metric are dropped."""
    engine = get_engine(request)
    _require_log(engine, log_id)
    workout_set = engine.add_set_to_exercise(log_id, _to_entries(engine, body))
    if workout_set is None:
        raise rejected("No entry had a positive metric for an exercise in this group")
    return workout_set.to_dict()


@router.put("/exercises/{log_id}/sets/{set_id}")
async def update_set(request: Request, log_id: str, set_id: str, body: SetIn):
    engine = get_engine(request)
    log = _require_log(engine, log_id)
    if log.find_set(set_id) == -1:
        raise not_found("Set")
    updated = engine.update_set_in_exercise(log_id, set_id, _to_entries(engine, body))
    if updated is None:
        raise rejected("No entry had a positive metric for an exercise in this group")
    return updated.to_dict()


@router.delete("/exercises/{log_id}/sets/{set_id}")
async def remove_set(request: Request, log_id: str, set_id: str):
    engine = get_engine(request)
    log = _require_log(engine, log_id)
    if not engine.remove_set_from_exercise(log_id, set_id):
        raise not_found("Set")
    return log.to_dict()


@router.post("/exercises/{log_id}/sets/move")
async def move_set(request: Request, log_id: str, body: SetMove):
    """Drag-and-drop reorder; new_index is the drop slot before removal."""
    engine = get_engine(request)
    log = _require_log(engine, log_id)
    if not engine.reorder_sets_in_exercise(log_id, body.old_index, body.new_index):
        raise rejected("Index out of range")
    return log.to_dict()
