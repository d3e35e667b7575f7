"""Muscle group and exercise library routes."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ...models.exercises import ExerciseUnit
from ..deps import get_engine, not_found, rejected

router = APIRouter(prefix="/api/library", tags=["library"])


class GroupIn(BaseModel):
    name: str


class ExerciseIn(BaseModel):
    name: str
    unit: ExerciseUnit = ExerciseUnit.WEIGHT_REPS


class ExerciseUpdate(BaseModel):
    name: str | None = None
    unit: ExerciseUnit | None = None


@router.get("")
async def list_library(request: Request):
    """All muscle groups with their exercises."""
    engine = get_engine(request)
    return [group.to_dict() for group in engine.muscle_groups]


@router.post("/groups", status_code=201)
async def add_group(request: Request, body: GroupIn):
    """Add a muscle group. Names are unique, ignoring case."""
    group = get_engine(request).add_muscle_group(body.name)
    if group is None:
        raise rejected("Name is empty or already used")
    return group.to_dict()


@router.patch("/groups/{group_id}")
async def rename_group(request: Request, group_id: str, body: GroupIn):
    engine = get_engine(request)
    if engine.muscle_group_by_id(group_id) is None:
        raise not_found("Muscle group")
    if not engine.update_muscle_group(group_id, body.name):
        raise rejected("Name is empty or already used")
    return engine.muscle_group_by_id(group_id).to_dict()


@router.post("/groups/{group_id}/exercises", status_code=201)
async def add_exercise(request: Request, group_id: str, body: ExerciseIn):
    engine = get_engine(request)
    if engine.muscle_group_by_id(group_id) is None:
        raise not_found("Muscle group")
    exercise = engine.add_exercise(group_id, body.name, body.unit)
    if exercise is None:
        raise rejected("Name is empty or already used in this group")
    return exercise.to_dict()


@router.patch("/groups/{group_id}/exercises/{exercise_id}")
async def update_exercise(
    request: Request, group_id: str, exercise_id: str, body: ExerciseUpdate
):
    """Rename an exercise or change its unit. Logged sets are left as they are."""
    engine = get_engine(request)
    group = engine.muscle_group_by_id(group_id)
    exercise = group.find_exercise(exercise_id) if group else None
    if exercise is None:
        raise not_found("Exercise")

    name = body.name if body.name is not None else exercise.name
    unit = body.unit or exercise.unit
    if not engine.update_exercise(group_id, exercise_id, name, unit):
        raise rejected("Name is empty or already used in this group")
    return engine.exercise_by_id(exercise_id).to_dict()
