"""Test doubles and lookup helpers shared by the test modules."""

from datetime import datetime, timedelta
from pathlib import Path

from repwise.models.workout import WorkoutSetEntry
from repwise.services.workout_engine import WorkoutEngine


class FakeGateway:
    """In-memory stand-in for StateRepository."""

    def __init__(self, state: dict | None = None):
        self.state = state
        self.writes: list[dict] = []
        self.exports: list[dict] = []

    async def read_state(self) -> dict | None:
        return self.state

    async def write_state(self, state: dict) -> bool:
        self.writes.append(state)
        self.state = state
        return True

    async def create_export_file(self, state: dict) -> Path | None:
        self.exports.append(state)
        return Path("exports") / f"repwise-export-{len(self.exports)}.json"


class FakeClock:
    """A clock that moves forward one minute per reading."""

    def __init__(self, start: datetime = datetime(2024, 3, 1, 9, 0)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(minutes=1)
        return current

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def exercise_id(engine: WorkoutEngine, name: str) -> str:
    for group in engine.muscle_groups:
        for exercise in group.exercises:
            if exercise.name == name:
                return exercise.id
    raise KeyError(name)


def group_id(engine: WorkoutEngine, name: str) -> str:
    for group in engine.muscle_groups:
        if group.name == name:
            return group.id
    raise KeyError(name)


def entry(engine: WorkoutEngine, name: str, **metrics) -> WorkoutSetEntry:
    exercise = engine.exercise_by_id(exercise_id(engine, name))
    return WorkoutSetEntry(exercise_id=exercise.id, unit=exercise.unit, **metrics)
