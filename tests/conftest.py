"""Pytest configuration and fixtures."""

import itertools
import tempfile
from pathlib import Path

import pytest

from repwise.models.exercises import ExerciseUnit
from repwise.services.workout_engine import WorkoutEngine

from helpers import FakeClock, FakeGateway


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(gateway, clock):
    """An engine with sequential ids and a library: Chest (Bench, Fly) and Cardio (Run)."""
    counter = itertools.count(1)
    engine = WorkoutEngine(gateway, clock=clock, id_factory=lambda: f"id-{next(counter)}")
    chest = engine.add_muscle_group("Chest")
    engine.add_exercise(chest.id, "Bench Press", ExerciseUnit.WEIGHT_REPS)
    engine.add_exercise(chest.id, "Fly", ExerciseUnit.REPS)
    cardio = engine.add_muscle_group("Cardio")
    engine.add_exercise(cardio.id, "Run", ExerciseUnit.DISTANCE_TIME)
    return engine
