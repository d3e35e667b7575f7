"""Data models for repwise."""

from .exercises import Exercise, ExerciseUnit, MuscleGroup
from .settings import AppSettings
from .state import AppState, StateDecodeError
from .workout import WorkoutExerciseLog, WorkoutSession, WorkoutSet, WorkoutSetEntry

__all__ = [
    "AppSettings",
    "AppState",
    "Exercise",
    "ExerciseUnit",
    "MuscleGroup",
    "StateDecodeError",
    "WorkoutExerciseLog",
    "WorkoutSession",
    "WorkoutSet",
    "WorkoutSetEntry",
]
