"""Workout engine, rest timer and personal record services."""

from .records import collect_single_exercise_sets, current_prs, find_personal_records
from .rest_timer import RestTimer, TimerState
from .workout_engine import StateGateway, WorkoutEngine

__all__ = [
    "collect_single_exercise_sets",
    "current_prs",
    "find_personal_records",
    "RestTimer",
    "StateGateway",
    "TimerState",
    "WorkoutEngine",
]
