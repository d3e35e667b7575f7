"""Workout session, exercise log and set models."""

import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime

from .exercises import ExerciseUnit


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning None when it is missing or invalid."""
    if not isinstance(value, str) or not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    # Stored times are naive local time
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _optional_int(value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return None


def _optional_float(value) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, float) and math.isfinite(value):
        return value
    return None


def _unique(ids) -> list[str]:
    """De-duplicate ids, keeping first-seen order."""
    return list(dict.fromkeys(ids))


@dataclass
class WorkoutSetEntry:
    """One exercise's measurement within a set.

    Optional metrics mean "not recorded", which is different from zero.
    """

    exercise_id: str
    unit: ExerciseUnit
    reps: int | None = None
    weight: float | None = None
    distance: float | None = None
    duration_seconds: int | None = None
    half_reps: int | None = None
    comment: str | None = None

    @property
    def has_metrics(self) -> bool:
        """True if at least one metric was recorded with a positive value."""
        return any(
            (value or 0) > 0
            for value in (
                self.reps,
                self.half_reps,
                self.weight,
                self.distance,
                self.duration_seconds,
            )
        )

    def metric(self, name: str) -> float:
        """Value of a metric field, treating "not recorded" as zero."""
        return getattr(self, name) or 0

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "exerciseId": self.exercise_id,
            "unit": self.unit.value,
            "reps": self.reps,
            "weight": self.weight,
            "distance": self.distance,
            "durationSeconds": self.duration_seconds,
            "halfReps": self.half_reps,
            "comment": self.comment,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutSetEntry":
        """Create from dictionary."""
        comment = data.get("comment")
        if isinstance(comment, str):
            comment = comment.strip() or None
        else:
            comment = None

        duration = data.get("durationSeconds")
        return cls(
            exercise_id=str(data["exerciseId"]),
            unit=ExerciseUnit.from_code(data.get("unit")),
            reps=_optional_int(data.get("reps")),
            weight=_optional_float(data.get("weight")),
            distance=_optional_float(data.get("distance")),
            duration_seconds=(
                duration if isinstance(duration, int) and not isinstance(duration, bool) else None
            ),
            half_reps=_optional_int(data.get("halfReps")),
            comment=comment,
        )


@dataclass
class WorkoutSet:
    """A set: one or more entries logged together at one moment."""

    id: str
    muscle_group_id: str
    entries: list[WorkoutSetEntry]
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_superset(self) -> bool:
        return len(self.entries) > 1

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "muscleGroupId": self.muscle_group_id,
            "entries": [entry.to_dict() for entry in self.entries],
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutSet":
        """Create from dictionary."""
        entries = data.get("entries") or []
        if not isinstance(entries, list):
            entries = []
        return cls(
            id=str(data["id"]),
            muscle_group_id=str(data["muscleGroupId"]),
            entries=[
                WorkoutSetEntry.from_dict(item) for item in entries if isinstance(item, dict)
            ],
            timestamp=parse_timestamp(data.get("timestamp")) or datetime.now(),
        )


@dataclass
class WorkoutExerciseLog:
    """One exercise (or superset) slot within a session.

    A log is "open" until ``finished_at`` is set. Exercise ids are kept
    unique in first-seen order.
    """

    id: str
    muscle_group_id: str
    exercise_ids: list[str]
    sets: list[WorkoutSet] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None

    def __post_init__(self):
        self.exercise_ids = _unique(self.exercise_ids)

    @property
    def has_sets(self) -> bool:
        return bool(self.sets)

    @property
    def is_superset(self) -> bool:
        return len(self.exercise_ids) > 1

    @property
    def is_complete(self) -> bool:
        return self.finished_at is not None

    def find_set(self, set_id: str) -> int:
        """Index of the set with the given id, or -1."""
        for index, workout_set in enumerate(self.sets):
            if workout_set.id == set_id:
                return index
        return -1

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "muscleGroupId": self.muscle_group_id,
            "exerciseIds": list(self.exercise_ids),
            "startedAt": self.started_at.isoformat(),
            "finishedAt": self.finished_at.isoformat() if self.finished_at else None,
            "sets": [workout_set.to_dict() for workout_set in self.sets],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutExerciseLog":
        """Create from dictionary.

        Older data without ``exerciseIds`` gets them inferred from the
        entries of its sets.
        """
        raw_sets = data.get("sets") or []
        if not isinstance(raw_sets, list):
            raw_sets = []
        sets = [WorkoutSet.from_dict(item) for item in raw_sets if isinstance(item, dict)]

        raw_ids = data.get("exerciseIds")
        exercise_ids = (
            [item for item in raw_ids if isinstance(item, str)]
            if isinstance(raw_ids, list)
            else []
        )
        if not exercise_ids:
            exercise_ids = [
                entry.exercise_id for workout_set in sets for entry in workout_set.entries
            ]

        started_at = parse_timestamp(data.get("startedAt"))
        if started_at is None:
            started_at = sets[0].timestamp if sets else datetime.now()

        return cls(
            id=str(data["id"]),
            muscle_group_id=str(data["muscleGroupId"]),
            exercise_ids=exercise_ids,
            sets=sets,
            started_at=started_at,
            finished_at=parse_timestamp(data.get("finishedAt")),
        )

    @classmethod
    def from_legacy_set(cls, workout_set: WorkoutSet) -> "WorkoutExerciseLog":
        """Wrap a set from the old flat session format in its own finished log."""
        return cls(
            id=workout_set.id,
            muscle_group_id=workout_set.muscle_group_id,
            exercise_ids=[entry.exercise_id for entry in workout_set.entries],
            sets=[workout_set],
            started_at=workout_set.timestamp,
            finished_at=workout_set.timestamp,
        )


@dataclass
class WorkoutSession:
    """A workout: an ordered list of exercise logs."""

    id: str
    started_at: datetime = field(default_factory=datetime.now)
    exercises: list[WorkoutExerciseLog] = field(default_factory=list)

    def all_sets(self) -> Iterator[WorkoutSet]:
        """Iterate every set of every exercise log, in order."""
        for log in self.exercises:
            yield from log.sets

    def find_exercise(self, log_id: str) -> WorkoutExerciseLog | None:
        for log in self.exercises:
            if log.id == log_id:
                return log
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "startedAt": self.started_at.isoformat(),
            "exercises": [log.to_dict() for log in self.exercises],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutSession":
        """Create from dictionary, upgrading the legacy flat ``sets`` format."""
        raw_exercises = data.get("exercises")
        if isinstance(raw_exercises, list):
            exercises = [
                WorkoutExerciseLog.from_dict(item)
                for item in raw_exercises
                if isinstance(item, dict)
            ]
        else:
            legacy_sets = data.get("sets") or []
            if not isinstance(legacy_sets, list):
                legacy_sets = []
            exercises = [
                WorkoutExerciseLog.from_legacy_set(WorkoutSet.from_dict(item))
                for item in legacy_sets
                if isinstance(item, dict)
            ]

        return cls(
            id=str(data["id"]),
            started_at=parse_timestamp(data.get("startedAt")) or datetime.now(),
            exercises=exercises,
        )
