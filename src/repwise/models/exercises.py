"""Exercise library definitions: units, exercises and muscle groups."""

from dataclasses import dataclass, field, replace
from enum import Enum


class ExerciseUnit(str, Enum):
    """How an exercise is measured."""

    WEIGHT_REPS = "weightReps"
    REPS = "reps"
    TIME = "time"
    DISTANCE_TIME = "distanceTime"
    REPS_TIME = "repsTime"
    DISTANCE = "distance"
    WEIGHT_TIME = "weightTime"

    @property
    def label(self) -> str:
        """Human-readable name of the unit."""
        return UNIT_LABELS[self]

    @property
    def metrics(self) -> tuple[str, ...]:
        """Entry fields recorded for this unit, primary metric first."""
        return UNIT_METRICS[self]

    @classmethod
    def from_code(cls, code: str | None) -> "ExerciseUnit":
        """Decode a stored unit code, falling back to reps for unknown codes."""
        for unit in cls:
            if unit.value == code or unit.name == code:
                return unit
        return cls.REPS


UNIT_LABELS = {
    ExerciseUnit.WEIGHT_REPS: "Weight & Reps",
    ExerciseUnit.REPS: "Reps",
    ExerciseUnit.TIME: "Time",
    ExerciseUnit.DISTANCE_TIME: "Distance & Time",
    ExerciseUnit.REPS_TIME: "Reps & Time",
    ExerciseUnit.DISTANCE: "Distance",
    ExerciseUnit.WEIGHT_TIME: "Weight & Time",
}

# Field names on WorkoutSetEntry
UNIT_METRICS = {
    ExerciseUnit.WEIGHT_REPS: ("weight", "reps"),
    ExerciseUnit.REPS: ("reps",),
    ExerciseUnit.TIME: ("duration_seconds",),
    ExerciseUnit.DISTANCE_TIME: ("distance", "duration_seconds"),
    ExerciseUnit.REPS_TIME: ("reps", "duration_seconds"),
    ExerciseUnit.DISTANCE: ("distance",),
    ExerciseUnit.WEIGHT_TIME: ("weight", "duration_seconds"),
}


@dataclass
class Exercise:
    """An exercise in the library."""

    id: str
    name: str
    unit: ExerciseUnit = ExerciseUnit.WEIGHT_REPS

    def copy_with(self, **changes) -> "Exercise":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {"id": self.id, "name": self.name, "unit": self.unit.value}

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            unit=ExerciseUnit.from_code(data.get("unit")),
        )


@dataclass
class MuscleGroup:
    """A named muscle group that owns an ordered list of exercises."""

    id: str
    name: str
    exercises: list[Exercise] = field(default_factory=list)

    def copy_with(self, **changes) -> "MuscleGroup":
        """Return a copy with the given fields replaced.

        The exercise list is copied so the two groups never share it.
        """
        changes.setdefault("exercises", list(self.exercises))
        return replace(self, **changes)

    def exercise_ids(self) -> set[str]:
        return {exercise.id for exercise in self.exercises}

    def find_exercise(self, exercise_id: str) -> Exercise | None:
        for exercise in self.exercises:
            if exercise.id == exercise_id:
                return exercise
        return None

    def has_exercise_named(self, name: str, exclude_id: str | None = None) -> bool:
        """Case-insensitive name check within this group."""
        lowered = name.lower()
        return any(
            exercise.name.lower() == lowered and exercise.id != exclude_id
            for exercise in self.exercises
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "exercises": [exercise.to_dict() for exercise in self.exercises],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MuscleGroup":
        """Create from dictionary."""
        exercises = data.get("exercises") or []
        if not isinstance(exercises, list):
            exercises = []
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            exercises=[
                Exercise.from_dict(item) for item in exercises if isinstance(item, dict)
            ],
        )
