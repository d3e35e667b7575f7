"""The full persisted application state and its JSON codec."""

from dataclasses import dataclass, field

from .exercises import MuscleGroup
from .settings import AppSettings
from .workout import WorkoutSession


class StateDecodeError(ValueError):
    """Raised when a state blob does not have the expected shape."""


@dataclass
class AppState:
    """Everything that is saved: library, history, active workout and settings.

    ``completed_sessions`` is ordered most recent first.
    """

    muscle_groups: list[MuscleGroup] = field(default_factory=list)
    completed_sessions: list[WorkoutSession] = field(default_factory=list)
    active_session: WorkoutSession | None = None
    settings: AppSettings = field(default_factory=AppSettings)

    def to_dict(self) -> dict:
        """Convert to the JSON-compatible blob shape."""
        return {
            "muscleGroups": [group.to_dict() for group in self.muscle_groups],
            "completedSessions": [session.to_dict() for session in self.completed_sessions],
            "activeSession": self.active_session.to_dict() if self.active_session else None,
            "settings": self.settings.to_dict(),
        }

    @classmethod
    def from_dict(cls, data) -> "AppState":
        """Decode a state blob.

        Non-list collections decode as empty and unknown settings fall back
        to defaults, but a blob that is not an object, or entities missing
        their ids, fail the whole decode.

        Raises:
            StateDecodeError: If the blob cannot be decoded.
        """
        if not isinstance(data, dict):
            raise StateDecodeError("State must be a JSON object")

        try:
            groups = data.get("muscleGroups")
            sessions = data.get("completedSessions")
            active = data.get("activeSession")
            return cls(
                muscle_groups=[
                    MuscleGroup.from_dict(item)
                    for item in (groups if isinstance(groups, list) else [])
                    if isinstance(item, dict)
                ],
                completed_sessions=[
                    WorkoutSession.from_dict(item)
                    for item in (sessions if isinstance(sessions, list) else [])
                    if isinstance(item, dict)
                ],
                active_session=(
                    WorkoutSession.from_dict(active) if isinstance(active, dict) else None
                ),
                settings=AppSettings.from_dict(data.get("settings")),
            )
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise StateDecodeError(f"Invalid state: {e!r}") from e
