"""User-facing application settings."""

from dataclasses import dataclass

WEIGHT_UNITS = ("kg", "lb")
DISTANCE_UNITS = ("km", "mi")


def _bool(value, default: bool) -> bool:
    return value if isinstance(value, bool) else default


@dataclass
class AppSettings:
    """Preferences persisted alongside the workout data."""

    timer_sound_enabled: bool = True
    timer_vibration_enabled: bool = True
    weight_unit: str = "kg"
    distance_unit: str = "km"
    half_reps_enabled: bool = False
    comments_enabled: bool = True
    auto_finish_workout_enabled: bool = False
    auto_finish_workout_hours: int = 4
    auto_filter_history_enabled: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "timerSoundEnabled": self.timer_sound_enabled,
            "timerVibrationEnabled": self.timer_vibration_enabled,
            "weightUnit": self.weight_unit,
            "distanceUnit": self.distance_unit,
            "halfRepsEnabled": self.half_reps_enabled,
            "commentsEnabled": self.comments_enabled,
            "autoFinishWorkoutEnabled": self.auto_finish_workout_enabled,
            "autoFinishWorkoutHours": self.auto_finish_workout_hours,
            "autoFilterHistoryEnabled": self.auto_filter_history_enabled,
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "AppSettings":
        """Create from dictionary. Missing or malformed values fall back to defaults."""
        if not isinstance(data, dict):
            return cls()

        defaults = cls()
        weight_unit = data.get("weightUnit")
        distance_unit = data.get("distanceUnit")
        hours = data.get("autoFinishWorkoutHours")
        if isinstance(hours, bool) or not isinstance(hours, int) or hours < 1:
            hours = defaults.auto_finish_workout_hours

        return cls(
            timer_sound_enabled=_bool(data.get("timerSoundEnabled"), defaults.timer_sound_enabled),
            timer_vibration_enabled=_bool(
                data.get("timerVibrationEnabled"), defaults.timer_vibration_enabled
            ),
            weight_unit=weight_unit if weight_unit in WEIGHT_UNITS else defaults.weight_unit,
            distance_unit=(
                distance_unit if distance_unit in DISTANCE_UNITS else defaults.distance_unit
            ),
            half_reps_enabled=_bool(data.get("halfRepsEnabled"), defaults.half_reps_enabled),
            comments_enabled=_bool(data.get("commentsEnabled"), defaults.comments_enabled),
            auto_finish_workout_enabled=_bool(
                data.get("autoFinishWorkoutEnabled"), defaults.auto_finish_workout_enabled
            ),
            auto_finish_workout_hours=hours,
            auto_filter_history_enabled=_bool(
                data.get("autoFilterHistoryEnabled"), defaults.auto_filter_history_enabled
            ),
        )
