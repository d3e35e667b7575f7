"""Human-readable rendering of logged sets."""

from ..models.exercises import ExerciseUnit
from ..models.workout import WorkoutSetEntry

EMPTY_ENTRY = "-"


def format_number(value: float | None, suffix: str = "") -> str:
    """Format a positive number without trailing zeros, or "" if not recorded."""
    if value is None or value <= 0:
        return ""
    if float(value).is_integer():
        text = str(int(value))
    else:
        text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {suffix}" if suffix else text


def format_duration(seconds: int | None) -> str:
    """Format seconds as "45s", "2m" or "2m 05s"."""
    if seconds is None or seconds <= 0:
        return ""
    minutes, secs = divmod(seconds, 60)
    if minutes == 0:
        return f"{secs}s"
    if secs == 0:
        return f"{minutes}m"
    return f"{minutes}m {secs:02d}s"


def format_clock(seconds: int | None) -> str:
    """Format seconds as a countdown clock, e.g. "1:30"."""
    minutes, secs = divmod(max(seconds or 0, 0), 60)
    return f"{minutes}:{secs:02d}"


def _format_reps(reps: int | None) -> str:
    if reps is None or reps <= 0:
        return ""
    return f"{reps} reps"


def _format_half_reps(half_reps: int | None) -> str:
    if half_reps is None or half_reps <= 0:
        return ""
    return f"{half_reps} half rep" if half_reps == 1 else f"{half_reps} half reps"


def _combine(first: str, second: str, joiner: str) -> str:
    if first and second:
        return f"{first}{joiner}{second}"
    return first or second


def format_entry(
    entry: WorkoutSetEntry, weight_unit: str = "kg", distance_unit: str = "km"
) -> str:
    """Render a set entry according to its unit.

    Examples:
        "100 kg x 5 reps", "5 km in 25m", "1m 30s", "12 reps - 1 half rep"
    """
    weight = format_number(entry.weight, weight_unit)
    distance = format_number(entry.distance, distance_unit)
    reps = _format_reps(entry.reps)
    duration = format_duration(entry.duration_seconds)

    if entry.unit == ExerciseUnit.WEIGHT_REPS:
        text = _combine(weight, reps, " x ")
    elif entry.unit == ExerciseUnit.REPS:
        text = reps
    elif entry.unit == ExerciseUnit.TIME:
        text = duration
    elif entry.unit == ExerciseUnit.DISTANCE_TIME:
        text = _combine(distance, duration, " in ")
    elif entry.unit == ExerciseUnit.REPS_TIME:
        text = _combine(reps, duration, " in ")
    elif entry.unit == ExerciseUnit.DISTANCE:
        text = distance
    else:
        text = _combine(weight, duration, " for ")

    parts = [part for part in (text, _format_half_reps(entry.half_reps)) if part]
    if not parts:
        return EMPTY_ENTRY
    return " - ".join(parts)
