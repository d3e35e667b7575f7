"""Shared CLI utilities."""

import asyncio
import re
from contextlib import asynccontextmanager
from functools import wraps
from pathlib import Path

import click

from ..db import StateRepository, get_db_path
from ..models.exercises import Exercise, MuscleGroup
from ..models.workout import WorkoutExerciseLog, WorkoutSetEntry
from ..services.workout_engine import WorkoutEngine


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def selected_data_dir(ctx: click.Context) -> Path | None:
    """Data directory chosen on the command line, if any."""
    obj = ctx.find_root().obj or {}
    return obj.get("data_dir")


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the database is initialized."""
    db_path = get_db_path(selected_data_dir(ctx))
    if not db_path.exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'repwise init' first."
        )
        ctx.exit(1)


@asynccontextmanager
async def open_engine(ctx: click.Context):
    """Load the engine for one command and flush its writes afterwards."""
    repo = StateRepository(get_db_path(selected_data_dir(ctx)))
    engine = WorkoutEngine(repo)
    await engine.initialize()
    try:
        yield engine
    finally:
        engine.close()
        await engine.flush()


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append(
            "".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row))
        )
    return "\n".join(lines)


def short_id(value: str) -> str:
    """First block of a UUID, enough to tell items apart on screen."""
    return value.split("-")[0]


def _matches(ref: str, item_id: str, name: str | None = None) -> bool:
    lowered = ref.strip().lower()
    if not lowered:
        return False
    if name is not None and name.lower() == lowered:
        return True
    return item_id == ref or item_id.startswith(lowered)


def find_group(engine: WorkoutEngine, ref: str) -> MuscleGroup | None:
    """Look up a muscle group by id, id prefix or name."""
    for group in engine.muscle_groups:
        if _matches(ref, group.id, group.name):
            return group
    return None


def find_exercise(group: MuscleGroup, ref: str) -> Exercise | None:
    """Look up an exercise in a group by id, id prefix or name."""
    for exercise in group.exercises:
        if _matches(ref, exercise.id, exercise.name):
            return exercise
    return None


def find_log(engine: WorkoutEngine, ref: str | None) -> WorkoutExerciseLog | None:
    """Look up an exercise log of the active workout; defaults to the open one."""
    if ref is None:
        return engine.active_exercise
    for log in engine.active_exercises:
        if _matches(ref, log.id):
            return log
    return None


def parse_duration(value: str) -> int:
    """Parse "90", "1:30" or "2m05s" into seconds."""
    value = value.strip().lower()
    if ":" in value:
        minutes, seconds = value.split(":", 1)
        return int(minutes) * 60 + int(seconds)
    match = re.fullmatch(r"(?:(\d+)m)?\s*(?:(\d+)s?)?", value)
    if not match or not any(match.groups()):
        raise ValueError(f"Invalid duration: {value!r}")
    minutes, seconds = match.groups()
    return int(minutes or 0) * 60 + int(seconds or 0)


ENTRY_FIELDS = {
    "reps": ("reps", int),
    "weight": ("weight", float),
    "distance": ("distance", float),
    "time": ("duration_seconds", parse_duration),
    "duration": ("duration_seconds", parse_duration),
    "half": ("half_reps", int),
    "half_reps": ("half_reps", int),
    "comment": ("comment", str),
}


def parse_entry(
    text: str, engine: WorkoutEngine, log: WorkoutExerciseLog
) -> WorkoutSetEntry:
    """Parse an entry like "Bench Press:weight=100,reps=5".

    The exercise part may be omitted when the log covers a single exercise.

    Raises:
        click.BadParameter: If the entry cannot be understood
    """
    group = engine.muscle_group_by_id(log.muscle_group_id)
    exercise_ref, sep, metrics = text.partition(":")
    if not sep or "=" in exercise_ref:
        exercise_ref, metrics = "", text

    if exercise_ref:
        exercise = find_exercise(group, exercise_ref) if group else None
    elif len(log.exercise_ids) == 1:
        exercise = engine.exercise_by_id(log.exercise_ids[0])
    else:
        raise click.BadParameter(f"Name the exercise in {text!r} for a superset")
    if exercise is None:
        raise click.BadParameter(f"Unknown exercise in {text!r}")

    values = {}
    for part in filter(None, (p.strip() for p in metrics.split(","))):
        key, _, raw = part.partition("=")
        field_info = ENTRY_FIELDS.get(key.strip().lower())
        if field_info is None:
            raise click.BadParameter(f"Unknown metric {key!r} in {text!r}")
        name, convert = field_info
        try:
            values[name] = convert(raw.strip())
        except ValueError as e:
            raise click.BadParameter(f"Bad value for {key!r}: {e}") from e

    return WorkoutSetEntry(exercise_id=exercise.id, unit=exercise.unit, **values)
