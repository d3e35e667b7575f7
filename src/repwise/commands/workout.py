"""Workout session, exercise and set commands."""

import click

from ..models.workout import WorkoutSession, WorkoutSet
from ..services.workout_engine import WorkoutEngine
from ..utils.formatting import format_entry
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    find_exercise,
    find_group,
    find_log,
    open_engine,
    parse_entry,
    short_id,
)


def describe_set(engine: WorkoutEngine, workout_set: WorkoutSet) -> str:
    """One line for a set: each entry with its exercise name, plus a PR marker."""
    settings = engine.settings
    parts = []
    for entry in workout_set.entries:
        exercise = engine.exercise_by_id(entry.exercise_id)
        name = exercise.name if exercise else "(deleted exercise)"
        text = f"{name}: {format_entry(entry, settings.weight_unit, settings.distance_unit)}"
        if entry.comment and settings.comments_enabled:
            text += f' "{entry.comment}"'
        parts.append(text)
    line = " + ".join(parts)
    if engine.is_personal_record(workout_set):
        line += click.style(" [PR]", fg="yellow", bold=True)
    return line


def echo_session(engine: WorkoutEngine, session: WorkoutSession) -> None:
    """Print a session's exercise logs and sets."""
    for log in session.exercises:
        group = engine.muscle_group_by_id(log.muscle_group_id)
        names = [
            exercise.name
            for exercise in map(engine.exercise_by_id, log.exercise_ids)
            if exercise is not None
        ]
        label = " + ".join(names) or "(no exercises)"
        status = "done" if log.is_complete else click.style("open", fg="green")
        kind = "superset" if log.is_superset else (group.name if group else "?")
        click.echo(f"  [{short_id(log.id)}] {label} ({kind}, {status})")
        for index, workout_set in enumerate(log.sets, start=1):
            click.echo(
                f"      {index}. {workout_set.timestamp:%H:%M}  "
                f"{describe_set(engine, workout_set)}"
            )


@click.group()
@click.pass_context
def workout(ctx):
    """Start, track and finish workouts."""
    ensure_initialized(ctx)


@workout.command()
@click.pass_context
@async_command
async def start(ctx):
    """Start a workout (does nothing if one is already running)."""
    async with open_engine(ctx) as engine:
        if engine.start_workout():
            echo_success("Workout started")
        else:
            echo_info("A workout is already in progress")


@workout.command()
@click.pass_context
@async_command
async def status(ctx):
    """Show the workout in progress."""
    async with open_engine(ctx) as engine:
        session = engine.active_session
        if session is None:
            echo_info("No workout in progress. Start one with 'repwise workout start'")
            return

        click.echo()
        click.echo(click.style(f"Workout started {session.started_at:%Y-%m-%d %H:%M}", bold=True))
        click.echo("=" * 50)
        if not session.exercises:
            click.echo("  No exercises yet.")
        echo_session(engine, session)

        if engine.timer.is_active:
            click.echo()
            click.echo(f"Rest timer: {engine.timer.state.value}")


@workout.command()
@click.pass_context
@async_command
async def finish(ctx):
    """Finish the workout in progress."""
    async with open_engine(ctx) as engine:
        if engine.active_session is None:
            echo_error("No workout in progress")
            ctx.exit(1)

        session = engine.finish_workout()
        if session is None:
            echo_warning("Workout had no sets and was discarded")
            return
        set_count = sum(1 for _ in session.all_sets())
        echo_success(
            f"Workout saved: {len(session.exercises)} exercise(s), {set_count} set(s)"
        )


@workout.command(name="start-exercise")
@click.argument("group_ref")
@click.argument("exercise_refs", nargs=-1, required=True)
@click.pass_context
@async_command
async def start_exercise(ctx, group_ref: str, exercise_refs: tuple[str, ...]):
    """Start an exercise; name several exercises for a superset."""
    async with open_engine(ctx) as engine:
        group = find_group(engine, group_ref)
        if group is None:
            echo_error(f"Muscle group '{group_ref}' not found")
            ctx.exit(1)

        exercise_ids = []
        for ref in exercise_refs:
            exercise = find_exercise(group, ref)
            if exercise is None:
                echo_error(f"Exercise '{ref}' not found in {group.name}")
                ctx.exit(1)
            exercise_ids.append(exercise.id)

        log = engine.start_exercise(group.id, exercise_ids)
        if log is None:
            if engine.active_session is None:
                echo_error("No workout in progress")
            elif engine.active_exercise is not None:
                echo_error("Finish or cancel the current exercise first")
            else:
                echo_error("Could not start exercise")
            ctx.exit(1)
        echo_success(f"Started exercise {short_id(log.id)}")


def _log_command(name: str, help_text: str, action: str, failure: str):
    """Build a command that applies an engine action to one exercise log."""

    @workout.command(name=name, help=help_text)
    @click.argument("log_ref", required=False)
    @click.pass_context
    @async_command
    async def command(ctx, log_ref: str | None):
        async with open_engine(ctx) as engine:
            log = find_log(engine, log_ref)
            if log is None:
                echo_error("Exercise not found in the current workout")
                ctx.exit(1)
            if not getattr(engine, action)(log.id):
                echo_error(failure)
                ctx.exit(1)
            echo_success(f"{name.capitalize()}: {short_id(log.id)}")

    return command


complete = _log_command(
    "complete",
    "Mark an exercise as done (defaults to the open one).",
    "complete_exercise",
    "An exercise needs at least one set before it can be completed",
)
reopen = _log_command(
    "reopen",
    "Re-open a completed exercise.",
    "reopen_exercise",
    "Another exercise is still open",
)
cancel = _log_command(
    "cancel",
    "Cancel an exercise that has no sets yet.",
    "cancel_exercise",
    "Exercise has sets; use 'repwise workout remove' to delete it",
)
remove = _log_command(
    "remove",
    "Delete an exercise and its sets from the current workout.",
    "remove_active_exercise",
    "Could not remove exercise",
)


@click.group()
@click.pass_context
def sets(ctx):
    """Log and edit sets in the current workout.

    Entries look like "weight=100,reps=5". For supersets prefix the
    exercise: "Bench Press:weight=100,reps=5". Metrics: reps, weight,
    distance, time (90, 1:30 or 1m30s), half, comment.
    """
    ensure_initialized(ctx)


@sets.command(name="add")
@click.option("--log", "log_ref", help="Exercise log (defaults to the open one)")
@click.option("--entry", "-e", "entries", multiple=True, required=True, help="Entry such as weight=100,reps=5")
@click.pass_context
@async_command
async def add_set(ctx, log_ref: str | None, entries: tuple[str, ...]):
    """Log a set."""
    async with open_engine(ctx) as engine:
        log = find_log(engine, log_ref)
        if log is None:
            echo_error("No open exercise. Start one with 'repwise workout start-exercise'")
            ctx.exit(1)

        parsed = [parse_entry(text, engine, log) for text in entries]
        workout_set = engine.add_set_to_exercise(log.id, parsed)
        if workout_set is None:
            echo_error("Set not logged: no entry had a positive metric")
            ctx.exit(1)
        if len(workout_set.entries) < len(parsed):
            echo_warning(f"Skipped {len(parsed) - len(workout_set.entries)} empty entry(ies)")
        echo_success(f"Logged set {len(log.sets)}: {describe_set(engine, workout_set)}")


@sets.command(name="update")
@click.argument("position", type=int)
@click.option("--log", "log_ref", help="Exercise log (defaults to the open one)")
@click.option("--entry", "-e", "entries", multiple=True, required=True, help="Entry such as weight=100,reps=5")
@click.pass_context
@async_command
async def update_set(ctx, position: int, log_ref: str | None, entries: tuple[str, ...]):
    """Replace the entries of the set at POSITION (1-based)."""
    async with open_engine(ctx) as engine:
        log = find_log(engine, log_ref)
        if log is None or not 1 <= position <= len(log.sets):
            echo_error(f"Set {position} not found")
            ctx.exit(1)

        parsed = [parse_entry(text, engine, log) for text in entries]
        updated = engine.update_set_in_exercise(log.id, log.sets[position - 1].id, parsed)
        if updated is None:
            echo_error("Set not updated: no entry had a positive metric")
            ctx.exit(1)
        echo_success(f"Updated set {position}: {describe_set(engine, updated)}")


@sets.command(name="remove")
@click.argument("position", type=int)
@click.option("--log", "log_ref", help="Exercise log (defaults to the open one)")
@click.pass_context
@async_command
async def remove_set(ctx, position: int, log_ref: str | None):
    """Delete the set at POSITION (1-based)."""
    async with open_engine(ctx) as engine:
        log = find_log(engine, log_ref)
        if log is None or not 1 <= position <= len(log.sets):
            echo_error(f"Set {position} not found")
            ctx.exit(1)
        engine.remove_set_from_exercise(log.id, log.sets[position - 1].id)
        echo_success(f"Removed set {position}")


@sets.command(name="move")
@click.argument("from_position", type=int)
@click.argument("to_position", type=int)
@click.option("--log", "log_ref", help="Exercise log (defaults to the open one)")
@click.pass_context
@async_command
async def move_set(ctx, from_position: int, to_position: int, log_ref: str | None):
    """Move a set to another position (both 1-based)."""
    async with open_engine(ctx) as engine:
        log = find_log(engine, log_ref)
        if log is None:
            echo_error("Exercise not found in the current workout")
            ctx.exit(1)

        old_index = from_position - 1
        new_index = to_position - 1
        # The engine expects the drop slot, which is one past the target when moving down
        if new_index > old_index:
            new_index += 1
        if not engine.reorder_sets_in_exercise(log.id, old_index, new_index):
            echo_error("Position out of range")
            ctx.exit(1)
        echo_success(f"Moved set {from_position} to {to_position}")
