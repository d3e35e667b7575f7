"""Workout history and personal record commands."""

from datetime import date, datetime

import click

from ..models.workout import WorkoutSession
from ..services.workout_engine import WorkoutEngine
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    find_exercise,
    find_group,
    open_engine,
    short_id,
)
from .workout import describe_set, echo_session


def _sessions_for_group(
    sessions: list[WorkoutSession], group_id: str
) -> list[WorkoutSession]:
    return [
        session
        for session in sessions
        if any(log.muscle_group_id == group_id for log in session.exercises)
    ]


def _find_session(engine: WorkoutEngine, ref: str) -> WorkoutSession | None:
    for session in engine.completed_sessions:
        if session.id == ref or session.id.startswith(ref.lower()):
            return session
    return None


@click.group()
@click.pass_context
def history(ctx):
    """Browse completed workouts."""
    ensure_initialized(ctx)


@history.command(name="list")
@click.option("--group", "-g", "group_ref", help="Only workouts that trained this group")
@click.option("--all", "show_all", is_flag=True, help="Ignore automatic group filtering")
@click.option("--limit", "-n", default=10, show_default=True, help="Number of days to show")
@click.pass_context
@async_command
async def list_history(ctx, group_ref: str | None, show_all: bool, limit: int):
    """List completed workouts, most recent first.

    With automatic history filtering enabled, only workouts that trained
    the muscle group of the current exercise are listed.
    """
    async with open_engine(ctx) as engine:
        group_id = None
        if group_ref:
            group = find_group(engine, group_ref)
            if group is None:
                echo_error(f"Muscle group '{group_ref}' not found")
                ctx.exit(1)
            group_id = group.id
        elif engine.settings.auto_filter_history_enabled and not show_all:
            group_id = engine.active_workout_muscle_group_id
            if group_id is not None:
                group = engine.muscle_group_by_id(group_id)
                echo_info(f"Showing {group.name if group else 'filtered'} workouts only")

        by_date = engine.completed_sessions_by_date()
        shown = 0
        for day, sessions in sorted(by_date.items(), reverse=True):
            if group_id is not None:
                sessions = _sessions_for_group(sessions, group_id)
            if not sessions:
                continue
            if shown >= limit:
                break
            shown += 1
            click.echo()
            click.echo(click.style(f"{day:%A, %Y-%m-%d}", bold=True))
            for session in sessions:
                set_count = sum(1 for _ in session.all_sets())
                click.echo(
                    f"  [{short_id(session.id)}] {session.started_at:%H:%M}  "
                    f"{len(session.exercises)} exercise(s), {set_count} set(s)"
                )

        if shown == 0:
            echo_info("No completed workouts yet.")


@history.command(name="day")
@click.argument("day", type=click.DateTime(formats=["%Y-%m-%d"]), required=False)
@click.pass_context
@async_command
async def show_day(ctx, day: datetime | None):
    """Show every workout of a day (defaults to today)."""
    async with open_engine(ctx) as engine:
        selected: date = day.date() if day else date.today()
        sessions = engine.sessions_for_day(selected)
        if not sessions:
            echo_info(f"No workouts on {selected:%Y-%m-%d}")
            return

        for session in sessions:
            click.echo()
            click.echo(
                click.style(
                    f"Workout {short_id(session.id)} at {session.started_at:%H:%M}",
                    bold=True,
                )
            )
            echo_session(engine, session)


@history.command(name="remove-set")
@click.argument("session_ref")
@click.argument("log_ref")
@click.argument("position", type=int)
@click.pass_context
@async_command
async def remove_set(ctx, session_ref: str, log_ref: str, position: int):
    """Delete set POSITION (1-based) of an exercise in a completed workout."""
    async with open_engine(ctx) as engine:
        session = _find_session(engine, session_ref)
        if session is None:
            echo_error(f"Workout '{session_ref}' not found")
            ctx.exit(1)

        log = next(
            (log for log in session.exercises if log.id.startswith(log_ref.lower())),
            None,
        )
        if log is None or not 1 <= position <= len(log.sets):
            echo_error(f"Set {position} not found")
            ctx.exit(1)

        engine.remove_completed_set(session.id, log.id, log.sets[position - 1].id)
        echo_success(f"Removed set {position} from workout {short_id(session.id)}")


@click.group()
@click.pass_context
def records(ctx):
    """Personal records."""
    ensure_initialized(ctx)


@records.command(name="show")
@click.argument("group_ref")
@click.argument("exercise_ref")
@click.pass_context
@async_command
async def show_records(ctx, group_ref: str, exercise_ref: str):
    """Show the sets currently holding a personal record for an exercise."""
    async with open_engine(ctx) as engine:
        group = find_group(engine, group_ref)
        exercise = find_exercise(group, exercise_ref) if group else None
        if exercise is None:
            echo_error(f"Exercise '{exercise_ref}' not found")
            ctx.exit(1)

        pr_ids = engine.current_prs(exercise.id)
        if not pr_ids:
            echo_info(f"No personal records for {exercise.name} yet")
            return

        sessions = list(engine.completed_sessions)
        if engine.active_session is not None:
            sessions.append(engine.active_session)
        pr_sets = sorted(
            (
                workout_set
                for session in sessions
                for workout_set in session.all_sets()
                if workout_set.id in pr_ids
            ),
            key=lambda workout_set: workout_set.timestamp,
        )

        click.echo()
        click.echo(click.style(f"{exercise.name} ({exercise.unit.label})", bold=True))
        for workout_set in pr_sets:
            click.echo(
                f"  {workout_set.timestamp:%Y-%m-%d}  {describe_set(engine, workout_set)}"
            )
