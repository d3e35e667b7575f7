"""Muscle group and exercise library commands."""

import click

from ..models.exercises import ExerciseUnit
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    find_exercise,
    find_group,
    format_table,
    open_engine,
    short_id,
)

UNIT_CHOICE = click.Choice([unit.value for unit in ExerciseUnit])


@click.group()
@click.pass_context
def groups(ctx):
    """Manage muscle groups."""
    ensure_initialized(ctx)


@groups.command(name="list")
@click.pass_context
@async_command
async def list_groups(ctx):
    """List muscle groups."""
    async with open_engine(ctx) as engine:
        if not engine.muscle_groups:
            echo_info("No muscle groups yet. Add one with 'repwise groups add'")
            return

        rows = [
            [short_id(group.id), group.name, str(len(group.exercises))]
            for group in engine.muscle_groups
        ]
        click.echo()
        click.echo(format_table(["ID", "Name", "Exercises"], rows))


@groups.command(name="add")
@click.argument("name")
@click.pass_context
@async_command
async def add_group(ctx, name: str):
    """Add a muscle group."""
    async with open_engine(ctx) as engine:
        group = engine.add_muscle_group(name)
        if group is None:
            echo_error(f"Could not add '{name}' (empty or already exists)")
            ctx.exit(1)
        echo_success(f"Added muscle group {group.name} ({short_id(group.id)})")


@groups.command(name="rename")
@click.argument("group_ref")
@click.argument("name")
@click.pass_context
@async_command
async def rename_group(ctx, group_ref: str, name: str):
    """Rename a muscle group."""
    async with open_engine(ctx) as engine:
        group = find_group(engine, group_ref)
        if group is None:
            echo_error(f"Muscle group '{group_ref}' not found")
            ctx.exit(1)
        if not engine.update_muscle_group(group.id, name):
            echo_error(f"Could not rename to '{name}' (empty or already exists)")
            ctx.exit(1)
        echo_success(f"Renamed {group.name} to {name.strip()}")


@click.group()
@click.pass_context
def exercises(ctx):
    """Manage the exercises of each muscle group."""
    ensure_initialized(ctx)


@exercises.command(name="list")
@click.argument("group_ref", required=False)
@click.pass_context
@async_command
async def list_exercises(ctx, group_ref: str | None):
    """List exercises, optionally for one muscle group."""
    async with open_engine(ctx) as engine:
        if group_ref:
            group = find_group(engine, group_ref)
            if group is None:
                echo_error(f"Muscle group '{group_ref}' not found")
                ctx.exit(1)
            selected = [group]
        else:
            selected = engine.muscle_groups

        rows = [
            [short_id(exercise.id), group.name, exercise.name, exercise.unit.label]
            for group in selected
            for exercise in group.exercises
        ]
        if not rows:
            echo_info("No exercises found.")
            return
        click.echo()
        click.echo(format_table(["ID", "Group", "Exercise", "Unit"], rows))


@exercises.command(name="add")
@click.argument("group_ref")
@click.argument("name")
@click.option(
    "--unit",
    "-u",
    type=UNIT_CHOICE,
    default=ExerciseUnit.WEIGHT_REPS.value,
    show_default=True,
    help="How the exercise is measured",
)
@click.pass_context
@async_command
async def add_exercise(ctx, group_ref: str, name: str, unit: str):
    """Add an exercise to a muscle group."""
    async with open_engine(ctx) as engine:
        group = find_group(engine, group_ref)
        if group is None:
            echo_error(f"Muscle group '{group_ref}' not found")
            ctx.exit(1)
        exercise = engine.add_exercise(group.id, name, ExerciseUnit(unit))
        if exercise is None:
            echo_error(f"Could not add '{name}' to {group.name} (empty or already exists)")
            ctx.exit(1)
        echo_success(
            f"Added {exercise.name} ({exercise.unit.label}) to {group.name}"
        )


@exercises.command(name="update")
@click.argument("group_ref")
@click.argument("exercise_ref")
@click.option("--name", "-n", help="New name")
@click.option("--unit", "-u", type=UNIT_CHOICE, help="New unit")
@click.pass_context
@async_command
async def update_exercise(
    ctx, group_ref: str, exercise_ref: str, name: str | None, unit: str | None
):
    """Rename an exercise or change its unit."""
    async with open_engine(ctx) as engine:
        group = find_group(engine, group_ref)
        exercise = find_exercise(group, exercise_ref) if group else None
        if exercise is None:
            echo_error(f"Exercise '{exercise_ref}' not found")
            ctx.exit(1)

        new_name = name if name is not None else exercise.name
        new_unit = ExerciseUnit(unit) if unit else exercise.unit
        if not engine.update_exercise(group.id, exercise.id, new_name, new_unit):
            echo_error(f"Could not update {exercise.name} (empty or duplicate name)")
            ctx.exit(1)
        echo_success(f"Updated {new_name.strip()} ({new_unit.label})")
