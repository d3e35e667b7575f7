"""Initialize project command."""

import click

from ..db import get_data_dir, get_db_path, init_db
from ..models.exercises import ExerciseUnit
from .base import async_command, echo_info, echo_success, open_engine, selected_data_dir

# Starter library for an empty log
DEFAULT_LIBRARY = {
    "Chest": [
        ("Bench Press", ExerciseUnit.WEIGHT_REPS),
        ("Push Up", ExerciseUnit.REPS),
    ],
    "Back": [
        ("Deadlift", ExerciseUnit.WEIGHT_REPS),
        ("Pull Up", ExerciseUnit.REPS),
    ],
    "Legs": [
        ("Squat", ExerciseUnit.WEIGHT_REPS),
        ("Wall Sit", ExerciseUnit.TIME),
    ],
    "Core": [
        ("Plank", ExerciseUnit.TIME),
        ("Farmer Carry", ExerciseUnit.WEIGHT_TIME),
    ],
    "Cardio": [
        ("Run", ExerciseUnit.DISTANCE_TIME),
        ("Row", ExerciseUnit.DISTANCE),
    ],
}


@click.command()
@click.option("--empty", is_flag=True, help="Do not add the starter exercise library")
@click.pass_context
@async_command
async def init(ctx: click.Context, empty: bool):
    """Initialize the repwise data directory and database.

    Creates the SQLite database and, unless --empty is given, a small
    starter library of muscle groups and exercises.
    """
    data_dir = get_data_dir(selected_data_dir(ctx))
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing repwise in {data_dir}")
    await init_db(db_path)
    echo_success("Database initialized")

    if not empty:
        async with open_engine(ctx) as engine:
            if engine.muscle_groups:
                echo_info("Existing library kept")
            else:
                count = 0
                for group_name, exercises in DEFAULT_LIBRARY.items():
                    group = engine.add_muscle_group(group_name)
                    for name, unit in exercises:
                        if engine.add_exercise(group.id, name, unit):
                            count += 1
                echo_success(
                    f"Exercise library populated ({len(DEFAULT_LIBRARY)} groups, "
                    f"{count} exercises)"
                )

    click.echo()
    click.echo("repwise is ready to use!")
    click.echo()
    click.echo("Next steps:")
    click.echo("  repwise workout start")
    click.echo('  repwise workout start-exercise Chest "Bench Press"')
    click.echo('  repwise sets add -e "weight=100,reps=5"')
