"""CLI entry point for repwise."""

import logging
from pathlib import Path

import click

from . import __version__
from .commands import (
    exercises,
    export,
    groups,
    history,
    import_data,
    init,
    records,
    serve,
    sets,
    settings,
    timer,
    workout,
)
from .db.engine import DATA_DIR_ENV


@click.group()
@click.version_option(version=__version__, prog_name="repwise")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=DATA_DIR_ENV,
    help="Where the database and exports live (default: ./data)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, data_dir: Path | None, verbose: bool):
    """repwise: a workout log with supersets, rest timer and personal records.

    Example usage:

        # Initialize the project
        repwise init

        # Log a workout
        repwise workout start
        repwise workout start-exercise Chest "Bench Press"
        repwise sets add -e "weight=100,reps=5"
        repwise timer 90
        repwise workout finish

        # Review
        repwise history list
        repwise records show Chest "Bench Press"
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir


# Register commands
main.add_command(init)
main.add_command(groups)
main.add_command(exercises)
main.add_command(workout)
main.add_command(sets)
main.add_command(history)
main.add_command(records)
main.add_command(settings)
main.add_command(export)
main.add_command(import_data)
main.add_command(timer)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
