"""Export and import commands."""

import json
from pathlib import Path

import click

from ..db import StateRepository, get_db_path
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    open_engine,
    selected_data_dir,
)


@click.command()
@click.option(
    "--clipboard",
    "-c",
    is_flag=True,
    help="Copy to clipboard instead of writing a file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write to this file instead of the exports directory",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the JSON document")
@click.option("--list", "list_only", is_flag=True, help="List earlier exports")
@click.pass_context
@async_command
async def export(
    ctx, clipboard: bool, output: str | None, to_stdout: bool, list_only: bool
):
    """Export all workout data as JSON.

    By default a timestamped file is written to the exports directory
    inside the data directory. The document can be restored with
    'repwise import'.

    Examples:
        # Save to data/exports/
        repwise export

        # Copy to clipboard
        repwise export --clipboard

        # Save to a chosen file
        repwise export -o backup.json

        # Show earlier exports
        repwise export --list
    """
    ensure_initialized(ctx)

    if list_only:
        repo = StateRepository(get_db_path(selected_data_dir(ctx)))
        exports = await repo.list_exports()
        if not exports:
            echo_info("No exports yet")
            return
        rows = [
            [item["created_at"], item["path"], "" if item["exists"] else "(missing)"]
            for item in exports
        ]
        click.echo()
        click.echo(format_table(["Created", "Path", ""], rows))
        return

    async with open_engine(ctx) as engine:
        if clipboard or output or to_stdout:
            content = json.dumps(engine.serialize(), indent=2)

            if clipboard:
                try:
                    import pyperclip

                    pyperclip.copy(content)
                    echo_success("Copied to clipboard!")
                except ImportError:
                    echo_error(
                        "pyperclip not installed. Install with: pip install pyperclip"
                    )
                    ctx.exit(1)

            elif output:
                Path(output).write_text(content, encoding="utf-8")
                echo_success(f"Exported to {output}")

            else:
                click.echo(content)
            return

        path = await engine.create_export_file()
        if path is None:
            echo_error("Export failed (see log for details)")
            ctx.exit(1)
        echo_success(f"Exported to {path}")


@click.command(name="import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@async_command
async def import_data(ctx, file: str, yes: bool):
    """Replace all workout data with an exported JSON file."""
    ensure_initialized(ctx)

    if not yes and not click.confirm(
        "This replaces your library, history and settings. Continue?"
    ):
        echo_info("Import cancelled")
        return

    async with open_engine(ctx) as engine:
        if not await engine.import_from_file(file):
            echo_error(f"Could not import {file}: not a valid repwise export")
            ctx.exit(1)
        echo_success(
            f"Imported {len(engine.muscle_groups)} muscle groups and "
            f"{len(engine.completed_sessions)} workouts"
        )
