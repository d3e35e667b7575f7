"""Rest timer command."""

import asyncio

import click

from ..utils.formatting import format_clock
from .base import (
    async_command,
    echo_error,
    echo_success,
    ensure_initialized,
    open_engine,
    parse_duration,
)


@click.command()
@click.argument("duration")
@click.option("--sound/--no-sound", default=None, help="Ring the terminal bell when done")
@click.pass_context
@async_command
async def timer(ctx, duration: str, sound: bool | None):
    """Count down a rest period in the terminal.

    DURATION accepts 90, 1:30 or 1m30s.
    """
    ensure_initialized(ctx)

    try:
        seconds = parse_duration(duration)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)
    if seconds <= 0:
        echo_error("Duration must be positive")
        ctx.exit(1)

    async with open_engine(ctx) as engine:
        rest = engine.timer
        done = asyncio.Event()
        seen_completion = rest.completion_id

        def render():
            if rest.completion_id != seen_completion:
                done.set()
            elif rest.is_running:
                click.echo(f"\r  Rest {format_clock(rest.remaining_seconds)} ", nl=False)

        engine.add_listener(render)
        engine.start_timer(seconds, sound_enabled=sound)
        try:
            await done.wait()
        finally:
            engine.remove_listener(render)

        click.echo()
        if rest.sound_enabled:
            click.echo("\a", nl=False)
        echo_success("Rest over!")
        engine.dismiss_timer()
