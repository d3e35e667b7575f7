"""Settings commands."""

import click

from ..models.settings import DISTANCE_UNITS, WEIGHT_UNITS
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    open_engine,
)

# Setting name -> (engine setter, value type); timer cues share one setter
SETTERS = {
    "weight-unit": ("set_weight_unit", click.STRING),
    "distance-unit": ("set_distance_unit", click.STRING),
    "half-reps": ("set_half_reps_enabled", click.BOOL),
    "comments": ("set_comments_enabled", click.BOOL),
    "auto-finish": ("set_auto_finish_workout_enabled", click.BOOL),
    "auto-finish-hours": ("set_auto_finish_workout_hours", click.INT),
    "auto-filter-history": ("set_auto_filter_history_enabled", click.BOOL),
    "timer-sound": (None, click.BOOL),
    "timer-vibration": (None, click.BOOL),
}


def _on_off(value: bool) -> str:
    return "on" if value else "off"


@click.group()
@click.pass_context
def settings(ctx):
    """View and change preferences."""
    ensure_initialized(ctx)


@settings.command(name="show")
@click.pass_context
@async_command
async def show_settings(ctx):
    """Show current settings."""
    async with open_engine(ctx) as engine:
        current = engine.settings
        rows = [
            ("weight-unit", current.weight_unit),
            ("distance-unit", current.distance_unit),
            ("half-reps", _on_off(current.half_reps_enabled)),
            ("comments", _on_off(current.comments_enabled)),
            ("auto-finish", _on_off(current.auto_finish_workout_enabled)),
            ("auto-finish-hours", str(current.auto_finish_workout_hours)),
            ("auto-filter-history", _on_off(current.auto_filter_history_enabled)),
            ("timer-sound", _on_off(current.timer_sound_enabled)),
            ("timer-vibration", _on_off(current.timer_vibration_enabled)),
        ]
        click.echo()
        for name, value in rows:
            click.echo(f"  {name:<22}{value}")


@settings.command(name="set")
@click.argument("name", type=click.Choice(list(SETTERS)))
@click.argument("value")
@click.pass_context
@async_command
async def set_setting(ctx, name: str, value: str):
    """Change a setting.

    \b
    Examples:
        repwise settings set weight-unit lb
        repwise settings set half-reps on
        repwise settings set auto-finish-hours 6
    """
    setter, parse = SETTERS[name]
    try:
        parsed = parse.convert(value, None, ctx)
    except click.BadParameter as e:
        echo_error(f"Invalid value for {name}: {e.message}")
        ctx.exit(1)

    if name == "weight-unit" and parsed not in WEIGHT_UNITS:
        echo_error(f"Weight unit must be one of: {', '.join(WEIGHT_UNITS)}")
        ctx.exit(1)
    if name == "distance-unit" and parsed not in DISTANCE_UNITS:
        echo_error(f"Distance unit must be one of: {', '.join(DISTANCE_UNITS)}")
        ctx.exit(1)
    if name == "auto-finish-hours" and parsed < 1:
        echo_error("auto-finish-hours must be at least 1")
        ctx.exit(1)

    async with open_engine(ctx) as engine:
        if name == "timer-sound":
            changed = engine.update_timer_preferences(sound_enabled=parsed)
        elif name == "timer-vibration":
            changed = engine.update_timer_preferences(vibration_enabled=parsed)
        else:
            changed = getattr(engine, setter)(parsed)

        if changed:
            echo_success(f"{name} set to {value}")
        else:
            echo_info(f"{name} already set to {value}")
