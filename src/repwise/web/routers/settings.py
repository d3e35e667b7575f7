"""Settings routes."""

from typing import Literal

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from ..deps import get_engine

router = APIRouter(prefix="/api/settings", tags=["settings"])


class SettingsUpdate(BaseModel):
    """Partial update; omitted fields keep their value."""

    weight_unit: Literal["kg", "lb"] | None = None
    distance_unit: Literal["km", "mi"] | None = None
    half_reps_enabled: bool | None = None
    comments_enabled: bool | None = None
    auto_finish_workout_enabled: bool | None = None
    auto_finish_workout_hours: int | None = Field(default=None, ge=1)
    auto_filter_history_enabled: bool | None = None
    timer_sound_enabled: bool | None = None
    timer_vibration_enabled: bool | None = None


SETTERS = {
    "weight_unit": "set_weight_unit",
    "distance_unit": "set_distance_unit",
    "half_reps_enabled": "set_half_reps_enabled",
    "comments_enabled": "set_comments_enabled",
    "auto_finish_workout_enabled": "set_auto_finish_workout_enabled",
    "auto_finish_workout_hours": "set_auto_finish_workout_hours",
    "auto_filter_history_enabled": "set_auto_filter_history_enabled",
}


@router.get("")
async def get_settings(request: Request):
    return get_engine(request).settings.to_dict()


@router.patch("")
async def update_settings(request: Request, body: SettingsUpdate):
    engine = get_engine(request)
    changes = body.model_dump(exclude_none=True)
    for field_name, setter in SETTERS.items():
        if field_name in changes:
            getattr(engine, setter)(changes[field_name])
    engine.update_timer_preferences(
        sound_enabled=changes.get("timer_sound_enabled"),
        vibration_enabled=changes.get("timer_vibration_enabled"),
    )
    return engine.settings.to_dict()
