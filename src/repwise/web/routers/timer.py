"""Rest timer routes."""

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from ..deps import get_engine, rejected

router = APIRouter(prefix="/api/timer", tags=["timer"])


class TimerStart(BaseModel):
    duration_seconds: int = Field(gt=0)
    sound_enabled: bool | None = None
    vibration_enabled: bool | None = None


class TimerCollapse(BaseModel):
    collapsed: bool


@router.get("")
async def timer_state(request: Request):
    return get_engine(request).timer.to_dict()


@router.post("/start")
async def start_timer(request: Request, body: TimerStart):
    """Start (or replace) the countdown. Cue preferences default to the saved ones."""
    engine = get_engine(request)
    engine.start_timer(body.duration_seconds, body.sound_enabled, body.vibration_enabled)
    return engine.timer.to_dict()


def _timer_action(name: str, action: str, reason: str):
    @router.post(f"/{name}", name=f"{name}_timer")
    async def endpoint(request: Request):
        engine = get_engine(request)
        if not getattr(engine, action)():
            raise rejected(reason)
        return engine.timer.to_dict()

    return endpoint


pause = _timer_action("pause", "pause_timer", "Timer is not running")
resume = _timer_action("resume", "resume_timer", "Timer is not paused")
restart = _timer_action("restart", "restart_timer", "No timer to restart")
dismiss = _timer_action("dismiss", "dismiss_timer", "No timer to dismiss")


@router.post("/collapse")
async def collapse_timer(request: Request, body: TimerCollapse):
    engine = get_engine(request)
    engine.set_timer_collapsed(body.collapsed)
    return engine.timer.to_dict()
