"""Rest timer countdown between sets."""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger(__name__)


class TimerState(str, Enum):
    """Rest timer lifecycle states."""

    INACTIVE = "inactive"
    RUNNING = "running"
    PAUSED = "paused"
    EXPIRED = "expired"


def _current_task() -> asyncio.Task | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None


class RestTimer:
    """Countdown state machine with a one-tick-per-interval background loop.

    Inactive -> Running <-> Paused, Running -> Expired, Expired -> Running
    (restart), any state -> Inactive (dismiss).

    ``completion_id`` increases by one on every expiry, so observers that
    re-read state repeatedly can fire a completion cue exactly once per
    expiry. ``collapsed`` is a display flag only and does not affect the
    countdown.
    """

    def __init__(
        self,
        on_change: Callable[[], None] | None = None,
        interval: float = 1.0,
    ):
        self.on_change = on_change
        self.interval = interval
        self.total_seconds: int | None = None
        self.remaining_seconds: int | None = None
        self.sound_enabled = True
        self.vibration_enabled = True
        self.collapsed = False
        self.completion_id = 0
        self._running = False
        self._task: asyncio.Task | None = None

    # -- derived state -------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.total_seconds is not None

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_complete(self) -> bool:
        return self.is_active and not self._running and (self.remaining_seconds or 0) == 0

    @property
    def elapsed_seconds(self) -> int | None:
        if self.total_seconds is None or self.remaining_seconds is None:
            return None
        return self.total_seconds - self.remaining_seconds

    @property
    def state(self) -> TimerState:
        if not self.is_active:
            return TimerState.INACTIVE
        if self._running:
            return TimerState.RUNNING
        if self.is_complete:
            return TimerState.EXPIRED
        return TimerState.PAUSED

    # -- transitions ---------------------------------------------------------

    def start(
        self,
        duration_seconds: int,
        sound_enabled: bool = True,
        vibration_enabled: bool = True,
    ) -> bool:
        """Start a new countdown, replacing any existing one."""
        if duration_seconds <= 0:
            return False
        self._stop_loop()
        self.total_seconds = duration_seconds
        self.remaining_seconds = duration_seconds
        self.sound_enabled = sound_enabled
        self.vibration_enabled = vibration_enabled
        self.collapsed = False
        self._running = True
        self._start_loop()
        self._changed()
        return True

    def pause(self) -> bool:
        if not self._running or self.remaining_seconds is None:
            return False
        self._stop_loop()
        self._running = False
        self._changed()
        return True

    def resume(self) -> bool:
        if self._running or self.remaining_seconds is None or self.remaining_seconds <= 0:
            return False
        self._running = True
        self._start_loop()
        self._changed()
        return True

    def restart(self) -> bool:
        """Start again from the full duration with the current preferences."""
        if self.total_seconds is None:
            return False
        return self.start(self.total_seconds, self.sound_enabled, self.vibration_enabled)

    def dismiss(self) -> bool:
        if self.total_seconds is None and self.remaining_seconds is None:
            return False
        self._stop_loop()
        self._running = False
        self.total_seconds = None
        self.remaining_seconds = None
        self.collapsed = False
        self._changed()
        return True

    def set_collapsed(self, value: bool) -> bool:
        if self.collapsed == value or not self.is_active:
            return False
        self.collapsed = value
        self._changed()
        return True

    def reset(self) -> None:
        """Drop all countdown state, including the completion counter, without notifying."""
        self._stop_loop()
        self._running = False
        self.total_seconds = None
        self.remaining_seconds = None
        self.collapsed = False
        self.completion_id = 0

    def close(self) -> None:
        """Cancel the background loop, if any."""
        self._stop_loop()

    def tick(self) -> None:
        """Advance a running countdown by one second."""
        if not self._running or self.remaining_seconds is None:
            return
        remaining = self.remaining_seconds - 1
        if remaining <= 0:
            self._stop_loop()
            self.remaining_seconds = 0
            self._running = False
            self.completion_id += 1
            logger.debug("Rest timer expired (completion %d)", self.completion_id)
        else:
            self.remaining_seconds = remaining
        self._changed()

    def to_dict(self) -> dict:
        """Snapshot of the timer for display."""
        return {
            "state": self.state.value,
            "total_seconds": self.total_seconds,
            "remaining_seconds": self.remaining_seconds,
            "elapsed_seconds": self.elapsed_seconds,
            "sound_enabled": self.sound_enabled,
            "vibration_enabled": self.vibration_enabled,
            "collapsed": self.collapsed,
            "completion_id": self.completion_id,
        }

    # -- internals -----------------------------------------------------------

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def _start_loop(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop: state is still tracked and tick() can drive it
            self._task = None
            return
        self._task = loop.create_task(self._run())

    def _stop_loop(self) -> None:
        task, self._task = self._task, None
        if task is not None and task is not _current_task():
            task.cancel()

    async def _run(self) -> None:
        this_task = asyncio.current_task()
        while True:
            await asyncio.sleep(self.interval)
            # A restart from inside a tick callback hands over to a new task
            if self._task is not this_task or not self._running:
                return
            self.tick()
