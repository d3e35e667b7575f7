"""The workout engine: library, sessions, sets, settings and rest timer.

All mutators are synchronous with respect to in-memory state. A successful
mutation notifies every listener exactly once before returning, then hands
a snapshot of the full state to the gateway as a fire-and-forget write.
Invalid input is rejected silently: the mutator returns ``None`` or
``False`` and state is left untouched. Nothing here raises to the caller.
"""

import asyncio
import json
import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Protocol, runtime_checkable
from uuid import uuid4

from ..models.exercises import Exercise, ExerciseUnit, MuscleGroup
from ..models.settings import DISTANCE_UNITS, WEIGHT_UNITS, AppSettings
from ..models.state import AppState, StateDecodeError
from ..models.workout import (
    WorkoutExerciseLog,
    WorkoutSession,
    WorkoutSet,
    WorkoutSetEntry,
)
from .records import current_prs
from .rest_timer import RestTimer

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


@runtime_checkable
class StateGateway(Protocol):
    """Storage for the serialized state blob.

    Implementations must not raise: failures are reported as ``None`` or
    ``False``. ``write_state`` may be called again before an earlier call
    finishes; the last call issued must win.
    """

    async def read_state(self) -> dict | None:
        ...

    async def write_state(self, state: dict) -> bool:
        ...

    async def create_export_file(self, state: dict) -> Path | None:
        ...


def _new_id() -> str:
    return str(uuid4())


def _coerce_unit(unit) -> ExerciseUnit | None:
    try:
        return ExerciseUnit(unit)
    except ValueError:
        return None


class WorkoutEngine:
    """Stateful controller for the workout log."""

    def __init__(
        self,
        gateway: StateGateway,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = _new_id,
        timer_interval: float = 1.0,
    ):
        self.gateway = gateway
        self._clock = clock
        self._new_id = id_factory
        self._state = AppState()
        self._listeners: list[Listener] = []
        self._pending_writes: set[asyncio.Task] = set()
        self._initialized = False
        self.timer = RestTimer(on_change=self._notify, interval=timer_interval)

    # -- observers -----------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _commit(self) -> None:
        """Notify listeners and persist after a successful mutation."""
        self._notify()
        self._schedule_persist()

    # -- read-only views -----------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def muscle_groups(self) -> list[MuscleGroup]:
        return list(self._state.muscle_groups)

    @property
    def completed_sessions(self) -> list[WorkoutSession]:
        """Finished workouts, most recent first."""
        return list(self._state.completed_sessions)

    @property
    def active_session(self) -> WorkoutSession | None:
        return self._state.active_session

    @property
    def active_exercises(self) -> list[WorkoutExerciseLog]:
        session = self._state.active_session
        return list(session.exercises) if session else []

    @property
    def active_exercise(self) -> WorkoutExerciseLog | None:
        """The open exercise log of the active session, if any."""
        session = self._state.active_session
        if session is None:
            return None
        for log in reversed(session.exercises):
            if not log.is_complete:
                return log
        return None

    @property
    def active_workout_muscle_group_id(self) -> str | None:
        """Group of the open exercise, else of the last exercise with sets."""
        session = self._state.active_session
        if session is None or not session.exercises:
            return None
        open_log = self.active_exercise
        if open_log is not None:
            return open_log.muscle_group_id
        for log in reversed(session.exercises):
            if log.has_sets:
                return log.muscle_group_id
        return None

    @property
    def settings(self) -> AppSettings:
        return self._state.settings

    def muscle_group_by_id(self, group_id: str) -> MuscleGroup | None:
        for group in self._state.muscle_groups:
            if group.id == group_id:
                return group
        return None

    def exercise_by_id(self, exercise_id: str) -> Exercise | None:
        for group in self._state.muscle_groups:
            exercise = group.find_exercise(exercise_id)
            if exercise is not None:
                return exercise
        return None

    def completed_sessions_by_date(self) -> dict[date, list[WorkoutSession]]:
        """Completed sessions grouped by the calendar day they started on."""
        grouped: dict[date, list[WorkoutSession]] = {}
        for session in self._state.completed_sessions:
            grouped.setdefault(session.started_at.date(), []).append(session)
        return grouped

    def sessions_for_day(self, day: date | datetime) -> list[WorkoutSession]:
        if isinstance(day, datetime):
            day = day.date()
        return list(self.completed_sessions_by_date().get(day, []))

    # -- persistence ---------------------------------------------------------

    def serialize(self) -> dict:
        """Full state as a JSON-compatible dict. The timer is never included."""
        return self._state.to_dict()

    @staticmethod
    def deserialize(blob) -> AppState:
        """Decode a state blob.

        Raises:
            StateDecodeError: If the top-level shape is invalid
        """
        return AppState.from_dict(blob)

    def load_state(self, state: AppState) -> None:
        """Replace all state wholesale. The timer is reset."""
        self.timer.reset()
        self._state = state

    async def initialize(self) -> None:
        """Load persisted state once. Later calls do nothing."""
        if self._initialized:
            return

        blob = await self.gateway.read_state()
        state = AppState()
        if blob is not None:
            try:
                state = self.deserialize(blob)
            except StateDecodeError as e:
                logger.warning("Discarding unreadable saved state: %s", e)
        self.load_state(state)
        self._initialized = True
        logger.info(
            "Loaded %d muscle groups and %d completed sessions",
            len(self._state.muscle_groups),
            len(self._state.completed_sessions),
        )
        self._auto_finish_stale_workout()
        self._notify()

    def _auto_finish_stale_workout(self) -> None:
        settings = self._state.settings
        session = self._state.active_session
        if not settings.auto_finish_workout_enabled or session is None:
            return
        age = self._clock() - session.started_at
        if age >= timedelta(hours=settings.auto_finish_workout_hours):
            logger.info("Auto-finishing workout %s started %s ago", session.id, age)
            self.finish_workout()

    def _schedule_persist(self) -> None:
        if not self._initialized:
            return
        snapshot = self.serialize()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; change not persisted")
            return
        task = loop.create_task(self.gateway.write_state(snapshot))
        self._pending_writes.add(task)
        task.add_done_callback(self._write_finished)

    def _write_finished(self, task: asyncio.Task) -> None:
        self._pending_writes.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning("State write failed: %s", error)

    async def flush(self) -> None:
        """Wait for all outstanding state writes."""
        while self._pending_writes:
            await asyncio.gather(*list(self._pending_writes), return_exceptions=True)

    async def import_from_json(self, source: str) -> bool:
        """Replace all state with an exported JSON document.

        Returns False, leaving state untouched, if the document cannot be
        parsed or has the wrong shape.
        """
        try:
            state = self.deserialize(json.loads(source))
        except (ValueError, TypeError) as e:
            logger.info("Import rejected: %s", e)
            return False

        self.load_state(state)
        self._initialized = True
        self._notify()
        # Older queued snapshots must land before the imported one
        await self.flush()
        await self.gateway.write_state(self.serialize())
        logger.info("Imported %d completed sessions", len(state.completed_sessions))
        return True

    async def import_from_file(self, path: Path | str) -> bool:
        try:
            contents = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.info("Could not read import file %s: %s", path, e)
            return False
        return await self.import_from_json(contents)

    async def create_export_file(self) -> Path | None:
        """Write a standalone snapshot of the current state for sharing."""
        if not self._initialized:
            await self.initialize()
        return await self.gateway.create_export_file(self.serialize())

    def close(self) -> None:
        self.timer.close()

    # -- library -------------------------------------------------------------

    def add_muscle_group(self, name: str) -> MuscleGroup | None:
        trimmed = name.strip()
        if not trimmed or self._group_name_taken(trimmed):
            return None
        group = MuscleGroup(id=self._new_id(), name=trimmed)
        self._state.muscle_groups.append(group)
        self._commit()
        return group

    def update_muscle_group(self, group_id: str, name: str) -> bool:
        trimmed = name.strip()
        if not trimmed:
            return False
        groups = self._state.muscle_groups
        index = next((i for i, g in enumerate(groups) if g.id == group_id), -1)
        if index == -1 or self._group_name_taken(trimmed, exclude_id=group_id):
            return False
        groups[index] = groups[index].copy_with(name=trimmed)
        self._commit()
        return True

    def _group_name_taken(self, name: str, exclude_id: str | None = None) -> bool:
        lowered = name.lower()
        return any(
            group.name.lower() == lowered and group.id != exclude_id
            for group in self._state.muscle_groups
        )

    def add_exercise(
        self, group_id: str, name: str, unit: ExerciseUnit
    ) -> Exercise | None:
        group = self.muscle_group_by_id(group_id)
        trimmed = name.strip()
        unit = _coerce_unit(unit)
        if group is None or unit is None or not trimmed:
            return None
        if group.has_exercise_named(trimmed):
            return None
        exercise = Exercise(id=self._new_id(), name=trimmed, unit=unit)
        group.exercises.append(exercise)
        self._commit()
        return exercise

    def update_exercise(
        self, group_id: str, exercise_id: str, name: str, unit: ExerciseUnit
    ) -> bool:
        group = self.muscle_group_by_id(group_id)
        trimmed = name.strip()
        unit = _coerce_unit(unit)
        if group is None or unit is None or not trimmed:
            return False
        index = next(
            (i for i, e in enumerate(group.exercises) if e.id == exercise_id), -1
        )
        if index == -1 or group.has_exercise_named(trimmed, exclude_id=exercise_id):
            return False
        group.exercises[index] = group.exercises[index].copy_with(
            name=trimmed, unit=unit
        )
        self._commit()
        return True

    # -- session lifecycle ---------------------------------------------------

    def start_workout(self) -> bool:
        """Start a workout. Returns False if one was already active."""
        if self._state.active_session is not None:
            return False
        self._state.active_session = WorkoutSession(
            id=self._new_id(), started_at=self._clock()
        )
        self._commit()
        return True

    def finish_workout(self) -> WorkoutSession | None:
        """End the active workout.

        Exercise logs without sets are dropped. If nothing is left the
        session is discarded; otherwise open logs are closed and the session
        goes to the front of the history.

        Returns:
            The session added to history, or None
        """
        session = self._state.active_session
        if session is None:
            return None

        session.exercises = [log for log in session.exercises if log.has_sets]
        self._state.active_session = None
        if not session.exercises:
            logger.debug("Discarding workout %s with no sets", session.id)
            self._commit()
            return None

        finished_at = self._clock()
        for log in session.exercises:
            if log.finished_at is None:
                log.finished_at = finished_at
        self._state.completed_sessions.insert(0, session)
        self._commit()
        return session

    # -- exercise lifecycle --------------------------------------------------

    def start_exercise(
        self, group_id: str, exercise_ids: list[str]
    ) -> WorkoutExerciseLog | None:
        """Open a new exercise (or superset) log in the active workout."""
        session = self._state.active_session
        if session is None or self.active_exercise is not None:
            return None
        group = self.muscle_group_by_id(group_id)
        if group is None:
            return None
        unique_ids = list(dict.fromkeys(exercise_ids))
        if not unique_ids or not set(unique_ids) <= group.exercise_ids():
            return None

        log = WorkoutExerciseLog(
            id=self._new_id(),
            muscle_group_id=group_id,
            exercise_ids=unique_ids,
            started_at=self._clock(),
        )
        session.exercises.append(log)
        self._commit()
        return log

    def _active_log(self, log_id: str) -> WorkoutExerciseLog | None:
        session = self._state.active_session
        if session is None:
            return None
        return session.find_exercise(log_id)

    def cancel_exercise(self, log_id: str) -> bool:
        """Remove an exercise log that has no sets yet."""
        log = self._active_log(log_id)
        if log is None or log.has_sets:
            return False
        self._state.active_session.exercises.remove(log)
        self._commit()
        return True

    def complete_exercise(self, log_id: str) -> bool:
        log = self._active_log(log_id)
        if log is None or not log.has_sets:
            return False
        log.finished_at = self._clock()
        self._commit()
        return True

    def reopen_exercise(self, log_id: str) -> bool:
        log = self._active_log(log_id)
        if log is None:
            return False
        current = self.active_exercise
        if current is not None and current.id != log_id:
            return False
        log.finished_at = None
        self._commit()
        return True

    def remove_active_exercise(self, log_id: str) -> bool:
        """Remove an exercise log from the active workout, sets included."""
        log = self._active_log(log_id)
        if log is None:
            return False
        self._state.active_session.exercises.remove(log)
        self._commit()
        return True

    # -- sets ----------------------------------------------------------------

    def _valid_entries(
        self, log: WorkoutExerciseLog, entries: list[WorkoutSetEntry]
    ) -> list[WorkoutSetEntry]:
        """Entries that carry metrics and belong to the log's muscle group."""
        group = self.muscle_group_by_id(log.muscle_group_id)
        if group is None:
            return []
        allowed = group.exercise_ids()
        return [
            entry
            for entry in entries
            if entry.has_metrics and entry.exercise_id in allowed
        ]

    @staticmethod
    def _merge_exercise_ids(
        log: WorkoutExerciseLog, entries: list[WorkoutSetEntry]
    ) -> None:
        for entry in entries:
            if entry.exercise_id not in log.exercise_ids:
                log.exercise_ids.append(entry.exercise_id)

    def add_set_to_exercise(
        self, log_id: str, entries: list[WorkoutSetEntry]
    ) -> WorkoutSet | None:
        """Log a set. Invalid entries are dropped; fails if none remain.

        Adding a set re-opens a completed exercise log.
        """
        log = self._active_log(log_id)
        if log is None:
            return None
        valid = self._valid_entries(log, entries)
        if not valid:
            return None

        self._merge_exercise_ids(log, valid)
        workout_set = WorkoutSet(
            id=self._new_id(),
            muscle_group_id=log.muscle_group_id,
            entries=valid,
            timestamp=self._clock(),
        )
        log.sets.append(workout_set)
        log.finished_at = None
        self._commit()
        return workout_set

    def update_set_in_exercise(
        self, log_id: str, set_id: str, entries: list[WorkoutSetEntry]
    ) -> WorkoutSet | None:
        """Replace a set's entries, keeping its id and original timestamp."""
        log = self._active_log(log_id)
        if log is None:
            return None
        valid = self._valid_entries(log, entries)
        if not valid:
            return None
        index = log.find_set(set_id)
        if index == -1:
            return None

        self._merge_exercise_ids(log, valid)
        existing = log.sets[index]
        updated = WorkoutSet(
            id=existing.id,
            muscle_group_id=log.muscle_group_id,
            entries=valid,
            timestamp=existing.timestamp,
        )
        log.sets[index] = updated
        log.finished_at = None
        self._commit()
        return updated

    def remove_set_from_exercise(self, log_id: str, set_id: str) -> bool:
        log = self._active_log(log_id)
        if log is None:
            return False
        index = log.find_set(set_id)
        if index == -1:
            return False
        del log.sets[index]
        if not log.sets:
            log.finished_at = None
        self._commit()
        return True

    def reorder_sets_in_exercise(
        self, log_id: str, old_index: int, new_index: int
    ) -> bool:
        """Move a set, drag-and-drop style.

        ``new_index`` is the slot before removal, so moving forward lands
        one position earlier: [A, B, C, D] with (0, 3) gives [B, C, A, D].
        """
        log = self._active_log(log_id)
        if log is None:
            return False
        if not 0 <= old_index < len(log.sets):
            return False
        if not 0 <= new_index <= len(log.sets):
            return False
        target = new_index - 1 if new_index > old_index else new_index
        moved = log.sets.pop(old_index)
        log.sets.insert(target, moved)
        self._commit()
        return True

    def remove_completed_set(self, session_id: str, log_id: str, set_id: str) -> bool:
        """Delete a set from history, pruning emptied logs and sessions."""
        sessions = self._state.completed_sessions
        session = next((s for s in sessions if s.id == session_id), None)
        if session is None:
            return False
        log = session.find_exercise(log_id)
        if log is None:
            return False
        index = log.find_set(set_id)
        if index == -1:
            return False

        del log.sets[index]
        if not log.sets:
            session.exercises.remove(log)
        if not session.exercises:
            sessions.remove(session)
        self._commit()
        return True

    # -- personal records ----------------------------------------------------

    def current_prs(self, exercise_id: str) -> set[str]:
        """Ids of the sets currently holding a PR for an exercise."""
        exercise = self.exercise_by_id(exercise_id)
        if exercise is None:
            return set()
        sessions = list(self._state.completed_sessions)
        if self._state.active_session is not None:
            sessions.append(self._state.active_session)
        return current_prs(sessions, exercise_id, exercise.unit)

    def is_personal_record(self, workout_set: WorkoutSet) -> bool:
        if len(workout_set.entries) != 1:
            return False
        return workout_set.id in self.current_prs(workout_set.entries[0].exercise_id)

    # -- settings ------------------------------------------------------------

    def _update_setting(self, name: str, value) -> bool:
        if getattr(self._state.settings, name) == value:
            return False
        setattr(self._state.settings, name, value)
        self._commit()
        return True

    def set_weight_unit(self, unit: str) -> bool:
        if unit not in WEIGHT_UNITS:
            return False
        return self._update_setting("weight_unit", unit)

    def set_distance_unit(self, unit: str) -> bool:
        if unit not in DISTANCE_UNITS:
            return False
        return self._update_setting("distance_unit", unit)

    def set_half_reps_enabled(self, enabled: bool) -> bool:
        return self._update_setting("half_reps_enabled", bool(enabled))

    def set_comments_enabled(self, enabled: bool) -> bool:
        return self._update_setting("comments_enabled", bool(enabled))

    def set_auto_finish_workout_enabled(self, enabled: bool) -> bool:
        return self._update_setting("auto_finish_workout_enabled", bool(enabled))

    def set_auto_finish_workout_hours(self, hours: int) -> bool:
        if hours < 1:
            return False
        return self._update_setting("auto_finish_workout_hours", int(hours))

    def set_auto_filter_history_enabled(self, enabled: bool) -> bool:
        return self._update_setting("auto_filter_history_enabled", bool(enabled))

    def update_timer_preferences(
        self, sound_enabled: bool | None = None, vibration_enabled: bool | None = None
    ) -> bool:
        settings = self._state.settings
        changed = False
        if sound_enabled is not None and sound_enabled != settings.timer_sound_enabled:
            settings.timer_sound_enabled = sound_enabled
            changed = True
        if (
            vibration_enabled is not None
            and vibration_enabled != settings.timer_vibration_enabled
        ):
            settings.timer_vibration_enabled = vibration_enabled
            changed = True
        if changed:
            self._commit()
        return changed

    # -- rest timer ----------------------------------------------------------

    def start_timer(
        self,
        duration_seconds: int,
        sound_enabled: bool | None = None,
        vibration_enabled: bool | None = None,
    ) -> bool:
        """Start the rest timer, defaulting to the saved cue preferences.

        Preferences passed here become the saved ones.
        """
        if duration_seconds <= 0:
            return False
        settings = self._state.settings
        if sound_enabled is None:
            sound_enabled = settings.timer_sound_enabled
        if vibration_enabled is None:
            vibration_enabled = settings.timer_vibration_enabled
        if (sound_enabled, vibration_enabled) != (
            settings.timer_sound_enabled,
            settings.timer_vibration_enabled,
        ):
            settings.timer_sound_enabled = sound_enabled
            settings.timer_vibration_enabled = vibration_enabled
            self._schedule_persist()
        return self.timer.start(duration_seconds, sound_enabled, vibration_enabled)

    def pause_timer(self) -> bool:
        return self.timer.pause()

    def resume_timer(self) -> bool:
        return self.timer.resume()

    def restart_timer(self) -> bool:
        return self.timer.restart()

    def dismiss_timer(self) -> bool:
        return self.timer.dismiss()

    def set_timer_collapsed(self, collapsed: bool) -> bool:
        return self.timer.set_collapsed(collapsed)
