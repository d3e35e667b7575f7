"""Tests for the workout engine."""

import json
from datetime import date, datetime, timedelta

import pytest

from repwise.models.exercises import ExerciseUnit
from repwise.models.workout import WorkoutSetEntry
from repwise.services.workout_engine import StateGateway, WorkoutEngine

from helpers import FakeClock, FakeGateway, entry, exercise_id, group_id


def _start_bench(engine: WorkoutEngine):
    engine.start_workout()
    return engine.start_exercise(
        group_id(engine, "Chest"), [exercise_id(engine, "Bench Press")]
    )


def _log_bench(engine: WorkoutEngine, log, weight: float, reps: int):
    return engine.add_set_to_exercise(
        log.id, [entry(engine, "Bench Press", weight=weight, reps=reps)]
    )


def _bench_history(timestamp: str, reps: str = "5") -> str:
    """Exported JSON with one finished bench set. ``reps`` is a raw JSON literal."""
    return (
        '{"muscleGroups": [{"id": "g", "name": "Chest", "exercises": '
        '[{"id": "e", "name": "Bench Press", "unit": "weightReps"}]}],'
        ' "completedSessions": [{"id": "s", "startedAt": "' + timestamp + '",'
        ' "exercises": [{"id": "l", "muscleGroupId": "g", "exerciseIds": ["e"],'
        ' "startedAt": "' + timestamp + '", "sets": [{"id": "old", "muscleGroupId": "g",'
        ' "timestamp": "' + timestamp + '", "entries": [{"exerciseId": "e",'
        ' "unit": "weightReps", "weight": 100, "reps": ' + reps + "}]}]}]}]}"
    )


class TestListeners:
    """Tests for change notification."""

    def test_successful_mutation_notifies_once(self, engine):
        """Test a change notifies each listener once."""
        calls = []
        engine.add_listener(lambda: calls.append(1))
        engine.add_muscle_group("Back")

        assert calls == [1]

    def test_rejected_mutation_does_not_notify(self, engine):
        """Test rejected changes stay silent."""
        calls = []
        engine.add_listener(lambda: calls.append(1))
        engine.add_muscle_group("chest")
        engine.finish_workout()

        assert calls == []

    def test_remove_listener(self, engine):
        """Test removed listeners are not called."""
        calls = []
        listener = lambda: calls.append(1)  # noqa: E731
        engine.add_listener(listener)
        engine.remove_listener(listener)
        engine.add_muscle_group("Back")

        assert calls == []


class TestLibrary:
    """Tests for muscle group and exercise management."""

    def test_group_names_unique_ignoring_case(self, engine):
        """Test group names are unique regardless of case."""
        assert engine.add_muscle_group("  chest ") is None
        assert engine.add_muscle_group("") is None
        back = engine.add_muscle_group("  Back ")
        assert back.name == "Back"

    def test_rename_group(self, engine):
        """Test renaming a group."""
        chest = group_id(engine, "Chest")
        assert engine.update_muscle_group(chest, "Pecs")
        assert engine.muscle_group_by_id(chest).name == "Pecs"
        assert not engine.update_muscle_group(chest, "cardio")
        assert not engine.update_muscle_group("missing", "Legs")

    def test_exercise_names_unique_within_group(self, engine):
        """Test exercise names are unique within a group."""
        chest = group_id(engine, "Chest")
        cardio = group_id(engine, "Cardio")

        assert engine.add_exercise(chest, "bench press", ExerciseUnit.REPS) is None
        assert engine.add_exercise(cardio, "Bench Press", ExerciseUnit.REPS) is not None

    def test_add_exercise_rejects_unknown_unit(self, engine):
        """Test unknown units are rejected."""
        assert engine.add_exercise(group_id(engine, "Chest"), "Dip", "bogus") is None

    def test_update_exercise(self, engine):
        """Test updating an exercise keeps its id."""
        chest = group_id(engine, "Chest")
        fly = exercise_id(engine, "Fly")

        assert engine.update_exercise(chest, fly, "Cable Fly", ExerciseUnit.WEIGHT_REPS)
        updated = engine.exercise_by_id(fly)
        assert updated.name == "Cable Fly"
        assert updated.unit == ExerciseUnit.WEIGHT_REPS
        assert not engine.update_exercise(chest, fly, "bench press", ExerciseUnit.REPS)


class TestSessionLifecycle:
    """Tests for starting and finishing workouts."""

    def test_start_is_idempotent(self, engine):
        """Test starting twice keeps the first workout."""
        assert engine.start_workout()
        session = engine.active_session
        assert not engine.start_workout()
        assert engine.active_session is session

    def test_finish_without_workout(self, engine):
        """Test finishing with no workout."""
        assert engine.finish_workout() is None

    def test_finish_drops_empty_logs(self, engine):
        """Test exercises without sets are dropped on finish."""
        log = _start_bench(engine)
        _log_bench(engine, log, 100, 5)
        engine.complete_exercise(log.id)
        engine.start_exercise(group_id(engine, "Cardio"), [exercise_id(engine, "Run")])

        session = engine.finish_workout()

        assert [item.id for item in session.exercises] == [log.id]
        assert engine.completed_sessions[0] is session
        assert engine.active_session is None

    def test_finish_empty_workout_discards_it(self, engine):
        """Test a workout without sets is not saved."""
        _start_bench(engine)
        assert engine.finish_workout() is None
        assert engine.completed_sessions == []
        assert engine.active_session is None

    def test_finish_closes_open_logs(self, engine):
        """Test finishing stamps open exercises."""
        log = _start_bench(engine)
        _log_bench(engine, log, 100, 5)

        session = engine.finish_workout()
        assert session.exercises[0].finished_at is not None

    def test_history_most_recent_first(self, engine):
        """Test history order."""
        for reps in (5, 6):
            log = _start_bench(engine)
            _log_bench(engine, log, 100, reps)
            engine.finish_workout()

        first, second = engine.completed_sessions
        assert first.started_at > second.started_at


class TestExerciseLifecycle:
    """Tests for exercise logs within a workout."""

    def test_start_requires_workout(self, engine):
        """Test exercises need an active workout."""
        assert (
            engine.start_exercise(
                group_id(engine, "Chest"), [exercise_id(engine, "Bench Press")]
            )
            is None
        )

    def test_only_one_open_exercise(self, engine):
        """Test only one exercise can be open."""
        _start_bench(engine)
        assert (
            engine.start_exercise(group_id(engine, "Chest"), [exercise_id(engine, "Fly")])
            is None
        )

    def test_exercises_must_belong_to_group(self, engine):
        """Test exercise ids must belong to the group."""
        engine.start_workout()
        assert (
            engine.start_exercise(group_id(engine, "Cardio"), [exercise_id(engine, "Fly")])
            is None
        )
        assert engine.start_exercise(group_id(engine, "Cardio"), []) is None

    def test_superset(self, engine):
        """Test starting a superset."""
        engine.start_workout()
        log = engine.start_exercise(
            group_id(engine, "Chest"),
            [exercise_id(engine, "Bench Press"), exercise_id(engine, "Fly")],
        )
        assert log.is_superset
        assert engine.active_exercise is log

    def test_complete_requires_sets(self, engine):
        """Test completing needs at least one set."""
        log = _start_bench(engine)
        assert not engine.complete_exercise(log.id)
        _log_bench(engine, log, 100, 5)
        assert engine.complete_exercise(log.id)
        assert engine.active_exercise is None

    def test_cancel_only_without_sets(self, engine):
        """Test cancelling is blocked once sets exist."""
        log = _start_bench(engine)
        _log_bench(engine, log, 100, 5)
        assert not engine.cancel_exercise(log.id)

        set_id = log.sets[0].id
        engine.remove_set_from_exercise(log.id, set_id)
        assert engine.cancel_exercise(log.id)
        assert engine.active_exercises == []

    def test_reopen_blocked_by_other_open_exercise(self, engine):
        """Test reopening while another exercise is open."""
        bench = _start_bench(engine)
        _log_bench(engine, bench, 100, 5)
        engine.complete_exercise(bench.id)
        engine.start_exercise(group_id(engine, "Chest"), [exercise_id(engine, "Fly")])

        assert not engine.reopen_exercise(bench.id)

    def test_reopen(self, engine):
        """Test reopening a completed exercise."""
        bench = _start_bench(engine)
        _log_bench(engine, bench, 100, 5)
        engine.complete_exercise(bench.id)

        assert engine.reopen_exercise(bench.id)
        assert engine.active_exercise is bench

    def test_remove_active_exercise(self, engine):
        """Test force-removing an exercise with sets."""
        log = _start_bench(engine)
        _log_bench(engine, log, 100, 5)

        assert engine.remove_active_exercise(log.id)
        assert engine.active_exercises == []
        assert not engine.remove_active_exercise(log.id)

    def test_active_workout_muscle_group(self, engine):
        """Test the current muscle group lookup."""
        assert engine.active_workout_muscle_group_id is None
        log = _start_bench(engine)
        assert engine.active_workout_muscle_group_id == group_id(engine, "Chest")

        _log_bench(engine, log, 100, 5)
        engine.complete_exercise(log.id)
        assert engine.active_workout_muscle_group_id == group_id(engine, "Chest")


class TestSets:
    """Tests for logging and editing sets."""

    def test_add_set(self, engine, clock):
        """Test adding a set."""
        log = _start_bench(engine)
        workout_set = _log_bench(engine, log, 100, 5)

        assert log.sets == [workout_set]
        assert workout_set.muscle_group_id == group_id(engine, "Chest")
        assert workout_set.entries[0].weight == 100

    def test_entries_without_metrics_rejected(self, engine):
        """Test entries without metrics are rejected."""
        log = _start_bench(engine)
        assert engine.add_set_to_exercise(log.id, [entry(engine, "Bench Press")]) is None
        assert engine.add_set_to_exercise(log.id, []) is None
        assert log.sets == []

    def test_partial_batch_keeps_valid_entries(self, engine):
        """Test invalid entries are dropped from a batch."""
        engine.start_workout()
        log = engine.start_exercise(
            group_id(engine, "Chest"),
            [exercise_id(engine, "Bench Press"), exercise_id(engine, "Fly")],
        )
        workout_set = engine.add_set_to_exercise(
            log.id,
            [
                entry(engine, "Bench Press", weight=60, reps=10),
                entry(engine, "Fly", reps=0),
                entry(engine, "Run", distance=5),
            ],
        )
        assert len(workout_set.entries) == 1
        assert workout_set.entries[0].exercise_id == exercise_id(engine, "Bench Press")

    def test_add_set_reopens_completed_log(self, engine):
        """Test a new set reopens a completed exercise."""
        log = _start_bench(engine)
        _log_bench(engine, log, 100, 5)
        engine.complete_exercise(log.id)

        _log_bench(engine, log, 100, 6)
        assert not log.is_complete

    def test_update_set_keeps_id_and_timestamp(self, engine):
        """Test editing a set keeps its id and time."""
        log = _start_bench(engine)
        original = _log_bench(engine, log, 100, 5)

        updated = engine.update_set_in_exercise(
            log.id, original.id, [entry(engine, "Bench Press", weight=105, reps=5)]
        )

        assert updated.id == original.id
        assert updated.timestamp == original.timestamp
        assert log.sets[0].entries[0].weight == 105

    def test_update_set_merges_exercise_ids(self, engine):
        """Test editing merges new exercise ids."""
        log = _start_bench(engine)
        original = _log_bench(engine, log, 100, 5)
        engine.update_set_in_exercise(
            log.id,
            original.id,
            [
                entry(engine, "Bench Press", weight=100, reps=5),
                entry(engine, "Fly", reps=12),
            ],
        )
        assert log.exercise_ids == [
            exercise_id(engine, "Bench Press"),
            exercise_id(engine, "Fly"),
        ]

    def test_update_unknown_set(self, engine):
        """Test editing a missing set."""
        log = _start_bench(engine)
        assert (
            engine.update_set_in_exercise(
                log.id, "missing", [entry(engine, "Bench Press", reps=5)]
            )
            is None
        )

    def test_reorder_moving_forward(self, engine):
        """[A, B, C, D] with (0, 3) gives [B, C, A, D]."""
        log = _start_bench(engine)
        ids = [_log_bench(engine, log, 100, reps).id for reps in (1, 2, 3, 4)]
        a, b, c, d = ids

        assert engine.reorder_sets_in_exercise(log.id, 0, 3)
        assert [s.id for s in log.sets] == [b, c, a, d]

    def test_reorder_moving_back(self, engine):
        """Test moving a set earlier."""
        log = _start_bench(engine)
        a, b, c = (_log_bench(engine, log, 100, reps).id for reps in (1, 2, 3))

        assert engine.reorder_sets_in_exercise(log.id, 2, 0)
        assert [s.id for s in log.sets] == [c, a, b]

    def test_reorder_to_end(self, engine):
        """Test moving a set to the end."""
        log = _start_bench(engine)
        a, b, c = (_log_bench(engine, log, 100, reps).id for reps in (1, 2, 3))

        assert engine.reorder_sets_in_exercise(log.id, 0, 3)
        assert [s.id for s in log.sets] == [b, c, a]

    @pytest.mark.parametrize("old_index, new_index", [(-1, 0), (3, 0), (0, 4)])
    def test_reorder_out_of_range(self, engine, old_index, new_index):
        """Test out of range moves are rejected."""
        log = _start_bench(engine)
        for reps in (1, 2, 3):
            _log_bench(engine, log, 100, reps)

        assert not engine.reorder_sets_in_exercise(log.id, old_index, new_index)

    def test_remove_completed_set_prunes(self, engine):
        """Test removing history sets prunes empty logs and sessions."""
        log = _start_bench(engine)
        first = _log_bench(engine, log, 100, 5)
        second = _log_bench(engine, log, 100, 6)
        session = engine.finish_workout()

        assert engine.remove_completed_set(session.id, log.id, first.id)
        assert len(engine.completed_sessions) == 1
        assert engine.remove_completed_set(session.id, log.id, second.id)
        assert engine.completed_sessions == []
        assert not engine.remove_completed_set(session.id, log.id, second.id)


class TestPersonalRecords:
    """Tests for PR queries through the engine."""

    def test_active_sets_count(self, engine):
        """Test sets in the active workout can be records."""
        log = _start_bench(engine)
        light = _log_bench(engine, log, 80, 5)
        heavy = _log_bench(engine, log, 100, 5)

        assert engine.current_prs(exercise_id(engine, "Bench Press")) == {heavy.id}
        assert engine.is_personal_record(heavy)
        assert not engine.is_personal_record(light)

    def test_supersets_never_records(self, engine):
        """Test supersets are never records."""
        engine.start_workout()
        log = engine.start_exercise(
            group_id(engine, "Chest"),
            [exercise_id(engine, "Bench Press"), exercise_id(engine, "Fly")],
        )
        workout_set = engine.add_set_to_exercise(
            log.id,
            [
                entry(engine, "Bench Press", weight=200, reps=5),
                entry(engine, "Fly", reps=20),
            ],
        )
        assert not engine.is_personal_record(workout_set)

    def test_unknown_exercise(self, engine):
        """Test records for a missing exercise."""
        assert engine.current_prs("missing") == set()


class TestHistoryViews:
    """Tests for history grouping."""

    def test_sessions_grouped_by_day(self, engine, clock):
        """Test history grouped by day."""
        log = _start_bench(engine)
        _log_bench(engine, log, 100, 5)
        engine.finish_workout()
        clock.advance(days=1)
        log = _start_bench(engine)
        _log_bench(engine, log, 100, 5)
        engine.finish_workout()

        by_date = engine.completed_sessions_by_date()
        assert sorted(by_date) == [date(2024, 3, 1), date(2024, 3, 2)]
        assert len(engine.sessions_for_day(date(2024, 3, 2))) == 1
        assert engine.sessions_for_day(datetime(2024, 3, 5)) == []


class TestSettings:
    """Tests for settings mutators."""

    def test_units_validated(self, engine):
        """Test unit settings are validated."""
        assert engine.set_weight_unit("lb")
        assert not engine.set_weight_unit("lb")
        assert not engine.set_weight_unit("stone")
        assert engine.set_distance_unit("mi")
        assert not engine.set_distance_unit("furlong")
        assert engine.settings.weight_unit == "lb"

    def test_auto_finish_hours(self, engine):
        """Test auto-finish hours must be positive."""
        assert not engine.set_auto_finish_workout_hours(0)
        assert engine.set_auto_finish_workout_hours(6)
        assert engine.settings.auto_finish_workout_hours == 6

    def test_flags(self, engine):
        """Test boolean settings."""
        assert engine.set_half_reps_enabled(True)
        assert engine.set_comments_enabled(False)
        assert engine.set_auto_filter_history_enabled(True)
        assert engine.set_auto_finish_workout_enabled(True)
        assert engine.settings.half_reps_enabled
        assert not engine.settings.comments_enabled

    def test_timer_preferences(self, engine):
        """Test timer cue preferences."""
        assert engine.update_timer_preferences(sound_enabled=False)
        assert not engine.update_timer_preferences(sound_enabled=False)
        assert not engine.update_timer_preferences()
        assert engine.settings.timer_sound_enabled is False


class TestTimerFacade:
    """Tests for the rest timer through the engine."""

    def test_start_uses_saved_preferences(self, engine):
        """Test the timer starts with saved cues."""
        engine.update_timer_preferences(vibration_enabled=False)
        assert engine.start_timer(60)
        assert engine.timer.vibration_enabled is False

    def test_start_saves_preferences(self, engine):
        """Test cues passed to start are saved."""
        engine.start_timer(60, sound_enabled=False)
        assert engine.settings.timer_sound_enabled is False

    def test_timer_changes_notify(self, engine):
        """Test timer changes reach engine listeners."""
        calls = []
        engine.add_listener(lambda: calls.append(1))
        engine.start_timer(2)
        engine.timer.tick()
        engine.pause_timer()

        assert len(calls) == 3

    def test_rejected_duration(self, engine):
        """Test a zero duration is rejected."""
        assert not engine.start_timer(0)
        assert not engine.timer.is_active

    def test_controls(self, engine):
        """Test the timer control facade."""
        engine.start_timer(2)
        assert engine.pause_timer()
        assert engine.resume_timer()
        assert engine.set_timer_collapsed(True)
        assert engine.restart_timer()
        assert engine.dismiss_timer()
        assert not engine.timer.is_active


class TestPersistence:
    """Tests for loading, saving, import and export."""

    def test_gateway_protocol(self, gateway):
        """Test the fake gateway satisfies the protocol."""
        assert isinstance(gateway, StateGateway)

    async def test_initialize_loads_state(self, engine, clock):
        """Test initialize loads saved state."""
        saved = engine.serialize()
        gateway = FakeGateway(saved)
        loaded = WorkoutEngine(gateway, clock=clock)
        await loaded.initialize()

        assert [g.name for g in loaded.muscle_groups] == ["Chest", "Cardio"]
        assert loaded.is_initialized

    async def test_initialize_is_idempotent(self, clock):
        """Test initialize reads storage once."""
        gateway = FakeGateway({"muscleGroups": []})
        engine = WorkoutEngine(gateway, clock=clock)
        await engine.initialize()
        engine.add_muscle_group("Back")
        gateway.state = {"muscleGroups": []}
        await engine.initialize()

        assert [g.name for g in engine.muscle_groups] == ["Back"]

    async def test_unreadable_state_starts_empty(self, clock):
        """Test unreadable saved state is discarded."""
        engine = WorkoutEngine(FakeGateway(["not", "a", "state"]), clock=clock)
        await engine.initialize()

        assert engine.muscle_groups == []
        assert engine.is_initialized

    async def test_mutations_are_persisted(self, clock):
        """Test changes are written to the gateway."""
        gateway = FakeGateway()
        engine = WorkoutEngine(gateway, clock=clock)
        await engine.initialize()
        engine.add_muscle_group("Back")
        engine.add_muscle_group("Legs")
        await engine.flush()

        assert len(gateway.writes) == 2
        assert [g["name"] for g in gateway.state["muscleGroups"]] == ["Back", "Legs"]

    async def test_write_snapshot_taken_at_mutation(self, clock):
        """Test each write holds the state at its change."""
        gateway = FakeGateway()
        engine = WorkoutEngine(gateway, clock=clock)
        await engine.initialize()
        engine.add_muscle_group("Back")
        engine.add_muscle_group("Legs")
        await engine.flush()

        assert [g["name"] for g in gateway.writes[0]["muscleGroups"]] == ["Back"]

    async def test_timer_not_persisted(self, clock):
        """Test timer activity is never written."""
        gateway = FakeGateway()
        engine = WorkoutEngine(gateway, clock=clock, timer_interval=60)
        await engine.initialize()
        engine.start_timer(30)
        engine.close()
        await engine.flush()

        assert gateway.writes == []

    async def test_auto_finish_stale_workout(self, engine):
        """Test stale workouts are finished on load."""
        engine.set_auto_finish_workout_enabled(True)
        log = _start_bench(engine)
        _log_bench(engine, log, 100, 5)
        saved = engine.serialize()

        clock = FakeClock(datetime(2024, 3, 1, 9, 0) + timedelta(hours=5))
        reloaded = WorkoutEngine(FakeGateway(saved), clock=clock)
        await reloaded.initialize()

        assert reloaded.active_session is None
        assert len(reloaded.completed_sessions) == 1

    async def test_recent_workout_not_auto_finished(self, engine):
        """Test recent workouts stay active on load."""
        engine.set_auto_finish_workout_enabled(True)
        engine.start_workout()
        saved = engine.serialize()

        clock = FakeClock(datetime(2024, 3, 1, 10, 0))
        reloaded = WorkoutEngine(FakeGateway(saved), clock=clock)
        await reloaded.initialize()

        assert reloaded.active_session is not None

    async def test_import_replaces_state(self, clock):
        """Test import replaces all state."""
        gateway = FakeGateway()
        engine = WorkoutEngine(gateway, clock=clock)
        await engine.initialize()
        engine.add_muscle_group("Old")
        engine.start_timer(60)
        document = json.dumps(
            {"muscleGroups": [{"id": "g", "name": "Imported", "exercises": []}]}
        )

        assert await engine.import_from_json(document)
        await engine.flush()

        assert [g.name for g in engine.muscle_groups] == ["Imported"]
        assert not engine.timer.is_active
        assert gateway.state["muscleGroups"][0]["name"] == "Imported"

    @pytest.mark.parametrize("document", ["not json", "[]", '{"muscleGroups": [{}]}'])
    async def test_invalid_import_leaves_state(self, engine, document):
        """Test invalid imports change nothing."""
        before = engine.serialize()

        assert not await engine.import_from_json(document)
        assert engine.serialize() == before

    async def test_import_with_overflowing_number(self, engine):
        """Test an out-of-range metric is dropped instead of failing the import."""
        assert await engine.import_from_json(_bench_history("2024-01-01T10:00:00", "1e999"))

        imported = engine.completed_sessions[0].exercises[0].sets[0].entries[0]
        assert imported.reps is None
        assert imported.weight == 100

    async def test_initialize_with_non_finite_saved_value(self, clock):
        """Test saved state holding an infinite metric still loads."""
        blob = json.loads(_bench_history("2024-01-01T10:00:00", "1e999"))
        engine = WorkoutEngine(FakeGateway(blob), clock=clock)
        await engine.initialize()

        assert engine.is_initialized
        assert len(engine.completed_sessions) == 1

    async def test_imported_offsets_mix_with_new_sets(self, clock):
        """Test records work after importing timestamps that carry an offset."""
        engine = WorkoutEngine(FakeGateway(), clock=clock)
        await engine.initialize()
        assert await engine.import_from_json(_bench_history("2024-01-01T10:00:00+00:00"))

        engine.start_workout()
        log = engine.start_exercise("g", ["e"])
        heavier = engine.add_set_to_exercise(
            log.id, [WorkoutSetEntry("e", ExerciseUnit.WEIGHT_REPS, reps=5, weight=110)]
        )

        assert engine.current_prs("e") == {heavier.id}
        assert engine.is_personal_record(heavier)
        assert engine.completed_sessions[0].started_at.tzinfo is None

    async def test_auto_finish_with_offset_timestamp(self, clock):
        """Test a saved workout whose start carries an offset is auto-finished."""
        blob = json.loads(_bench_history("2024-01-01T10:00:00Z"))
        blob["activeSession"] = blob.pop("completedSessions")[0]
        blob["settings"] = {"autoFinishWorkoutEnabled": True, "autoFinishWorkoutHours": 4}
        engine = WorkoutEngine(FakeGateway(blob), clock=clock)
        await engine.initialize()

        assert engine.active_session is None
        assert len(engine.completed_sessions) == 1

    async def test_import_from_missing_file(self, engine, tmp_path):
        """Test importing a missing file."""
        assert not await engine.import_from_file(tmp_path / "missing.json")

    async def test_import_from_file(self, engine, tmp_path):
        """Test importing from a file."""
        path = tmp_path / "export.json"
        path.write_text(json.dumps(engine.serialize()), encoding="utf-8")
        engine.add_muscle_group("Extra")

        assert await engine.import_from_file(path)
        assert [g.name for g in engine.muscle_groups] == ["Chest", "Cardio"]

    async def test_export(self, clock):
        """Test export hands the state to the gateway."""
        gateway = FakeGateway({"muscleGroups": [{"id": "g", "name": "Chest"}]})
        engine = WorkoutEngine(gateway, clock=clock)
        path = await engine.create_export_file()

        assert path is not None
        assert gateway.exports[0]["muscleGroups"][0]["name"] == "Chest"
