"""Tests for state persistence in SQLite."""

import asyncio
import json

import aiosqlite

from repwise.db import StateRepository, get_data_dir, get_db_path, init_db
from repwise.db.engine import DATA_DIR_ENV, LEGACY_STATE_FILENAME
from repwise.services.workout_engine import WorkoutEngine


class TestPaths:
    """Tests for data directory resolution."""

    def test_explicit_dir_wins(self, tmp_path, monkeypatch):
        """Test an explicit data dir beats the environment."""
        monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "env"))
        assert get_data_dir(tmp_path / "cli") == tmp_path / "cli"

    def test_env_var(self, tmp_path, monkeypatch):
        """Test the data dir environment variable."""
        monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "env"))
        assert get_data_dir() == tmp_path / "env"

    def test_db_path_creates_dir(self, tmp_path):
        """Test the database directory is created."""
        path = get_db_path(tmp_path / "nested")
        assert path.parent.is_dir()
        assert path.name == "repwise.db"


class TestStateRepository:
    """Tests for StateRepository."""

    async def test_empty_database(self, temp_db_path):
        """Test reading from a new database."""
        repo = StateRepository(temp_db_path)
        assert await repo.read_state() is None

    async def test_write_then_read(self, temp_db_path):
        """Test a write can be read back."""
        repo = StateRepository(temp_db_path)
        assert await repo.write_state({"muscleGroups": [], "settings": {"weightUnit": "lb"}})

        state = await repo.read_state()
        assert state["settings"]["weightUnit"] == "lb"

    async def test_write_replaces(self, temp_db_path):
        """Test writes replace the stored state."""
        repo = StateRepository(temp_db_path)
        await repo.write_state({"version": 1})
        await repo.write_state({"version": 2})

        assert await repo.read_state() == {"version": 2}

    async def test_overlapping_writes_last_wins(self, temp_db_path):
        """Test the last of overlapping writes wins."""
        repo = StateRepository(temp_db_path)
        await asyncio.gather(*(repo.write_state({"version": i}) for i in range(5)))

        assert await repo.read_state() == {"version": 4}

    async def test_corrupt_blob_reads_as_none(self, temp_db_path):
        """Test a corrupt blob reads as missing."""
        await init_db(temp_db_path)
        async with aiosqlite.connect(temp_db_path) as db:
            await db.execute("INSERT INTO app_state (id, data) VALUES (1, '{broken')")
            await db.commit()

        assert await StateRepository(temp_db_path).read_state() is None

    async def test_unwritable_location(self, tmp_path):
        """Test storage failures are reported, not raised."""
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        repo = StateRepository(blocker / "repwise.db")

        assert await repo.read_state() is None
        assert await repo.write_state({}) is False

    async def test_export_file(self, temp_db_path):
        """Test export files are written and recorded."""
        repo = StateRepository(temp_db_path)
        path = await repo.create_export_file({"muscleGroups": []})

        assert path.parent == temp_db_path.parent / "exports"
        assert path.name.startswith("repwise-export-")
        assert json.loads(path.read_text()) == {"muscleGroups": []}

        exports = await repo.list_exports()
        assert exports[0]["path"] == str(path)
        assert exports[0]["exists"]

    async def test_legacy_state_file_migrated(self, temp_db_path):
        """Test the legacy state file is read."""
        legacy = temp_db_path.parent / LEGACY_STATE_FILENAME
        legacy.write_text(json.dumps({"muscleGroups": [{"id": "g", "name": "Legs"}]}))

        state = await StateRepository(temp_db_path).read_state()
        assert state["muscleGroups"][0]["name"] == "Legs"


class TestEngineWithRepository:
    """Tests for the engine over a real database."""

    async def test_state_survives_restart(self, temp_db_path):
        """Test state survives a restart."""
        engine = WorkoutEngine(StateRepository(temp_db_path))
        await engine.initialize()
        group = engine.add_muscle_group("Back")
        engine.add_exercise(group.id, "Row", "weightReps")
        engine.set_weight_unit("lb")
        await engine.flush()

        reloaded = WorkoutEngine(StateRepository(temp_db_path))
        await reloaded.initialize()

        assert reloaded.muscle_groups[0].exercises[0].name == "Row"
        assert reloaded.settings.weight_unit == "lb"
