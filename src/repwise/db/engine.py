"""Database engine setup and initialization."""

import json
import logging
import os
from pathlib import Path

import aiosqlite

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "REPWISE_DATA_DIR"
DB_FILENAME = "repwise.db"

# State file written by older releases, picked up once on first init
LEGACY_STATE_FILENAME = "repwise_state.json"


def get_data_dir(data_dir: Path | None = None) -> Path:
    """Resolve the data directory.

    Uses the explicit argument, then ``REPWISE_DATA_DIR``, then ``./data``.
    """
    if data_dir is None:
        data_dir = Path(os.environ.get(DATA_DIR_ENV, "data"))
    return Path(data_dir)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    data_dir = get_data_dir(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / DB_FILENAME


def get_export_dir(data_dir: Path | None = None) -> Path:
    """Directory that holds export snapshots."""
    return get_data_dir(data_dir) / "exports"


async def _migrate_legacy_state(db: aiosqlite.Connection, db_path: Path) -> None:
    """Copy a legacy JSON state file into the database if no state is stored yet."""
    legacy_path = db_path.parent / LEGACY_STATE_FILENAME
    if not legacy_path.exists():
        return

    cursor = await db.execute("SELECT COUNT(*) FROM app_state")
    (count,) = await cursor.fetchone()
    if count:
        return

    try:
        contents = legacy_path.read_text(encoding="utf-8")
        json.loads(contents)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable legacy state file %s: %s", legacy_path, e)
        return

    await db.execute("INSERT INTO app_state (id, data) VALUES (1, ?)", (contents,))
    await db.commit()
    logger.info("Migrated legacy state file %s", legacy_path)


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Single-row table holding the serialized state blob
        await db.execute("""
            CREATE TABLE IF NOT EXISTS app_state (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                data TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Export snapshots written for sharing
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exports (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                path TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exports_created
            ON exports(created_at)
        """)

        await db.commit()

        await _migrate_legacy_state(db, Path(db_path))
