"""Data access layer for repwise."""

import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path

import aiosqlite

from .engine import get_db_path, get_export_dir, init_db

logger = logging.getLogger(__name__)


class StateRepository:
    """Reads and writes the serialized application state.

    Every method is best-effort: storage and decode errors are logged and
    reported as "no data" (``None``) or ``False``, never raised. Writes are
    serialized through a lock, so when several writes overlap the one issued
    last is the one that ends up stored.
    """

    def __init__(self, db_path: Path | None = None, export_dir: Path | None = None):
        self.db_path = db_path or get_db_path()
        self.export_dir = export_dir or get_export_dir(Path(self.db_path).parent)
        self._write_lock = asyncio.Lock()
        self._schema_ready = False

    async def _ensure_schema(self) -> None:
        if not self._schema_ready:
            await init_db(self.db_path)
            self._schema_ready = True

    async def read_state(self) -> dict | None:
        """Load the stored state blob, or None if there is none."""
        try:
            await self._ensure_schema()
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute("SELECT data FROM app_state WHERE id = 1")
                row = await cursor.fetchone()
        except (aiosqlite.Error, OSError) as e:
            logger.warning("Could not read state from %s: %s", self.db_path, e)
            return None

        if row is None or not row[0].strip():
            return None

        try:
            state = json.loads(row[0])
        except ValueError as e:
            logger.warning("Stored state is not valid JSON: %s", e)
            return None
        return state if isinstance(state, dict) else None

    async def write_state(self, state: dict) -> bool:
        """Store the state blob, replacing whatever was there."""
        payload = json.dumps(state)
        async with self._write_lock:
            try:
                await self._ensure_schema()
                async with aiosqlite.connect(self.db_path) as db:
                    await db.execute(
                        """
                        INSERT INTO app_state (id, data, updated_at)
                        VALUES (1, ?, CURRENT_TIMESTAMP)
                        ON CONFLICT(id) DO UPDATE SET
                            data = excluded.data,
                            updated_at = excluded.updated_at
                        """,
                        (payload,),
                    )
                    await db.commit()
            except (aiosqlite.Error, OSError) as e:
                logger.warning("Could not write state to %s: %s", self.db_path, e)
                return False
        return True

    async def create_export_file(self, state: dict) -> Path | None:
        """Write a standalone JSON snapshot for sharing.

        Returns:
            Path of the export file, or None if it could not be written
        """
        timestamp = datetime.now().isoformat(timespec="seconds").replace(":", "-")
        path = self.export_dir / f"repwise-export-{timestamp}.json"
        try:
            self.export_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(state, indent=2), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not create export file %s: %s", path, e)
            return None

        try:
            await self._ensure_schema()
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute("INSERT INTO exports (path) VALUES (?)", (str(path),))
                await db.commit()
        except (aiosqlite.Error, OSError) as e:
            # The file itself is usable even if it could not be recorded
            logger.warning("Could not record export %s: %s", path, e)

        logger.info("Created export %s", path)
        return path

    async def list_exports(self) -> list[dict]:
        """List recorded exports, newest first."""
        try:
            await self._ensure_schema()
            async with aiosqlite.connect(self.db_path) as db:
                db.row_factory = aiosqlite.Row
                cursor = await db.execute(
                    "SELECT * FROM exports ORDER BY created_at DESC, id DESC"
                )
                rows = await cursor.fetchall()
        except (aiosqlite.Error, OSError) as e:
            logger.warning("Could not list exports: %s", e)
            return []

        return [
            {
                "id": row["id"],
                "path": row["path"],
                "created_at": row["created_at"],
                "exists": Path(row["path"]).exists(),
            }
            for row in rows
        ]
