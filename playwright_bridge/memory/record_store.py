"""
Record Store - SQLite storage for application model records.
Each record belongs to a named model and keeps its attributes as JSON.
"""

import json
import aiosqlite
from datetime import datetime
from typing import Any
from pathlib import Path


RESERVED_COLUMNS = ("id", "created_at")


class RecordStore:
    """
    SQLite-based storage for model records.
    Backs the factories, the login helpers and the management commands.
    """

    def __init__(self, db_path: str):
        """
        Initialize record store.

        Args:
            db_path: Path to SQLite database file, or ":memory:"
        """
        self.db_path = db_path
        self.db: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        """Initialize database and create tables."""
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        self.db = await aiosqlite.connect(self.db_path)

        await self.db.executescript("""
            CREATE TABLE IF NOT EXISTS records (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                model TEXT NOT NULL,
                attributes JSON NOT NULL,
                created_at TIMESTAMP
            );

            CREATE INDEX IF NOT EXISTS idx_records_model
                ON records(model);
        """)

        await self.db.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self.db:
            await self.db.close()
            self.db = None

    @property
    def connection(self) -> aiosqlite.Connection:
        if self.db is None:
            raise RuntimeError("Record store is not initialized")
        return self.db

    # =========================================================================
    # Writes
    # =========================================================================

    async def create(self, model: str, attributes: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a record.

        An explicit ``id`` or ``created_at`` attribute is stored in its
        column; otherwise the id is assigned and the timestamp is now.

        Returns:
            The stored record including its ``id`` and ``created_at``

        Raises:
            aiosqlite.IntegrityError: If a record with the given id exists
        """
        payload = {
            key: value for key, value in attributes.items()
            if key not in RESERVED_COLUMNS
        }
        created_at = attributes.get("created_at")
        created_at = str(created_at) if created_at is not None else datetime.now().isoformat()

        cursor = await self.connection.execute("""
            INSERT INTO records (id, model, attributes, created_at)
            VALUES (?, ?, ?, ?)
        """, (attributes.get("id"), model, json.dumps(payload), created_at))
        await self.connection.commit()

        return self._to_record(cursor.lastrowid, json.dumps(payload), created_at)

    async def update(
        self,
        model: str,
        record_id: int,
        attributes: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Merge attributes into an existing record. ``id`` and ``created_at`` never change."""
        record = await self.find(model, record_id)
        if record is None:
            return None

        merged = self._attributes_of(record)
        merged.update({
            key: value for key, value in attributes.items()
            if key not in RESERVED_COLUMNS
        })
        await self.connection.execute(
            "UPDATE records SET attributes = ? WHERE id = ? AND model = ?",
            (json.dumps(merged), record_id, model)
        )
        await self.connection.commit()
        return self._to_record(record_id, json.dumps(merged), record["created_at"])

    async def delete(self, model: str, record_id: int) -> bool:
        """Delete a record. Returns True if a row was removed."""
        cursor = await self.connection.execute(
            "DELETE FROM records WHERE id = ? AND model = ?", (record_id, model)
        )
        await self.connection.commit()
        return cursor.rowcount > 0

    async def truncate(self, model: str | None = None) -> int:
        """
        Remove every record, or every record of one model.

        Returns:
            Number of rows removed
        """
        if model is None:
            cursor = await self.connection.execute("DELETE FROM records")
        else:
            cursor = await self.connection.execute(
                "DELETE FROM records WHERE model = ?", (model,)
            )
        await self.connection.commit()
        return cursor.rowcount

    # =========================================================================
    # Reads
    # =========================================================================

    async def find(self, model: str, record_id: int) -> dict[str, Any] | None:
        """Get a record by id."""
        async with self.connection.execute(
            "SELECT id, attributes, created_at FROM records WHERE id = ? AND model = ?",
            (record_id, model)
        ) as cursor:
            row = await cursor.fetchone()
            if row:
                return self._to_record(*row)
        return None

    async def where(
        self,
        model: str,
        conditions: dict[str, Any] | None = None,
        limit: int | None = None
    ) -> list[dict[str, Any]]:
        """
        Get records whose attributes equal every given condition.

        Args:
            model: Model name
            conditions: Attribute name to expected value
            limit: Maximum records to return

        Returns:
            Matching records ordered by id
        """
        sql = "SELECT id, attributes, created_at FROM records WHERE model = ?"
        params: list[Any] = [model]

        for key, value in (conditions or {}).items():
            if key == "id":
                sql += " AND id = ?"
                params.append(value)
                continue

            path = '$."' + key.replace('"', '\\"') + '"'
            if value is None:
                sql += " AND json_extract(attributes, ?) IS NULL"
                params.append(path)
            elif isinstance(value, (dict, list)):
                sql += " AND json_extract(attributes, ?) = json(?)"
                params.extend([path, json.dumps(value)])
            else:
                sql += " AND json_extract(attributes, ?) = ?"
                params.extend([path, value])

        sql += " ORDER BY id"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)

        records = []
        async with self.connection.execute(sql, params) as cursor:
            async for row in cursor:
                records.append(self._to_record(*row))
        return records

    async def first(
        self,
        model: str,
        conditions: dict[str, Any] | None = None
    ) -> dict[str, Any] | None:
        """Get the first record matching the conditions."""
        records = await self.where(model, conditions, limit=1)
        return records[0] if records else None

    async def all(self, model: str) -> list[dict[str, Any]]:
        """Get all records of a model."""
        return await self.where(model)

    async def count(self, model: str | None = None) -> int:
        """Count records of a model, or of every model."""
        if model is None:
            sql, params = "SELECT COUNT(*) FROM records", ()
        else:
            sql, params = "SELECT COUNT(*) FROM records WHERE model = ?", (model,)

        async with self.connection.execute(sql, params) as cursor:
            row = await cursor.fetchone()
            return row[0] if row else 0

    async def models(self) -> list[str]:
        """List model names that currently have records."""
        async with self.connection.execute(
            "SELECT DISTINCT model FROM records ORDER BY model"
        ) as cursor:
            return [row[0] async for row in cursor]

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _to_record(record_id: int, attributes: str, created_at: str | None) -> dict[str, Any]:
        record: dict[str, Any] = {"id": record_id}
        record.update(json.loads(attributes) if attributes else {})
        record["created_at"] = created_at
        return record

    @staticmethod
    def _attributes_of(record: dict[str, Any]) -> dict[str, Any]:
        return {
            key: value for key, value in record.items()
            if key not in RESERVED_COLUMNS
        }
