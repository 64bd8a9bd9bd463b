import sqlite3
from typing import Optional

from ledger_tracker.database.connection import DatabaseManager, execute_schema
from ledger_tracker.logging_utils import get_logger
from ledger_tracker.repositories.base import KeyValueStorage, StorageError

logger = get_logger(__name__)

class SQLiteKeyValueStorage(KeyValueStorage):
    """
    SQLite implementation of KeyValueStorage.

    Every slot is one row of the kv_store table. The schema is created
    the first time the storage is used.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db = db_manager
        self._schema_ready = False

    def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        try:
            execute_schema(self.db.get_connection())
        except sqlite3.Error as e:
            raise StorageError(f"Could not initialize storage: {e}") from e
        self._schema_ready = True

    def get_item(self, key: str) -> Optional[str]:
        """Read a slot, None if it doesn't exist"""
        self._ensure_schema()
        try:
            conn = self.db.get_connection()
            cursor = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?",
                (key,)
            )
            row = cursor.fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Could not read '{key}': {e}") from e

        if row is None:
            logger.debug("Slot %r is empty", key)
            return None

        return row["value"]

    def set_item(self, key: str, value: str) -> None:
        """Overwrite a slot with a new value"""
        self._ensure_schema()
        try:
            with self.db.transaction() as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value),
                )
        except sqlite3.Error as e:
            raise StorageError(f"Could not write '{key}': {e}") from e

        logger.debug("Wrote %d characters to slot %r", len(value), key)

    def remove_item(self, key: str) -> None:
        """Delete a slot if present"""
        self._ensure_schema()
        try:
            with self.db.transaction() as conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        except sqlite3.Error as e:
            raise StorageError(f"Could not remove '{key}': {e}") from e

        logger.debug("Removed slot %r", key)
