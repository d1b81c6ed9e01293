from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .base import KeyValueStorage


class MySQLKeyValueStorage(KeyValueStorage):
    """Key-value pairs in the `kv_store` table (see database/schema.sql)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_item(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT item_value FROM kv_store WHERE item_key=%s", (key,))
            row = fetchone(cur)
            return row["item_value"] if row else None

    def set_item(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO kv_store(item_key, item_value)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE item_value=VALUES(item_value)
                """,
                (key, value),
            )
