from __future__ import annotations

import json
import logging
import threading
from typing import Any, Sequence

from ..core.constants import RECORDS_STORAGE_KEY
from ..core.exceptions import StorageError
from ..storage.base import KeyValueStorage
from .model import AttendanceRecord
from .repository import AttendanceRepository

log = logging.getLogger(__name__)


class KeyValueAttendanceRepository(AttendanceRepository):
    """Stores the whole record list as one JSON array under a single key.

    Appending rewrites the full array, keeping every existing entry as
    stored. Listing skips entries that do not parse as records; a value that
    is not a JSON array lists as empty but is never overwritten by append.
    """

    def __init__(self, storage: KeyValueStorage, *, key: str = RECORDS_STORAGE_KEY):
        self._storage = storage
        self._key = key
        self._write_lock = threading.Lock()

    def _read_raw(self) -> list[Any]:
        try:
            raw = self._storage.get_item(self._key)
        except Exception as e:
            raise StorageError("Could not read attendance records") from e
        if raw is None:
            return []

        try:
            items = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Unreadable attendance data under key {self._key!r}") from e
        if not isinstance(items, list):
            raise StorageError(f"Attendance data under key {self._key!r} is not a list")
        return items

    def _parse(self, items: list[Any]) -> list[AttendanceRecord]:
        records = []
        for index, item in enumerate(items):
            try:
                records.append(AttendanceRecord.from_dict(item))
            except (KeyError, TypeError, ValueError):
                log.warning("Skipping malformed attendance entry %d under key %r", index, self._key)
        return records

    def append(self, record: AttendanceRecord) -> None:
        with self._write_lock:
            items = self._read_raw()
            items.append(record.to_dict())
            try:
                payload = json.dumps(items, ensure_ascii=False, allow_nan=False)
                self._storage.set_item(self._key, payload)
            except Exception as e:
                raise StorageError(f"Could not store attendance record {record.id}") from e

    def list_all(self) -> Sequence[AttendanceRecord]:
        try:
            items = self._read_raw()
        except StorageError:
            log.warning("Listing attendance records failed", exc_info=True)
            return []
        records = self._parse(items)
        records.reverse()
        return records
