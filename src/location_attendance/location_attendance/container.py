from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.kv_attendance_repository import KeyValueAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_STORAGE_PATH
from .core.enums import StorageBackend
from .database.connection import DatabaseConnection, DBConfig
from .geo.model import Zone
from .location.model import LocationRequestOptions
from .storage.base import KeyValueStorage
from .storage.file_storage import JsonFileStorage
from .storage.memory_storage import InMemoryStorage
from .storage.mysql_storage import MySQLKeyValueStorage


@dataclass(frozen=True)
class Container:
    zone: Zone
    location_options: LocationRequestOptions

    storage: KeyValueStorage
    attendance_repo: KeyValueAttendanceRepository

    attendance_service: AttendanceService


def build_storage(
    backend: str | StorageBackend,
    *,
    storage_path: Optional[str] = None,
    db_config: Optional[dict] = None,
) -> KeyValueStorage:
    backend = StorageBackend(str(getattr(backend, "value", backend)).lower())
    if backend == StorageBackend.MEMORY:
        return InMemoryStorage()
    if backend == StorageBackend.MYSQL:
        if not db_config:
            raise ValueError("STORAGE_BACKEND=mysql requires DB_CONFIG")
        return MySQLKeyValueStorage(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))
    return JsonFileStorage(storage_path or DEFAULT_STORAGE_PATH)


def build_container(
    *,
    zone_config: dict,
    storage_backend: str | StorageBackend = StorageBackend.FILE,
    storage_path: Optional[str] = None,
    db_config: Optional[dict] = None,
    location_options: Optional[dict] = None,
    storage: Optional[KeyValueStorage] = None,
) -> Container:
    zone = Zone.from_config(zone_config)
    storage = storage or build_storage(storage_backend, storage_path=storage_path, db_config=db_config)

    attendance_repo = KeyValueAttendanceRepository(storage)
    attendance_service = AttendanceService(attendance_repo, zone)

    return Container(
        zone=zone,
        location_options=LocationRequestOptions.from_config(location_options),
        storage=storage,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
    )
