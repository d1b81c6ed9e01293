from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.location_attendance.location_attendance.attendance.kv_attendance_repository import KeyValueAttendanceRepository
from src.location_attendance.location_attendance.attendance.service import AttendanceService
from src.location_attendance.location_attendance.geo.model import LocationSample, Zone
from src.location_attendance.location_attendance.storage.memory_storage import InMemoryStorage

ZONE_CENTER = (40.7128, -74.0060)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 14, 8, 30, 0, 123000, tzinfo=timezone.utc)


@pytest.fixture
def zone() -> Zone:
    return Zone(center_latitude=ZONE_CENTER[0], center_longitude=ZONE_CENTER[1], radius_meters=1000.0)


@pytest.fixture
def make_sample(fixed_now):
    def _make(latitude: float = ZONE_CENTER[0], longitude: float = ZONE_CENTER[1], accuracy: float = 5.0) -> LocationSample:
        return LocationSample(latitude=latitude, longitude=longitude, accuracy=accuracy, captured_at=fixed_now)

    return _make


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def repo(storage) -> KeyValueAttendanceRepository:
    return KeyValueAttendanceRepository(storage)


@pytest.fixture
def service(repo, zone, fixed_now) -> AttendanceService:
    return AttendanceService(repo, zone, clock=lambda: fixed_now)


@pytest.fixture
def app(monkeypatch):
    from src.location_attendance.location_attendance.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(
        {
            "STORAGE_BACKEND": "memory",
            "ZONE": {"center_lat": ZONE_CENTER[0], "center_lng": ZONE_CENTER[1], "radius_m": 1000.0},
        }
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()
