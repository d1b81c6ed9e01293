from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import epoch_millis, format_local, now_utc, to_iso_instant
from ..common.formatting import format_accuracy, format_location
from ..core.exceptions import LocationUnavailableError, OutsideZoneError, ValidationError
from ..geo.distance import evaluate_zone
from ..geo.model import LocationSample, Zone, ZoneCheck
from .model import AttendanceRecord
from .repository import AttendanceRepository

log = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Please fill in both name and result fields."


class AttendanceService:
    """Use cases: classify a position, record a check-in, list check-ins."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        zone: Zone,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._attendance = attendance
        self._zone = zone
        self._clock = clock or now_utc

    def current_time_ui(self) -> str:
        return format_local(self._clock())

    def evaluate(self, sample: LocationSample) -> ZoneCheck:
        return evaluate_zone(sample.point, self._zone)

    def prepare(
        self,
        *,
        name: str | None,
        result: str | None,
        location: Optional[LocationSample],
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Validate a check-in and build its record without storing it.

        Raises ValidationError, LocationUnavailableError or OutsideZoneError.
        """
        name = (name or "").strip()
        result = (result or "").strip()
        if not name or not result:
            raise ValidationError(MISSING_FIELDS_MESSAGE)

        if location is None:
            raise LocationUnavailableError()

        check = self.evaluate(location)
        if not check.in_zone:
            raise OutsideZoneError(check.distance_meters)

        now = now or self._clock()
        record = AttendanceRecord(
            id=str(epoch_millis(now)),
            name=name,
            result=result,
            latitude=location.latitude,
            longitude=location.longitude,
            accuracy=location.accuracy,
            submitted_at=to_iso_instant(now),
            in_zone=check.in_zone,
        )
        return record

    def save(self, record: AttendanceRecord) -> None:
        self._attendance.append(record)
        log.info("Recorded attendance %s for %r", record.id, record.name)

    def submit(
        self,
        *,
        name: str | None,
        result: str | None,
        location: Optional[LocationSample],
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """prepare() then save(); StorageError comes from the repository."""
        record = self.prepare(name=name, result=result, location=location, now=now)
        self.save(record)
        return record

    def list_records(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all()

    def get_records_ui(self) -> list[dict]:
        return [self._to_ui(r) for r in self.list_records()]

    def _to_ui(self, r: AttendanceRecord) -> dict:
        return {
            "id": r.id,
            "name": r.name,
            "result": r.result,
            "submitted_at": _display_time(r.submitted_at),
            "location": format_location(r.latitude, r.longitude),
            "accuracy": format_accuracy(r.accuracy),
            "badge": "In Zone" if r.in_zone else "Out of Zone",
            "css_class": "bg-success" if r.in_zone else "bg-danger",
        }


def _display_time(value: str) -> str:
    try:
        return format_local(value)
    except ValueError:
        return value
