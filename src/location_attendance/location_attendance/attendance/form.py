from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import parse_iso_instant, to_iso_instant
from ..common.formatting import format_accuracy, round_meters
from ..core.enums import LocationErrorReason, LocationStatus, NoticeVariant, SubmissionState
from ..core.exceptions import (
    LocationUnavailableError,
    OutsideZoneError,
    StorageError,
    ValidationError,
)
from ..geo.model import LocationSample, ZoneCheck
from ..location.model import LocationRequestOptions
from ..location.provider import LocationProvider
from .model import AttendanceRecord
from .service import AttendanceService

log = logging.getLogger(__name__)

_LOCATION_ERROR_TITLES = {
    LocationErrorReason.PERMISSION_DENIED: "Location access denied",
    LocationErrorReason.POSITION_UNAVAILABLE: "Location unavailable",
    LocationErrorReason.TIMEOUT: "Location timed out",
    LocationErrorReason.UNSUPPORTED: "Location not supported",
}


@dataclass(frozen=True)
class Notice:
    """A toast shown to the user."""

    title: str
    description: str
    variant: NoticeVariant = NoticeVariant.DEFAULT

    def to_dict(self) -> dict:
        return {"title": self.title, "description": self.description, "variant": self.variant.value}

    @property
    def flash_category(self) -> str:
        return "warning" if self.variant == NoticeVariant.DESTRUCTIVE else "success"


@dataclass(frozen=True)
class SubmissionResult:
    outcome: SubmissionState
    notice: Notice
    record: Optional[AttendanceRecord] = None


class CheckInForm:
    """State of one check-in form: entered text, last location, submission lifecycle.

    Location results arrive through futures. Each result is applied when
    its future completes; a later refresh does not cancel an earlier one,
    so whichever callback fires last wins.
    """

    def __init__(
        self,
        service: AttendanceService,
        *,
        options: Optional[LocationRequestOptions] = None,
        on_submit_success: Optional[Callable[[AttendanceRecord], None]] = None,
    ):
        self._service = service
        self._options = options or LocationRequestOptions()
        self._on_submit_success = on_submit_success

        self.name = ""
        self.result = ""
        self.location: Optional[LocationSample] = None
        self.location_status = LocationStatus.LOADING
        self.location_error: Optional[LocationErrorReason] = None
        self.zone_check: Optional[ZoneCheck] = None
        self.state = SubmissionState.IDLE
        self.transitions: list[SubmissionState] = []
        self.notices: list[Notice] = []

    @property
    def in_zone(self) -> Optional[bool]:
        return self.zone_check.in_zone if self.zone_check else None

    @property
    def can_submit(self) -> bool:
        return self.state == SubmissionState.IDLE and self.location_status == LocationStatus.SUCCESS and bool(self.in_zone)

    # ----- location -----

    def refresh_location(self, provider: LocationProvider) -> Future:
        self.location_status = LocationStatus.LOADING
        future = provider.request(self._options)
        future.add_done_callback(self._on_location_result)
        return future

    def _on_location_result(self, future: Future) -> None:
        try:
            sample = future.result()
        except LocationUnavailableError as e:
            self._location_failed(e.reason or LocationErrorReason.POSITION_UNAVAILABLE, str(e))
            return
        except ValidationError as e:
            log.warning("Rejected location report: %s", e)
            self._location_failed(LocationErrorReason.POSITION_UNAVAILABLE, str(e))
            return

        self.apply_location(sample)

    def apply_location(self, sample: LocationSample) -> ZoneCheck:
        check = self._service.evaluate(sample)
        self.location = sample
        self.location_status = LocationStatus.SUCCESS
        self.location_error = None
        self.zone_check = check

        if not check.in_zone:
            self._notify(
                Notice(
                    "Outside allowed zone",
                    f"You are {round_meters(check.distance_meters)}m from the attendance zone.",
                    NoticeVariant.DESTRUCTIVE,
                )
            )
        return check

    def _location_failed(self, reason: LocationErrorReason, message: str) -> None:
        self.location = None
        self.zone_check = None
        self.location_status = LocationStatus.ERROR
        self.location_error = reason
        self._notify(Notice(_LOCATION_ERROR_TITLES.get(reason, "Location unavailable"), message, NoticeVariant.DESTRUCTIVE))

    # ----- submission -----

    def _enter(self, state: SubmissionState) -> None:
        self.state = state
        self.transitions.append(state)

    def submit(self, *, now: Optional[datetime] = None) -> SubmissionResult:
        self.transitions = []
        self._enter(SubmissionState.VALIDATING)

        location = self.location if self.location_status == LocationStatus.SUCCESS else None
        try:
            record = self._service.prepare(name=self.name, result=self.result, location=location, now=now)
        except ValidationError as e:
            return self._finish(SubmissionState.REJECTED, Notice("Missing information", str(e), NoticeVariant.DESTRUCTIVE))
        except LocationUnavailableError as e:
            description = str(e) if e.reason or not self.location_error else str(LocationUnavailableError(self.location_error))
            return self._finish(SubmissionState.REJECTED, Notice("Location required", description, NoticeVariant.DESTRUCTIVE))
        except OutsideZoneError as e:
            return self._finish(
                SubmissionState.REJECTED,
                Notice(
                    "Outside attendance zone",
                    f"You must be within the designated area to submit attendance. {e}",
                    NoticeVariant.DESTRUCTIVE,
                ),
            )

        self._enter(SubmissionState.SUBMITTING)
        try:
            self._service.save(record)
        except StorageError:
            log.exception("Attendance submission failed")
            return self._finish(
                SubmissionState.FAILED,
                Notice("Submission failed", "Failed to submit attendance. Please try again.", NoticeVariant.DESTRUCTIVE),
            )

        self.name = ""
        self.result = ""
        result = self._finish(
            SubmissionState.STORED,
            Notice("Attendance submitted!", "Your attendance has been recorded successfully."),
            record,
        )
        if self._on_submit_success:
            self._on_submit_success(record)
        return result

    def _finish(self, outcome: SubmissionState, notice: Notice, record: Optional[AttendanceRecord] = None) -> SubmissionResult:
        self._enter(outcome)
        self._notify(notice)
        self._enter(SubmissionState.IDLE)
        return SubmissionResult(outcome=outcome, notice=notice, record=record)

    def _notify(self, notice: Notice) -> None:
        self.notices.append(notice)

    # ----- view helpers -----

    def badge(self) -> dict:
        if self.location_status == LocationStatus.LOADING:
            return {"text": "Getting location...", "variant": "secondary"}
        if self.location_status == LocationStatus.ERROR:
            return {"text": "Location unavailable", "variant": "destructive"}
        if self.in_zone:
            return {"text": "In attendance zone", "variant": "default"}
        return {"text": "Outside zone", "variant": "destructive"}

    def location_view(self) -> Optional[dict]:
        if not self.location:
            return None
        return {
            "latitude": f"{self.location.latitude:.6f}",
            "longitude": f"{self.location.longitude:.6f}",
            "accuracy": format_accuracy(self.location.accuracy),
            "distance": round_meters(self.zone_check.distance_meters) if self.zone_check else None,
        }

    # ----- session round trip -----

    def to_session(self) -> dict:
        data: dict = {
            "name": self.name,
            "result": self.result,
            "location_status": self.location_status.value,
            "location_error": self.location_error.value if self.location_error else None,
            "location": None,
        }
        if self.location:
            data["location"] = {
                "latitude": self.location.latitude,
                "longitude": self.location.longitude,
                "accuracy": self.location.accuracy,
                "captured_at": to_iso_instant(self.location.captured_at),
            }
        return data

    @classmethod
    def from_session(
        cls,
        data: Optional[dict],
        service: AttendanceService,
        *,
        options: Optional[LocationRequestOptions] = None,
        on_submit_success: Optional[Callable[[AttendanceRecord], None]] = None,
    ) -> "CheckInForm":
        form = cls(service, options=options, on_submit_success=on_submit_success)
        if not data:
            return form

        form.name = str(data.get("name") or "")
        form.result = str(data.get("result") or "")
        try:
            form.location_status = LocationStatus(data.get("location_status", LocationStatus.LOADING.value))
            error = data.get("location_error")
            form.location_error = LocationErrorReason(error) if error else None

            loc = data.get("location")
            if loc and form.location_status == LocationStatus.SUCCESS:
                form.location = LocationSample(
                    latitude=float(loc["latitude"]),
                    longitude=float(loc["longitude"]),
                    accuracy=float(loc["accuracy"]),
                    captured_at=parse_iso_instant(loc["captured_at"]),
                )
                form.zone_check = service.evaluate(form.location)
        except (KeyError, TypeError, ValueError):
            log.warning("Discarding unreadable check-in form state")
            form.location = None
            form.zone_check = None
            form.location_status = LocationStatus.LOADING
            form.location_error = None
        return form
