from __future__ import annotations

from concurrent.futures import Future

from src.location_attendance.location_attendance.attendance.form import CheckInForm
from src.location_attendance.location_attendance.attendance.kv_attendance_repository import KeyValueAttendanceRepository
from src.location_attendance.location_attendance.attendance.service import AttendanceService
from src.location_attendance.location_attendance.core.constants import RECORDS_STORAGE_KEY
from src.location_attendance.location_attendance.core.enums import (
    LocationErrorReason,
    LocationStatus,
    NoticeVariant,
    SubmissionState,
)
from src.location_attendance.location_attendance.core.exceptions import LocationUnavailableError
from src.location_attendance.location_attendance.location.model import LocationRequestOptions
from src.location_attendance.location_attendance.location.provider import FixedLocationProvider
from src.location_attendance.location_attendance.storage.memory_storage import InMemoryStorage


class PendingLocationProvider:
    """Hands out unresolved futures; the test settles them later."""

    def __init__(self):
        self.pending: list[Future] = []

    def request(self, options):
        future: Future = Future()
        self.pending.append(future)
        return future


class ReadOnlyStorage:
    def get_item(self, key):
        return None

    def set_item(self, key, value):
        raise OSError("quota exceeded")


def _ready_form(service, sample, **kwargs) -> CheckInForm:
    form = CheckInForm(service, **kwargs)
    form.refresh_location(FixedLocationProvider(sample))
    return form


def test_new_form_waits_for_location(service):
    form = CheckInForm(service)

    assert form.location_status == LocationStatus.LOADING
    assert form.badge()["text"] == "Getting location..."
    assert form.can_submit is False


def test_refresh_passes_request_options(service, make_sample):
    provider = FixedLocationProvider(make_sample())
    form = CheckInForm(service)
    form.refresh_location(provider)

    assert provider.requests == [LocationRequestOptions(enable_high_accuracy=True, timeout_ms=10000, maximum_age_ms=60000)]


def test_stored_submission_clears_fields_and_signals(service, make_sample):
    stored = []
    form = _ready_form(service, make_sample(), on_submit_success=stored.append)
    form.name, form.result = "Alice", "present"

    result = form.submit()

    assert result.outcome == SubmissionState.STORED
    assert form.transitions == [
        SubmissionState.VALIDATING,
        SubmissionState.SUBMITTING,
        SubmissionState.STORED,
        SubmissionState.IDLE,
    ]
    assert form.state == SubmissionState.IDLE
    assert (form.name, form.result) == ("", "")
    assert stored == [result.record]
    assert list(service.list_records()) == [result.record]
    assert result.notice.title == "Attendance submitted!"


def test_empty_fields_are_rejected(service, make_sample):
    form = _ready_form(service, make_sample())
    form.name = "Alice"

    result = form.submit()

    assert result.outcome == SubmissionState.REJECTED
    assert form.transitions == [SubmissionState.VALIDATING, SubmissionState.REJECTED, SubmissionState.IDLE]
    assert result.notice.variant == NoticeVariant.DESTRUCTIVE
    assert form.name == "Alice"
    assert list(service.list_records()) == []


def test_out_of_zone_location_blocks_submission(service, make_sample):
    form = _ready_form(service, make_sample(40.7328, -74.0060))
    form.name, form.result = "Alice", "present"

    assert form.in_zone is False
    assert form.badge()["text"] == "Outside zone"
    assert form.notices[-1].title == "Outside allowed zone"

    result = form.submit()
    assert result.outcome == SubmissionState.REJECTED
    assert "m from the attendance zone" in result.notice.description
    assert list(service.list_records()) == []


def test_location_failure_blocks_until_refresh(service, make_sample):
    form = CheckInForm(service)
    form.refresh_location(FixedLocationProvider(error=LocationErrorReason.PERMISSION_DENIED))
    form.name, form.result = "Alice", "present"

    assert form.location_status == LocationStatus.ERROR
    assert form.badge()["text"] == "Location unavailable"
    assert form.notices[-1].title == "Location access denied"

    rejected = form.submit()
    assert rejected.outcome == SubmissionState.REJECTED
    assert rejected.notice.description == str(LocationUnavailableError(LocationErrorReason.PERMISSION_DENIED))
    assert list(service.list_records()) == []

    form.refresh_location(FixedLocationProvider(make_sample()))
    assert form.submit().outcome == SubmissionState.STORED


def test_storage_failure_keeps_entered_text(zone, make_sample, fixed_now):
    service = AttendanceService(KeyValueAttendanceRepository(ReadOnlyStorage()), zone, clock=lambda: fixed_now)
    form = _ready_form(service, make_sample())
    form.name, form.result = "Alice", "present"

    result = form.submit()

    assert result.outcome == SubmissionState.FAILED
    assert result.notice.title == "Submission failed"
    assert (form.name, form.result) == ("Alice", "present")
    assert form.state == SubmissionState.IDLE


def test_unreadable_stored_records_fail_submission(zone, make_sample, fixed_now):
    storage = InMemoryStorage({RECORDS_STORAGE_KEY: "{not json"})
    service = AttendanceService(KeyValueAttendanceRepository(storage), zone, clock=lambda: fixed_now)
    form = _ready_form(service, make_sample())
    form.name, form.result = "Alice", "present"

    result = form.submit()

    assert result.outcome == SubmissionState.FAILED
    assert (form.name, form.result) == ("Alice", "present")
    assert storage.get_item(RECORDS_STORAGE_KEY) == "{not json"


def test_latest_callback_wins(service, make_sample):
    provider = PendingLocationProvider()
    form = CheckInForm(service)
    first = form.refresh_location(provider)
    second = form.refresh_location(provider)

    second.set_result(make_sample(40.7328, -74.0060))
    assert form.in_zone is False

    first.set_result(make_sample())
    assert form.in_zone is True
    assert form.location.latitude == 40.7128


def test_session_round_trip_keeps_location(service, make_sample):
    form = _ready_form(service, make_sample(accuracy=7.6))
    form.name = "Alice"

    restored = CheckInForm.from_session(form.to_session(), service)

    assert restored.name == "Alice"
    assert restored.location_status == LocationStatus.SUCCESS
    assert restored.location == form.location
    assert restored.in_zone is True
    assert restored.location_view()["accuracy"] == "±8m"


def test_unreadable_session_state_starts_fresh(service):
    restored = CheckInForm.from_session({"location_status": "bogus"}, service)
    assert restored.location_status == LocationStatus.LOADING
