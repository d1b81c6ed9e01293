"""Example: drive the service layer without Flask.

Controllers stay thin; the check-in rules live in AttendanceService and CheckInForm.
"""

from datetime import datetime, timezone

from src.location_attendance.location_attendance.attendance.form import CheckInForm
from src.location_attendance.location_attendance.container import build_container
from src.location_attendance.location_attendance.geo.model import LocationSample
from src.location_attendance.location_attendance.location.provider import FixedLocationProvider


def main():
    container = build_container(
        zone_config={"center_lat": 40.7128, "center_lng": -74.0060, "radius_m": 1000},
        storage_backend="memory",
    )

    form = CheckInForm(container.attendance_service, options=container.location_options)
    here = LocationSample(latitude=40.7130, longitude=-74.0055, accuracy=12.0, captured_at=datetime.now(timezone.utc))
    form.refresh_location(FixedLocationProvider(here))

    form.name = "Alice"
    form.result = "present"
    outcome = form.submit()
    print(outcome.notice.title, outcome.notice.description)
    print(container.attendance_service.get_records_ui())


if __name__ == "__main__":
    main()
