from __future__ import annotations

from ..common.formatting import round_meters
from .enums import LocationErrorReason


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class LocationUnavailableError(DomainError):
    """Raised when no usable position is available for a check-in."""

    def __init__(self, reason: LocationErrorReason | None = None, message: str | None = None):
        self.reason = reason
        super().__init__(message or _LOCATION_MESSAGES.get(reason, "Location data is required for attendance submission."))


class OutsideZoneError(DomainError):
    """Raised when the reported position lies outside the attendance zone."""

    def __init__(self, distance_meters: float):
        self.distance_meters = float(distance_meters)
        super().__init__(f"You are {round_meters(self.distance_meters)}m from the attendance zone.")


class StorageError(Exception):
    """Raised when the record store cannot persist data."""


_LOCATION_MESSAGES = {
    LocationErrorReason.PERMISSION_DENIED: "Please enable location access to submit attendance.",
    LocationErrorReason.POSITION_UNAVAILABLE: "Your position could not be determined. Try refreshing your location.",
    LocationErrorReason.TIMEOUT: "Getting your location took too long. Try refreshing your location.",
    LocationErrorReason.UNSUPPORTED: "Your browser doesn't support geolocation.",
}
