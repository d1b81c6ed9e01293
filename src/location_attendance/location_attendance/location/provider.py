from __future__ import annotations

from concurrent.futures import Future
from datetime import datetime
from typing import Any, Optional, Protocol

from ..common.datetime_utils import now_utc
from ..common.validators import require_finite
from ..core.enums import LocationErrorReason
from ..core.exceptions import LocationUnavailableError, ValidationError
from ..geo.model import LocationSample
from .model import LocationRequestOptions

# W3C GeolocationPositionError codes.
_BROWSER_ERROR_CODES = {
    1: LocationErrorReason.PERMISSION_DENIED,
    2: LocationErrorReason.POSITION_UNAVAILABLE,
    3: LocationErrorReason.TIMEOUT,
}


class LocationProvider(Protocol):
    def request(self, options: LocationRequestOptions) -> Future[LocationSample]:
        """Start one acquisition.

        The future resolves to a LocationSample or fails with
        LocationUnavailableError.
        """

        raise NotImplementedError


def _resolved(sample: Optional[LocationSample] = None, error: Optional[BaseException] = None) -> Future[LocationSample]:
    future: Future = Future()
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(sample)
    return future


class FixedLocationProvider(LocationProvider):
    """Answers every request with the same sample or the same failure."""

    def __init__(
        self,
        sample: Optional[LocationSample] = None,
        *,
        error: Optional[LocationErrorReason] = None,
    ):
        if sample is None and error is None:
            raise ValueError("FixedLocationProvider needs a sample or an error")
        self._sample = sample
        self._error = error
        self.requests: list[LocationRequestOptions] = []

    def request(self, options: LocationRequestOptions) -> Future[LocationSample]:
        self.requests.append(options)
        if self._error is not None:
            return _resolved(error=LocationUnavailableError(self._error))
        return _resolved(self._sample)


class ClientReportedLocationProvider(LocationProvider):
    """Turns the payload posted by the browser's geolocation callback into a result.

    Accepted payloads:
    - {"coords": {"latitude": .., "longitude": .., "accuracy": ..}, "timestamp": <ms>?}
    - {"error": {"code": 1 | 2 | 3 | "unsupported"}}
    """

    def __init__(self, payload: Any, *, now: Optional[datetime] = None):
        self._payload = payload
        self._now = now

    def request(self, options: LocationRequestOptions) -> Future[LocationSample]:
        try:
            sample = self.parse(self._payload, now=self._now)
        except (LocationUnavailableError, ValidationError) as e:
            return _resolved(error=e)
        return _resolved(sample)

    @staticmethod
    def parse(payload: Any, *, now: Optional[datetime] = None) -> LocationSample:
        if not isinstance(payload, dict):
            raise ValidationError("Location payload must be an object")

        error = payload.get("error")
        if error is not None:
            code = error.get("code") if isinstance(error, dict) else error
            if code == "unsupported":
                raise LocationUnavailableError(LocationErrorReason.UNSUPPORTED)
            try:
                reason = _BROWSER_ERROR_CODES[int(code)]
            except (KeyError, TypeError, ValueError):
                reason = LocationErrorReason.POSITION_UNAVAILABLE
            raise LocationUnavailableError(reason)

        coords = payload.get("coords")
        if not isinstance(coords, dict):
            raise ValidationError("Location payload has no coordinates")

        latitude = require_finite(coords.get("latitude"), "latitude")
        longitude = require_finite(coords.get("longitude"), "longitude")
        accuracy = require_finite(coords.get("accuracy", 0), "accuracy")
        if not -90.0 <= latitude <= 90.0:
            raise ValidationError("latitude is out of range")
        if not -180.0 <= longitude <= 180.0:
            raise ValidationError("longitude is out of range")
        if accuracy < 0:
            raise ValidationError("accuracy must not be negative")

        return LocationSample(
            latitude=latitude,
            longitude=longitude,
            accuracy=accuracy,
            captured_at=now or now_utc(),
        )
