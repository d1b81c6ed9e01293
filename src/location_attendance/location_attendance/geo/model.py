from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class LocationSample:
    """One position fix reported by the platform.

    `accuracy` is the radius of 68% confidence in meters.
    """

    latitude: float
    longitude: float
    accuracy: float
    captured_at: datetime

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)


@dataclass(frozen=True)
class Zone:
    """Fixed circular region where check-ins are admissible."""

    center_latitude: float
    center_longitude: float
    radius_meters: float

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(self.center_latitude, self.center_longitude)

    @classmethod
    def from_config(cls, cfg: dict) -> "Zone":
        return cls(
            center_latitude=float(cfg["center_lat"]),
            center_longitude=float(cfg["center_lng"]),
            radius_meters=float(cfg["radius_m"]),
        )


@dataclass(frozen=True)
class ZoneCheck:
    distance_meters: float
    in_zone: bool
