"""Great-circle distance and zone membership.

Distances use the haversine formula on a spherical Earth. That is plenty
for zones the size of a campus or a city block; no special handling is
done near the poles or the antimeridian.
"""

from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_M
from .model import GeoPoint, Zone, ZoneCheck


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Distance in meters between two points given in degrees."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def evaluate_zone(point: GeoPoint, zone: Zone) -> ZoneCheck:
    distance = haversine_distance(point, zone.center)
    return ZoneCheck(distance_meters=distance, in_zone=distance <= zone.radius_meters)


def is_in_zone(point: GeoPoint, zone: Zone) -> bool:
    # Boundary is inclusive.
    return evaluate_zone(point, zone).in_zone
