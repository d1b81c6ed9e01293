from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in.

    Note: `in_zone` is the zone evaluation taken when the record was created;
    it is never recomputed.
    """

    id: str
    name: str
    result: str
    latitude: float
    longitude: float
    accuracy: float
    submitted_at: str
    in_zone: bool

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "result": self.result,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "accuracy": self.accuracy,
            "submitted_at": self.submitted_at,
            "in_zone": self.in_zone,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceRecord":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            result=str(data["result"]),
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            accuracy=float(data["accuracy"]),
            submitted_at=str(data["submitted_at"]),
            in_zone=bool(data["in_zone"]),
        )
