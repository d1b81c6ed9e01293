from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_LOCATION_MAX_AGE_MS, DEFAULT_LOCATION_TIMEOUT_MS


@dataclass(frozen=True)
class LocationRequestOptions:
    enable_high_accuracy: bool = True
    timeout_ms: int = DEFAULT_LOCATION_TIMEOUT_MS
    maximum_age_ms: int = DEFAULT_LOCATION_MAX_AGE_MS

    @classmethod
    def from_config(cls, cfg: dict | None) -> "LocationRequestOptions":
        cfg = cfg or {}
        return cls(
            enable_high_accuracy=bool(cfg.get("enable_high_accuracy", True)),
            timeout_ms=int(cfg.get("timeout_ms", DEFAULT_LOCATION_TIMEOUT_MS)),
            maximum_age_ms=int(cfg.get("maximum_age_ms", DEFAULT_LOCATION_MAX_AGE_MS)),
        )

    def as_browser_options(self) -> dict:
        """Shape expected by navigator.geolocation.getCurrentPosition."""
        return {
            "enableHighAccuracy": self.enable_high_accuracy,
            "timeout": self.timeout_ms,
            "maximumAge": self.maximum_age_ms,
        }
