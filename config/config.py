import os


def _env_bool(name: str, default: str) -> bool:
    return bool(int(os.environ.get(name, default)))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "location-attendance-dev-key"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Allowed attendance zone (fixed per deployment)
    ZONE = {
        "center_lat": float(os.environ.get("ZONE_CENTER_LAT", "40.7128")),
        "center_lng": float(os.environ.get("ZONE_CENTER_LNG", "-74.0060")),
        "radius_m": float(os.environ.get("ZONE_RADIUS_M", "1000")),
    }

    # Passed to navigator.geolocation.getCurrentPosition
    LOCATION_OPTIONS = {
        "enable_high_accuracy": True,
        "timeout_ms": int(os.environ.get("LOCATION_TIMEOUT_MS", "10000")),
        "maximum_age_ms": int(os.environ.get("LOCATION_MAX_AGE_MS", "60000")),
    }

    # file | memory | mysql
    # Appends are serialized within one process only; run a single worker
    # process per store.
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "file")
    STORAGE_PATH = os.environ.get("STORAGE_PATH", "instance/storage.json")

    DB_CONFIG = {
        "host": os.environ.get("DB_HOST", "localhost"),
        "port": int(os.environ.get("DB_PORT", "3306")),
        "user": os.environ.get("DB_USER", "root"),
        "password": os.environ.get("DB_PASSWORD", ""),
        "database": os.environ.get("DB_NAME", "location_attendance"),
    }
    AUTO_INIT_DB = _env_bool("AUTO_INIT_DB", "0")
