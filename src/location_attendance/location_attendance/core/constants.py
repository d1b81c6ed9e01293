"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_M = 6_371_000.0

DEFAULT_ZONE_CENTER_LAT = 40.7128
DEFAULT_ZONE_CENTER_LNG = -74.0060
DEFAULT_ZONE_RADIUS_M = 1000.0

DEFAULT_LOCATION_TIMEOUT_MS = 10_000
DEFAULT_LOCATION_MAX_AGE_MS = 60_000

RECORDS_STORAGE_KEY = "attendanceRecords"
DEFAULT_STORAGE_PATH = "instance/storage.json"
