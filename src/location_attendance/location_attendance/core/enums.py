from __future__ import annotations

from enum import Enum


class LocationStatus(str, Enum):
    """Where the form stands with respect to location acquisition."""

    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class LocationErrorReason(str, Enum):
    """Why the platform could not provide a position."""

    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"


class SubmissionState(str, Enum):
    """Check-in submission lifecycle of a single form."""

    IDLE = "idle"
    VALIDATING = "validating"
    REJECTED = "rejected"
    SUBMITTING = "submitting"
    STORED = "stored"
    FAILED = "failed"


class NoticeVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class StorageBackend(str, Enum):
    FILE = "file"
    MEMORY = "memory"
    MYSQL = "mysql"
