from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def append(self, record: AttendanceRecord) -> None:
        """Add a record after all existing ones. Raises StorageError."""

        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        """All records, most recently appended first."""

        raise NotImplementedError
