from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceMark, AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        """Every record, newest date first."""

        raise NotImplementedError

    def list_for_date_and_batch(self, *, work_date: date, batch_id: str) -> Sequence[AttendanceRecord]:
        """Records on work_date for students currently assigned to batch_id."""

        raise NotImplementedError

    def upsert_many(self, marks: Sequence[AttendanceMark]) -> int:
        """Insert-or-replace keyed by (student_id, work_date), all or nothing.

        Returns the number of marks written.
        """

        raise NotImplementedError
