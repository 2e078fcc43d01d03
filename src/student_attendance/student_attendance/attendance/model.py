from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's presence flag for one day."""

    record_id: str
    student_id: str
    work_date: date
    present: bool


@dataclass(frozen=True)
class AttendanceMark:
    """Write-model for the upsert: the (student_id, work_date) pair is the key."""

    student_id: str
    work_date: date
    present: bool


@dataclass(frozen=True)
class AttendanceSummary:
    present_count: int
    absent_count: int

    @property
    def total(self) -> int:
        return self.present_count + self.absent_count
