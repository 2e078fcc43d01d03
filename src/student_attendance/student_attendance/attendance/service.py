from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Mapping, Optional

from ..app_logger import get_logger
from ..batches.repository import BatchRepository
from ..core.exceptions import NotFoundError, ValidationError
from ..reports.aggregation import compute_attendance_summary, filter_students_by_batch
from ..students.model import Student
from ..students.repository import StudentRepository
from . import policy
from .model import AttendanceSummary
from .repository import AttendanceRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class AttendanceSheet:
    """One batch, one day: who is on the sheet and how each is marked."""

    batch_id: Optional[str]
    work_date: date
    students: List[Student]
    marks: Dict[str, bool]
    summary: AttendanceSummary


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        batches: BatchRepository,
    ):
        self._attendance = attendance
        self._students = students
        self._batches = batches

    def _batch_students(self, batch_id: Optional[str]) -> List[Student]:
        if not batch_id:
            return []
        if not self._batches.get_by_id(batch_id):
            raise NotFoundError("Batch not found")
        return filter_students_by_batch(self._students.list_all(), batch_id)

    def _sheet(self, batch_id: Optional[str], work_date: date, students: List[Student], marks: Mapping[str, bool]) -> AttendanceSheet:
        full = {s.student_id: policy.is_present(marks, s.student_id) for s in students}
        summary = compute_attendance_summary(full, [s.student_id for s in students])
        return AttendanceSheet(batch_id=batch_id, work_date=work_date, students=students, marks=full, summary=summary)

    def load_sheet(self, batch_id: Optional[str], work_date: date) -> AttendanceSheet:
        """Students of the batch with their stored marks for work_date (absent when unmarked)."""

        students = self._batch_students(batch_id)
        if not students:
            return self._sheet(batch_id, work_date, [], {})

        existing = self._attendance.list_for_date_and_batch(work_date=work_date, batch_id=batch_id)
        return self._sheet(batch_id, work_date, students, policy.marks_from_records(existing))

    def save_sheet(
        self,
        batch_id: Optional[str],
        work_date: date,
        marks: Mapping[str, bool],
        *,
        mark_all: Optional[bool] = None,
    ) -> AttendanceSheet:
        """Write one record per student of the batch in a single upsert.

        Re-saving the same sheet leaves the store unchanged; a failing upsert
        raises StoreError and nothing is applied.
        """

        if not batch_id:
            raise ValidationError("Please select a batch")

        students = self._batch_students(batch_id)
        if mark_all is not None:
            marks = policy.mark_all(students, mark_all)

        records = policy.build_sheet_records(students, work_date, marks)
        written = self._attendance.upsert_many(records)

        sheet = self._sheet(batch_id, work_date, students, marks)
        logger.info(
            "Attendance saved: batch=%s date=%s records=%d present=%d absent=%d",
            batch_id,
            work_date.isoformat(),
            written,
            sheet.summary.present_count,
            sheet.summary.absent_count,
        )
        return sheet
