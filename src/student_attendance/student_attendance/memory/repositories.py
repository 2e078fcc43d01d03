from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceMark, AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..batches.model import Batch, BatchFields, BatchWithCount
from ..batches.repository import BatchRepository
from ..students.model import Student, StudentFields
from ..students.repository import StudentRepository
from .store import MemoryStore


class InMemoryStudentRepository(StudentRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def list_all(self) -> Sequence[Student]:
        return self._store.students()

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self._store.get_student(student_id)

    def insert(self, fields: StudentFields) -> Student:
        return self._store.put_student(fields)

    def update(self, student_id: str, fields: StudentFields) -> Optional[Student]:
        if self._store.get_student(student_id) is None:
            return None
        return self._store.put_student(fields, student_id=student_id)

    def delete(self, student_id: str) -> bool:
        return self._store.delete_student(student_id)

    def count(self) -> int:
        return self._store.count_where("students")

    def count_in_batch(self, batch_id: str) -> int:
        return self._store.count_where("students", lambda s: s.batch_id == batch_id)


class InMemoryBatchRepository(BatchRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def list_all(self) -> Sequence[Batch]:
        return self._store.batches()

    def list_with_counts(self) -> Sequence[BatchWithCount]:
        out: list[BatchWithCount] = []
        for b in self._store.batches():
            out.append(
                BatchWithCount(
                    batch_id=b.batch_id,
                    name=b.name,
                    capacity=b.capacity,
                    schedule=b.schedule,
                    instructor=b.instructor,
                    created_date=b.created_date,
                    current_students=self._store.count_where("students", lambda s, bid=b.batch_id: s.batch_id == bid),
                )
            )
        return out

    def get_by_id(self, batch_id: str) -> Optional[Batch]:
        return self._store.get_batch(batch_id)

    def insert(self, fields: BatchFields) -> Batch:
        return self._store.put_batch(fields)

    def update(self, batch_id: str, fields: BatchFields) -> Optional[Batch]:
        if self._store.get_batch(batch_id) is None:
            return None
        return self._store.put_batch(fields, batch_id=batch_id)

    def delete(self, batch_id: str) -> bool:
        return self._store.delete_batch(batch_id)

    def count(self) -> int:
        return self._store.count_where("batches")


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def list_all(self) -> Sequence[AttendanceRecord]:
        return self._store.attendance()

    def list_for_date_and_batch(self, *, work_date: date, batch_id: str) -> Sequence[AttendanceRecord]:
        members = {s.student_id for s in self._store.students() if s.batch_id == batch_id}
        return [r for r in self._store.attendance() if r.work_date == work_date and r.student_id in members]

    def upsert_many(self, marks: Sequence[AttendanceMark]) -> int:
        return self._store.upsert_attendance(list(marks))
