"""In-process store used when no MySQL server is configured, and by tests.

The store owns the invariants the SQL schema enforces:
- fees_due is derived on every write (generated column);
- (student_id, date) is unique for attendance, writes go through upsert;
- deleting a batch unassigns its students;
- deleting a student deletes their attendance;
- an upsert referencing an unknown student applies nothing.

Build one instance at startup (or one per test) and hand it to the
InMemory*Repository classes.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..attendance.model import AttendanceMark, AttendanceRecord
from ..batches.model import Batch, BatchFields
from ..core.exceptions import StoreError
from ..students.model import Student, StudentFields, derive_fees_due


class MemoryStore:
    def __init__(self, *, seed: bool = False):
        self._lock = threading.RLock()
        self._students: Dict[str, Student] = {}
        self._batches: Dict[str, Batch] = {}
        self._attendance: Dict[Tuple[str, date], AttendanceRecord] = {}
        if seed:
            seed_demo_data(self)

    # -- students ---------------------------------------------------------

    def students(self) -> List[Student]:
        with self._lock:
            return sorted(self._students.values(), key=lambda s: s.name)

    def get_student(self, student_id: str) -> Optional[Student]:
        with self._lock:
            return self._students.get(student_id)

    def put_student(self, fields: StudentFields, *, student_id: Optional[str] = None) -> Student:
        with self._lock:
            if fields.batch_id is not None and fields.batch_id not in self._batches:
                raise StoreError(f"Batch {fields.batch_id!r} does not exist")
            student = Student(
                student_id=student_id or str(uuid.uuid4()),
                name=fields.name,
                email=fields.email,
                mobile=fields.mobile,
                parent_mobile=fields.parent_mobile,
                address=fields.address,
                batch_id=fields.batch_id,
                enrollment_date=fields.enrollment_date,
                total_fees=fields.total_fees,
                fees_paid=fields.fees_paid,
                fees_due=derive_fees_due(fields.total_fees, fields.fees_paid),
            )
            self._students[student.student_id] = student
            return student

    def delete_student(self, student_id: str) -> bool:
        with self._lock:
            if self._students.pop(student_id, None) is None:
                return False
            for key in [k for k in self._attendance if k[0] == student_id]:
                del self._attendance[key]
            return True

    # -- batches ----------------------------------------------------------

    def batches(self) -> List[Batch]:
        with self._lock:
            return sorted(self._batches.values(), key=lambda b: b.name)

    def get_batch(self, batch_id: str) -> Optional[Batch]:
        with self._lock:
            return self._batches.get(batch_id)

    def put_batch(self, fields: BatchFields, *, batch_id: Optional[str] = None) -> Batch:
        with self._lock:
            batch = Batch(
                batch_id=batch_id or str(uuid.uuid4()),
                name=fields.name,
                capacity=fields.capacity,
                schedule=fields.schedule,
                instructor=fields.instructor,
                created_date=fields.created_date,
            )
            self._batches[batch.batch_id] = batch
            return batch

    def delete_batch(self, batch_id: str) -> bool:
        with self._lock:
            if self._batches.pop(batch_id, None) is None:
                return False
            for sid, s in list(self._students.items()):
                if s.batch_id == batch_id:
                    self._students[sid] = replace(s, batch_id=None)
            return True

    # -- attendance -------------------------------------------------------

    def attendance(self) -> List[AttendanceRecord]:
        with self._lock:
            return sorted(self._attendance.values(), key=lambda r: r.work_date, reverse=True)

    def upsert_attendance(self, marks: Sequence[AttendanceMark]) -> int:
        with self._lock:
            unknown = sorted({m.student_id for m in marks if m.student_id not in self._students})
            if unknown:
                raise StoreError(f"Unknown student id(s): {', '.join(unknown)}")

            for m in marks:
                key = (m.student_id, m.work_date)
                existing = self._attendance.get(key)
                self._attendance[key] = AttendanceRecord(
                    record_id=existing.record_id if existing else str(uuid.uuid4()),
                    student_id=m.student_id,
                    work_date=m.work_date,
                    present=bool(m.present),
                )
            return len(marks)

    # -- aggregate --------------------------------------------------------

    def count_where(self, table: str, predicate: Optional[Callable[[object], bool]] = None) -> int:
        with self._lock:
            rows = {
                "students": list(self._students.values()),
                "batches": list(self._batches.values()),
                "attendance_records": list(self._attendance.values()),
            }.get(table)
            if rows is None:
                raise ValueError(f"Unsupported table for count: {table!r}")
            if predicate is None:
                return len(rows)
            return sum(1 for r in rows if predicate(r))


def seed_demo_data(store: MemoryStore) -> None:
    """Demo rows, mirrored in database/seed.sql."""

    for batch_id, name, capacity, schedule, instructor, created in [
        ("batch1", "Morning Batch A", 35, "9:00 AM - 12:00 PM", "Prof. Smith", date(2024, 1, 1)),
        ("batch2", "Evening Batch B", 40, "2:00 PM - 5:00 PM", "Prof. Johnson", date(2024, 1, 1)),
        ("batch3", "Weekend Batch C", 30, "10:00 AM - 1:00 PM (Sat-Sun)", "Prof. Williams", date(2024, 1, 15)),
    ]:
        store.put_batch(
            BatchFields(name=name, capacity=capacity, schedule=schedule, instructor=instructor, created_date=created),
            batch_id=batch_id,
        )

    for student_id, name, email, mobile, parent_mobile, address, enrolled in [
        ("1", "John Doe", "john@example.com", "9876543210", "9876543211", "123 Main St", date(2024, 1, 15)),
        ("2", "Jane Smith", "jane@example.com", "9876543212", "9876543213", "456 Oak Ave", date(2024, 1, 20)),
    ]:
        store.put_student(
            StudentFields(
                name=name,
                email=email,
                mobile=mobile,
                parent_mobile=parent_mobile,
                address=address,
                batch_id="batch1",
                enrollment_date=enrolled,
                total_fees=Decimal("0.00"),
                fees_paid=Decimal("0.00"),
            ),
            student_id=student_id,
        )

    store.upsert_attendance(
        [
            AttendanceMark("1", date(2024, 1, 1), True),
            AttendanceMark("1", date(2024, 1, 2), True),
            AttendanceMark("1", date(2024, 1, 3), False),
            AttendanceMark("2", date(2024, 1, 1), True),
            AttendanceMark("2", date(2024, 1, 2), False),
            AttendanceMark("2", date(2024, 1, 3), True),
        ]
    )
