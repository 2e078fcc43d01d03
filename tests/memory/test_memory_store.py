from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.student_attendance.student_attendance.attendance.model import AttendanceMark
from src.student_attendance.student_attendance.core.exceptions import StoreError
from src.student_attendance.student_attendance.memory.store import MemoryStore


def test_seeded_store_matches_demo_data():
    store = MemoryStore(seed=True)

    assert [b.batch_id for b in store.batches()] == ["batch2", "batch1", "batch3"]
    assert [s.name for s in store.students()] == ["Jane Smith", "John Doe"]
    assert len(store.attendance()) == 6
    assert store.count_where("attendance_records", lambda r: r.present) == 4


def test_upsert_replaces_in_place(store, add_student):
    amy = add_student("Amy Adams")
    store.upsert_attendance([AttendanceMark(amy.student_id, date(2024, 3, 5), True)])
    first = store.attendance()[0]

    store.upsert_attendance([AttendanceMark(amy.student_id, date(2024, 3, 5), False)])

    records = store.attendance()
    assert len(records) == 1
    assert records[0].record_id == first.record_id
    assert records[0].present is False


def test_upsert_with_unknown_student_applies_nothing(store, add_student):
    amy = add_student("Amy Adams")
    with pytest.raises(StoreError):
        store.upsert_attendance(
            [AttendanceMark(amy.student_id, date(2024, 3, 5), True), AttendanceMark("ghost", date(2024, 3, 5), True)]
        )
    assert store.attendance() == []


def test_attendance_newest_first(store, add_student):
    amy = add_student("Amy Adams")
    store.upsert_attendance(
        [AttendanceMark(amy.student_id, date(2024, 3, d), True) for d in (2, 9, 5)]
    )
    assert [r.work_date.day for r in store.attendance()] == [9, 5, 2]


def test_student_needs_existing_batch(add_student):
    with pytest.raises(StoreError):
        add_student("Amy Adams", batch_id="missing")


def test_fees_due_is_derived(add_student):
    amy = add_student("Amy Adams", total_fees="100.10", fees_paid="25")
    assert amy.fees_due == Decimal("75.10")


def test_count_where_unknown_table(store):
    with pytest.raises(ValueError):
        store.count_where("users")
