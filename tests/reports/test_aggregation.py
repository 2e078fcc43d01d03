from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.student_attendance.student_attendance.attendance.model import AttendanceRecord
from src.student_attendance.student_attendance.batches.model import Batch
from src.student_attendance.student_attendance.core.enums import AttendanceLabel, CapacityStatus
from src.student_attendance.student_attendance.reports.aggregation import (
    classify_attendance,
    classify_batch_capacity,
    compute_attendance_summary,
    compute_dashboard_stats,
    compute_monthly_report,
    filter_students_by_batch,
    summarize_report,
)
from src.student_attendance.student_attendance.students.model import Student


def student(student_id, batch_id="b1", name=None, total="0", paid="0", due=None):
    total_d, paid_d = Decimal(total), Decimal(paid)
    return Student(
        student_id=student_id,
        name=name or f"Student {student_id}",
        email="s@example.com",
        mobile="1",
        parent_mobile="",
        address="",
        batch_id=batch_id,
        enrollment_date=date(2024, 1, 1),
        total_fees=total_d,
        fees_paid=paid_d,
        fees_due=Decimal(due) if due is not None else total_d - paid_d,
    )


def record(student_id, day, present):
    return AttendanceRecord(record_id=f"{student_id}-{day}", student_id=student_id, work_date=day, present=present)


def test_filter_students_by_batch_keeps_input_order():
    students = [student("2", name="Bob"), student("1", name="Amy"), student("3", batch_id="b2")]
    assert [s.student_id for s in filter_students_by_batch(students, "b1")] == ["2", "1"]


def test_filter_students_by_batch_unknown_or_empty_batch():
    students = [student("1"), student("2")]
    assert filter_students_by_batch(students, "nope") == []
    assert filter_students_by_batch(students, "") == []
    assert filter_students_by_batch(students, None) == []


def test_filter_skips_unassigned_students():
    assert filter_students_by_batch([student("1", batch_id=None)], "b1") == []


def test_attendance_summary_defaults_missing_to_absent():
    summary = compute_attendance_summary({"1": True, "2": False}, ["1", "2", "3"])
    assert summary.present_count == 1
    assert summary.absent_count == 2
    assert summary.total == 3


def test_attendance_summary_ignores_ids_outside_sheet():
    summary = compute_attendance_summary({"1": True, "other": True}, ["1", "2"])
    assert (summary.present_count, summary.absent_count) == (1, 1)


def test_attendance_summary_empty():
    summary = compute_attendance_summary({}, [])
    assert (summary.present_count, summary.absent_count) == (0, 0)


def test_monthly_report_scenario():
    students = [student("1")]
    records = [record("1", date(2024, 3, 5), True), record("1", date(2024, 3, 6), False)]

    rows = compute_monthly_report(students, records, "b1", "2024-03")

    assert len(rows) == 1
    row = rows[0]
    assert (row.total_days, row.present_days, row.absent_days) == (2, 1, 1)
    assert row.attendance_percentage == 50


def test_monthly_report_excludes_other_months_and_batches():
    students = [student("1"), student("2", batch_id="b2")]
    records = [
        record("1", date(2024, 3, 5), True),
        record("1", date(2024, 4, 1), False),
        record("1", date(2023, 3, 5), False),
        record("2", date(2024, 3, 5), True),
    ]

    rows = compute_monthly_report(students, records, "b1", "2024-03")

    assert [r.student_id for r in rows] == ["1"]
    assert rows[0].total_days == 1
    assert rows[0].attendance_percentage == 100


def test_monthly_report_zero_records_is_zero_percent():
    rows = compute_monthly_report([student("1")], [], "b1", "2024-03")
    assert rows[0].total_days == 0
    assert rows[0].attendance_percentage == 0


def test_monthly_report_rounds_to_two_decimals():
    records = [
        record("1", date(2024, 3, 1), True),
        record("1", date(2024, 3, 2), True),
        record("1", date(2024, 3, 3), False),
    ]
    rows = compute_monthly_report([student("1")], records, "b1", "2024-03")
    assert rows[0].attendance_percentage == 66.67


def test_monthly_report_is_stable_across_recomputation():
    students = [student("1"), student("2")]
    records = [record("1", date(2024, 3, d), d % 3 != 0) for d in range(1, 20)]
    first = compute_monthly_report(students, records, "b1", "2024-03")
    second = compute_monthly_report(students, records, "b1", "2024-03")
    assert first == second


def test_monthly_report_without_batch_is_empty():
    assert compute_monthly_report([student("1")], [], None, "2024-03") == []


@pytest.mark.parametrize(
    "percentage,expected",
    [
        (100, AttendanceLabel.EXCELLENT),
        (90, AttendanceLabel.EXCELLENT),
        (89.99, AttendanceLabel.GOOD),
        (75, AttendanceLabel.GOOD),
        (74.99, AttendanceLabel.AVERAGE),
        (60, AttendanceLabel.AVERAGE),
        (59.99, AttendanceLabel.POOR),
        (0, AttendanceLabel.POOR),
    ],
)
def test_classify_attendance_boundaries(percentage, expected):
    assert classify_attendance(percentage) is expected


def test_classify_attendance_never_raises_in_range():
    for tenth in range(0, 1001):
        classify_attendance(tenth / 10)


@pytest.mark.parametrize(
    "current,capacity,expected",
    [
        (9, 10, CapacityStatus.CRITICAL),
        (10, 10, CapacityStatus.CRITICAL),
        (12, 10, CapacityStatus.CRITICAL),
        (3, 4, CapacityStatus.WARNING),
        (74, 100, CapacityStatus.NORMAL),
        (0, 35, CapacityStatus.NORMAL),
    ],
)
def test_classify_batch_capacity(current, capacity, expected):
    assert classify_batch_capacity(current, capacity) is expected


def test_classify_batch_capacity_zero_capacity_is_critical():
    assert classify_batch_capacity(0, 0) is CapacityStatus.CRITICAL
    assert classify_batch_capacity(5, 0) is CapacityStatus.CRITICAL


def test_summarize_report_buckets_and_average():
    students = [student(str(i)) for i in range(1, 5)]
    days = [date(2024, 3, d) for d in range(1, 5)]
    # 4/4, 3/4, 1/4 present; student 4 has no records
    marks = {"1": [True] * 4, "2": [True, True, True, False], "3": [True, False, False, False]}
    records = [record(sid, day, p) for sid, ps in marks.items() for day, p in zip(days, ps)]

    rows = compute_monthly_report(students, records, "b1", "2024-03")
    summary = summarize_report(rows)

    assert summary.total_students == 4
    # (100 + 75 + 25 + 0) / 4
    assert summary.average_attendance == 50
    assert summary.label_counts[AttendanceLabel.EXCELLENT] == 1
    assert summary.label_counts[AttendanceLabel.GOOD] == 1
    assert summary.label_counts[AttendanceLabel.AVERAGE] == 0
    assert summary.label_counts[AttendanceLabel.POOR] == 2


def test_summarize_empty_report():
    summary = summarize_report([])
    assert summary.total_students == 0
    assert summary.average_attendance == 0
    assert sum(summary.label_counts.values()) == 0


def test_dashboard_fee_totals():
    students = [student("1", total="100", paid="100"), student("2", total="200", paid="50")]
    stats = compute_dashboard_stats(students, [], [], date(2024, 3, 15), "2024-03")

    assert stats.total_fees == Decimal("300.00")
    assert stats.total_fees_paid == Decimal("150.00")
    assert stats.total_fees_due == Decimal("150.00")


def test_dashboard_sums_stored_fees_due():
    # fees_due is taken as the store reported it
    stats = compute_dashboard_stats([student("1", total="100", paid="0", due="40")], [], [], date(2024, 3, 15), "2024-03")
    assert stats.total_fees_due == Decimal("40.00")


def test_dashboard_attendance_counts():
    today = date(2024, 3, 15)
    batches = [Batch("b1", "Morning", 30, "", "", date(2024, 1, 1))]
    records = [
        record("1", today, True),
        record("2", today, False),
        record("3", today, True),
        record("1", date(2024, 3, 14), False),
        record("1", date(2024, 2, 28), True),
    ]
    stats = compute_dashboard_stats([student("1"), student("2")], batches, records, today, "2024-03")

    assert stats.total_students == 2
    assert stats.total_batches == 1
    assert stats.today_attendance == 2
    # 2 present of 4 March records
    assert stats.attendance_rate == 50


def test_dashboard_attendance_rate_rounds_to_integer():
    today = date(2024, 3, 15)
    records = [record("1", today, True), record("2", today, True), record("3", today, False)]
    stats = compute_dashboard_stats([], [], records, today, "2024-03")
    assert stats.attendance_rate == 67


def test_dashboard_empty_inputs():
    stats = compute_dashboard_stats([], [], [], date(2024, 3, 15), "2024-03")
    assert stats.total_students == 0
    assert stats.today_attendance == 0
    assert stats.attendance_rate == 0
    assert stats.total_fees == Decimal("0.00")
