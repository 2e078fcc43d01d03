"""Derived views over in-memory snapshots of students, batches and attendance.

Pure functions: no I/O, nothing raised for empty input, every ratio guarded so
a zero denominator yields 0.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Mapping, Optional, Sequence

from ..attendance.model import AttendanceRecord, AttendanceSummary
from ..batches.model import Batch
from ..core.constants import (
    AVERAGE_THRESHOLD,
    CAPACITY_CRITICAL_THRESHOLD,
    CAPACITY_WARNING_THRESHOLD,
    EXCELLENT_THRESHOLD,
    GOOD_THRESHOLD,
    MONEY_QUANT,
    PERCENT_QUANT,
)
from ..core.enums import AttendanceLabel, CapacityStatus
from ..students.model import Student
from .model import DashboardStats, MonthlyReportRow, ReportSummary


def _percent(part: int, whole: int, quant: Decimal) -> Decimal:
    if whole <= 0:
        return Decimal(0)
    return (Decimal(part) * 100 / Decimal(whole)).quantize(quant, rounding=ROUND_HALF_UP)


def filter_students_by_batch(students: Iterable[Student], batch_id: Optional[str]) -> List[Student]:
    """Students assigned to batch_id, in input order. No batch means no students."""
    if not batch_id:
        return []
    return [s for s in students if s.batch_id == batch_id]


def compute_attendance_summary(attendance: Mapping[str, bool], student_ids: Sequence[str]) -> AttendanceSummary:
    # Ids missing from the mapping count as absent
    present = sum(1 for sid in student_ids if attendance.get(sid, False))
    return AttendanceSummary(present_count=present, absent_count=len(student_ids) - present)


def compute_monthly_report(
    students: Iterable[Student],
    records: Iterable[AttendanceRecord],
    batch_id: Optional[str],
    month: str,
) -> List[MonthlyReportRow]:
    batch_students = filter_students_by_batch(students, batch_id)
    if not batch_students:
        return []

    month_records = [r for r in records if r.work_date.isoformat().startswith(month)]

    rows: List[MonthlyReportRow] = []
    for s in batch_students:
        mine = [r for r in month_records if r.student_id == s.student_id]
        total = len(mine)
        present = sum(1 for r in mine if r.present)
        rows.append(
            MonthlyReportRow(
                student_id=s.student_id,
                student_name=s.name,
                total_days=total,
                present_days=present,
                absent_days=total - present,
                attendance_percentage=float(_percent(present, total, PERCENT_QUANT)),
            )
        )
    return rows


def classify_attendance(percentage: float) -> AttendanceLabel:
    if percentage >= EXCELLENT_THRESHOLD:
        return AttendanceLabel.EXCELLENT
    if percentage >= GOOD_THRESHOLD:
        return AttendanceLabel.GOOD
    if percentage >= AVERAGE_THRESHOLD:
        return AttendanceLabel.AVERAGE
    return AttendanceLabel.POOR


def classify_batch_capacity(current: int, capacity: int) -> CapacityStatus:
    # A batch with no seats is treated as saturated
    if capacity <= 0:
        return CapacityStatus.CRITICAL
    percentage = Decimal(current) * 100 / Decimal(capacity)
    if percentage >= CAPACITY_CRITICAL_THRESHOLD:
        return CapacityStatus.CRITICAL
    if percentage >= CAPACITY_WARNING_THRESHOLD:
        return CapacityStatus.WARNING
    return CapacityStatus.NORMAL


def summarize_report(rows: Sequence[MonthlyReportRow]) -> ReportSummary:
    counts = {label: 0 for label in AttendanceLabel}
    for r in rows:
        counts[classify_attendance(r.attendance_percentage)] += 1

    average = 0
    if rows:
        mean = sum(Decimal(str(r.attendance_percentage)) for r in rows) / len(rows)
        average = int(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    return ReportSummary(total_students=len(rows), average_attendance=average, label_counts=counts)


def compute_dashboard_stats(
    students: Sequence[Student],
    batches: Sequence[Batch],
    records: Sequence[AttendanceRecord],
    today: date,
    current_month: str,
) -> DashboardStats:
    today_present = sum(1 for r in records if r.work_date == today and r.present)

    month_records = [r for r in records if r.work_date.isoformat().startswith(current_month)]
    month_present = sum(1 for r in month_records if r.present)
    rate = int(_percent(month_present, len(month_records), Decimal(1)))

    # fees_due is summed as stored, never recomputed here
    return DashboardStats(
        total_students=len(students),
        total_batches=len(batches),
        today_attendance=today_present,
        attendance_rate=rate,
        total_fees=sum((s.total_fees for s in students), Decimal(0)).quantize(MONEY_QUANT),
        total_fees_paid=sum((s.fees_paid for s in students), Decimal(0)).quantize(MONEY_QUANT),
        total_fees_due=sum((s.fees_due for s in students), Decimal(0)).quantize(MONEY_QUANT),
    )
