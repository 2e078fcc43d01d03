from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from ..batches.model import Batch
from ..core.enums import AttendanceLabel


@dataclass(frozen=True)
class MonthlyReportRow:
    """Per-student attendance statistics restricted to one calendar month."""

    student_id: str
    student_name: str
    total_days: int
    present_days: int
    absent_days: int
    attendance_percentage: float


@dataclass(frozen=True)
class ReportSummary:
    total_students: int
    average_attendance: int
    label_counts: Dict[AttendanceLabel, int] = field(default_factory=dict)


@dataclass(frozen=True)
class MonthlyReport:
    batch: Optional[Batch]
    month: str
    rows: List[MonthlyReportRow]
    summary: ReportSummary


@dataclass(frozen=True)
class DashboardStats:
    total_students: int
    total_batches: int
    today_attendance: int
    attendance_rate: int
    total_fees: Decimal
    total_fees_paid: Decimal
    total_fees_due: Decimal
