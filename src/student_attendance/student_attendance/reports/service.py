from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..batches.repository import BatchRepository
from ..common.datetime_utils import parse_month, today_local
from ..core.constants import DEFAULT_SYSTEM_NAME, DEFAULT_SYSTEM_SHORT_NAME
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .aggregation import compute_monthly_report, summarize_report
from .export import export_monthly_report, report_filename
from .model import MonthlyReport


@dataclass(frozen=True)
class ExportedReport:
    filename: str
    content: bytes
    mimetype: str = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ReportService:
    def __init__(
        self,
        students: StudentRepository,
        batches: BatchRepository,
        attendance: AttendanceRepository,
        *,
        system_name: str = DEFAULT_SYSTEM_NAME,
        system_short_name: str = DEFAULT_SYSTEM_SHORT_NAME,
    ):
        self._students = students
        self._batches = batches
        self._attendance = attendance
        self._system_name = system_name
        self._system_short_name = system_short_name

    def monthly_report(self, batch_id: Optional[str], month: str) -> MonthlyReport:
        month = parse_month(month)
        if not batch_id:
            return MonthlyReport(batch=None, month=month, rows=[], summary=summarize_report([]))

        batch = self._batches.get_by_id(batch_id)
        if not batch:
            raise NotFoundError("Batch not found")

        rows = compute_monthly_report(self._students.list_all(), self._attendance.list_all(), batch_id, month)
        return MonthlyReport(batch=batch, month=month, rows=rows, summary=summarize_report(rows))

    def export(self, batch_id: Optional[str], month: str, *, generated_on: Optional[date] = None) -> ExportedReport:
        report = self.monthly_report(batch_id, month)
        if report.batch is None or not report.rows:
            raise ValidationError("Please select a batch and ensure there is data to export")

        generated_on = generated_on or today_local()
        content = export_monthly_report(report, system_name=self._system_name, generated_on=generated_on)
        filename = report_filename(self._system_short_name, report.batch.name, report.month, generated_on)
        return ExportedReport(filename=filename, content=content)
