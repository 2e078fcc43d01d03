from __future__ import annotations

import io
import re
from datetime import date
from typing import List

import pandas as pd
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from ..common.datetime_utils import month_label
from ..core.constants import REPORT_COLUMN_WIDTHS, REPORT_COLUMNS, REPORT_SHEET_NAME
from ..core.enums import AttendanceLabel
from .model import MonthlyReport

# Title block occupies rows 1-4, row 5 is blank, the table header is row 6.
TABLE_START_ROW = 5

BUCKET_LABELS = [
    (AttendanceLabel.EXCELLENT, "Excellent (≥90%)"),
    (AttendanceLabel.GOOD, "Good (75-89%)"),
    (AttendanceLabel.AVERAGE, "Average (60-74%)"),
    (AttendanceLabel.POOR, "Poor (<60%)"),
]


def format_percentage(value: float) -> str:
    # 50.0 -> "50%", 66.67 -> "66.67%"
    return f"{value:g}%"


def report_filename(short_name: str, batch_name: str, month: str, generated_on: date) -> str:
    safe_batch = re.sub(r"\s+", "_", batch_name.strip())
    return f"{short_name}_attendance_{safe_batch}_{month}_{generated_on.isoformat()}.xlsx"


def _rows_frame(report: MonthlyReport) -> pd.DataFrame:
    data = [
        [r.student_name, r.total_days, r.present_days, r.absent_days, format_percentage(r.attendance_percentage)]
        for r in report.rows
    ]
    return pd.DataFrame(data, columns=REPORT_COLUMNS)


def _summary_lines(report: MonthlyReport) -> List[list]:
    s = report.summary
    lines: List[list] = [
        ["SUMMARY"],
        ["Total Students", s.total_students],
        ["Average Attendance", None, None, None, f"{s.average_attendance}%"],
    ]
    for label, caption in BUCKET_LABELS:
        lines.append([caption, s.label_counts.get(label, 0)])
    return lines


def export_monthly_report(report: MonthlyReport, *, system_name: str, generated_on: date) -> bytes:
    """Render a monthly report as an .xlsx workbook and return its bytes."""

    batch_name = report.batch.name if report.batch else "Unknown Batch"
    df = _rows_frame(report)

    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=REPORT_SHEET_NAME, index=False, startrow=TABLE_START_ROW)
        ws = writer.sheets[REPORT_SHEET_NAME]

        ws.cell(row=1, column=1, value=system_name).font = Font(bold=True, size=14)
        ws.cell(row=2, column=1, value=f"Attendance Report - {batch_name}")
        ws.cell(row=3, column=1, value=f"Month: {month_label(report.month)}")
        ws.cell(row=4, column=1, value=f"Generated on: {generated_on.isoformat()}")

        # header row + data rows, then one blank row
        row = TABLE_START_ROW + 1 + len(df) + 2
        for line in _summary_lines(report):
            for col, value in enumerate(line, start=1):
                if value is not None:
                    ws.cell(row=row, column=col, value=value)
            row += 1
        ws.cell(row=TABLE_START_ROW + 1 + len(df) + 2, column=1).font = Font(bold=True)

        for idx, width in enumerate(REPORT_COLUMN_WIDTHS, start=1):
            ws.column_dimensions[get_column_letter(idx)].width = width

    out.seek(0)
    return out.getvalue()
