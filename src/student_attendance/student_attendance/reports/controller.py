from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.datetime_utils import month_label, month_prefix, today_local
from ..common.http import ok
from ..container import Container
from .aggregation import classify_attendance
from .model import MonthlyReport


def report_to_json(report: MonthlyReport) -> dict:
    s = report.summary
    return {
        "batch": {"id": report.batch.batch_id, "name": report.batch.name} if report.batch else None,
        "month": report.month,
        "month_label": month_label(report.month),
        "rows": [
            {
                "student_id": r.student_id,
                "student_name": r.student_name,
                "total_days": r.total_days,
                "present_days": r.present_days,
                "absent_days": r.absent_days,
                "attendance_percentage": r.attendance_percentage,
                "label": classify_attendance(r.attendance_percentage).value,
            }
            for r in report.rows
        ],
        "summary": {
            "total_students": s.total_students,
            "average_attendance": s.average_attendance,
            "labels": {label.value: count for label, count in s.label_counts.items()},
        },
    }


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _args():
        batch_id = request.args.get("batch_id") or None
        month = request.args.get("month") or month_prefix(today_local())
        return batch_id, month

    @app.route("/api/reports/monthly", methods=["GET"], endpoint="monthly_report")
    def monthly_report():
        batch_id, month = _args()
        return ok({"report": report_to_json(service.monthly_report(batch_id, month))})

    @app.route("/api/reports/monthly.xlsx", methods=["GET"], endpoint="monthly_report_xlsx")
    def monthly_report_xlsx():
        batch_id, month = _args()
        exported = service.export(batch_id, month)
        return send_file(
            io.BytesIO(exported.content),
            mimetype=exported.mimetype,
            as_attachment=True,
            download_name=exported.filename,
        )
