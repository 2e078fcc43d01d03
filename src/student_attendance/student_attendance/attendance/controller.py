from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.http import json_body, ok
from ..container import Container
from ..core.exceptions import ValidationError
from .policy import parse_mark_all
from .service import AttendanceSheet


def sheet_to_json(sheet: AttendanceSheet) -> dict:
    return {
        "batch_id": sheet.batch_id,
        "date": sheet.work_date.isoformat(),
        "students": [
            {"id": s.student_id, "name": s.name, "present": sheet.marks.get(s.student_id, False)}
            for s in sheet.students
        ],
        "summary": {
            "total": sheet.summary.total,
            "present": sheet.summary.present_count,
            "absent": sheet.summary.absent_count,
        },
    }


def _parse_marks(value) -> dict[str, bool]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValidationError("marks must be an object of student id -> true/false")
    marks: dict[str, bool] = {}
    for student_id, present in value.items():
        if not isinstance(present, bool):
            raise ValidationError(f"Mark for student {student_id!r} must be true or false")
        marks[str(student_id)] = present
    return marks


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_sheet")
    def attendance_sheet():
        batch_id = request.args.get("batch_id") or None
        date_s = request.args.get("date")
        work_date = parse_iso_date(date_s) if date_s else today_local()
        return ok({"sheet": sheet_to_json(service.load_sheet(batch_id, work_date))})

    @app.route("/api/attendance", methods=["POST"], endpoint="save_attendance")
    def save_attendance():
        data = json_body()
        date_s = data.get("date")
        work_date = parse_iso_date(str(date_s)) if date_s else today_local()

        sheet = service.save_sheet(
            data.get("batch_id") or None,
            work_date,
            _parse_marks(data.get("marks")),
            mark_all=parse_mark_all(data.get("mark_all")),
        )
        return ok({"message": "Attendance saved successfully!", "sheet": sheet_to_json(sheet)})
