"""How one batch's attendance sheet for one day becomes store writes.

A student with no entry in the marks mapping is absent. That default applies
both when pre-filling a sheet and when saving it.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional

from ..core.exceptions import ValidationError
from ..students.model import Student
from .model import AttendanceMark, AttendanceRecord

DEFAULT_PRESENT = False


def is_present(marks: Mapping[str, bool], student_id: str) -> bool:
    return bool(marks.get(student_id, DEFAULT_PRESENT))


def marks_from_records(records: Iterable[AttendanceRecord]) -> Dict[str, bool]:
    """Mapping used to pre-fill a sheet from stored records."""
    return {r.student_id: bool(r.present) for r in records}


def mark_all(students: Iterable[Student], present: bool) -> Dict[str, bool]:
    return {s.student_id: bool(present) for s in students}


def parse_mark_all(value: Optional[str]) -> Optional[bool]:
    if value is None or value == "":
        return None
    normalized = str(value).strip().lower()
    if normalized == "present":
        return True
    if normalized == "absent":
        return False
    raise ValidationError("mark_all must be 'present' or 'absent'")


def build_sheet_records(
    students: Iterable[Student],
    work_date: date,
    marks: Mapping[str, bool],
) -> List[AttendanceMark]:
    """One mark per student of the sheet; marks for other students are ignored."""
    return [
        AttendanceMark(student_id=s.student_id, work_date=work_date, present=is_present(marks, s.student_id))
        for s in students
    ]
