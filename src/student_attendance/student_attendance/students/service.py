from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..app_logger import get_logger
from ..batches.repository import BatchRepository
from ..common.datetime_utils import parse_iso_date, today_local
from ..common.validators import optional_text, require_non_empty, require_non_negative_money
from ..core.exceptions import NotFoundError, ValidationError
from .model import Student, StudentFields
from .repository import StudentRepository

logger = get_logger(__name__)

READ_ONLY_FIELDS = ("fees_due",)


class StudentService:
    """Use cases: list, enroll, edit and remove students."""

    def __init__(self, students: StudentRepository, batches: BatchRepository):
        self._students = students
        self._batches = batches

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def get(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def create(self, data: Mapping[str, Any], *, today: Optional[date] = None) -> Student:
        fields = self._parse_fields(data, default_enrollment=today or today_local())
        student = self._students.insert(fields)
        logger.info("Student added: %s (%s)", student.name, student.student_id)
        return student

    def update(self, student_id: str, data: Mapping[str, Any]) -> Student:
        current = self.get(student_id)
        fields = self._parse_fields(data, default_enrollment=current.enrollment_date)
        student = self._students.update(student_id, fields)
        if not student:
            raise NotFoundError("Student not found")
        logger.info("Student updated: %s (%s)", student.name, student.student_id)
        return student

    def delete(self, student_id: str) -> None:
        if not self._students.delete(student_id):
            raise NotFoundError("Student not found")
        logger.info("Student deleted: %s", student_id)

    def _parse_fields(self, data: Mapping[str, Any], *, default_enrollment: date) -> StudentFields:
        for name in READ_ONLY_FIELDS:
            if name in data:
                raise ValidationError(f"{name} is computed by the store and cannot be set")

        batch_id = optional_text(data.get("batch_id")) or None
        if batch_id is not None and not self._batches.get_by_id(batch_id):
            raise ValidationError("Batch not found")

        enrollment_raw = data.get("enrollment_date")
        enrollment_date = parse_iso_date(str(enrollment_raw)) if enrollment_raw else default_enrollment

        return StudentFields(
            name=require_non_empty(data.get("name"), "Name"),
            email=require_non_empty(data.get("email"), "Email"),
            mobile=require_non_empty(data.get("mobile"), "Mobile"),
            parent_mobile=optional_text(data.get("parent_mobile")),
            address=optional_text(data.get("address")),
            batch_id=batch_id,
            enrollment_date=enrollment_date,
            total_fees=require_non_negative_money(data.get("total_fees"), "Total fees"),
            fees_paid=require_non_negative_money(data.get("fees_paid"), "Fees paid"),
        )
