from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    count_where,
    db_cursor,
    fetchall,
    fetchone,
    normalize_mysql_date,
    normalize_mysql_decimal,
)
from .model import Student, StudentFields
from .repository import StudentRepository

_COLUMNS = """
    id, name, email, mobile, parent_mobile, address, batch_id,
    enrollment_date, total_fees, fees_paid, fees_due
"""


def _to_student(r: dict) -> Student:
    return Student(
        student_id=str(r["id"]),
        name=r["name"],
        email=r.get("email") or "",
        mobile=r.get("mobile") or "",
        parent_mobile=r.get("parent_mobile") or "",
        address=r.get("address") or "",
        batch_id=r.get("batch_id") or None,
        enrollment_date=normalize_mysql_date(r["enrollment_date"]),
        total_fees=normalize_mysql_decimal(r.get("total_fees")),
        fees_paid=normalize_mysql_decimal(r.get("fees_paid")),
        fees_due=normalize_mysql_decimal(r.get("fees_due")),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory, action="fetch students") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY name")
            return [_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory, action="fetch student") as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE id=%s", (student_id,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def insert(self, fields: StudentFields) -> Student:
        student_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory, action="add student") as (_, cur):
            cur.execute(
                """
                INSERT INTO students(
                    id, name, email, mobile, parent_mobile, address, batch_id,
                    enrollment_date, total_fees, fees_paid
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    student_id,
                    fields.name,
                    fields.email,
                    fields.mobile,
                    fields.parent_mobile,
                    fields.address,
                    fields.batch_id,
                    fields.enrollment_date,
                    fields.total_fees,
                    fields.fees_paid,
                ),
            )
            # Read back so fees_due comes from the generated column
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE id=%s", (student_id,))
            return _to_student(fetchone(cur))

    def update(self, student_id: str, fields: StudentFields) -> Optional[Student]:
        with db_cursor(self._conn_factory, action="update student") as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET name=%s, email=%s, mobile=%s, parent_mobile=%s, address=%s,
                    batch_id=%s, enrollment_date=%s, total_fees=%s, fees_paid=%s
                WHERE id=%s
                """,
                (
                    fields.name,
                    fields.email,
                    fields.mobile,
                    fields.parent_mobile,
                    fields.address,
                    fields.batch_id,
                    fields.enrollment_date,
                    fields.total_fees,
                    fields.fees_paid,
                    student_id,
                ),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE id=%s", (student_id,))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def delete(self, student_id: str) -> bool:
        # attendance_records rows go with it (ON DELETE CASCADE)
        with db_cursor(self._conn_factory, action="delete student") as (_, cur):
            cur.execute("DELETE FROM students WHERE id=%s", (student_id,))
            return cur.rowcount > 0

    def count(self) -> int:
        return count_where(self._conn_factory, "students")

    def count_in_batch(self, batch_id: str) -> int:
        return count_where(self._conn_factory, "students", "batch_id=%s", (batch_id,))
