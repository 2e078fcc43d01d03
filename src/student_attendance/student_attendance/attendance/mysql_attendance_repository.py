from __future__ import annotations

import uuid
from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date
from .model import AttendanceMark, AttendanceRecord
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(r["id"]),
        student_id=str(r["student_id"]),
        work_date=normalize_mysql_date(r["date"]),
        present=bool(r["present"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory, action="fetch attendance records") as (_, cur):
            cur.execute(
                """
                SELECT id, student_id, date, present
                FROM attendance_records
                ORDER BY date DESC
                """
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_date_and_batch(self, *, work_date: date, batch_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory, action="fetch attendance by date and batch") as (_, cur):
            cur.execute(
                """
                SELECT ar.id, ar.student_id, ar.date, ar.present
                FROM attendance_records ar
                JOIN students s ON s.id = ar.student_id
                WHERE ar.date=%s AND s.batch_id=%s
                """,
                (work_date, batch_id),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def upsert_many(self, marks: Sequence[AttendanceMark]) -> int:
        if not marks:
            return 0

        # One transaction for the whole sheet: db_cursor rolls back on any failure.
        with db_cursor(self._conn_factory, action="save attendance") as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_records(id, student_id, date, present)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE present=VALUES(present)
                """,
                [(str(uuid.uuid4()), m.student_id, m.work_date, bool(m.present)) for m in marks],
            )
        return len(marks)
