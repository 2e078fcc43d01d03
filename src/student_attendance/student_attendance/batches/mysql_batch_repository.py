from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import count_where, db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import Batch, BatchFields, BatchWithCount
from .repository import BatchRepository


def _to_batch(r: dict) -> Batch:
    return Batch(
        batch_id=str(r["id"]),
        name=r["name"],
        capacity=int(r["capacity"]),
        schedule=r.get("schedule") or "",
        instructor=r.get("instructor") or "",
        created_date=normalize_mysql_date(r["created_date"]),
    )


class MySQLBatchRepository(BatchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Batch]:
        with db_cursor(self._conn_factory, action="fetch batches") as (_, cur):
            cur.execute(
                """
                SELECT id, name, capacity, schedule, instructor, created_date
                FROM batches
                ORDER BY name
                """
            )
            return [_to_batch(r) for r in fetchall(cur)]

    def list_with_counts(self) -> Sequence[BatchWithCount]:
        with db_cursor(self._conn_factory, action="fetch batches with student count") as (_, cur):
            cur.execute(
                """
                SELECT b.id, b.name, b.capacity, b.schedule, b.instructor, b.created_date,
                       COUNT(s.id) AS current_students
                FROM batches b
                LEFT JOIN students s ON s.batch_id = b.id
                GROUP BY b.id, b.name, b.capacity, b.schedule, b.instructor, b.created_date
                ORDER BY b.name
                """
            )
            rows = fetchall(cur)
            return [
                BatchWithCount(
                    batch_id=str(r["id"]),
                    name=r["name"],
                    capacity=int(r["capacity"]),
                    schedule=r.get("schedule") or "",
                    instructor=r.get("instructor") or "",
                    created_date=normalize_mysql_date(r["created_date"]),
                    current_students=int(r.get("current_students") or 0),
                )
                for r in rows
            ]

    def get_by_id(self, batch_id: str) -> Optional[Batch]:
        with db_cursor(self._conn_factory, action="fetch batch") as (_, cur):
            cur.execute(
                "SELECT id, name, capacity, schedule, instructor, created_date FROM batches WHERE id=%s",
                (batch_id,),
            )
            row = fetchone(cur)
            return _to_batch(row) if row else None

    def insert(self, fields: BatchFields) -> Batch:
        batch_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory, action="add batch") as (_, cur):
            cur.execute(
                """
                INSERT INTO batches(id, name, capacity, schedule, instructor, created_date)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (batch_id, fields.name, fields.capacity, fields.schedule, fields.instructor, fields.created_date),
            )
        return Batch(
            batch_id=batch_id,
            name=fields.name,
            capacity=fields.capacity,
            schedule=fields.schedule,
            instructor=fields.instructor,
            created_date=fields.created_date,
        )

    def update(self, batch_id: str, fields: BatchFields) -> Optional[Batch]:
        with db_cursor(self._conn_factory, action="update batch") as (_, cur):
            cur.execute(
                """
                UPDATE batches
                SET name=%s, capacity=%s, schedule=%s, instructor=%s, created_date=%s
                WHERE id=%s
                """,
                (fields.name, fields.capacity, fields.schedule, fields.instructor, fields.created_date, batch_id),
            )
            cur.execute(
                "SELECT id, name, capacity, schedule, instructor, created_date FROM batches WHERE id=%s",
                (batch_id,),
            )
            row = fetchone(cur)
            return _to_batch(row) if row else None

    def delete(self, batch_id: str) -> bool:
        with db_cursor(self._conn_factory, action="delete batch") as (_, cur):
            # Unassign first; attendance rows are kept
            cur.execute("UPDATE students SET batch_id=NULL WHERE batch_id=%s", (batch_id,))
            cur.execute("DELETE FROM batches WHERE id=%s", (batch_id,))
            return cur.rowcount > 0

    def count(self) -> int:
        return count_where(self._conn_factory, "batches")
