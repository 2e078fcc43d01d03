from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .batches.mysql_batch_repository import MySQLBatchRepository
from .batches.repository import BatchRepository
from .batches.service import BatchService
from .core.constants import DEFAULT_SYSTEM_NAME, DEFAULT_SYSTEM_SHORT_NAME
from .core.enums import StoreBackend
from .core.exceptions import ValidationError
from .dashboard.service import DashboardService
from .database.connection import DatabaseConnection, DBConfig
from .memory.repositories import (
    InMemoryAttendanceRepository,
    InMemoryBatchRepository,
    InMemoryStudentRepository,
)
from .memory.store import MemoryStore
from .reports.service import ReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    backend: StoreBackend

    students_repo: StudentRepository
    batches_repo: BatchRepository
    attendance_repo: AttendanceRepository

    student_service: StudentService
    batch_service: BatchService
    attendance_service: AttendanceService
    report_service: ReportService
    dashboard_service: DashboardService

    system_name: str = DEFAULT_SYSTEM_NAME


def build_container(
    *,
    backend: str = StoreBackend.MYSQL.value,
    db_config: Optional[dict] = None,
    memory_store: Optional[MemoryStore] = None,
    memory_seed: bool = False,
    system_name: str = DEFAULT_SYSTEM_NAME,
    system_short_name: str = DEFAULT_SYSTEM_SHORT_NAME,
) -> Container:
    try:
        store_backend = StoreBackend(str(backend).lower())
    except ValueError:
        raise ValidationError(f"Unknown STORE_BACKEND: {backend!r}")

    if store_backend is StoreBackend.MEMORY:
        store = memory_store if memory_store is not None else MemoryStore(seed=memory_seed)
        students_repo = InMemoryStudentRepository(store)
        batches_repo = InMemoryBatchRepository(store)
        attendance_repo = InMemoryAttendanceRepository(store)
        target = "in-process"
    else:
        if not db_config:
            raise ValidationError("DB_CONFIG is required for the mysql backend")
        config = DBConfig.from_dict(db_config)
        conn = DatabaseConnection(config)
        students_repo = MySQLStudentRepository(conn)
        batches_repo = MySQLBatchRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
        target = config.describe()

    return Container(
        backend=store_backend,
        students_repo=students_repo,
        batches_repo=batches_repo,
        attendance_repo=attendance_repo,
        student_service=StudentService(students_repo, batches_repo),
        batch_service=BatchService(batches_repo, students_repo),
        attendance_service=AttendanceService(attendance_repo, students_repo, batches_repo),
        report_service=ReportService(
            students_repo,
            batches_repo,
            attendance_repo,
            system_name=system_name,
            system_short_name=system_short_name,
        ),
        dashboard_service=DashboardService(
            students_repo,
            batches_repo,
            attendance_repo,
            backend=store_backend.value,
            target=target,
        ),
        system_name=system_name,
    )
