from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..batches.repository import BatchRepository
from ..common.datetime_utils import month_prefix, today_local
from ..reports.aggregation import compute_dashboard_stats
from ..reports.model import DashboardStats
from ..students.repository import StudentRepository


@dataclass(frozen=True)
class ConnectionStatus:
    backend: str
    target: str
    batch_count: int


class DashboardService:
    def __init__(
        self,
        students: StudentRepository,
        batches: BatchRepository,
        attendance: AttendanceRepository,
        *,
        backend: str,
        target: str = "",
    ):
        self._students = students
        self._batches = batches
        self._attendance = attendance
        self._backend = backend
        self._target = target

    @property
    def backend(self) -> str:
        return self._backend

    @property
    def target(self) -> str:
        return self._target

    def stats(self, today: Optional[date] = None) -> DashboardStats:
        today = today or today_local()
        return compute_dashboard_stats(
            self._students.list_all(),
            self._batches.list_all(),
            self._attendance.list_all(),
            today,
            month_prefix(today),
        )

    def check_connection(self) -> ConnectionStatus:
        """Round-trip to the store; StoreError propagates when it is unreachable."""

        return ConnectionStatus(backend=self._backend, target=self._target, batch_count=self._batches.count())
