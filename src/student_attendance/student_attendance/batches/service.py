from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..app_logger import get_logger
from ..common.datetime_utils import parse_iso_date, today_local
from ..common.validators import optional_text, require_non_empty, require_positive_int
from ..core.enums import CapacityStatus
from ..core.exceptions import NotFoundError
from ..reports.aggregation import classify_batch_capacity
from ..students.repository import StudentRepository
from .model import Batch, BatchFields, BatchWithCount
from .repository import BatchRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class BatchRowUI:
    batch: BatchWithCount
    capacity_status: CapacityStatus
    is_full: bool


@dataclass(frozen=True)
class BatchTotals:
    total_batches: int
    total_capacity: int


class BatchService:
    def __init__(self, batches: BatchRepository, students: StudentRepository):
        self._batches = batches
        self._students = students

    def list_batches(self) -> Sequence[Batch]:
        return self._batches.list_all()

    def get(self, batch_id: str) -> Batch:
        batch = self._batches.get_by_id(batch_id)
        if not batch:
            raise NotFoundError("Batch not found")
        return batch

    def list_with_counts(self) -> list[BatchRowUI]:
        return [
            BatchRowUI(
                batch=b,
                capacity_status=classify_batch_capacity(b.current_students, b.capacity),
                is_full=b.current_students >= b.capacity,
            )
            for b in self._batches.list_with_counts()
        ]

    def totals(self) -> BatchTotals:
        batches = self._batches.list_all()
        return BatchTotals(total_batches=len(batches), total_capacity=sum(b.capacity for b in batches))

    def create(self, data: Mapping[str, Any], *, today: Optional[date] = None) -> Batch:
        fields = self._parse_fields(data, default_created=today or today_local())
        batch = self._batches.insert(fields)
        logger.info("Batch added: %s (%s)", batch.name, batch.batch_id)
        return batch

    def update(self, batch_id: str, data: Mapping[str, Any]) -> Batch:
        current = self.get(batch_id)
        fields = self._parse_fields(data, default_created=current.created_date)
        batch = self._batches.update(batch_id, fields)
        if not batch:
            raise NotFoundError("Batch not found")
        logger.info("Batch updated: %s (%s)", batch.name, batch.batch_id)
        return batch

    def delete(self, batch_id: str) -> int:
        """Delete a batch and return how many students were unassigned from it.

        Students and their attendance history are kept.
        """

        self.get(batch_id)
        unassigned = self._students.count_in_batch(batch_id)
        if not self._batches.delete(batch_id):
            raise NotFoundError("Batch not found")
        logger.info("Batch deleted: %s (%d students unassigned)", batch_id, unassigned)
        return unassigned

    @staticmethod
    def _parse_fields(data: Mapping[str, Any], *, default_created: date) -> BatchFields:
        created_raw = data.get("created_date")
        return BatchFields(
            name=require_non_empty(data.get("name"), "Name"),
            capacity=require_positive_int(data.get("capacity"), "Capacity"),
            schedule=optional_text(data.get("schedule")),
            instructor=optional_text(data.get("instructor")),
            created_date=parse_iso_date(str(created_raw)) if created_raw else default_created,
        )
