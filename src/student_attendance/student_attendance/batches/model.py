from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Batch:
    """Domain entity: a cohort sharing a schedule and instructor."""

    batch_id: str
    name: str
    capacity: int
    schedule: str
    instructor: str
    created_date: date


@dataclass(frozen=True)
class BatchFields:
    name: str
    capacity: int
    schedule: str
    instructor: str
    created_date: date


@dataclass(frozen=True)
class BatchWithCount(Batch):
    """Read-model: batch plus the number of students assigned to it (never stored)."""

    current_students: int = 0
