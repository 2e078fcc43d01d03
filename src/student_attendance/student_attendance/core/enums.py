from __future__ import annotations

from enum import Enum


class AttendanceLabel(str, Enum):
    """Monthly attendance band shown next to a percentage."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    POOR = "Poor"


class CapacityStatus(str, Enum):
    """How close a batch is to its capacity."""

    CRITICAL = "Critical"
    WARNING = "Warning"
    NORMAL = "Normal"


class FeeStatus(str, Enum):
    PAID = "Paid"
    PENDING = "Pending"


class StoreBackend(str, Enum):
    MYSQL = "mysql"
    MEMORY = "memory"
