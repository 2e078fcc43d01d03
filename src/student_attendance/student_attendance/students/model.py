from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.constants import MONEY_QUANT
from ..core.enums import FeeStatus


@dataclass(frozen=True)
class Student:
    """Domain entity: Student.

    fees_due is whatever the store computed from total_fees and fees_paid;
    it is read-only on this side of the repository.
    """

    student_id: str
    name: str
    email: str
    mobile: str
    parent_mobile: str
    address: str
    batch_id: Optional[str]
    enrollment_date: date
    total_fees: Decimal
    fees_paid: Decimal
    fees_due: Decimal

    @property
    def fee_status(self) -> FeeStatus:
        return fee_status(self.fees_due)


@dataclass(frozen=True)
class StudentFields:
    """Writable columns for insert/full update (no fees_due by construction)."""

    name: str
    email: str
    mobile: str
    parent_mobile: str
    address: str
    batch_id: Optional[str]
    enrollment_date: date
    total_fees: Decimal
    fees_paid: Decimal


def derive_fees_due(total_fees: Decimal, fees_paid: Decimal) -> Decimal:
    """The generated-column rule: fees_due = total_fees - fees_paid.

    Only a store implementation may call this; everything else reads
    Student.fees_due as returned by the store.
    """
    return (Decimal(total_fees) - Decimal(fees_paid)).quantize(MONEY_QUANT)


def fee_status(fees_due: Decimal) -> FeeStatus:
    return FeeStatus.PAID if fees_due <= 0 else FeeStatus.PENDING
