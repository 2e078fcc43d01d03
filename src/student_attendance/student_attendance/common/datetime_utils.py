from __future__ import annotations

import re
from datetime import date, datetime

from ..core.exceptions import ValidationError

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def parse_month(value: str) -> str:
    """Validate a YYYY-MM month prefix and return it unchanged."""
    if not value or not _MONTH_RE.match(value):
        raise ValidationError(f"Invalid month: {value!r} (expected YYYY-MM)")
    return value


def month_prefix(day: date) -> str:
    return day.strftime("%Y-%m")


def month_label(month: str) -> str:
    """'2024-03' -> 'March 2024'."""
    return datetime.strptime(parse_month(month) + "-01", "%Y-%m-%d").strftime("%B %Y")


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mock easier.
    """
    return date.today()
