"""Constants and defaults.

Note: Keep thresholds here to avoid magic numbers spread across code.
"""

from decimal import Decimal

EXCELLENT_THRESHOLD = 90
GOOD_THRESHOLD = 75
AVERAGE_THRESHOLD = 60

CAPACITY_CRITICAL_THRESHOLD = 90
CAPACITY_WARNING_THRESHOLD = 75

MONEY_QUANT = Decimal("0.01")
PERCENT_QUANT = Decimal("0.01")

DEFAULT_SYSTEM_NAME = "LINKCODE ATTENDANCE MANAGEMENT SYSTEM"
DEFAULT_SYSTEM_SHORT_NAME = "LINKCODE"

REPORT_SHEET_NAME = "Attendance Report"
REPORT_COLUMNS = ["Student Name", "Total Days", "Present Days", "Absent Days", "Attendance %"]
REPORT_COLUMN_WIDTHS = [25, 12, 12, 12, 15]
