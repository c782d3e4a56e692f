"""Domain service: human-readable order numbers.

Format: ``{business code}-{MON}-{YY}-{sequence}``, where the sequence
counts the tenant's orders within the month, starting at 1.
"""

from __future__ import annotations

from datetime import datetime

from orderdesk.domain.exceptions import ValidationError

_MONTHS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN",
           "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")


def format_order_number(business_code: str, when: datetime, sequence: int) -> str:
    if not business_code or not business_code.strip():
        raise ValidationError("Business code is required")
    if sequence <= 0:
        raise ValidationError("Order sequence must be positive")
    month = _MONTHS[when.month - 1]
    year = f"{when.year % 100:02d}"
    return f"{business_code.strip()}-{month}-{year}-{sequence:03d}"
