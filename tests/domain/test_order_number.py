"""Unit tests for order number formatting."""

from datetime import datetime

import pytest

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.service.order_number import format_order_number


def test_format():
    assert format_order_number("ACME", datetime(2025, 1, 15), 7) == "ACME-JAN-25-007"


def test_sequence_wider_than_padding():
    assert format_order_number("ACME", datetime(2026, 12, 1), 1234) == "ACME-DEC-26-1234"


def test_blank_business_code_rejected():
    with pytest.raises(ValidationError, match="Business code"):
        format_order_number("  ", datetime(2025, 1, 1), 1)


def test_non_positive_sequence_rejected():
    with pytest.raises(ValidationError, match="must be positive"):
        format_order_number("ACME", datetime(2025, 1, 1), 0)
