"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.value_objects import Money


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "PKR"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_int(self):
        assert Money.of(10).amount == Decimal("10")

    def test_of_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * 1.5

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "PKR") + Money(Decimal("5"), "USD")

    def test_str_uses_rupee_prefix_and_thousands_separator(self):
        assert str(Money.of("250")) == "Rs. 250.00"
        assert str(Money.of("1250.5")) == "Rs. 1,250.50"
        assert str(Money.of("1234567")) == "Rs. 1,234,567.00"


class TestLenientMoney:

    @pytest.mark.parametrize("raw", ["abc", "", None, "nan", "Infinity", True])
    def test_unparseable_input_becomes_zero(self, raw):
        assert Money.lenient(raw) == Money.zero()

    def test_negative_clamps_to_zero(self):
        assert Money.lenient("-40") == Money.zero()

    def test_rounds_to_cents(self):
        assert Money.lenient("19.999").amount == Decimal("20.00")
        assert Money.lenient(12.345).amount == Decimal("12.35")

    def test_accepts_whitespace_and_numbers(self):
        assert Money.lenient(" 500 ") == Money.of("500")
        assert Money.lenient(Decimal("99.5")) == Money.of("99.50")

    def test_money_passes_through(self):
        m = Money.of("3")
        assert Money.lenient(m) is m
