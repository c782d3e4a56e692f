"""Unit tests for the order total calculator."""

from orderdesk.domain.model.order_line import OrderLine
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.service.order_total import order_total


def test_sums_quantity_times_price():
    lines = [
        OrderLine(product_id="P1", name="Suit", variant_id="V1"),
        OrderLine(product_id="P2", name="Dupatta"),
    ]
    total = order_total(
        lines,
        {"P1_V1": 2, "P2": 1},
        {"P1_V1": Money.of("100"), "P2": Money.of("50")},
    )
    assert total == Money.of("250")


def test_empty_selection_totals_zero():
    assert order_total([], {}, {}) == Money.zero()


def test_missing_entries_use_defaults():
    lines = [
        OrderLine(product_id="P1", name="Suit"),
        OrderLine(product_id="P2", name="Dupatta"),
    ]
    # P1 has no quantity (counts as 1), P2 has no price (counts as 0).
    total = order_total(lines, {"P2": 4}, {"P1": Money.of("30")})
    assert total == Money.of("30")


def test_zero_quantity_contributes_nothing():
    lines = [OrderLine(product_id="P1", name="Suit")]
    assert order_total(lines, {"P1": 0}, {"P1": Money.of("99")}) == Money.zero()


def test_two_decimal_prices_stay_exact():
    lines = [OrderLine(product_id="P1", name="Suit")]
    total = order_total(lines, {"P1": 3}, {"P1": Money.of("0.10")})
    assert total == Money.of("0.30")
    assert str(total) == "Rs. 0.30"
