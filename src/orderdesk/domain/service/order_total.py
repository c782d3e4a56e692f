"""Domain service: order total calculation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from orderdesk.domain.model.order_line import resolve_key
from orderdesk.domain.model.value_objects import Money

DEFAULT_QUANTITY = 1


def order_total(
    lines: Iterable[object],
    quantities: Mapping[str, int],
    prices: Mapping[str, Money],
) -> Money:
    """Sum quantity x unit price over *lines*.

    Missing quantities count as 1 and missing prices as zero, so a
    half-filled selection still totals cleanly.
    """
    result = Money.zero()
    for line in lines:
        key = resolve_key(line)
        quantity = quantities.get(key, DEFAULT_QUANTITY)
        price = prices.get(key) or Money.zero()
        result = result + price * quantity
    return result
