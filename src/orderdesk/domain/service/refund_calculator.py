"""Domain service: refund calculation for customer returns.

A return refunds the value of the returned lines, adjusted for how the
original shipping charge is handled.  Line values are looked up the
same way the order was stored: the line's own quantity/price first,
then the order's maps by line key, then by bare product id (orders
created before variants existed), then the defaults.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from orderdesk.domain.model.composer import coerce_quantity
from orderdesk.domain.model.order_line import product_id_of, resolve_key
from orderdesk.domain.model.value_objects import Money


class ShippingHandling(Enum):
    NONE = "NONE"
    FULL_REFUND = "FULL_REFUND"
    DEDUCT_FROM_ADVANCE = "DEDUCT_FROM_ADVANCE"
    CUSTOMER_PAYS = "CUSTOMER_PAYS"


@dataclass(frozen=True)
class RefundQuote:
    products_value: Money
    refund: Money
    advance_used: Money


def _lookup(line: object, attr: str, by_key: Mapping, key: str, product_id: str):
    own = getattr(line, attr, None)
    if own is None and isinstance(line, Mapping):
        own = line.get(attr)
    if own is not None:
        return own
    if key in by_key:
        return by_key[key]
    return by_key.get(product_id)


def calculate_refund(
    lines: Iterable[object],
    quantities: Mapping[str, int],
    prices: Mapping[str, object],
    shipping_charges: Decimal | int | str = 0,
    shipping_handling: ShippingHandling = ShippingHandling.NONE,
    advance_balance: Decimal | int | str = 0,
) -> RefundQuote:
    """Work out how much to refund for the returned *lines*.

    - FULL_REFUND: shipping is refunded too.
    - DEDUCT_FROM_ADVANCE: shipping is taken from the customer's advance
      balance; whatever the balance cannot cover comes off the refund.
    - CUSTOMER_PAYS: shipping comes off the refund.

    The refund never goes below zero.
    """
    products_value = Decimal("0")
    for line in lines:
        key = resolve_key(line)
        product_id = product_id_of(line)
        quantity = _lookup(line, "quantity", quantities, key, product_id)
        price = _lookup(line, "price", prices, key, product_id)
        products_value += Money.lenient(price).amount * coerce_quantity(quantity)

    shipping = Money.lenient(shipping_charges).amount
    advance = Money.lenient(advance_balance).amount
    refund = products_value
    advance_used = Decimal("0")

    if shipping_handling is ShippingHandling.FULL_REFUND:
        refund += shipping
    elif shipping_handling is ShippingHandling.DEDUCT_FROM_ADVANCE:
        if advance >= shipping:
            advance_used = shipping
        else:
            advance_used = advance
            refund -= shipping - advance
    elif shipping_handling is ShippingHandling.CUSTOMER_PAYS:
        refund -= shipping

    return RefundQuote(
        products_value=Money.lenient(products_value),
        refund=Money.lenient(max(Decimal("0"), refund)),
        advance_used=Money.lenient(advance_used),
    )
