"""OrderLineComposer: the authoritative state of a customer's selection.

The composer owns the ordered list of lines plus two maps keyed by line
key: quantities and unit prices.  Every mutation keeps the three in step,
so the key set of the lines is always unique and every line has a
quantity and a price.

Nothing here talks to the network or to the user.  Catalog lookups are
done by the caller; outcomes are reported through return values and
exceptions so the caller decides what to show.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from orderdesk.domain.exceptions import (
    CapacityExceededError,
    EntityNotFoundError,
    ValidationError,
    VariantRequiredError,
)
from orderdesk.domain.model.order_line import OrderLine, resolve_key
from orderdesk.domain.model.product import Product, Variant
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.service.order_total import DEFAULT_QUANTITY, order_total

DEFAULT_MAX_PRODUCTS = 20


class ToggleOutcome(Enum):
    ADDED = "ADDED"
    REMOVED = "REMOVED"
    NEEDS_VARIANT = "NEEDS_VARIANT"


@dataclass(frozen=True)
class ComposerSnapshot:
    """Read-only copy of a composer's state, handed to the assembler."""

    lines: tuple[OrderLine, ...]
    quantities: dict[str, int] = field(default_factory=dict)
    prices: dict[str, Money] = field(default_factory=dict)

    @property
    def total(self) -> Money:
        return order_total(self.lines, self.quantities, self.prices)


def coerce_quantity(value: object) -> int:
    """Normalise quantity input to a non-negative int.

    Unparseable input falls back to the default quantity; fractional
    input is truncated and negatives clamp to zero.
    """
    if isinstance(value, bool):
        return DEFAULT_QUANTITY
    try:
        number = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError, OverflowError):
        try:
            number = int(float(str(value).strip()))
        except (TypeError, ValueError, OverflowError):
            return DEFAULT_QUANTITY
    return max(0, number)


class OrderLineComposer:
    """Mutable selection of order lines for one order-entry session.

    Use ``restore()`` to reopen a previously submitted order; the plain
    constructor starts an empty session.
    """

    def __init__(self, max_products: int = DEFAULT_MAX_PRODUCTS) -> None:
        if max_products <= 0:
            raise ValidationError("max_products must be positive")
        self.max_products = max_products
        self._lines: list[OrderLine] = []
        self._quantities: dict[str, int] = {}
        self._prices: dict[str, Money] = {}

    @classmethod
    def restore(
        cls,
        lines: Iterable[OrderLine],
        quantities: Mapping[str, int] | None = None,
        prices: Mapping[str, Money] | None = None,
        max_products: int = DEFAULT_MAX_PRODUCTS,
    ) -> OrderLineComposer:
        """Rebuild a composer from an existing order.

        Lines sharing a key collapse into one, the later line winning.
        Gaps in the maps are filled from the line's embedded quantity and
        price, then from the defaults.  The product limit is not applied:
        an order that was accepted once stays editable.
        """
        quantities = quantities or {}
        prices = prices or {}
        composer = cls(max_products=max_products)
        for line in lines:
            key = resolve_key(line)
            index = composer._index_of(key)
            if index is None:
                composer._lines.append(line)
            else:
                composer._lines[index] = line
            composer._quantities[key] = coerce_quantity(
                quantities.get(key, line.quantity if line.quantity is not None else DEFAULT_QUANTITY)
            )
            composer._prices[key] = Money.lenient(
                prices.get(key, line.price if line.price is not None else 0)
            )
        return composer

    # --- Read access ----------------------------------------------------------

    @property
    def lines(self) -> tuple[OrderLine, ...]:
        return tuple(self._lines)

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(resolve_key(line) for line in self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def contains_product(self, product_id: str) -> bool:
        return any(line.product_id == product_id for line in self._lines)

    def quantity_of(self, key: str) -> int:
        return self._quantities.get(key, DEFAULT_QUANTITY)

    def price_of(self, key: str) -> Money:
        return self._prices.get(key) or Money.zero()

    def line_total(self, key: str) -> Money:
        return self.price_of(key) * self.quantity_of(key)

    @property
    def total(self) -> Money:
        return order_total(self._lines, self._quantities, self._prices)

    def snapshot(self) -> ComposerSnapshot:
        return ComposerSnapshot(
            lines=tuple(self._lines),
            quantities=dict(self._quantities),
            prices=dict(self._prices),
        )

    # --- Mutations ------------------------------------------------------------

    def add_line(self, product: Product, variant: Variant | None = None) -> OrderLine:
        """Select *product* (and *variant*) as a new line.

        Raises:
            VariantRequiredError: the product has variants and none was given.
            ValidationError: *variant* belongs to a different product.
            CapacityExceededError: the selection is already full.

        Re-adding a line that is already selected refreshes its display
        attributes in place and keeps its quantity and price.
        """
        if variant is None and product.has_variants:
            raise VariantRequiredError(
                f"Choose a variant of '{product.name}' before adding it"
            )
        if variant is not None and variant.product_id != product.id:
            raise ValidationError(
                f"Variant '{variant.id}' does not belong to product '{product.name}'"
            )

        line = OrderLine.for_selection(product, variant)
        key = resolve_key(line)

        index = self._index_of(key)
        if index is not None:
            self._lines[index] = line
            return line

        if len(self._lines) >= self.max_products:
            raise CapacityExceededError(self.max_products)

        self._lines.append(line)
        self._quantities[key] = DEFAULT_QUANTITY
        self._prices[key] = product.unit_price
        return line

    def remove_line(self, line_or_key: OrderLine | str) -> bool:
        """Remove a line by line or key.  Returns False if it was not present."""
        key = line_or_key if isinstance(line_or_key, str) else resolve_key(line_or_key)
        index = self._index_of(key)
        if index is None:
            return False
        del self._lines[index]
        self._quantities.pop(key, None)
        self._prices.pop(key, None)
        return True

    def set_quantity(self, key: str, value: object) -> int:
        self._require(key)
        quantity = coerce_quantity(value)
        self._quantities[key] = quantity
        return quantity

    def adjust_quantity(self, key: str, delta: int) -> int:
        return self.set_quantity(key, self.quantity_of(key) + delta)

    def set_price(self, key: str, value: object) -> Money:
        self._require(key)
        price = Money.lenient(value)
        self._prices[key] = price
        return price

    def change_variant(self, old_line: OrderLine, new_variant: Variant) -> OrderLine:
        """Swap the variant of an existing line, keeping its quantity and price.

        The new line takes the old line's position.  If the new key
        already belongs to another line, that line is dropped and the
        values carried over from the old line win.
        """
        if new_variant.product_id != old_line.product_id:
            raise ValidationError(
                f"Variant '{new_variant.id}' does not belong to product "
                f"'{old_line.product_id}'"
            )
        old_key = resolve_key(old_line)
        index = self._index_of(old_key)
        if index is None:
            raise EntityNotFoundError(f"No selected line with key '{old_key}'")

        current = self._lines[index]
        quantity = self._quantities.get(
            old_key,
            current.quantity if current.quantity is not None else DEFAULT_QUANTITY,
        )
        price = self._prices.get(old_key) or Money.lenient(current.price)

        new_line = current.with_variant(new_variant)
        new_key = resolve_key(new_line)

        self._quantities.pop(old_key, None)
        self._prices.pop(old_key, None)

        clash = self._index_of(new_key)
        if clash is not None and clash != index:
            del self._lines[clash]
            if clash < index:
                index -= 1

        self._lines[index] = new_line
        self._quantities[new_key] = quantity
        self._prices[new_key] = price
        return new_line

    def toggle_selection(self, product: Product) -> ToggleOutcome:
        """Select or deselect *product*, ignoring which variant is chosen.

        Deselecting removes every line of the product.  Selecting a
        product with variants changes nothing and returns NEEDS_VARIANT so
        the caller can ask which variant to add.
        """
        if self.contains_product(product.id):
            matching = [line for line in self._lines if line.product_id == product.id]
            for line in matching:
                self.remove_line(line)
            return ToggleOutcome.REMOVED
        if product.has_variants:
            return ToggleOutcome.NEEDS_VARIANT
        self.add_line(product)
        return ToggleOutcome.ADDED

    # --- Internal helpers -----------------------------------------------------

    def _index_of(self, key: str) -> int | None:
        for i, line in enumerate(self._lines):
            if resolve_key(line) == key:
                return i
        return None

    def _require(self, key: str) -> None:
        if self._index_of(key) is None:
            raise EntityNotFoundError(f"No selected line with key '{key}'")
