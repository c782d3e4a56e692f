"""Order lines and the line identity resolver.

A line is identified by its product and, when one was chosen, its
variant.  That composite key indexes the per-line quantity and price maps
and is what the backend expects in ``productQuantities``/``productPrices``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from decimal import Decimal

from orderdesk.domain.exceptions import InvalidLineError
from orderdesk.domain.model.product import Product, Variant

KEY_SEPARATOR = "_"

# Field names checked, in order, when reading wire or legacy records.
# ``productVariantId`` is the current name; ``variantId`` predates it.
_PRODUCT_ID_FIELDS = ("product_id", "productId", "id")
_VARIANT_ID_FIELDS = ("product_variant_id", "productVariantId", "variant_id", "variantId")


@dataclass(frozen=True)
class OrderLine:
    """One product (and optional variant) in an in-progress order.

    Display attributes are copied from the catalog when the line is
    selected so the line still reads correctly if the catalog changes
    before the order is submitted.

    ``quantity`` and ``price`` are only set on lines restored from an
    existing order; for new lines the composer's maps are authoritative.
    """

    product_id: str
    name: str
    variant_id: str | None = None
    category: str | None = None
    color: str | None = None
    size: str | None = None
    quantity: int | None = None
    price: Decimal | None = None

    @property
    def key(self) -> str:
        return resolve_key(self)

    @staticmethod
    def for_selection(product: Product, variant: Variant | None = None) -> OrderLine:
        return OrderLine(
            product_id=product.id,
            name=product.name,
            variant_id=variant.id if variant else None,
            category=product.category,
            color=variant.color if variant else None,
            size=variant.size if variant else None,
        )

    def with_variant(self, variant: Variant) -> OrderLine:
        return replace(
            self,
            variant_id=variant.id,
            color=variant.color,
            size=variant.size,
        )


def _read(line: object, names: tuple[str, ...]) -> str | None:
    for name in names:
        if isinstance(line, Mapping):
            value = line.get(name)
        else:
            value = getattr(line, name, None)
        if value is not None and value != "":
            return str(value)
    return None


def line_key(product_id: str, variant_id: str | None = None) -> str:
    if variant_id:
        return f"{product_id}{KEY_SEPARATOR}{variant_id}"
    return product_id


def resolve_key(line: object) -> str:
    """Return the stable composite key of *line*.

    *line* may be an ``OrderLine`` or a record decoded from the wire.
    The product id is read from ``product_id``, ``productId`` or ``id``;
    the variant id from ``productVariantId`` first, then ``variantId``.

    Raises InvalidLineError when no product id can be found.
    """
    product_id = _read(line, _PRODUCT_ID_FIELDS)
    if product_id is None:
        raise InvalidLineError(f"Order line has no product id: {line!r}")
    return line_key(product_id, _read(line, _VARIANT_ID_FIELDS))


def product_id_of(line: object) -> str:
    product_id = _read(line, _PRODUCT_ID_FIELDS)
    if product_id is None:
        raise InvalidLineError(f"Order line has no product id: {line!r}")
    return product_id


def variant_id_of(line: object) -> str | None:
    return _read(line, _VARIANT_ID_FIELDS)
