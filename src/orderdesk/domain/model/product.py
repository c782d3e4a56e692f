"""Catalog model: products and their purchasable variants.

Products belong to the catalog service. The order composer only reads
them; it copies what it needs onto order lines at selection time.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.value_objects import Money


@dataclass(frozen=True)
class Variant:
    """A specific colour/size configuration of a product."""

    id: str
    product_id: str
    color: str | None = None
    size: str | None = None
    sku: str | None = None
    stock: int | None = None


@dataclass(frozen=True)
class Product:
    """A catalog entry.

    Invariant: a product flagged ``has_variants`` carries at least one
    variant, and every embedded variant points back at this product.
    """

    id: str
    name: str
    price: Money
    category: str | None = None
    description: str | None = None
    sku: str | None = None
    last_sale_price: Money | None = None
    has_variants: bool = False
    variants: tuple[Variant, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Product id is required")
        if self.has_variants and not self.variants:
            raise ValidationError(f"Product '{self.name}' declares variants but has none")
        for variant in self.variants:
            if variant.product_id != self.id:
                raise ValidationError(
                    f"Variant '{variant.id}' does not belong to product '{self.id}'"
                )

    @property
    def unit_price(self) -> Money:
        """Default sale price for a new order line.

        The last price this product sold at wins over the base price, so
        repeat customers see what they paid before.
        """
        if self.last_sale_price is not None and self.last_sale_price.amount > 0:
            return self.last_sale_price
        return self.price

    def find_variant(self, variant_id: str) -> Variant | None:
        for variant in self.variants:
            if variant.id == variant_id:
                return variant
        return None


@dataclass(frozen=True)
class VariantSet:
    """Resolved variants of one product, as held by the variant cache."""

    product_id: str
    name: str
    variants: tuple[Variant, ...]
