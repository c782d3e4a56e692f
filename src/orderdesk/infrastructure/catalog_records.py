"""Mapping between the backend's catalog JSON and domain objects.

The backend speaks camelCase (``hasVariants``, ``lastSalePrice``,
``currentQuantity``); the HTTP client and the JSON file catalog share
these helpers.
"""

from __future__ import annotations

from collections.abc import Iterable

from orderdesk.domain.exceptions import CatalogUnavailableError, ValidationError
from orderdesk.domain.model.product import Product, Variant
from orderdesk.domain.model.value_objects import Money

# What a malformed record can raise while being mapped.
_RECORD_ERRORS = (KeyError, TypeError, ValueError, AttributeError, ValidationError)


def _text(raw: dict, name: str) -> str | None:
    value = raw.get(name)
    return str(value) if value not in (None, "") else None


def variant_from_raw(raw: dict, product_id: str | None = None) -> Variant:
    stock = raw.get("currentQuantity", raw.get("stock"))
    return Variant(
        id=str(raw["id"]),
        product_id=str(product_id or raw["productId"]),
        color=_text(raw, "color"),
        size=_text(raw, "size"),
        sku=_text(raw, "sku"),
        stock=int(stock) if stock is not None else None,
    )


def product_from_raw(raw: dict) -> Product:
    product_id = str(raw["id"])
    variants = tuple(
        variant_from_raw(v, product_id)
        for v in raw.get("variants") or []
        if v.get("isActive", True)
    )
    last_sale = raw.get("lastSalePrice")
    return Product(
        id=product_id,
        name=str(raw.get("name") or ""),
        price=Money.lenient(raw.get("price", raw.get("currentRetailPrice"))),
        category=_text(raw, "category"),
        description=_text(raw, "description"),
        sku=_text(raw, "sku"),
        last_sale_price=Money.lenient(last_sale) if last_sale is not None else None,
        # Only active variants are orderable; a product whose variants are
        # all inactive is offered as a plain product.
        has_variants=bool(variants),
        variants=variants,
    )



def products_from_raw(records: Iterable[dict] | None) -> list[Product]:
    """Map a list of product records, rejecting the lot if one is malformed."""
    try:
        return [product_from_raw(raw) for raw in records or []]
    except _RECORD_ERRORS as exc:
        raise CatalogUnavailableError(f"Malformed product record: {exc!r}") from exc


def active_variants_from_raw(
    records: Iterable[dict] | None,
    product_id: str,
) -> list[Variant]:
    try:
        return [
            variant_from_raw(raw, product_id)
            for raw in records or []
            if raw.get("isActive", True)
        ]
    except _RECORD_ERRORS as exc:
        raise CatalogUnavailableError(f"Malformed variant record: {exc!r}") from exc
