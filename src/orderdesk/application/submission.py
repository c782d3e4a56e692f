"""Submission assembler: composer state <-> order-creation request body.

The backend stores the selection as three JSON text columns, so the
request carries ``selectedProducts``, ``productQuantities`` and
``productPrices`` as *serialized JSON strings*, not nested objects.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.composer import ComposerSnapshot, coerce_quantity
from orderdesk.domain.model.order_line import (
    OrderLine,
    product_id_of,
    resolve_key,
    variant_id_of,
)
from orderdesk.domain.model.value_objects import Money


@dataclass(frozen=True)
class SubmissionPayload:
    selected_products: list[dict]
    product_quantities: dict[str, int]
    product_prices: dict[str, Decimal]

    def to_request_body(self, form_id: str, form_data: dict) -> dict:
        return {
            "formId": form_id,
            "formData": form_data,
            "selectedProducts": json.dumps(self.selected_products),
            "productQuantities": json.dumps(self.product_quantities),
            "productPrices": _dump_prices(self.product_prices),
        }


def _dump_prices(prices: dict[str, Decimal]) -> str:
    # Amounts are written from their Decimal text, never through float.
    members = (f"{json.dumps(key)}: {amount:f}" for key, amount in prices.items())
    return "{" + ", ".join(members) + "}"


def _line_to_raw(line: OrderLine) -> dict:
    raw: dict = {"id": line.product_id, "name": line.name}
    if line.variant_id:
        # Both names are written; older readers only know ``variantId``.
        raw["productVariantId"] = line.variant_id
        raw["variantId"] = line.variant_id
    for attr in ("category", "color", "size"):
        value = getattr(line, attr)
        if value:
            raw[attr] = value
    return raw


def build_payload(snapshot: ComposerSnapshot) -> SubmissionPayload:
    """Serialise a snapshot, dropping map entries no line refers to."""
    keys = [resolve_key(line) for line in snapshot.lines]
    return SubmissionPayload(
        selected_products=[_line_to_raw(line) for line in snapshot.lines],
        product_quantities={key: snapshot.quantities.get(key, 1) for key in keys},
        product_prices={
            key: (snapshot.prices.get(key) or Money.zero()).amount
            for key in keys
        },
    )


def _decode(raw: object, field_name: str, default: object) -> object:
    if raw is None or raw == "":
        return default
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw, parse_float=Decimal)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Malformed {field_name}: {exc.msg}") from exc


def _raw_to_line(raw: object) -> OrderLine:
    if not isinstance(raw, dict):
        # Very old orders stored a bare list of product ids.
        raw = {"id": raw}
    return OrderLine(
        product_id=product_id_of(raw),
        name=str(raw.get("name") or ""),
        variant_id=variant_id_of(raw),
        category=raw.get("category"),
        color=raw.get("color"),
        size=raw.get("size"),
    )


def parse_payload(body: dict) -> ComposerSnapshot:
    """Rebuild a snapshot from an order-creation body, as the backend reads it."""
    products = _decode(body.get("selectedProducts"), "selectedProducts", [])
    quantities = _decode(body.get("productQuantities"), "productQuantities", {})
    prices = _decode(body.get("productPrices"), "productPrices", {})
    if not isinstance(products, list):
        raise ValidationError("selectedProducts must be a list")
    if not isinstance(quantities, dict) or not isinstance(prices, dict):
        raise ValidationError("productQuantities and productPrices must be objects")

    lines = tuple(_raw_to_line(raw) for raw in products)
    return ComposerSnapshot(
        lines=lines,
        quantities={key: coerce_quantity(value) for key, value in quantities.items()},
        prices={key: Money.lenient(value) for key, value in prices.items()},
    )
