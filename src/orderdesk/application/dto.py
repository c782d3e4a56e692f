"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ItemSpec:
    """Input: one requested line (product id, optional variant, overrides)."""

    product_id: str
    variant_id: str | None = None
    quantity: str | None = None
    price: str | None = None


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single selected line as displayed to the user."""

    key: str
    product_name: str
    variant_label: str
    quantity: int
    unit_price: str  # formatted, e.g. "Rs. 1,500.00"
    line_total: str


@dataclass(frozen=True)
class SelectionDTO:
    """Output: the whole selection with its grand total."""

    lines: list[OrderLineDTO]
    total: str


@dataclass(frozen=True)
class SubmittedOrderDTO:
    """Output: the backend's acknowledgement of a submitted order."""

    id: str
    customer_id: str | None
    order_number: str | None
    total: str
