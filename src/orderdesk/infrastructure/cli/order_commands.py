"""CLI commands for composing and submitting orders."""

from __future__ import annotations

from datetime import datetime

import click

from orderdesk.application.compose_order import ComposeOrderHandler
from orderdesk.application.dto import ItemSpec, SelectionDTO
from orderdesk.application.search_products import ProductSearchHandler
from orderdesk.application.submit_order import SubmitOrderHandler
from orderdesk.application.variant_cache import VariantCache
from orderdesk.domain.exceptions import DomainException
from orderdesk.domain.model.order_line import OrderLine
from orderdesk.domain.model.value_objects import Money
from orderdesk.domain.service.order_number import format_order_number
from orderdesk.domain.service.refund_calculator import ShippingHandling, calculate_refund
from orderdesk.infrastructure.bootstrap import (
    load_settings,
    order_gateway,
    product_catalog,
)


def _parse_item(raw: str) -> ItemSpec:
    """Parse 'P1@V2:3:1500' into an ItemSpec.

    Only the product id is required: 'P1', 'P1:3' and 'P1@V2' are valid.
    """
    parts = raw.strip().split(":")
    if len(parts) > 3 or not parts[0]:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected 'PRODUCT[@VARIANT][:QTY[:PRICE]]'."
        )
    product_id, _, variant_id = parts[0].partition("@")
    quantity = parts[1] if len(parts) > 1 else None
    if quantity is not None and not quantity.lstrip("-").isdigit():
        raise click.BadParameter(
            f"Invalid quantity '{quantity}' for product '{product_id}'."
        )
    return ItemSpec(
        product_id=product_id,
        variant_id=variant_id or None,
        quantity=quantity,
        price=parts[2] if len(parts) > 2 else None,
    )


def _parse_fields(raw_fields: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated 'Label=value' options into form data."""
    result: dict[str, str] = {}
    for pair in raw_fields:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid field '{pair}'. Expected 'Label=value'."
            )
        label, value = pair.split("=", 1)
        result[label.strip()] = value.strip()
    return result


def _display_selection(dto: SelectionDTO) -> None:
    click.echo(f"  {'Product':<20} {'Variant':<14} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*71}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_name:<20} {line.variant_label:<14} {line.quantity:>5} "
            f"{line.unit_price:>14} {line.line_total:>14}"
        )
    click.echo(f"  {'-'*71}")
    click.echo(f"  {'Order Total':<41} {dto.total:>30}")


@click.command("build")
@click.option("--tenant", required=True, help="Tenant ID.")
@click.option(
    "--item", "items", required=True, multiple=True,
    help="Item as 'PRODUCT[@VARIANT][:QTY[:PRICE]]'. Repeat for more lines.",
)
@click.option("--submit", is_flag=True, default=False, help="Submit the order.")
@click.option("--form-id", default=None, help="Form the order is submitted through.")
@click.option("--field", "fields", multiple=True, help="Form answer as 'Label=value'.")
@click.option("--offline", is_flag=True, default=False, help="Use the local JSON catalog.")
def order_build(
    tenant: str,
    items: tuple[str, ...],
    submit: bool,
    form_id: str | None,
    fields: tuple[str, ...],
    offline: bool,
) -> None:
    """Compose an order from catalog items, optionally submitting it."""
    if submit and not form_id:
        raise click.ClickException("--submit requires --form-id")

    specs = [_parse_item(raw) for raw in items]
    form_data = _parse_fields(fields)

    try:
        settings = load_settings()
        catalog = product_catalog(settings, offline=offline)
        handler = ComposeOrderHandler(
            search=ProductSearchHandler(catalog, tenant_id=tenant, limit=settings.search_limit),
            variant_cache=VariantCache(catalog),
            max_products=settings.max_products,
        )
        composer = handler.handle(specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_selection(ComposeOrderHandler.to_dto(composer))

    if not submit:
        return

    try:
        order = SubmitOrderHandler(order_gateway(settings)).handle(
            form_id=form_id, form_data=form_data, composer=composer
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo()
    click.echo(f"Order {order.order_number or '#' + order.id} submitted ({order.total}).")


@click.command("refund-quote")
@click.option(
    "--item", "items", required=True, multiple=True,
    help="Returned item as 'PRODUCT[@VARIANT][:QTY[:PRICE]]'. Repeat for more lines.",
)
@click.option("--shipping", default="0", help="Shipping charged on the original order.")
@click.option(
    "--shipping-handling",
    type=click.Choice([h.value for h in ShippingHandling], case_sensitive=False),
    default=ShippingHandling.NONE.value,
    show_default=True,
    help="How the shipping charge is settled.",
)
@click.option("--advance", default="0", help="Customer's advance balance.")
def order_refund_quote(
    items: tuple[str, ...],
    shipping: str,
    shipping_handling: str,
    advance: str,
) -> None:
    """Work out the refund for returned items."""
    lines = []
    for spec in (_parse_item(raw) for raw in items):
        lines.append(
            OrderLine(
                product_id=spec.product_id,
                name="",
                variant_id=spec.variant_id,
                quantity=int(spec.quantity) if spec.quantity is not None else None,
                price=Money.lenient(spec.price).amount if spec.price is not None else None,
            )
        )

    quote = calculate_refund(
        lines, {}, {},
        shipping_charges=shipping,
        shipping_handling=ShippingHandling(shipping_handling.upper()),
        advance_balance=advance,
    )

    click.echo(f"Products value : {quote.products_value}")
    click.echo(f"Advance used   : {quote.advance_used}")
    click.echo(f"Refund         : {quote.refund}")


@click.command("number")
@click.option("--code", required=True, help="Business code, e.g. ACME.")
@click.option("--sequence", type=int, required=True, help="Order count within the month.")
@click.option(
    "--date", "when", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
    help="Order date (defaults to today).",
)
def order_number(code: str, sequence: int, when: datetime | None) -> None:
    """Format a human-readable order number."""
    try:
        click.echo(format_order_number(code, when or datetime.now(), sequence))
    except DomainException as exc:
        raise click.ClickException(str(exc))
