"""CLI commands for browsing the product catalog."""

from __future__ import annotations

import click

from orderdesk.application.search_products import ProductSearchHandler
from orderdesk.domain.exceptions import DomainException
from orderdesk.infrastructure.bootstrap import load_settings, product_catalog


@click.command("search")
@click.option("--tenant", required=True, help="Tenant ID.")
@click.option("--query", default="", help="Free-text search.")
@click.option("--limit", type=int, default=None, help="Maximum products to return.")
@click.option("--offline", is_flag=True, default=False, help="Use the local JSON catalog.")
def catalog_search(tenant: str, query: str, limit: int | None, offline: bool) -> None:
    """Search a tenant's products."""
    try:
        settings = load_settings()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    handler = ProductSearchHandler(
        product_catalog(settings, offline=offline),
        tenant_id=tenant,
        limit=limit or settings.search_limit,
    )
    result = handler.search(query)
    if result.notice:
        raise click.ClickException(result.notice)

    if not result.products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<10} {'Name':<24} {'Variants':>8} {'Price':>16}")
    click.echo("-" * 61)
    for p in result.products:
        click.echo(
            f"{p.id:<10} {p.name:<24} {len(p.variants):>8} {str(p.unit_price):>16}"
        )


@click.command("variants")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--offline", is_flag=True, default=False, help="Use the local JSON catalog.")
def catalog_variants(product_id: str, offline: bool) -> None:
    """List the variants of a product."""
    try:
        catalog = product_catalog(load_settings(), offline=offline)
        variants = catalog.variants(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not variants:
        click.echo("No variants found.")
        return

    click.echo(f"{'ID':<10} {'Color':<12} {'Size':<8} {'SKU':<14} {'Stock':>6}")
    click.echo("-" * 54)
    for v in variants:
        stock = "" if v.stock is None else v.stock
        click.echo(
            f"{v.id:<10} {v.color or '':<12} {v.size or '':<8} {v.sku or '':<14} {stock:>6}"
        )
